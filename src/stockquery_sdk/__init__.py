from .auth_store import SessionStore
from .config import ClientConfig, ConfigError, load_config
from .exceptions import (
    ApiError,
    AuthenticationError,
    DecodeError,
    ForbiddenError,
    NotFoundError,
    QueryError,
    QueryErrorKind,
    RegistrationError,
    ServerError,
    StorageFailure,
    TransportError,
    UnauthorizedError,
    ValidationError,
)
from .http_client import HttpClient
from .models import Credentials, TokenResponse
from .models_stock import LocationRecordPayload, StockQuery, StockResponse
from .normalizer import (
    UNKNOWN_DATE_LABEL,
    LocationRecord,
    StockResult,
    VariantGroup,
    normalize_stock,
    parse_update_date,
)
from .session import ApiSession
from .stock_validation import ClientValidationError, ValidationIssue, validate_stock_query
from .ui_errors import UserFacingError, to_user_facing_error
from .variant_key import NOT_AVAILABLE, ParsedVariant, parse_variant_key
from .view_state import QueryInProgressError, StockViewState, ViewStateStatus

__all__ = [
    "ApiError",
    "ApiSession",
    "AuthenticationError",
    "ClientConfig",
    "ClientValidationError",
    "ConfigError",
    "Credentials",
    "DecodeError",
    "ForbiddenError",
    "HttpClient",
    "LocationRecord",
    "LocationRecordPayload",
    "NOT_AVAILABLE",
    "NotFoundError",
    "ParsedVariant",
    "QueryError",
    "QueryErrorKind",
    "QueryInProgressError",
    "RegistrationError",
    "ServerError",
    "SessionStore",
    "StockQuery",
    "StockResponse",
    "StockResult",
    "StockViewState",
    "StorageFailure",
    "TokenResponse",
    "TransportError",
    "UNKNOWN_DATE_LABEL",
    "UnauthorizedError",
    "UserFacingError",
    "ValidationError",
    "ValidationIssue",
    "VariantGroup",
    "ViewStateStatus",
    "load_config",
    "normalize_stock",
    "parse_update_date",
    "parse_variant_key",
    "to_user_facing_error",
    "validate_stock_query",
]
