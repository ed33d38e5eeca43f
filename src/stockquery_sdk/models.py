from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Credentials(BaseModel):
    username: str
    password: str = Field(repr=False)


class TokenResponse(BaseModel):
    model_config = ConfigDict(extra="allow")

    token: str = Field(min_length=1, repr=False)

