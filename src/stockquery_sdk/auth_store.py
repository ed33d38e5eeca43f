from __future__ import annotations

import json
import os
import tempfile
import threading
from dataclasses import dataclass, field
from pathlib import Path

from platformdirs import user_data_dir

from .config import ClientConfig
from .exceptions import StorageFailure


@dataclass
class SessionStore:
    """Durable home of the single session token for this installation.

    Writes go through a temp file and ``os.replace`` so a concurrent ``load``
    sees either the previous token or the new one, never a partial file.
    """

    app_name: str = "stockquery"
    app_author: str = "stockquery"
    filename: str = "session.json"
    base_dir: Path | None = None
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)

    @classmethod
    def from_config(cls, config: ClientConfig) -> SessionStore:
        return cls(app_name=config.app_name)

    def _path(self) -> Path:
        base = Path(self.base_dir) if self.base_dir else Path(user_data_dir(self.app_name, self.app_author))
        try:
            base.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageFailure("Session storage is unavailable", str(base)) from exc
        return base / self.filename

    def save(self, token: str) -> None:
        path = self._path()
        data = json.dumps({"token": token}, indent=2)
        with self._lock:
            try:
                fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".session-", suffix=".tmp")
                try:
                    with os.fdopen(fd, "w", encoding="utf-8") as fp:
                        fp.write(data)
                    try:
                        os.chmod(tmp_name, 0o600)
                    except OSError:
                        pass
                    os.replace(tmp_name, path)
                except BaseException:
                    Path(tmp_name).unlink(missing_ok=True)
                    raise
            except OSError as exc:
                raise StorageFailure("Could not save session token", str(path)) from exc

    def load(self) -> str | None:
        path = self._path()
        try:
            raw = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageFailure("Could not read session token", str(path)) from exc
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            self.clear()
            return None
        token = data.get("token") if isinstance(data, dict) else None
        if not isinstance(token, str) or not token:
            self.clear()
            return None
        return token

    def clear(self) -> None:
        path = self._path()
        with self._lock:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                raise StorageFailure("Could not clear session token", str(path)) from exc
