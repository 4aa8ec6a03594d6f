from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

# Base data dir: repository_root/data (we are in backend/notes_api/)
DEFAULT_DATA_DIR = Path(__file__).resolve().parents[2] / "data"

INSECURE_JWT_KEY = "secret"


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


@dataclass(frozen=True)
class Settings:
    data_dir: Path = DEFAULT_DATA_DIR
    mongodb_uri: Optional[str] = None
    mongodb_db: str = "notes"
    jwt_key: str = INSECURE_JWT_KEY
    jwt_algorithm: str = "HS256"
    jwt_expiry_seconds: int = 24 * 60 * 60
    bcrypt_rounds: int = 12
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            data_dir=Path(os.getenv("APP_DATA_DIR", str(DEFAULT_DATA_DIR))),
            mongodb_uri=os.getenv("MONGODB_URI") or None,
            mongodb_db=os.getenv("MONGODB_DB", "notes"),
            jwt_key=os.getenv("JWT_KEY") or INSECURE_JWT_KEY,
            jwt_algorithm=os.getenv("JWT_ALGORITHM", "HS256"),
            jwt_expiry_seconds=_int_env("JWT_EXPIRY", 24 * 60 * 60),
            bcrypt_rounds=_int_env("BCRYPT_ROUNDS", 12),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            host=os.getenv("HOST", "0.0.0.0"),
            port=_int_env("PORT", 8000),
        )

    @property
    def uses_insecure_key(self) -> bool:
        return self.jwt_key == INSECURE_JWT_KEY
