"""Application configuration settings."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Final

BASE_DIR: Final[Path] = Path(__file__).resolve().parent.parent
DATA_DIR: Final[Path] = BASE_DIR / "data"

DATABASE_URL: Final[str] = os.getenv(
    "DATABASE_URL", f"sqlite:///{(DATA_DIR / 'teacher_records.db').as_posix()}"
)
SQLALCHEMY_ECHO: Final[bool] = os.getenv("SQLALCHEMY_ECHO") == "1"

HOST: Final[str] = os.getenv("HOST", "0.0.0.0")
PORT: Final[int] = int(os.getenv("PORT", 8080))
LOG_LEVEL: Final[str] = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ORIGINS: Final[list[str]] = [
    origin.strip() for origin in os.getenv("CORS_ORIGINS", "*").split(",") if origin.strip()
]

# Paging defaults shared by the list endpoints.
DEFAULT_PAGE_SIZE: Final[int] = int(os.getenv("DEFAULT_PAGE_SIZE", 10))
MAX_PAGE_SIZE: Final[int] = int(os.getenv("MAX_PAGE_SIZE", 100))

SEED_DEV_DATA: Final[bool] = os.getenv("SEED_DEV_DATA") == "1"

# Ensure the default SQLite location exists at import time.
DATA_DIR.mkdir(parents=True, exist_ok=True)
