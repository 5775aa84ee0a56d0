# gridops/config.py
# Environment-aware configuration for the GridOps maintenance API

import os
from typing import List, Literal

# Environment detection
ENV: Literal["dev", "staging", "prod"] = os.environ.get("ENV", "dev")  # type: ignore
IS_DEV = (ENV == "dev")
IS_STAGING = (ENV == "staging")
IS_PROD = (ENV == "prod")

# JWT signing configuration (HS256 wants at least 32 bytes of key)
SECRET_KEY_MIN_BYTES = 32
_DEV_SECRET_KEY = "gridops-dev-only-signing-secret-change-me"


def load_secret_key(raw: str, is_dev: bool) -> str:
    """Return the signing secret, falling back to the dev key only in dev."""
    if not raw:
        if not is_dev:
            raise RuntimeError("SECRET_KEY environment variable is required outside dev")
        return _DEV_SECRET_KEY
    if len(raw.encode("utf-8")) < SECRET_KEY_MIN_BYTES:
        if not is_dev:
            raise RuntimeError(f"SECRET_KEY must be at least {SECRET_KEY_MIN_BYTES} bytes outside dev")
        print(f"[CONFIG] WARNING: SECRET_KEY shorter than {SECRET_KEY_MIN_BYTES} bytes (dev only)")
    return raw


SECRET_KEY = load_secret_key(os.environ.get("SECRET_KEY", ""), IS_DEV)
ALGORITHM = "HS256"

# Token lifetime in minutes; 0 issues tokens without an exp claim
ACCESS_TOKEN_MINUTES = int(os.environ.get("ACCESS_TOKEN_MINUTES", "0"))

# bcrypt work factor (bcrypt accepts 4..31)
BCRYPT_ROUNDS = int(os.environ.get("BCRYPT_ROUNDS", "12"))
if not 4 <= BCRYPT_ROUNDS <= 31:
    raise RuntimeError(f"BCRYPT_ROUNDS must be between 4 and 31, got {BCRYPT_ROUNDS}")

# Listening address
HOST = os.environ.get("HOST", "127.0.0.1")
PORT = int(os.environ.get("PORT", "8000"))

# Database configuration (relative paths live next to the package)
_raw_db_path = os.environ.get("DATABASE_PATH", "gridops.db")
if os.path.isabs(_raw_db_path):
    DATABASE_PATH = _raw_db_path
else:
    DATABASE_PATH = os.path.join(os.path.dirname(os.path.abspath(__file__)), _raw_db_path)

# Field limits shared by request schemas
NAME_MAX_LENGTH = 255
# bcrypt only reads the first 72 bytes; newer releases refuse longer input
PASSWORD_MAX_BYTES = 72

# CORS origins (dev allows everything, see main.py)
CORS_ORIGINS: List[str] = [
    origin.strip()
    for origin in os.environ.get("CORS_ORIGINS", "").split(",")
    if origin.strip()
]

print(f"[CONFIG] Environment: {ENV}")
print(f"[CONFIG] Database: SQLite ({os.path.basename(DATABASE_PATH)})")
print(f"[CONFIG] Access token: {f'{ACCESS_TOKEN_MINUTES} minutes' if ACCESS_TOKEN_MINUTES else 'no expiry'}")
print(f"[CONFIG] bcrypt rounds: {BCRYPT_ROUNDS}")
