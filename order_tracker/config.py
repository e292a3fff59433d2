# order_tracker/config.py
from __future__ import annotations

import os
from typing import List

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load .env locally (safe in prod too)
load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() not in {"0", "false", "no", "off"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, str(default))
    try:
        return int(raw)
    except ValueError:
        return default


def _env_list(name: str, default: str) -> List[str]:
    raw = os.getenv(name, default)
    return [x.strip() for x in raw.split(",") if x.strip()]


# -------------------
# Config (env-driven)
# -------------------
class Settings(BaseModel):
    project_name: str = os.getenv("PROJECT_NAME", "Order Tracker API")
    version: str = os.getenv("API_VERSION", "1.0.0")

    jwt_secret: str = os.getenv("JWT_SECRET", "dev-secret-change-me")
    jwt_alg: str = os.getenv("JWT_ALG", "HS256")
    # default 24h
    jwt_expire_minutes: int = _env_int("JWT_EXPIRE_MIN", 1440)

    log_level: str = os.getenv("LOG_LEVEL", "INFO")
    cors_origins: List[str] = Field(
        default_factory=lambda: _env_list(
            "CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000"
        )
    )
    seed_data: bool = _env_bool("SEED_DATA", "1")

    host: str = os.getenv("HOST", "0.0.0.0")
    port: int = _env_int("PORT", 3001)

    @property
    def expires_in_label(self) -> str:
        """Human label for the token lifetime, e.g. ``24h`` or ``90m``."""
        minutes = self.jwt_expire_minutes
        if minutes % 60 == 0:
            return f"{minutes // 60}h"
        return f"{minutes}m"
