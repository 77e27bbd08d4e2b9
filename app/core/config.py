# File: app/core/config.py

import os
from functools import lru_cache
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, field_validator


def _env_flag(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in {"1", "true", "yes", "on"}


class Settings(BaseModel):
    # Env-derived defaults go through the validators below as well
    model_config = ConfigDict(validate_default=True)

    # Basic app info
    PROJECT_NAME: str = "Users API"
    VERSION: str = "0.1.0"

    # Mounted as-is, so the default keeps /users, /register, ... at the root
    api_prefix: str = os.getenv("API_PREFIX", "")

    # CORS
    backend_cors_origins: List[str] = os.getenv("BACKEND_CORS_ORIGINS", "")

    # Storage backend: "memory", "json" or "sql"
    user_store: Literal["memory", "json", "sql"] = os.getenv("USER_STORE", "sql")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./users.db")
    users_file: str = os.getenv("USERS_FILE", "users.json")

    # Security
    bcrypt_rounds: int = int(os.getenv("BCRYPT_ROUNDS", "12"))

    # Every handler failure answers 500 unless this is switched on
    distinct_error_status: bool = _env_flag("DISTINCT_ERROR_STATUS")

    log_level: str = os.getenv("LOG_LEVEL", "INFO")

    @field_validator("backend_cors_origins", mode="before")
    @classmethod
    def assemble_cors_origins(cls, v):
        if isinstance(v, str):
            return [i.strip() for i in v.split(",") if i.strip()]
        if isinstance(v, list):
            return v
        return []

    @field_validator("user_store", mode="before")
    @classmethod
    def normalize_user_store(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
