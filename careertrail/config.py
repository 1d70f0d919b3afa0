"""Configuration management for the CareerTrail service.

Loads from YAML config file with environment variable overrides.
Pattern: CONFIG__{SECTION}__{KEY} overrides nested YAML keys.
Example: CONFIG__AUTH__TOKEN_EXPIRE_MINUTES=60
"""

import os
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field


# --- Sections ---


class DatabaseConfig(BaseModel):
    url: str = "sqlite:///data/careertrail.db"
    echo: bool = False


class AuthConfig(BaseModel):
    secret_key: str = "change-me-in-production"  # from env: JWT_SECRET_KEY
    algorithm: str = "HS256"
    token_expire_minutes: int = 1440  # 24 hours


class CorsConfig(BaseModel):
    origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]


class BoardConfig(BaseModel):
    drag_distance_px: int = Field(default=8, ge=0, description="Pointer travel before a drag starts")
    toast_seconds: float = 4.0


class RealtimeConfig(BaseModel):
    queue_size: int = Field(default=256, ge=1)


class AIConfig(BaseModel):
    api_key: str = ""  # from env: OPENAI_API_KEY
    base_url: str = "https://api.openai.com/v1"
    model: str = "gpt-4-turbo-preview"
    temperature: float = 0.3
    max_tokens: int = 2000
    timeout_s: float = 60.0
    max_retries: int = 2


class LinkedInConfig(BaseModel):
    guest_url: str = "https://www.linkedin.com/jobs-guest/jobs/api/jobPosting/{job_id}"
    timeout_s: float = 15.0


class ClientConfig(BaseModel):
    base_url: str = "http://localhost:8000"
    token: str = ""  # from env: CAREERTRAIL_TOKEN


# --- Service Config ---


class ServiceConfig(BaseModel):
    database: DatabaseConfig = DatabaseConfig()
    auth: AuthConfig = AuthConfig()
    cors: CorsConfig = CorsConfig()
    board: BoardConfig = BoardConfig()
    realtime: RealtimeConfig = RealtimeConfig()
    ai: AIConfig = AIConfig()
    linkedin: LinkedInConfig = LinkedInConfig()
    client: ClientConfig = ClientConfig()


def _apply_env_overrides(config_dict: dict, prefix: str = "CONFIG") -> dict:
    """Apply environment variable overrides to config dict.

    Pattern: CONFIG__SECTION__KEY=value maps to config[section][key] = value
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}__"):
            continue
        parts = key[len(prefix) + 2 :].lower().split("__")
        target = config_dict
        for part in parts[:-1]:
            target = target.setdefault(part, {})
        # Type coercion for common cases
        if value.lower() in ("true", "false"):
            value = value.lower() == "true"
        elif value.isdigit():
            value = int(value)
        target[parts[-1]] = value
    return config_dict


def _apply_dedicated_env(config_dict: dict) -> dict:
    """Secrets and URLs that conventionally live in their own env vars."""
    dedicated = {
        ("database", "url"): "DATABASE_URL",
        ("auth", "secret_key"): "JWT_SECRET_KEY",
        ("ai", "api_key"): "OPENAI_API_KEY",
        ("client", "base_url"): "CAREERTRAIL_URL",
        ("client", "token"): "CAREERTRAIL_TOKEN",
    }
    for (section, key), env_name in dedicated.items():
        target = config_dict.setdefault(section, {})
        if not target.get(key) and os.getenv(env_name):
            target[key] = os.environ[env_name]
    return config_dict


def load_config(
    config_path: Optional[str] = None,
) -> ServiceConfig:
    """Load configuration from YAML file with env overrides.

    Priority: env vars > YAML file > defaults
    """
    config_dict = {}

    # 1. Load YAML if exists
    if config_path is None:
        config_path = os.getenv("CONFIG_PATH", "config/careertrail.yml")
    path = Path(config_path)
    if path.exists():
        with open(path) as f:
            config_dict = yaml.safe_load(f) or {}

    # 2. Apply env overrides
    config_dict = _apply_env_overrides(config_dict)

    # 3. Dedicated env vars fill whatever is still empty
    config_dict = _apply_dedicated_env(config_dict)

    return ServiceConfig(**config_dict)


# Singleton for the service
_config: Optional[ServiceConfig] = None


def get_config() -> ServiceConfig:
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(config_path: Optional[str] = None) -> ServiceConfig:
    global _config
    _config = load_config(config_path)
    return _config
