# cyberguard/config.py
from __future__ import annotations

import os
from pathlib import Path
from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


BASE_DIR = Path(__file__).resolve().parent.parent
ENV_PATH = Path(BASE_DIR) / ".env"
DB_DIR = BASE_DIR / "database"
DB_DIR.mkdir(parents=True, exist_ok=True)

# Load .env
load_dotenv(ENV_PATH)


class ServiceConfigs(BaseSettings):
    """Konfigurasi service eksternal (LLM) dan simulasi monitoring."""

    # ====================================
    # Model dan parameter LLM
    # ====================================
    llm_base_url: str = os.getenv("LLM_BASE_URL", "https://api.openai.com/v1")
    llm_api_key: str = os.getenv("LLM_API_KEY", "")
    llm_model: str = os.getenv("LLM_MODEL", "gpt-4o-mini")
    max_token: int = int(os.getenv("LLM_MAX_TOKEN", 2048))
    llm_temperature: float = float(os.getenv("LLM_TEMPERATURE", 0.2))
    llm_request_timeout: float = float(os.getenv("LLM_REQUEST_TIMEOUT", 60.0))

    # ====================================
    # Monitoring (simulasi event jaringan)
    # ====================================
    event_interval_secs: float = float(os.getenv("EVENT_INTERVAL_SECS", 3.0))
    access_log_interval_secs: float = float(os.getenv("ACCESS_LOG_INTERVAL_SECS", 4.5))
    max_network_events: int = int(os.getenv("MAX_NETWORK_EVENTS", 100))
    max_access_logs: int = int(os.getenv("MAX_ACCESS_LOGS", 50))
    initial_network_events: int = int(os.getenv("INITIAL_NETWORK_EVENTS", 20))
    initial_access_logs: int = int(os.getenv("INITIAL_ACCESS_LOGS", 15))

    app_env: str = os.getenv("APP_ENV", "development")
    model_config = SettingsConfigDict(
        env_file=str(ENV_PATH), env_file_encoding="utf-8", extra="ignore"
    )


class BaseConfig:
    """Base configuration class for Quart."""

    # ====================
    # Database Config
    # ====================
    SQLALCHEMY_DATABASE_URI = os.getenv(
        "DATABASE_URL", f"sqlite+aiosqlite:///{(DB_DIR / 'cyberguard.sqlite').as_posix()}"
    )

    # ====================
    # App Config
    # ====================
    ENV = os.getenv("APP_ENV", "development")
    SECRET_KEY = os.getenv("SECRET_KEY", "change-me-secret-key")
    DEBUG = False
    TESTING = False
    MONITORING_AUTOSTART = os.getenv("MONITORING_AUTOSTART", "true").lower() == "true"

    # ====================
    # Logger Config
    # ====================
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT = os.getenv(
        "LOG_FORMAT", "[%(asctime)s] %(levelname)s in %(module)s: %(message)s"
    )
    LOG_RETENTION = int(os.getenv("LOG_RETENTION", 90))
    LOG_MODE = os.getenv("LOG_MODE", "file")  # file | stdout
    LOG_CONSOLE = os.getenv("LOG_CONSOLE", "true").lower() == "true"

    JSON_SORT_KEYS = False


class DevelopmentConfig(BaseConfig):
    DEBUG = True
    ENV = "development"


class TestingConfig(BaseConfig):
    TESTING = True
    DEBUG = True
    ENV = "testing"
    SQLALCHEMY_DATABASE_URI = "sqlite+aiosqlite:///:memory:"
    MONITORING_AUTOSTART = False
    LOG_MODE = "stdout"


class ProductionConfig(BaseConfig):
    DEBUG = False
    ENV = "production"


config_map = {
    "development": DevelopmentConfig,
    "testing": TestingConfig,
    "production": ProductionConfig,
    "default": DevelopmentConfig,
}


def get_config(env: str | None = None) -> type[BaseConfig]:
    """Return the configuration class corresponding to the given environment."""
    if not env:
        env = os.getenv("APP_ENV", "default")
    return config_map.get(env, config_map["default"])
