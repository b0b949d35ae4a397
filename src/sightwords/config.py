"""Configuration settings for the sight-word scheduler."""
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# Load environment variables from .env file
env_file = ".env.test" if os.getenv("ENV") == "test" else ".env"
load_dotenv(env_file)


DATA_DIR = Path(os.getenv("DATA_DIR", "./data"))

# Leitner settings
BOX_INTERVALS = {1: 1, 2: 2, 3: 4, 4: 8}  # sessions between reviews
MAX_BOX = 4
MAINTENANCE_SAMPLE_SIZE = 3
WARMUP_SIZE = 3
COOLDOWN_SIZE = 2

# Mastery predicate
MASTERY_CONSECUTIVE_CORRECT = 2
MASTERY_MIN_SESSIONS = 2
MASTERY_MAX_AVG_RESPONSE_MS = 3000


def default_database_url() -> str:
    """SQLite database inside the data directory."""
    return f"sqlite:///{DATA_DIR / 'sightwords.db'}"


def ensure_directories() -> None:
    """Ensure all required directories exist."""
    DATA_DIR.mkdir(parents=True, exist_ok=True)


@dataclass
class DatabaseSettings:
    """Database configuration settings."""
    url: str = os.getenv("DATABASE_URL", default_database_url())
    echo: bool = os.getenv("DATABASE_ECHO", "false").lower() == "true"


@dataclass
class LoggingSettings:
    """Logging configuration settings."""
    level: str = os.getenv("LOG_LEVEL", "INFO")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    dir: Optional[str] = os.getenv("LOG_DIR", None)
    rotation: str = os.getenv("LOG_ROTATION", "midnight")
    interval: int = int(os.getenv("LOG_INTERVAL", "1"))
    backup_count: int = int(os.getenv("LOG_BACKUP_COUNT", "7"))


@dataclass
class StorageSettings:
    """Persisted progress settings."""
    progress_key: str = os.getenv("PROGRESS_KEY", "felicity-sight-words-progress")


@dataclass
class SessionSettings:
    """Practice session settings."""
    max_new_words: int = int(os.getenv("MAX_NEW_WORDS", "3"))
    max_session_words: int = int(os.getenv("MAX_SESSION_WORDS", "15"))
    timeout_minutes: float = float(os.getenv("SESSION_TIMEOUT_MINUTES", "10"))
    timeout_check_seconds: float = float(os.getenv("TIMEOUT_CHECK_SECONDS", "10"))


@dataclass
class MonitoringSettings:
    """Prometheus exporter settings."""
    metrics_port: int = int(os.getenv("METRICS_PORT", "0"))  # 0 disables the exporter


def get_database_settings() -> DatabaseSettings:
    """Get database settings."""
    return DatabaseSettings()


def get_logging_settings() -> LoggingSettings:
    """Get logging settings."""
    return LoggingSettings()


def get_storage_settings() -> StorageSettings:
    """Get storage settings."""
    return StorageSettings()


def get_session_settings() -> SessionSettings:
    """Get session settings."""
    return SessionSettings()


def get_monitoring_settings() -> MonitoringSettings:
    """Get monitoring settings."""
    return MonitoringSettings()


@dataclass
class Settings:
    """Main settings class that combines all configuration settings."""
    database: DatabaseSettings = field(default_factory=get_database_settings)
    logging: LoggingSettings = field(default_factory=get_logging_settings)
    storage: StorageSettings = field(default_factory=get_storage_settings)
    session: SessionSettings = field(default_factory=get_session_settings)
    monitoring: MonitoringSettings = field(default_factory=get_monitoring_settings)

    def validate(self) -> None:
        """Validate settings and raise ValueError if invalid."""
        if not self.storage.progress_key:
            raise ValueError("PROGRESS_KEY must not be empty")

        if self.session.max_new_words < 0:
            raise ValueError("MAX_NEW_WORDS cannot be negative")

        if self.session.max_session_words < 0:
            raise ValueError("MAX_SESSION_WORDS cannot be negative")

        if self.session.timeout_minutes <= 0:
            raise ValueError("SESSION_TIMEOUT_MINUTES must be positive")

        if self.session.timeout_check_seconds <= 0:
            raise ValueError("TIMEOUT_CHECK_SECONDS must be positive")

        if self.monitoring.metrics_port < 0:
            raise ValueError("METRICS_PORT cannot be negative")


# Create global settings instance
settings = Settings()
settings.validate()
