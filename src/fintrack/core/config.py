#!/usr/bin/env python3
"""
Configuration Management for fintrack

Handles environment-based configuration with defaults and validation.
Supports multiple environments (development, test, production).
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class StorageConfig:
    """Where the book and its backups live on disk."""

    state_file: Path
    backup_dir: Path
    backup_format: str = "json"


@dataclass
class DashboardConfig:
    """Windows and thresholds for derived dashboard metrics."""

    currency_symbol: str = "R$"
    upcoming_days: int = 7
    recent_days: int = 7
    expense_alert_ratio: Decimal = Decimal("0.8")


@dataclass
class ReportConfig:
    """Report export configuration."""

    output_dir: Path
    csv_date_format: str = "%Y-%m-%d"


@dataclass
class Config:
    """
    Main configuration class for fintrack.

    Loads configuration from environment variables with defaults and
    validation for each environment type.
    """

    environment: Environment

    # Core directories
    data_dir: Path

    # Component configurations
    storage: StorageConfig
    dashboard: DashboardConfig
    reports: ReportConfig

    # Application settings
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables."""
        env = Environment(os.getenv("FINTRACK_ENV", "development"))

        if env == Environment.TEST:
            default_test_dir = Path(tempfile.gettempdir()) / "test_fintrack"
            data_dir = Path(os.getenv("FINTRACK_DATA_DIR", str(default_test_dir)))
        else:
            data_dir = Path(os.getenv("FINTRACK_DATA_DIR", "./data")).expanduser().resolve()

        data_dir.mkdir(parents=True, exist_ok=True)

        storage = StorageConfig(
            state_file=data_dir / "finance-data.json",
            backup_dir=data_dir / "backups",
            backup_format=os.getenv("FINTRACK_BACKUP_FORMAT", "json").lower(),
        )

        dashboard = DashboardConfig(
            currency_symbol=os.getenv("FINTRACK_CURRENCY_SYMBOL", "R$"),
            upcoming_days=int(os.getenv("FINTRACK_UPCOMING_DAYS", "7")),
            recent_days=int(os.getenv("FINTRACK_RECENT_DAYS", "7")),
            expense_alert_ratio=_parse_decimal(os.getenv("FINTRACK_EXPENSE_ALERT_RATIO", "0.8")),
        )

        reports = ReportConfig(
            output_dir=data_dir / "reports",
            csv_date_format=os.getenv("FINTRACK_CSV_DATE_FORMAT", "%Y-%m-%d"),
        )

        return cls(
            environment=env,
            data_dir=data_dir,
            storage=storage,
            dashboard=dashboard,
            reports=reports,
            debug=os.getenv("DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )

    def validate(self) -> list:
        """Validate configuration and return list of errors."""
        errors = []

        if not self.data_dir.exists():
            errors.append(f"data_dir does not exist: {self.data_dir}")

        if self.storage.backup_format not in ("json", "yaml"):
            errors.append(f"Backup format must be json or yaml, got {self.storage.backup_format!r}")

        if self.dashboard.upcoming_days < 0:
            errors.append("Upcoming bill window must be non-negative")
        if self.dashboard.recent_days < 0:
            errors.append("Recent activity window must be non-negative")
        if self.dashboard.expense_alert_ratio <= 0:
            errors.append("Expense alert ratio must be positive")

        if self.log_level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            errors.append(f"Unknown log level: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure logging based on configuration."""
        level = getattr(logging, self.log_level, logging.INFO)
        if self.debug:
            level = logging.DEBUG

        # Configure format based on environment
        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")
        logging.getLogger("fintrack").setLevel(level)

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to a plain dictionary for display."""
        result: dict[str, Any] = {}

        for field_name, field_value in self.__dict__.items():
            if hasattr(field_value, "__dict__") and not isinstance(field_value, Enum):
                result[field_name] = {name: _plain(value) for name, value in field_value.__dict__.items()}
            else:
                result[field_name] = _plain(field_value)

        return result


def _plain(value: Any) -> Any:
    """Render Paths, Enums and Decimals as display-friendly scalars."""
    if isinstance(value, Path):
        return str(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, Decimal):
        return str(value)
    return value


def _parse_decimal(value: str) -> Decimal:
    """Parse a decimal setting, raising ValueError on malformed input."""
    try:
        return Decimal(value.strip())
    except InvalidOperation as e:
        raise ValueError(f"Invalid decimal setting: {value!r}") from e


# Global configuration instance
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_environment()

        # Validate configuration
        errors = _config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        # Setup logging
        _config.setup_logging()

    return _config


def reload_config() -> Config:
    """Reload configuration from environment (useful for testing)."""
    global _config
    _config = None
    return get_config()


# Convenience functions
def get_data_dir() -> Path:
    """Get the data directory path."""
    return get_config().data_dir


def is_test() -> bool:
    """Check if running in test environment."""
    return get_config().environment == Environment.TEST
