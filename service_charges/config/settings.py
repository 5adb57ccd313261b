"""
Configuration management for the service charges engine.
"""

from decimal import Decimal
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from service_charges.models.rates import RateSchedule


class ServiceChargesConfig(BaseSettings):
    """Configuration settings for the service charges engine."""

    # Logging
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="standard", alias="LOG_FORMAT")
    log_console: bool = Field(default=True, alias="LOG_CONSOLE")
    log_file_enabled: bool = Field(default=False, alias="LOG_FILE_ENABLED")
    log_file: Optional[str] = Field(default=None, alias="LOG_FILE")
    log_max_file_size: int = Field(default=10 * 1024 * 1024, alias="LOG_MAX_FILE_SIZE")
    log_backup_count: int = Field(default=5, alias="LOG_BACKUP_COUNT")

    # Labor Rates (per hour)
    straight_rate: Decimal = Field(default=Decimal("120"), alias="STRAIGHT_RATE")
    overtime_rate: Decimal = Field(default=Decimal("180"), alias="OVERTIME_RATE")
    double_rate: Decimal = Field(default=Decimal("240"), alias="DOUBLE_RATE")
    straight_time_threshold_hours: Decimal = Field(
        default=Decimal("8"), alias="STRAIGHT_TIME_THRESHOLD_HOURS"
    )

    # Travel Transit Rates (per hour)
    weekday_travel_rate: Decimal = Field(
        default=Decimal("80"), alias="WEEKDAY_TRAVEL_RATE"
    )
    saturday_travel_rate: Decimal = Field(
        default=Decimal("120"), alias="SATURDAY_TRAVEL_RATE"
    )
    sunday_travel_rate: Decimal = Field(
        default=Decimal("160"), alias="SUNDAY_TRAVEL_RATE"
    )

    # Travel Expense Rates
    local_per_diem_rate: Decimal = Field(
        default=Decimal("65"), alias="LOCAL_PER_DIEM_RATE"
    )
    non_local_per_diem_rate: Decimal = Field(
        default=Decimal("220"), alias="NON_LOCAL_PER_DIEM_RATE"
    )
    mileage_rate: Decimal = Field(default=Decimal("0.63"), alias="MILEAGE_RATE")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        validate_default=True,
        extra="ignore",
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ["standard", "json"]
        if v.lower() not in valid_formats:
            raise ValueError(f"Log format must be one of: {valid_formats}")
        return v.lower()

    @field_validator("log_max_file_size", "log_backup_count")
    @classmethod
    def validate_rotation(cls, v):
        """Ensure rotation settings are not negative."""
        if v < 0:
            raise ValueError("Log rotation settings cannot be negative")
        return v

    @field_validator(
        "straight_rate",
        "overtime_rate",
        "double_rate",
        "weekday_travel_rate",
        "saturday_travel_rate",
        "sunday_travel_rate",
        "local_per_diem_rate",
        "non_local_per_diem_rate",
        "mileage_rate",
    )
    @classmethod
    def validate_rate(cls, v):
        """Ensure rates are not negative."""
        if v < 0:
            raise ValueError("Rates cannot be negative")
        return v

    @field_validator("straight_time_threshold_hours")
    @classmethod
    def validate_threshold(cls, v):
        """Ensure the straight-time threshold is positive."""
        if v <= 0:
            raise ValueError("Straight-time threshold must be positive")
        return v

    @model_validator(mode="after")
    def validate_log_file(self):
        """Ensure file logging has a file to write to."""
        if self.log_file_enabled and not self.log_file:
            raise ValueError("LOG_FILE must be set when LOG_FILE_ENABLED is true")
        return self

    def to_rate_schedule(self) -> RateSchedule:
        """Build the rate schedule the charge calculator consumes."""
        return RateSchedule(
            straight_rate=self.straight_rate,
            overtime_rate=self.overtime_rate,
            double_rate=self.double_rate,
            weekday_travel_rate=self.weekday_travel_rate,
            saturday_travel_rate=self.saturday_travel_rate,
            sunday_travel_rate=self.sunday_travel_rate,
            local_per_diem_rate=self.local_per_diem_rate,
            non_local_per_diem_rate=self.non_local_per_diem_rate,
            mileage_rate=self.mileage_rate,
            straight_time_threshold_hours=self.straight_time_threshold_hours,
        )


def load_config(env_file: Optional[str] = None) -> ServiceChargesConfig:
    """Load configuration from environment variables and .env file."""
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    return ServiceChargesConfig()


# Global configuration instance
_config: Optional[ServiceChargesConfig] = None


def get_config() -> ServiceChargesConfig:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config(env_file: Optional[str] = None) -> ServiceChargesConfig:
    """Reload configuration (useful for testing)."""
    global _config
    _config = load_config(env_file)
    return _config
