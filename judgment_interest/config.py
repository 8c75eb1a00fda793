"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class JudgmentInterestConfig(BaseSettings):
    """Judgment interest calculator configuration"""

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # Rate data
    default_jurisdiction: str = "BC"
    rates_file: Optional[str] = None  # If None, the bundled BC table is used

    # Calculation conventions
    end_date_accrues: bool = False  # True lets the end date itself earn interest
    payments_before_damages: bool = True  # Same-day ordering of principal events
    display_precision: int = 2

    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8095

    class Config:
        env_prefix = "JUDGMENT_INTEREST_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = JudgmentInterestConfig()


def get_config() -> JudgmentInterestConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> JudgmentInterestConfig:
    """Reload configuration from environment"""
    global config
    config = JudgmentInterestConfig()
    return config
