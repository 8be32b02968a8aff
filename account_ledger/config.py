"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
"""

from pydantic_settings import BaseSettings
from typing import Optional


class LedgerConfig(BaseSettings):
    """Account ledger configuration"""

    # Bank configuration
    bank_name: str = "Syllabus Bank"
    seed_demo_data: bool = True  # Create the demo users at startup

    # API configuration
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Security configuration
    jwt_secret: str = "change-me-in-production"
    jwt_expiry_hours: int = 24
    jwt_algorithm: str = "HS256"
    auth_enabled: bool = True

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text
    log_file: Optional[str] = None  # If None, logs to stdout

    # Account numbering
    account_counter_start: int = 1000  # First issued number is start + 1
    account_prefix_length: int = 3

    # Credit card rules
    minimum_due_rate: str = "0.10"
    minimum_due_floor: str = "10.00"

    class Config:
        env_prefix = "LEDGER_"
        env_file = ".env"
        case_sensitive = False


# Global configuration instance
config = LedgerConfig()


def get_config() -> LedgerConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> LedgerConfig:
    """Reload configuration from environment"""
    global config
    config = LedgerConfig()
    return config
