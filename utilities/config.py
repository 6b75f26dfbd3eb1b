"""
Configuration management using environment variables.
Handles logging and store settings with validation and defaults.
"""

from pathlib import Path
from typing import Optional

from pydantic import validator
from pydantic_settings import BaseSettings


class AppConfig(BaseSettings):
    """
    Application-wide settings.
    Uses pydantic BaseSettings for environment variable management.
    """

    # Logging Configuration
    log_level: str = "INFO"
    log_format: str = "json"
    log_file: Optional[str] = None

    # Store Configuration
    book_id_length: int = 16

    # Development/Testing
    debug: bool = False

    @validator('log_level')
    def validate_log_level(cls, v):
        """Ensure log level is valid."""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of: {valid_levels}')
        return v.upper()

    @validator('log_format')
    def validate_log_format(cls, v):
        """Ensure log format is valid."""
        valid_formats = ['json', 'console']
        if v.lower() not in valid_formats:
            raise ValueError(f'log_format must be one of: {valid_formats}')
        return v.lower()

    @validator('book_id_length')
    def validate_book_id_length(cls, v):
        """Keep ids long enough that collisions stay negligible."""
        if v < 8 or v > 64:
            raise ValueError('book_id_length must be between 8 and 64')
        return v

    class Config:
        """Pydantic configuration."""
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False
        extra = "ignore"

    def get_log_file_path(self) -> Optional[Path]:
        """Get log file path as Path object."""
        if self.log_file:
            return Path(self.log_file)
        return None


# Global configuration instance
config = AppConfig()
