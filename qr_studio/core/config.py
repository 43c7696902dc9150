"""
Core configuration using Pydantic Settings.
Handles all environment variables and application settings.
"""
from functools import lru_cache
from typing import Annotated, List

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    # Application Info
    APP_NAME: str = "QR Studio"
    APP_VERSION: str = "1.0.0"

    # QR Generation Defaults
    QR_WIDTH: int = 300
    QR_HEIGHT: int = 300
    QR_BORDER: int = 4
    QR_FOREGROUND_COLOR: str = "#000000"
    QR_BACKGROUND_COLOR: str = "#ffffff"
    QR_DARK_FOREGROUND_COLOR: str = "#ffffff"
    QR_DARK_BACKGROUND_COLOR: str = "#1a1a1a"
    QR_ERROR_CORRECTION: str = "H"

    # QR Image Settings
    QR_MAX_FILE_SIZE: int = 10 * 1024 * 1024  # 10MB max
    QR_ALLOWED_FORMATS: Annotated[List[str], NoDecode] = ["png", "jpg", "jpeg", "gif", "bmp", "webp"]

    # Decoder backends, tried in order
    QR_DECODER_BACKENDS: Annotated[List[str], NoDecode] = ["pyzbar", "opencv"]

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"
    )

    @field_validator("QR_ALLOWED_FORMATS", "QR_DECODER_BACKENDS", mode="before")
    @classmethod
    def parse_comma_separated(cls, v):
        """Parse list settings from environment variable if string."""
        if isinstance(v, str):
            return [item.strip().lower() for item in v.split(",") if item.strip()]
        return v

    @field_validator("QR_ERROR_CORRECTION")
    @classmethod
    def validate_error_correction(cls, v: str) -> str:
        """Only the four QR error correction levels are accepted."""
        level = v.strip().upper()
        if level not in ("L", "M", "Q", "H"):
            raise ValueError(f"Invalid error correction level: {v!r} (expected L, M, Q or H)")
        return level

    def get_colors(self, dark_mode: bool = False) -> tuple:
        """Return (foreground, background) for the requested theme."""
        if dark_mode:
            return self.QR_DARK_FOREGROUND_COLOR, self.QR_DARK_BACKGROUND_COLOR
        return self.QR_FOREGROUND_COLOR, self.QR_BACKGROUND_COLOR


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Returns:
        Settings instance with all configuration loaded.
    """
    return Settings()


# Global settings instance
settings = get_settings()
