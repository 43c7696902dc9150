"""
Exceptions raised at the encode/decode boundary.

The payload analysis core never raises; these only come from the
workflow around the encoder and decoder capabilities.
"""
from typing import Any, Dict, Optional


class QrStudioError(Exception):
    """Base class for all QR Studio errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class EmptyPayloadError(QrStudioError):
    """Raised when there is no text to encode."""

    def __init__(self, message: str = "Please enter text to generate QR code"):
        super().__init__(message)


class InvalidConfigError(QrStudioError):
    """Raised when rendering options cannot be applied (size, colors, level)."""


class CapabilityUnavailableError(QrStudioError):
    """Raised when the library behind an encoder/decoder cannot be loaded."""


class InvalidImageError(QrStudioError):
    """Raised when an uploaded image is rejected or cannot be read."""


class QrNotFoundError(QrStudioError):
    """Raised when the decoder finds no QR code in the image."""

    def __init__(
        self,
        message: str = "No QR code found in image. Please upload a clear QR code image.",
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
