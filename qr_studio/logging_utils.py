"""
Structured logging utilities for QR Studio.

Provides helper functions for logging generate/decode events with consistent formatting.
Uses Python's built-in logging module with structured fields for easy parsing.
"""

import logging
from typing import Any, Dict, Optional

from qr_studio.core.config import settings

logger = logging.getLogger("qr_studio")

PREVIEW_LENGTH = 200


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger from settings.

    Args:
        level: Optional override for LOG_LEVEL (e.g. "DEBUG")
    """
    logging.basicConfig(
        level=getattr(logging, (level or settings.LOG_LEVEL).upper(), logging.INFO),
        format=settings.LOG_FORMAT,
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def _preview(raw_text: str) -> str:
    # Avoid logging very long payloads
    if len(raw_text) > PREVIEW_LENGTH:
        return raw_text[:PREVIEW_LENGTH] + "..."
    return raw_text


def log_qr_generated(
    raw_text: str,
    kind: str,
    version: Optional[int] = None,
    error_correction_level: Optional[str] = None
) -> None:
    """
    Log a QR code generation with structured data.

    Args:
        raw_text: Text that was encoded
        kind: Detected payload kind of the text
        version: QR symbol version chosen by the encoder
        error_correction_level: L, M, Q or H
    """
    log_data: Dict[str, Any] = {
        "event": "qr_generate",
        "kind": kind,
        "version": version,
        "error_correction_level": error_correction_level,
        "qr_data_preview": _preview(raw_text),
    }

    logger.info(
        f"QR generated | Kind: {kind} | Version: {version} | EC: {error_correction_level}",
        extra=log_data
    )


def log_qr_decoded(
    raw_text: str,
    kind: str,
    backend: Optional[str] = None,
    filename: Optional[str] = None
) -> None:
    """
    Log a successful QR decode with structured data.

    Args:
        raw_text: Decoded payload
        kind: Detected payload kind
        backend: Decoder backend that found the symbol
        filename: Source image name
    """
    logger.info(
        f"QR decoded | Kind: {kind} | Backend: {backend} | File: {filename}",
        extra={
            "event": "qr_decode",
            "kind": kind,
            "backend": backend,
            "image_name": filename,
            "qr_data_preview": _preview(raw_text),
        }
    )


def log_decode_failure(filename: Optional[str], reason: str) -> None:
    """
    Log an image that yielded no payload.

    Args:
        filename: Source image name
        reason: Error message reported by the decoder
    """
    logger.warning(
        f"QR decode failed | File: {filename} | Reason: {reason}",
        extra={
            "event": "qr_decode_failed",
            "image_name": filename,
            "reason": reason,
        }
    )


def log_error(message: str, error: Exception, context: Optional[Dict[str, Any]] = None) -> None:
    """
    Log an error with context information.

    Args:
        message: Error description
        error: Exception object
        context: Additional context data
    """
    extra_data = {"event": "error", "error_type": type(error).__name__}
    if context:
        extra_data.update(context)

    logger.error(
        f"{message}: {str(error)}",
        extra=extra_data
    )
