"""
QR Code Encoder Service.

Renders text into a QR code PNG using the qrcode library and Pillow.
The qrcode library is loaded on first use.
"""
import importlib
import io
import logging
from typing import Any, Optional

from PIL import Image

from qr_studio.core.exceptions import CapabilityUnavailableError, InvalidConfigError
from qr_studio.schemas.analysis import EncodeConfig, EncodedSymbol

logger = logging.getLogger(__name__)


class QrEncoderService:
    """Service for generating QR code images."""

    def __init__(self, box_size: int = 10):
        self.box_size = box_size
        self._qrcode: Optional[Any] = None

    def _load_library(self) -> Any:
        """Import qrcode on first use."""
        if self._qrcode is None:
            try:
                self._qrcode = importlib.import_module("qrcode")
            except ImportError as e:
                logger.error(f"QR code library could not be loaded: {e}")
                raise CapabilityUnavailableError(
                    "QR Code library is not available. Install the 'qrcode' package.",
                    {"library": "qrcode"}
                ) from e
        return self._qrcode

    def encode(self, text: str, config: EncodeConfig) -> EncodedSymbol:
        """
        Encode text into a QR code PNG.

        Args:
            text: Payload, passed to the encoder unchanged
            config: Size, colors, error correction level and quiet zone

        Returns:
            EncodedSymbol with PNG bytes plus the chosen version and mask
        """
        qrcode = self._load_library()

        qr = qrcode.QRCode(
            version=None,
            error_correction=getattr(
                qrcode.constants, f"ERROR_CORRECT_{config.error_correction_level}"
            ),
            box_size=self.box_size,
            border=config.border,
        )
        qr.add_data(text)
        qr.make(fit=True)

        # Pin the mask so the index can be reported with the symbol
        qr.mask_pattern = qr.best_mask_pattern()
        qr.make(fit=False)

        try:
            image = qr.make_image(
                fill_color=config.foreground_color,
                back_color=config.background_color
            ).get_image()
        except ValueError as e:
            raise InvalidConfigError(
                f"Invalid color: {e}",
                {
                    "foreground_color": config.foreground_color,
                    "background_color": config.background_color,
                }
            ) from e
        image = image.convert("RGB").resize((config.width, config.height), Image.NEAREST)

        buffer = io.BytesIO()
        image.save(buffer, format="PNG")

        logger.debug(
            f"Encoded {len(text)} chars as version {qr.version} "
            f"(mask {qr.mask_pattern}, EC {config.error_correction_level})"
        )

        return EncodedSymbol(
            png_bytes=buffer.getvalue(),
            width=config.width,
            height=config.height,
            version=qr.version,
            mask_pattern=qr.mask_pattern,
            error_correction_level=config.error_correction_level
        )


# Global instance
qr_encoder = QrEncoderService()
