"""
Generate/decode workflow.

Orchestrates the encoder and decoder capabilities around the payload
analysis core. Both capabilities are injected; nothing here looks them up
globally.
"""
import logging
from pathlib import Path
from typing import Optional, Union

from qr_studio.core.exceptions import EmptyPayloadError, InvalidImageError, QrNotFoundError
from qr_studio.logging_utils import log_decode_failure, log_qr_decoded, log_qr_generated
from qr_studio.schemas.analysis import (
    DecodeOutcome,
    EncodeConfig,
    EncodedSymbol,
    GenerationResult,
)
from qr_studio.services.capabilities import QrDecoder, QrEncoder
from qr_studio.services.qr_analyzer import analyze_payload

logger = logging.getLogger(__name__)


class QrWorkflowService:
    """Runs generate and decode actions and analyses their payloads."""

    def __init__(self, encoder: QrEncoder, decoder: QrDecoder):
        self.encoder = encoder
        self.decoder = decoder

    def generate(
        self,
        text: str,
        config: Optional[EncodeConfig] = None,
        dark_mode: bool = False
    ) -> GenerationResult:
        """
        Encode text into a QR code and analyse it.

        Args:
            text: Payload to encode (passed to the encoder unchanged)
            config: Rendering options; defaults to the light or dark theme
            dark_mode: Theme used when no config is given

        Returns:
            GenerationResult with the PNG and the payload analysis

        Raises:
            EmptyPayloadError: If text is blank
            CapabilityUnavailableError: If the encoder library cannot be loaded
            InvalidConfigError: If the encoder rejects the colors
        """
        if not text or not text.strip():
            raise EmptyPayloadError()

        config = config or EncodeConfig.for_theme(dark_mode)
        symbol = self.encoder.encode(text, config)
        analysis = analyze_payload(text, symbol.symbol_metadata)

        log_qr_generated(
            raw_text=text,
            kind=analysis.kind.value,
            version=symbol.version,
            error_correction_level=symbol.error_correction_level
        )

        return GenerationResult(symbol=symbol, analysis=analysis)

    def decode(self, file_content: bytes, filename: str) -> DecodeOutcome:
        """
        Decode a QR image and analyse the payload.

        Args:
            file_content: Image file bytes
            filename: Original filename (its extension is checked)

        Returns:
            DecodeOutcome with the analysis and image metadata

        Raises:
            InvalidImageError: If the image is rejected or unreadable
            QrNotFoundError: If no QR code was found
            CapabilityUnavailableError: If no decoder library can be loaded
        """
        symbol, metadata = self.decoder.decode_qr_image(file_content, filename)

        if symbol is None:
            error_msg = metadata.get("error") or "Could not decode QR code"
            log_decode_failure(filename, error_msg)
            if metadata.get("reason") == "not_found":
                raise QrNotFoundError(error_msg, details=metadata)
            raise InvalidImageError(error_msg, details=metadata)

        analysis = analyze_payload(symbol.text, symbol.symbol_metadata)

        log_qr_decoded(
            raw_text=symbol.text,
            kind=analysis.kind.value,
            backend=symbol.backend,
            filename=filename
        )

        return DecodeOutcome(analysis=analysis, image_metadata=metadata)

    def decode_file(self, path: Union[str, Path]) -> DecodeOutcome:
        """Decode a QR image from disk."""
        path = Path(path)
        try:
            file_content = path.read_bytes()
        except OSError as e:
            raise InvalidImageError(f"Failed to read file: {e}", details={"path": str(path)}) from e
        return self.decode(file_content, path.name)

    @staticmethod
    def save_png(symbol: EncodedSymbol, path: Union[str, Path]) -> Path:
        """Write a generated QR code to disk."""
        path = Path(path)
        path.write_bytes(symbol.png_bytes)
        logger.info(f"QR code saved to {path}")
        return path
