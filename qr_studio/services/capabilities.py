"""Encoder and decoder capability interfaces (adapter pattern)."""

from typing import Dict, Optional, Protocol, Tuple

from qr_studio.schemas.analysis import DecodedSymbol, EncodeConfig, EncodedSymbol


class QrEncoder(Protocol):
    """Interface for QR code generation."""

    def encode(self, text: str, config: EncodeConfig) -> EncodedSymbol:
        """Render ``text`` unchanged into a QR PNG."""
        ...


class QrDecoder(Protocol):
    """Interface for QR code decoding."""

    def decode_qr_image(
        self,
        file_content: bytes,
        filename: str
    ) -> Tuple[Optional[DecodedSymbol], Dict]:
        """
        Decode the first QR code in an image.

        Returns (symbol, metadata); symbol is None when nothing was found
        and metadata["error"] then says why.
        """
        ...
