from typing import Dict, Optional, Tuple

import pytest

from qr_studio.schemas.analysis import DecodedSymbol, EncodeConfig, EncodedSymbol, SymbolMetadata
from qr_studio.services.qr_workflow import QrWorkflowService


class FakeEncoder:
    """Records what it was asked to encode."""

    def __init__(self):
        self.calls = []

    def encode(self, text: str, config: EncodeConfig) -> EncodedSymbol:
        self.calls.append((text, config))
        return EncodedSymbol(
            png_bytes=b"\x89PNG fake",
            width=config.width,
            height=config.height,
            version=2,
            mask_pattern=5,
            error_correction_level=config.error_correction_level
        )


class FakeDecoder:
    """Returns a canned decode result."""

    def __init__(self, text: Optional[str] = None, reason: str = "not_found",
                 metadata: Optional[SymbolMetadata] = None):
        self.text = text
        self.reason = reason
        self.metadata = metadata or SymbolMetadata()

    def decode_qr_image(self, file_content: bytes, filename: str) -> Tuple[Optional[DecodedSymbol], Dict]:
        metadata = {"size_bytes": len(file_content), "backend": None, "error": None, "reason": None}
        if self.text is None:
            metadata["error"] = f"failure: {self.reason}"
            metadata["reason"] = self.reason
            return None, metadata
        metadata["backend"] = "fake"
        return DecodedSymbol(text=self.text, symbol_metadata=self.metadata, backend="fake"), metadata


@pytest.fixture
def fake_encoder():
    return FakeEncoder()


@pytest.fixture
def make_workflow(fake_encoder):
    def _make(text: Optional[str] = None, reason: str = "not_found",
              metadata: Optional[SymbolMetadata] = None) -> QrWorkflowService:
        return QrWorkflowService(fake_encoder, FakeDecoder(text, reason, metadata))
    return _make


@pytest.fixture
def workflow_with_encoder():
    def _make(encoder) -> QrWorkflowService:
        return QrWorkflowService(encoder, FakeDecoder())
    return _make
