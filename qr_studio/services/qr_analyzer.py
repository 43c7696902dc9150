"""
QR Payload Analysis Service.

This is the core module that turns a decoded QR payload into an AnalysisResult.

Analysis Components:
1. Classification - Pick the payload convention (URL, WiFi, vCard, ...)
2. Field Extraction - Pull structured fields for that convention
3. Byte Rendering - Hex dump of the UTF-8 payload
4. Assembly - Combine the above with the symbol metadata

Every step is a pure function of the payload text; the same input always
produces an equal result no matter where the text came from.
"""
import logging
from typing import Optional

from qr_studio.schemas.analysis import (
    QR_FORMAT,
    AnalysisResult,
    ParsedFields,
    PayloadKind,
    SymbolMetadata,
)
from qr_studio.services.byte_renderer import to_hex_bytes
from qr_studio.services.field_extractors import extract_fields
from qr_studio.services.payload_classifier import classify

logger = logging.getLogger(__name__)


def assemble_analysis(
    raw: str,
    kind: PayloadKind,
    fields: ParsedFields,
    symbol_metadata: Optional[SymbolMetadata] = None
) -> AnalysisResult:
    """
    Combine the outputs of the analysis steps into one record.

    Args:
        raw: Payload text
        kind: Classifier output
        fields: Extractor output for ``kind``
        symbol_metadata: Version/mask reported by the encoder or decoder

    Returns:
        AnalysisResult with format always set to QR_CODE
    """
    return AnalysisResult(
        raw_text=raw,
        kind=kind,
        fields=fields,
        raw_bytes_hex=to_hex_bytes(raw),
        format=QR_FORMAT,
        symbol_metadata=symbol_metadata or SymbolMetadata()
    )


def analyze_payload(
    raw: str,
    symbol_metadata: Optional[SymbolMetadata] = None
) -> AnalysisResult:
    """
    Classify a payload, extract its fields and build the AnalysisResult.

    Args:
        raw: Payload text exactly as decoded (or about to be encoded)
        symbol_metadata: Optional version/mask of the QR symbol

    Returns:
        AnalysisResult for the payload
    """
    kind = classify(raw)
    fields = extract_fields(kind, raw)
    logger.debug(f"Classified payload as {kind.value}: {fields.title!r}")
    return assemble_analysis(raw, kind, fields, symbol_metadata)
