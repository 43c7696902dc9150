"""
Pydantic schemas for QR payload analysis.
These schemas define the records handed to the presentation layer.
"""
import base64
from enum import Enum
from typing import Any, Dict, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from qr_studio.core.config import settings


QR_FORMAT = "QR_CODE"


class FrozenModel(BaseModel):
    """Immutable base model; serializes with camelCase aliases."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ============================================================================
# PAYLOAD KINDS
# ============================================================================

class PayloadKind(str, Enum):
    """Closed set of payload conventions recognised in QR text."""
    TEXT = "Text"
    URL = "URL"
    WIFI = "WiFi"
    CONTACT = "Contact"
    EMAIL = "Email"
    PHONE = "Phone"
    SMS = "SMS"
    GEO = "Geo"
    CALENDAR_EVENT = "CalendarEvent"
    WHATSAPP = "WhatsApp"

    @property
    def label(self) -> str:
        """Human-readable name for display."""
        if self is PayloadKind.CALENDAR_EVENT:
            return "Calendar Event"
        return self.value


# ============================================================================
# PARSED FIELDS (one model per kind)
# ============================================================================

class UrlFields(FrozenModel):
    """Fields of an http(s) link."""
    title: str = Field(..., description="Hostname, or the raw URL if it could not be parsed")
    url: str = Field(..., description="URL exactly as decoded")
    protocol: Optional[str] = Field(None, description="Scheme without the trailing colon", examples=["https"])
    domain: Optional[str] = Field(None, description="Hostname")
    path: Optional[str] = Field(None, description="Path component")
    query: Optional[str] = Field(None, description="Query string without the leading '?'")


class WifiFields(FrozenModel):
    """Fields of a WIFI: network credential string."""
    title: str
    ssid: str = Field("", description="Network name (S:)")
    password: str = Field("", description="Network password (P:)")
    encryption: str = Field("WPA/WPA2", description="Authentication type (T:)")
    hidden: bool = Field(False, description="Whether the SSID is hidden (H:true)")


class ContactFields(FrozenModel):
    """Fields of a vCard contact."""
    title: str
    name: str = Field("Unknown", description="Formatted name (FN:)")
    phone: Optional[str] = None
    email: Optional[str] = None
    organization: Optional[str] = None
    job_title: Optional[str] = None
    url: Optional[str] = None


class EmailFields(FrozenModel):
    """Fields of a mailto: link."""
    title: str
    email: str = ""
    subject: Optional[str] = None
    body: Optional[str] = None


class PhoneFields(FrozenModel):
    """Fields of a tel: link."""
    title: str
    number: str = ""


class SmsFields(FrozenModel):
    """Fields of an smsto:/SMS: link."""
    title: str
    number: str = ""
    message: str = ""


class GeoFields(FrozenModel):
    """Fields of a geo: coordinate."""
    title: str
    latitude: str = ""
    longitude: str = ""
    altitude: Optional[str] = None


class CalendarEventFields(FrozenModel):
    """Fields of an iCalendar VEVENT."""
    title: str
    summary: str = "No title"
    start: Optional[str] = Field(None, description="Normalized DTSTART")
    end: Optional[str] = Field(None, description="Normalized DTEND")
    location: Optional[str] = None
    description: Optional[str] = None


class WhatsAppFields(FrozenModel):
    """Fields of a wa.me deep link."""
    title: str
    number: str = ""
    message: Optional[str] = None


class TextFields(FrozenModel):
    """Fallback for payloads with no recognised convention."""
    title: str
    text: str


ParsedFields = Union[
    UrlFields,
    WifiFields,
    ContactFields,
    EmailFields,
    PhoneFields,
    SmsFields,
    GeoFields,
    CalendarEventFields,
    WhatsAppFields,
    TextFields,
]

FIELDS_BY_KIND: Dict[PayloadKind, type] = {
    PayloadKind.URL: UrlFields,
    PayloadKind.WIFI: WifiFields,
    PayloadKind.CONTACT: ContactFields,
    PayloadKind.EMAIL: EmailFields,
    PayloadKind.PHONE: PhoneFields,
    PayloadKind.SMS: SmsFields,
    PayloadKind.GEO: GeoFields,
    PayloadKind.CALENDAR_EVENT: CalendarEventFields,
    PayloadKind.WHATSAPP: WhatsAppFields,
    PayloadKind.TEXT: TextFields,
}


# ============================================================================
# ANALYSIS RESULT
# ============================================================================

class SymbolMetadata(FrozenModel):
    """Facts about the QR symbol reported by the encoder or decoder."""
    version: Optional[int] = Field(None, ge=1, le=40, description="QR symbol version (1-40)")
    mask_pattern: Optional[int] = Field(None, ge=0, le=7, description="Mask pattern index (0-7)")


class AnalysisResult(FrozenModel):
    """
    Complete interpretation of one QR payload.
    Produced once per generate/decode action and replaced on the next one.
    """
    raw_text: str = Field(..., description="Payload exactly as decoded")
    kind: PayloadKind = Field(..., description="Detected payload convention")
    fields: ParsedFields = Field(..., description="Kind-specific structured fields")
    raw_bytes_hex: str = Field(..., description="UTF-8 bytes as space separated hex pairs")
    format: Literal["QR_CODE"] = QR_FORMAT
    symbol_metadata: SymbolMetadata = Field(default_factory=SymbolMetadata)

    @field_validator("fields", mode="before")
    @classmethod
    def fields_for_kind(cls, v: Any, info: ValidationInfo) -> Any:
        """Validate plain field data (e.g. from JSON) against the model for ``kind``."""
        kind = info.data.get("kind")
        if isinstance(v, dict) and kind is not None:
            return FIELDS_BY_KIND[kind].model_validate(v)
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "rawText": "https://example.com/path?x=1",
                "kind": "URL",
                "fields": {
                    "title": "example.com",
                    "url": "https://example.com/path?x=1",
                    "protocol": "https",
                    "domain": "example.com",
                    "path": "/path",
                    "query": "x=1"
                },
                "rawBytesHex": "68 74 74 70 73 ...",
                "format": "QR_CODE",
                "symbolMetadata": {"version": 3, "maskPattern": 5}
            }
        }
    )


# ============================================================================
# ENCODER / DECODER BOUNDARY
# ============================================================================

class EncodeConfig(FrozenModel):
    """Rendering options handed to the encoder capability."""
    width: int = Field(default_factory=lambda: settings.QR_WIDTH, gt=0)
    height: int = Field(default_factory=lambda: settings.QR_HEIGHT, gt=0)
    foreground_color: str = Field(default_factory=lambda: settings.QR_FOREGROUND_COLOR)
    background_color: str = Field(default_factory=lambda: settings.QR_BACKGROUND_COLOR)
    error_correction_level: str = Field(default_factory=lambda: settings.QR_ERROR_CORRECTION)
    border: int = Field(default_factory=lambda: settings.QR_BORDER, ge=0)

    @field_validator("error_correction_level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in ("L", "M", "Q", "H"):
            raise ValueError(f"Invalid error correction level: {v!r}")
        return level

    @classmethod
    def for_theme(cls, dark_mode: bool = False, **overrides: Any) -> "EncodeConfig":
        """Default config using the light or dark palette."""
        foreground, background = settings.get_colors(dark_mode)
        values: Dict[str, Any] = {
            "foreground_color": foreground,
            "background_color": background,
        }
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)


class EncodedSymbol(FrozenModel):
    """PNG produced by the encoder capability."""
    model_config = ConfigDict(ser_json_bytes="base64")

    png_bytes: bytes = Field(..., repr=False)
    width: int
    height: int
    version: Optional[int] = None
    mask_pattern: Optional[int] = None
    error_correction_level: str = "H"

    @property
    def data_uri(self) -> str:
        """PNG as a data URI, suitable for <img src>."""
        return "data:image/png;base64," + base64.b64encode(self.png_bytes).decode("ascii")

    @property
    def symbol_metadata(self) -> SymbolMetadata:
        return SymbolMetadata(version=self.version, mask_pattern=self.mask_pattern)


class DecodedSymbol(FrozenModel):
    """Payload returned by the decoder capability."""
    text: str
    symbol_metadata: SymbolMetadata = Field(default_factory=SymbolMetadata)
    backend: Optional[str] = Field(None, description="Decoder backend that found the symbol")


class GenerationResult(FrozenModel):
    """Outcome of a generate action."""
    symbol: EncodedSymbol
    analysis: AnalysisResult


class DecodeOutcome(FrozenModel):
    """Outcome of a decode action."""
    analysis: AnalysisResult
    image_metadata: Dict[str, Any] = Field(default_factory=dict)
