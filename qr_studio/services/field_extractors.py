"""
Field Extractors.

One extractor per payload kind. Each takes the raw payload and returns the
kind's fields model. Extractors never raise: a sub-field whose pattern does
not match is simply left empty, and a URL that cannot be parsed falls back to
a minimal record.

Every model carries a ``title`` used for compact display. When the most
salient field is empty the title falls back to the raw text, truncated to
47 characters plus "..." when it is longer than 50.
"""
import re
from typing import Callable, Dict, List, Optional, Pattern
from urllib.parse import parse_qs, urlsplit

from qr_studio.schemas.analysis import (
    CalendarEventFields,
    ContactFields,
    EmailFields,
    GeoFields,
    ParsedFields,
    PayloadKind,
    PhoneFields,
    SmsFields,
    TextFields,
    UrlFields,
    WhatsAppFields,
    WifiFields,
)
from qr_studio.services.date_normalizer import normalize_date

TITLE_MAX_LENGTH = 50
TITLE_TRUNCATED_LENGTH = 47

DEFAULT_WIFI_ENCRYPTION = "WPA/WPA2"
DEFAULT_CONTACT_NAME = "Unknown"
DEFAULT_EVENT_SUMMARY = "No title"

FORBIDDEN_HOST_CHARS = re.compile(r"[\s\x00-\x1f\x7f<>^|%\[\]/\\]")

# WIFI:T:WPA;S:MyNet;P:secret;H:true;
# Each token is scanned on its own so fields may come in any order.
WIFI_SSID = re.compile(r"S:([^;]*)")
WIFI_TYPE = re.compile(r"T:([^;]*)")
WIFI_PASSWORD = re.compile(r"P:([^;]*)")
WIFI_HIDDEN = re.compile(r"H:([^;]*)")

MAILTO = re.compile(r"^mailto:([^?]*)(?:\?(.*))?\Z", re.IGNORECASE)
TEL_PREFIX = re.compile(r"^tel:", re.IGNORECASE)
SMS = re.compile(r"^(?:smsto|SMS):([^:]*):?(.*)", re.IGNORECASE)
GEO = re.compile(r"^geo:([^,]*),([^,]*)(?:,([^,]*))?", re.IGNORECASE)
WHATSAPP = re.compile(r"^https://wa\.me/([0-9]+)(?:\?(.*))?", re.IGNORECASE)


def _line_pattern(name: str, with_params: bool = False) -> Pattern[str]:
    """
    Build a pattern for a ``NAME:value`` content line.

    An optional vCard group prefix (``item1.TEL:``) is allowed. With
    ``with_params``, ``;``-separated parameters may sit between the name
    and the colon (``TEL;TYPE=CELL:``); they are matched but not captured.
    """
    params = r"(?:;[^:\r\n]*)?" if with_params else ""
    return re.compile(
        rf"^(?:[A-Za-z0-9-]+\.)?{name}{params}:([^\r\n]*)",
        re.IGNORECASE | re.MULTILINE
    )


VCARD_NAME = _line_pattern("FN")
VCARD_TEL = _line_pattern("TEL", with_params=True)
VCARD_EMAIL = _line_pattern("EMAIL", with_params=True)
VCARD_ORG = _line_pattern("ORG")
VCARD_TITLE = _line_pattern("TITLE")
VCARD_URL = _line_pattern("URL")

EVENT_SUMMARY = _line_pattern("SUMMARY")
EVENT_START = _line_pattern("DTSTART")
EVENT_END = _line_pattern("DTEND")
EVENT_LOCATION = _line_pattern("LOCATION")
EVENT_DESCRIPTION = _line_pattern("DESCRIPTION")


# ==========================================
# HELPERS
# ==========================================

def truncate_title(raw: str) -> str:
    """Raw text shortened for use as a title."""
    if len(raw) > TITLE_MAX_LENGTH:
        return raw[:TITLE_TRUNCATED_LENGTH] + "..."
    return raw


def _title(candidate: Optional[str], raw: str) -> str:
    return candidate or truncate_title(raw)


def _search(pattern: Pattern[str], raw: str) -> Optional[str]:
    """First capture group of the first match, or None (empty counts as None)."""
    match = pattern.search(raw)
    if match:
        return match.group(1) or None
    return None


def _query_param(params: Dict[str, List[str]], *names: str) -> Optional[str]:
    """First non-empty value among the given query parameters."""
    for name in names:
        values = params.get(name)
        if values and values[0]:
            return values[0]
    return None


# ==========================================
# EXTRACTORS
# ==========================================

def extract_url(raw: str) -> UrlFields:
    try:
        parsed = urlsplit(raw)
        hostname = parsed.hostname
        parsed.port  # raises ValueError for an out of range or non-numeric port
    except ValueError:
        return UrlFields(title=raw, url=raw)

    # Bracketed IPv6 hosts are validated by urlsplit; any other host must
    # be free of code points a browser URL parser rejects.
    bracketed = "[" in parsed.netloc
    if not hostname or (not bracketed and FORBIDDEN_HOST_CHARS.search(hostname)):
        return UrlFields(title=raw, url=raw)

    return UrlFields(
        title=hostname,
        url=raw,
        protocol=parsed.scheme.lower(),
        domain=hostname,
        path=parsed.path or "/",
        query=parsed.query or None
    )


def extract_wifi(raw: str) -> WifiFields:
    ssid = _search(WIFI_SSID, raw) or ""
    hidden = _search(WIFI_HIDDEN, raw) or ""
    return WifiFields(
        title=_title(ssid, raw),
        ssid=ssid,
        password=_search(WIFI_PASSWORD, raw) or "",
        encryption=_search(WIFI_TYPE, raw) or DEFAULT_WIFI_ENCRYPTION,
        hidden=hidden.lower() == "true"
    )


def extract_contact(raw: str) -> ContactFields:
    name = _search(VCARD_NAME, raw) or DEFAULT_CONTACT_NAME
    return ContactFields(
        title=name,
        name=name,
        phone=_search(VCARD_TEL, raw),
        email=_search(VCARD_EMAIL, raw),
        organization=_search(VCARD_ORG, raw),
        job_title=_search(VCARD_TITLE, raw),
        url=_search(VCARD_URL, raw)
    )


def extract_email(raw: str) -> EmailFields:
    match = MAILTO.match(raw)
    address = match.group(1) if match else ""
    params = parse_qs(match.group(2) or "") if match else {}
    return EmailFields(
        title=_title(address, raw),
        email=address,
        subject=_query_param(params, "subject"),
        body=_query_param(params, "body")
    )


def extract_phone(raw: str) -> PhoneFields:
    number = TEL_PREFIX.sub("", raw, count=1)
    return PhoneFields(title=_title(number, raw), number=number)


def extract_sms(raw: str) -> SmsFields:
    match = SMS.match(raw)
    number = (match.group(1) if match else "") or ""
    message = (match.group(2) if match else "") or ""
    return SmsFields(title=_title(number, raw), number=number, message=message)


def extract_geo(raw: str) -> GeoFields:
    match = GEO.match(raw)
    if not match:
        return GeoFields(title=truncate_title(raw))

    latitude, longitude, altitude = match.groups()
    label = f"{latitude}, {longitude}" if (latitude or longitude) else None
    return GeoFields(
        title=_title(label, raw),
        latitude=latitude,
        longitude=longitude,
        altitude=altitude or None
    )


def extract_calendar_event(raw: str) -> CalendarEventFields:
    summary = _search(EVENT_SUMMARY, raw) or DEFAULT_EVENT_SUMMARY
    return CalendarEventFields(
        title=summary,
        summary=summary,
        start=normalize_date(_search(EVENT_START, raw)),
        end=normalize_date(_search(EVENT_END, raw)),
        location=_search(EVENT_LOCATION, raw),
        description=_search(EVENT_DESCRIPTION, raw)
    )


def extract_whatsapp(raw: str) -> WhatsAppFields:
    match = WHATSAPP.match(raw)
    number = match.group(1) if match else ""
    params = parse_qs(match.group(2) or "") if match else {}
    return WhatsAppFields(
        title=_title(number, raw),
        number=number,
        message=_query_param(params, "text", "message")
    )


def extract_text(raw: str) -> TextFields:
    return TextFields(title=truncate_title(raw), text=raw)


EXTRACTORS: Dict[PayloadKind, Callable[[str], ParsedFields]] = {
    PayloadKind.URL: extract_url,
    PayloadKind.WIFI: extract_wifi,
    PayloadKind.CONTACT: extract_contact,
    PayloadKind.EMAIL: extract_email,
    PayloadKind.PHONE: extract_phone,
    PayloadKind.SMS: extract_sms,
    PayloadKind.GEO: extract_geo,
    PayloadKind.CALENDAR_EVENT: extract_calendar_event,
    PayloadKind.WHATSAPP: extract_whatsapp,
    PayloadKind.TEXT: extract_text,
}


def extract_fields(kind: PayloadKind, raw: str) -> ParsedFields:
    """Run the extractor registered for ``kind``."""
    return EXTRACTORS[kind](raw)
