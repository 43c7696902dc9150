"""
Payload Classifier.

Decides which well-known convention a decoded QR payload follows.
Rules are evaluated in order and the first match wins, so the order of
CLASSIFICATION_RULES is part of the contract: an https://wa.me/ link is
reported as a URL because the URL rule comes first.
"""
import re
from typing import Pattern, Tuple

from qr_studio.schemas.analysis import PayloadKind

CLASSIFICATION_RULES: Tuple[Tuple[Pattern[str], PayloadKind], ...] = (
    (re.compile(r"^https?://", re.IGNORECASE), PayloadKind.URL),
    (re.compile(r"^WIFI:", re.IGNORECASE), PayloadKind.WIFI),
    (re.compile(r"BEGIN:VCARD", re.IGNORECASE), PayloadKind.CONTACT),
    (re.compile(r"^mailto:", re.IGNORECASE), PayloadKind.EMAIL),
    (re.compile(r"^tel:", re.IGNORECASE), PayloadKind.PHONE),
    (re.compile(r"^(?:smsto|SMS):", re.IGNORECASE), PayloadKind.SMS),
    (re.compile(r"^geo:", re.IGNORECASE), PayloadKind.GEO),
    (re.compile(r"BEGIN:VEVENT", re.IGNORECASE), PayloadKind.CALENDAR_EVENT),
    (re.compile(r"^https://wa\.me/", re.IGNORECASE), PayloadKind.WHATSAPP),
)


def classify(raw: str) -> PayloadKind:
    """
    Classify a decoded payload.

    Args:
        raw: Payload text exactly as decoded

    Returns:
        The kind of the first matching rule, or PayloadKind.TEXT
    """
    for pattern, kind in CLASSIFICATION_RULES:
        if pattern.search(raw):
            return kind
    return PayloadKind.TEXT
