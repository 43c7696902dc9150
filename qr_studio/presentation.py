"""
Read-only text rendering of an AnalysisResult.

View state (dark mode) is passed in by the caller.
"""
from typing import List, Tuple

from qr_studio.schemas.analysis import AnalysisResult, PayloadKind

RESET = "\033[0m"
PALETTES = {
    # (accent, label, value)
    False: ("\033[35m", "\033[90m", "\033[30m"),
    True: ("\033[95m", "\033[37m", "\033[97m"),
}

# Field rows per kind: (label, attribute, always shown)
FIELD_ROWS = {
    PayloadKind.URL: [
        ("URL", "url", True),
        ("Domain", "domain", False),
        ("Path", "path", False),
        ("Query", "query", False),
    ],
    PayloadKind.WIFI: [
        ("SSID", "ssid", True),
        ("Encryption", "encryption", True),
        ("Password", "password", False),
        ("Hidden", "hidden", True),
    ],
    PayloadKind.CONTACT: [
        ("Name", "name", True),
        ("Phone", "phone", False),
        ("Email", "email", False),
        ("Organization", "organization", False),
        ("Job Title", "job_title", False),
        ("URL", "url", False),
    ],
    PayloadKind.EMAIL: [
        ("Email", "email", True),
        ("Subject", "subject", False),
        ("Body", "body", False),
    ],
    PayloadKind.PHONE: [
        ("Number", "number", True),
    ],
    PayloadKind.SMS: [
        ("Number", "number", True),
        ("Message", "message", False),
    ],
    PayloadKind.GEO: [
        ("Latitude", "latitude", True),
        ("Longitude", "longitude", True),
        ("Altitude", "altitude", False),
    ],
    PayloadKind.CALENDAR_EVENT: [
        ("Summary", "summary", True),
        ("Start", "start", False),
        ("End", "end", False),
        ("Location", "location", False),
        ("Description", "description", False),
    ],
    PayloadKind.WHATSAPP: [
        ("Number", "number", True),
        ("Message", "message", False),
    ],
    PayloadKind.TEXT: [
        ("Text", "text", True),
    ],
}


def _format_value(value) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return "" if value is None else str(value)


def field_rows(result: AnalysisResult) -> List[Tuple[str, str]]:
    """Label/value pairs shown for the result's kind; empty optional fields are skipped."""
    rows = []
    for label, attribute, always in FIELD_ROWS[result.kind]:
        value = getattr(result.fields, attribute, None)
        if always or value:
            rows.append((label, _format_value(value)))
    return rows


def render_analysis(
    result: AnalysisResult,
    dark_mode: bool = False,
    color: bool = True
) -> str:
    """
    Render an analysis for the terminal.

    Args:
        result: Analysis to show
        dark_mode: Use the palette for dark terminals
        color: Emit ANSI colors at all

    Returns:
        Multi-line string
    """
    accent, label_color, value_color = PALETTES[dark_mode] if color else ("", "", "")
    reset = RESET if color else ""

    def line(label: str, value: str) -> str:
        return f"  {label_color}{label + ':':<14}{reset} {value_color}{value}{reset}"

    lines = [f"{accent}[{result.kind.label}]{reset} {result.fields.title}"]
    lines.extend(line(label, value) for label, value in field_rows(result))

    metadata = result.symbol_metadata
    if metadata.version is not None:
        lines.append(line("Version", str(metadata.version)))
    if metadata.mask_pattern is not None:
        lines.append(line("Mask Pattern", str(metadata.mask_pattern)))

    lines.append(line("Format", result.format))
    lines.append(line("Raw Bytes", result.raw_bytes_hex))
    return "\n".join(lines)
