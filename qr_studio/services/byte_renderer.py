"""
Hex dump of a payload's UTF-8 bytes.
"""


def _utf8_bytes(raw: str) -> bytes:
    try:
        return raw.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates become U+FFFD, the same as a browser TextEncoder
        return raw.encode("utf-16", "surrogatepass").decode("utf-16", "replace").encode("utf-8")


def to_hex_bytes(raw: str) -> str:
    """
    Render text as lowercase, space separated, two-digit hex bytes.

    >>> to_hex_bytes("AB")
    '41 42'
    >>> to_hex_bytes("é")
    'c3 a9'
    """
    return " ".join(f"{byte:02x}" for byte in _utf8_bytes(raw))
