"""
Display formatting for iCalendar DATE and DATE-TIME values.
"""
import re
from typing import Optional

DATE_PATTERN = re.compile(r"([0-9]{4})([0-9]{2})([0-9]{2})")
DATE_TIME_PATTERN = re.compile(r"([0-9]{4})([0-9]{2})([0-9]{2})T([0-9]{2})([0-9]{2})[0-9]{2}Z?")


def normalize_date(token: Optional[str]) -> Optional[str]:
    """
    Format an iCalendar date token for display.

    - ``YYYYMMDD`` becomes ``YYYY-MM-DD``
    - ``YYYYMMDDTHHMMSS[Z]`` becomes ``YYYY-MM-DD HH:MM``; seconds and the
      UTC marker are dropped, not converted
    - anything else is returned unchanged

    Args:
        token: Raw DTSTART/DTEND value, or None

    Returns:
        Display string, or None when the token is missing or empty
    """
    if not token:
        return None

    match = DATE_PATTERN.fullmatch(token)
    if match:
        year, month, day = match.groups()
        return f"{year}-{month}-{day}"

    match = DATE_TIME_PATTERN.fullmatch(token)
    if match:
        year, month, day, hour, minute = match.groups()
        return f"{year}-{month}-{day} {hour}:{minute}"

    return token
