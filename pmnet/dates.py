"""Calendar date normalization for activity spans"""
import calendar
import re
from datetime import date
from typing import Optional

DAY_MS = 86_400_000
EPOCH = date(1970, 1, 1)

# yyyy-mm-dd, month/day may be 1 or 2 digits
ISO_PATTERN = re.compile(r"(\d{4})-(\d{1,2})-(\d{1,2})", re.ASCII)
# d/m/yyyy or dd/mm/yyyy
DMY_PATTERN = re.compile(r"(\d{1,2})/(\d{1,2})/(\d{4})", re.ASCII)


def is_valid_date_parts(year: int, month: int, day: int) -> bool:
    if year < 1 or month < 1 or month > 12:
        return False
    days_in_month = calendar.monthrange(year, month)[1]
    return 1 <= day <= days_in_month


def normalize_date(raw: Optional[str]) -> Optional[str]:
    """
    Accepts "yyyy-mm-dd" (e.g. 2012-09-03) or "d/m/yyyy" (e.g. 3/9/2012).
    Returns the zero padded "yyyy-mm-dd" string, or None if invalid.
    """
    if not raw or not isinstance(raw, str):
        return None

    iso_match = ISO_PATTERN.fullmatch(raw)
    if iso_match:
        year, month, day = (int(p) for p in iso_match.groups())
    else:
        dmy_match = DMY_PATTERN.fullmatch(raw)
        if not dmy_match:
            return None  # unsupported format
        day, month, year = (int(p) for p in dmy_match.groups())

    if not is_valid_date_parts(year, month, day):
        return None
    return f"{year:04d}-{month:02d}-{day:02d}"


def to_epoch_ms(iso_date: Optional[str]) -> Optional[int]:
    """UTC midnight of a canonical date in epoch milliseconds, or None"""
    if not iso_date:
        return None
    try:
        parsed = date.fromisoformat(iso_date)
    except ValueError:
        return None
    return (parsed - EPOCH).days * DAY_MS
