import re
from typing import Optional

_VALID_STATION_ID = re.compile(r"[a-zA-Z0-9]+")
_INVALID_CHARS = re.compile(r"[^a-zA-Z0-9]")

def is_valid_station_id(station_id: Optional[str], max_length: int = 10) -> bool:
    """Check that a station id is non-empty, short, and alphanumeric only.

    NDBC/NWS ids are 4-5 alphanumerics (WPOW1, KSEA); CO-OPS tide ids are
    7 digits (9447130).
    """
    if not station_id or not isinstance(station_id, str):
        return False
    if len(station_id) > max_length:
        return False
    return bool(_VALID_STATION_ID.fullmatch(station_id))

def sanitize_station_id(
    station_id: Optional[str],
    default: str,
    max_length: int = 10
) -> str:
    """Strip a caller-supplied station id down to something safe to put in a URL.

    Station ids are interpolated into outbound NOAA URLs, so anything outside
    [a-zA-Z0-9] is removed (this drops path separators, schemes and query
    strings). Falls back to ``default`` if nothing usable is left.
    """
    if not station_id:
        return default

    sanitized = _INVALID_CHARS.sub("", station_id)[:max_length]

    if is_valid_station_id(sanitized, max_length):
        return sanitized

    return default
