from datetime import datetime
from typing import Optional

class UnitConversions:
    """Centralized utility for unit conversions across the application."""

    @staticmethod
    def ms_to_mph(ms: Optional[float]) -> Optional[float]:
        """Convert meters per second to miles per hour."""
        if ms is None:
            return None
        return round(ms * 2.23694, 2)  # 1 m/s = 2.23694 mph

    @staticmethod
    def celsius_to_fahrenheit(celsius: Optional[float]) -> Optional[float]:
        """Convert degrees Celsius to degrees Fahrenheit."""
        if celsius is None:
            return None
        return round(celsius * 9 / 5 + 32, 2)

_TIDE_TIME_FORMATS = ("%Y-%m-%d %H:%M", "%Y-%m-%d %H:%M:%S")

def format_tide_time(raw: str) -> str:
    """Render a CO-OPS/NWS timestamp as ``M/D/YYYY h:MM:SS AM``.

    Unparseable input is returned unchanged.
    """
    parsed: Optional[datetime] = None
    for fmt in _TIDE_TIME_FORMATS:
        try:
            parsed = datetime.strptime(raw, fmt)
            break
        except (ValueError, TypeError):
            continue

    if parsed is None:
        try:
            parsed = datetime.fromisoformat(raw)
        except (ValueError, TypeError):
            return raw

    hour = parsed.hour % 12 or 12
    meridiem = "AM" if parsed.hour < 12 else "PM"
    return (
        f"{parsed.month}/{parsed.day}/{parsed.year} "
        f"{hour}:{parsed.minute:02d}:{parsed.second:02d} {meridiem}"
    )
