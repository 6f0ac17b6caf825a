import logging
from datetime import datetime, timezone, timedelta

from core.config import settings

class LocalTimeFormatter(logging.Formatter):
    """Formatter that stamps records in the configured station-local offset."""

    def __init__(self, fmt: str, offset_hours: int, tz_name: str):
        super().__init__(fmt=fmt)
        self.tz = timezone(timedelta(hours=offset_hours))
        self.tz_name = tz_name

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        dt = datetime.fromtimestamp(record.created, tz=timezone.utc).astimezone(self.tz)
        return f"{dt.strftime('%Y-%m-%d %H:%M:%S')} {self.tz_name}"

    def format(self, record: logging.LogRecord) -> str:
        # Show the module name only, not the dotted feature path
        record.name = record.name.split('.')[-1]
        return super().format(record)

def setup_logging() -> None:
    formatter = LocalTimeFormatter(
        fmt="[%(levelname)s] %(asctime)s | %(name)s | %(message)s",
        offset_hours=settings.log_tz_offset_hours,
        tz_name=settings.log_tz_name
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(settings.log_level.upper())

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    # Remove existing handlers and add our custom handler
    root_logger.handlers.clear()
    root_logger.addHandler(console_handler)

    # Set specific log levels for noisy libraries
    logging.getLogger("apscheduler").setLevel(logging.WARNING)
    logging.getLogger("aiohttp.access").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
