"""Wall clock in the restaurant's timezone."""
from datetime import datetime
from zoneinfo import ZoneInfo

from table_reservations.config import settings


def restaurant_now() -> datetime:
    """Current local time at the restaurant, naive (comparable with reservation date + time)."""
    return datetime.now(ZoneInfo(settings.restaurant_timezone)).replace(tzinfo=None)
