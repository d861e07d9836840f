# gamevault/utils/formatters.py
from datetime import datetime
import pytz
from decimal import Decimal
from ..config import Config


def format_price(amount: Decimal, currency: str = None) -> str:
    """Format a money amount, e.g. $1,234.50"""
    currency = Config.CURRENCY if currency is None else currency
    sign = "-" if amount < 0 else ""
    return f"{sign}{currency}{abs(amount):,.2f}"


def format_datetime(dt: datetime, timezone: str = None) -> str:
    """Format a timestamp in the configured time zone"""
    tz = pytz.timezone(timezone or Config.TIMEZONE)
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt.astimezone(tz).strftime("%Y-%m-%d %H:%M")
