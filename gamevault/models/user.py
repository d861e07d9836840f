# gamevault/models/user.py
from decimal import Decimal
from pydantic import Field
from .base import TimeStampedModel


class User(TimeStampedModel):
    """User model bound to a Telegram account"""
    id: str = Field(min_length=1)
    username: str = "User"
    balance: Decimal = Field(default=Decimal(0), ge=0)
    is_admin: bool = False
    avatar_url: str = ""
