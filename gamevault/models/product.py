# gamevault/models/product.py
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import Field
from .base import TimeStampedModel


class ProductCategory(str, Enum):
    STEAM = "STEAM"
    EMAIL = "EMAIL"
    CURRENCY = "CURRENCY"
    ACCOUNTS = "ACCOUNTS"
    KEYS = "KEYS"


class Product(TimeStampedModel):
    """Product model for digital goods"""
    id: Optional[str] = None
    title: str = Field(min_length=1)
    description: str = ""
    price: Decimal = Field(ge=0)
    category: ProductCategory
    stock: int = Field(default=0, ge=0)
    image_url: str = ""
    region: Optional[str] = None

    # Secret payload handed to the buyer, stored verbatim
    auto_delivery_data: Optional[str] = None

    @property
    def in_stock(self) -> bool:
        return self.stock > 0
