# gamevault/models/order.py
from decimal import Decimal
from enum import Enum
from typing import Optional
from pydantic import Field
from .base import TimeStampedModel


class OrderStatus(str, Enum):
    COMPLETED = "completed"
    PENDING = "pending"


class Order(TimeStampedModel):
    """Order model for purchases.

    Title, price and delivery data are copied from the product at the moment
    of sale, so later product edits never change a past order.
    """
    id: Optional[str] = None
    user_id: str
    product_id: str
    product_title: str
    price: Decimal = Field(ge=0)
    status: OrderStatus = OrderStatus.COMPLETED
    delivery_data: Optional[str] = None

    @property
    def is_completed(self) -> bool:
        return self.status == OrderStatus.COMPLETED
