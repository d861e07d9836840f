# gamevault/models/wallet.py
from decimal import Decimal
from typing import Optional
from enum import Enum
from .base import TimeStampedModel


class TransactionType(str, Enum):
    DEPOSIT = "deposit"
    PURCHASE = "purchase"


class Transaction(TimeStampedModel):
    """Ledger entry for a balance change; amount is negative for purchases"""
    id: Optional[str] = None
    user_id: str
    type: TransactionType
    amount: Decimal
    description: str = ""
    related_order_id: Optional[str] = None
