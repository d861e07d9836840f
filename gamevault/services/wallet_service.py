# gamevault/services/wallet_service.py
import logging
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from ..database import Store
from ..errors import InvalidAmount, ShopError
from ..models.wallet import Transaction, TransactionType


class WalletService:
    """Wallet balance and ledger"""

    def __init__(self, store: Store, max_deposit: Optional[Decimal] = None):
        self.store = store
        self.max_deposit = max_deposit
        self.logger = logging.getLogger(__name__)

    def parse_amount(self, amount) -> Decimal:
        """Coerce a deposit amount, rejecting anything not strictly positive"""
        try:
            value = Decimal(str(amount).strip())
        except (InvalidOperation, ValueError):
            raise InvalidAmount(amount, "not a number")
        if not value.is_finite():
            raise InvalidAmount(amount, "not a number")
        if value <= 0:
            raise InvalidAmount(amount)
        if self.max_deposit is not None and value > self.max_deposit:
            raise InvalidAmount(amount, f"exceeds the {self.max_deposit} limit")
        return value

    async def get_balance(self, user_id: str) -> Decimal:
        user = await self.store.users.get(str(user_id))
        return user.balance

    async def deposit(self, user_id: str, amount) -> Transaction:
        """Top up the wallet and record the deposit in the ledger"""
        user_id = str(user_id)
        value = self.parse_amount(amount)
        try:
            async with self.store.transaction() as tx:
                user = await tx.users.get(user_id, for_update=True)
                await tx.users.update(user_id, {"balance": user.balance + value})
                transaction = await tx.transactions.insert({
                    "user_id": user_id,
                    "type": TransactionType.DEPOSIT,
                    "amount": value,
                    "description": "Wallet top-up",
                })
        except ShopError as e:
            self.logger.warning(f"Deposit of {value} for {user_id} failed: {e}")
            raise

        self.logger.info(f"Deposit {transaction.id}: {user_id} +{value}")
        return transaction

    async def get_transactions(self, user_id: str, limit: Optional[int] = None) -> List[Transaction]:
        """Ledger entries of a user, newest first"""
        transactions = await self.store.transactions.list(user_id=str(user_id))
        return transactions[:limit] if limit else transactions
