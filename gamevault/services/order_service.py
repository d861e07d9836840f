# gamevault/services/order_service.py
import logging
from typing import List

from ..database import Store
from ..errors import InsufficientFunds, OutOfStock, ShopError
from ..models.order import Order, OrderStatus
from ..models.wallet import TransactionType


class OrderService:
    def __init__(self, store: Store):
        self.store = store
        self.logger = logging.getLogger(__name__)

    async def purchase(self, user_id: str, product_id: str) -> Order:
        """Buy one unit of a product with the user's wallet balance.

        Checks run in a fixed order: the product exists, it is in stock, the
        user can afford it. The stock and balance changes, the order and the
        ledger entry are written in one store transaction, under row locks
        taken product first, then user.
        """
        user_id = str(user_id)
        try:
            async with self.store.transaction() as tx:
                product = await tx.products.get(product_id, for_update=True)
                if product.stock <= 0:
                    raise OutOfStock(product_id)

                user = await tx.users.get(user_id, for_update=True)
                if user.balance < product.price:
                    raise InsufficientFunds(product.price, user.balance)

                await tx.products.update(product_id, {"stock": product.stock - 1})
                await tx.users.update(user_id, {"balance": user.balance - product.price})

                order = await tx.orders.insert({
                    "user_id": user_id,
                    "product_id": product.id,
                    "product_title": product.title,
                    "price": product.price,
                    "status": OrderStatus.COMPLETED,
                    "delivery_data": product.auto_delivery_data,
                })
                await tx.transactions.insert({
                    "user_id": user_id,
                    "type": TransactionType.PURCHASE,
                    "amount": -product.price,
                    "description": f"Bought {product.title}",
                    "related_order_id": order.id,
                })
        except ShopError as e:
            self.logger.warning(f"Purchase of {product_id} by {user_id} failed: {e}")
            raise

        self.logger.info(f"Order {order.id}: {user_id} bought {product_id} for {order.price}")
        return order

    async def get_order(self, order_id: str) -> Order:
        return await self.store.orders.get(order_id)

    async def get_user_orders(self, user_id: str) -> List[Order]:
        """User's orders, newest first"""
        return await self.store.orders.list(user_id=str(user_id))
