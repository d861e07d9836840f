from .product import Product, ProductCategory
from .user import User
from .order import Order, OrderStatus
from .wallet import Transaction, TransactionType

__all__ = [
    'Product',
    'ProductCategory',
    'User',
    'Order',
    'OrderStatus',
    'Transaction',
    'TransactionType',
]
