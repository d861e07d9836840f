from .product_service import ProductService, query_products
from .order_service import OrderService
from .wallet_service import WalletService
from .user_service import UserService

__all__ = [
    'ProductService',
    'OrderService',
    'WalletService',
    'UserService',
    'query_products',
]
