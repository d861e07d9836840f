"""Telegram handlers"""
from .user_handlers import UserHandler
from .wallet_handler import WalletHandler
from .product_management import ProductManagementHandler
from .callback_handler import CallbackHandler

__all__ = [
    'UserHandler',
    'WalletHandler',
    'ProductManagementHandler',
    'CallbackHandler',
]
