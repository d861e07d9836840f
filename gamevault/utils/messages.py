# gamevault/utils/messages.py
from typing import List
from ..errors import (
    InsufficientFunds,
    InvalidAmount,
    NotFound,
    OutOfStock,
    PermissionDenied,
    ProductNotFound,
    ShopError,
    StoreUnavailable,
    ValidationError,
)
from ..models import Order, Product, Transaction, TransactionType, User
from .formatters import format_datetime, format_price

CATEGORY_NAMES = {
    "ALL": "🔥 All",
    "STEAM": "🎮 Steam",
    "EMAIL": "📧 E-mail",
    "CURRENCY": "💰 Currency",
    "ACCOUNTS": "👤 Accounts",
    "KEYS": "🔑 Keys",
}


class Messages:
    @staticmethod
    def welcome(user: User) -> str:
        return (
            f"Hi {user.username}! 👋\n\n"
            "Welcome to GameVault: game accounts, keys and currency with instant delivery.\n"
            "Use the menu below to browse the catalog."
        )

    @staticmethod
    def format_product(product: Product) -> str:
        """Product card"""
        lines = [
            f"🏷 {product.title}",
            f"📝 {product.description}" if product.description else None,
            f"🗂 {CATEGORY_NAMES.get(product.category.value, product.category.value)}",
            f"🌍 Region: {product.region}" if product.region else None,
            f"💰 Price: {format_price(product.price)}",
            f"📦 {'In stock: ' + str(product.stock) if product.in_stock else 'Out of stock'}",
        ]
        return "\n".join(line for line in lines if line)

    @staticmethod
    def catalog_header(category: str, search_text: str, count: int) -> str:
        header = f"🛍 {CATEGORY_NAMES.get(category, category)}"
        if search_text:
            header += f" · 🔎 \"{search_text}\""
        if not count:
            return header + "\n\nNothing found. Try another category or search."
        return header + f"\n\n{count} item(s). Send any text to search."

    @staticmethod
    def purchase_success(order: Order) -> str:
        text = (
            "✅ Purchase successful! The item is in your profile.\n\n"
            f"🧾 Order #{order.id}\n"
            f"🏷 {order.product_title}\n"
            f"💰 {format_price(order.price)}"
        )
        if order.delivery_data:
            text += f"\n\n🔐 Delivery:\n{order.delivery_data}"
        return text

    @staticmethod
    def format_order(order: Order) -> str:
        status = "✅" if order.is_completed else "⏳"
        text = (
            f"{status} #{order.id} · {order.product_title}\n"
            f"   {format_price(order.price)} · {format_datetime(order.created_at)}"
        )
        if order.delivery_data:
            text += f"\n   🔐 {order.delivery_data}"
        return text

    @staticmethod
    def format_transaction(transaction: Transaction) -> str:
        icon = "➕" if transaction.type == TransactionType.DEPOSIT else "➖"
        return (
            f"{icon} {format_price(transaction.amount)} · {transaction.description}\n"
            f"   {format_datetime(transaction.created_at)}"
        )

    @classmethod
    def profile(cls, user: User, orders: List[Order]) -> str:
        text = (
            f"👤 {user.username}{' (admin)' if user.is_admin else ''}\n"
            f"💰 Balance: {format_price(user.balance)}\n\n"
        )
        if not orders:
            return text + "You have not bought anything yet."
        return text + "📝 Your orders:\n\n" + "\n\n".join(cls.format_order(o) for o in orders)

    @classmethod
    def transactions(cls, transactions: List[Transaction]) -> str:
        if not transactions:
            return "No transactions yet."
        return "📊 Recent transactions:\n\n" + "\n".join(
            cls.format_transaction(t) for t in transactions
        )

    @staticmethod
    def deposit_success(transaction: Transaction, balance) -> str:
        return (
            f"✅ {format_price(transaction.amount)} added to your wallet.\n"
            f"💰 Balance: {format_price(balance)}"
        )

    @staticmethod
    def error(error: Exception) -> str:
        """User-facing text for an error kind"""
        if isinstance(error, OutOfStock):
            return "❌ Out of stock."
        if isinstance(error, InsufficientFunds):
            return (
                "❌ Insufficient funds. "
                f"You need {format_price(error.required - error.available)} more, top up your wallet."
            )
        if isinstance(error, ProductNotFound):
            return "❌ Product not found."
        if isinstance(error, NotFound):
            return "❌ Not found. Press /start and try again."
        if isinstance(error, InvalidAmount):
            return "❌ Enter a positive amount, e.g. 10 or 25.50."
        if isinstance(error, ValidationError):
            return "❌ Invalid data, please check the values."
        if isinstance(error, PermissionDenied):
            return "⛔️ You do not have access to this section."
        if isinstance(error, StoreUnavailable):
            return "⚠️ The shop is temporarily unavailable. Please try again later."
        return "❌ Something went wrong."
