# gamevault/utils/keyboards.py
from typing import List
from telegram import InlineKeyboardButton, InlineKeyboardMarkup
from ..constants import CATEGORY_ALL, EDITABLE_FIELDS
from ..models import Product, ProductCategory
from .formatters import format_price
from .messages import CATEGORY_NAMES


class Keyboards:
    @staticmethod
    def main_menu(is_admin: bool = False) -> InlineKeyboardMarkup:
        """Main menu keyboard"""
        keyboard = [
            [InlineKeyboardButton("🛍 Store", callback_data=f"catalog_{CATEGORY_ALL}")],
            [InlineKeyboardButton("👛 Wallet", callback_data="wallet_menu"),
             InlineKeyboardButton("👤 Profile", callback_data="profile")],
        ]
        if is_admin:
            keyboard.append([InlineKeyboardButton("🛠 Admin panel", callback_data="admin_menu")])
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def catalog(products: List[Product], category: str = CATEGORY_ALL) -> InlineKeyboardMarkup:
        """Category tabs followed by the product list"""
        names = [CATEGORY_ALL] + [c.value for c in ProductCategory]
        tabs = [
            InlineKeyboardButton(
                ("• " if name == category else "") + CATEGORY_NAMES[name],
                callback_data=f"catalog_{name}"
            )
            for name in names
        ]
        keyboard = [tabs[i:i + 3] for i in range(0, len(tabs), 3)]
        for product in products:
            label = f"{product.title} · {format_price(product.price)}"
            if not product.in_stock:
                label += " · sold out"
            keyboard.append([InlineKeyboardButton(label, callback_data=f"product_{product.id}")])
        keyboard.append([InlineKeyboardButton("🏠 Main menu", callback_data="main_menu")])
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def product_menu(product: Product) -> InlineKeyboardMarkup:
        """Product card keyboard"""
        keyboard = []
        if product.in_stock:
            keyboard.append([InlineKeyboardButton(
                f"🛒 Buy for {format_price(product.price)}",
                callback_data=f"buy_{product.id}"
            )])
        keyboard.append([
            InlineKeyboardButton("⬅️ Back", callback_data=f"catalog_{product.category.value}"),
            InlineKeyboardButton("🏠 Main menu", callback_data="main_menu"),
        ])
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def wallet_menu() -> InlineKeyboardMarkup:
        """Wallet keyboard"""
        keyboard = [
            [InlineKeyboardButton("💵 Top up", callback_data="wallet_deposit")],
            [InlineKeyboardButton("📊 Transactions", callback_data="wallet_transactions")],
            [InlineKeyboardButton("🏠 Main menu", callback_data="main_menu")]
        ]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def back_to_menu() -> InlineKeyboardMarkup:
        return InlineKeyboardMarkup([[InlineKeyboardButton("🏠 Main menu", callback_data="main_menu")]])

    @staticmethod
    def cancel_keyboard() -> InlineKeyboardMarkup:
        return InlineKeyboardMarkup([[InlineKeyboardButton("🔙 Cancel", callback_data="cancel")]])

    @staticmethod
    def admin_menu(products: List[Product]) -> InlineKeyboardMarkup:
        """Admin product list"""
        keyboard = [[InlineKeyboardButton("➕ Add product", callback_data="admin_add")]]
        for product in products:
            keyboard.append([InlineKeyboardButton(
                f"{product.title} ({product.stock} pcs)",
                callback_data=f"admin_product_{product.id}"
            )])
        keyboard.append([InlineKeyboardButton("🏠 Main menu", callback_data="main_menu")])
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def admin_product(product_id: str) -> InlineKeyboardMarkup:
        keyboard = [
            [InlineKeyboardButton(f"✏️ {field}", callback_data=f"admin_edit_{field}_{product_id}")]
            for field in EDITABLE_FIELDS
        ]
        keyboard.append([InlineKeyboardButton("❌ Delete", callback_data=f"admin_delete_{product_id}")])
        keyboard.append([InlineKeyboardButton("🔙 Back", callback_data="admin_menu")])
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def confirm_delete(product_id: str) -> InlineKeyboardMarkup:
        keyboard = [[
            InlineKeyboardButton("✅ Yes", callback_data=f"admin_confirmdelete_{product_id}"),
            InlineKeyboardButton("❌ No", callback_data=f"admin_product_{product_id}"),
        ]]
        return InlineKeyboardMarkup(keyboard)

    @staticmethod
    def categories_select() -> InlineKeyboardMarkup:
        """Category picker for new products"""
        keyboard = [
            [InlineKeyboardButton(CATEGORY_NAMES[c.value], callback_data=f"newcategory_{c.value}")]
            for c in ProductCategory
        ]
        keyboard.append([InlineKeyboardButton("🔙 Cancel", callback_data="cancel")])
        return InlineKeyboardMarkup(keyboard)
