# gamevault/handlers/callback_handler.py
from telegram import Update
from telegram.ext import ContextTypes
from .product_management import ProductManagementHandler
from .user_handlers import UserHandler
from .wallet_handler import WalletHandler


class CallbackHandler:
    """Routes button presses that do not start a conversation"""

    def __init__(self, user_handler: UserHandler, wallet_handler: WalletHandler,
                 product_handler: ProductManagementHandler):
        self.user_handler = user_handler
        self.wallet_handler = wallet_handler
        self.product_handler = product_handler

    async def handle_callback(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        data = update.callback_query.data

        if data == "main_menu":
            await self.user_handler.show_main_menu(update, context)
        elif data.startswith("catalog_"):
            await self.user_handler.show_catalog(update, context, data[len("catalog_"):])
        elif data.startswith("product_"):
            await self.user_handler.show_product(update, context, data[len("product_"):])
        elif data.startswith("buy_"):
            await self.user_handler.buy_product(update, context, data[len("buy_"):])
        elif data == "profile":
            await self.user_handler.show_profile(update, context)
        elif data == "wallet_menu":
            await self.wallet_handler.show_wallet(update, context)
        elif data == "wallet_transactions":
            await self.wallet_handler.show_transactions(update, context)
        elif data == "admin_menu":
            await self.product_handler.show_admin_menu(update, context)
        elif data.startswith("admin_product_"):
            await self.product_handler.show_product(update, context, data[len("admin_product_"):])
        elif data.startswith("admin_delete_"):
            await self.product_handler.confirm_delete(update, context, data[len("admin_delete_"):])
        elif data.startswith("admin_confirmdelete_"):
            await self.product_handler.delete_product(update, context, data[len("admin_confirmdelete_"):])
        else:
            await update.callback_query.answer("⚠️ Unknown command")
