# gamevault/handlers/base_handler.py
import logging
from telegram import Update
from telegram.ext import ContextTypes, ConversationHandler
from ..config import Config
from ..database import Store
from ..services import OrderService, ProductService, UserService, WalletService
from ..utils.keyboards import Keyboards
from ..utils.messages import Messages


class BaseHandler:
    """Base class for handlers"""
    def __init__(self, store: Store):
        self.store = store
        self.user_service = UserService(store, Config.ADMIN_IDS)
        self.product_service = ProductService(store)
        self.order_service = OrderService(store)
        self.wallet_service = WalletService(store, Config.MAX_DEPOSIT_AMOUNT)
        self.keyboards = Keyboards()
        self.messages = Messages()
        self.logger = logging.getLogger(__name__)

    @staticmethod
    async def reply(update: Update, text: str, reply_markup=None):
        """Edit the message behind a button press, or answer a text message"""
        query = update.callback_query
        if query:
            await query.answer()
            await query.edit_message_text(text, reply_markup=reply_markup)
        else:
            await update.effective_message.reply_text(text, reply_markup=reply_markup)

    async def cancel_conversation(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Cancel the current conversation"""
        context.user_data.clear()
        is_admin = await self.is_admin(update.effective_user.id)
        await self.reply(update, "❌ Cancelled.", self.keyboards.main_menu(is_admin))
        return ConversationHandler.END

    async def is_admin(self, user_id) -> bool:
        """Check admin access"""
        return await self.user_service.is_admin(user_id)
