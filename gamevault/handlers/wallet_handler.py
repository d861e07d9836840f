# gamevault/handlers/wallet_handler.py
from telegram import Update
from telegram.ext import (
    CallbackQueryHandler, CommandHandler, ContextTypes,
    ConversationHandler, MessageHandler, filters
)
from .base_handler import BaseHandler
from ..constants import WAITING_DEPOSIT_AMOUNT
from ..errors import InvalidAmount, ShopError
from ..utils.formatters import format_price


class WalletHandler(BaseHandler):
    """Wallet handlers"""

    async def show_wallet(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        try:
            balance = await self.wallet_service.get_balance(update.effective_user.id)
        except ShopError as e:
            await self.reply(update, self.messages.error(e), self.keyboards.back_to_menu())
            return
        await self.reply(
            update,
            f"👛 Your balance: {format_price(balance)}\n\n"
            "Top up the wallet or review your transactions below.",
            self.keyboards.wallet_menu()
        )

    async def start_deposit(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        await self.reply(update, "💵 Enter the amount to top up:", self.keyboards.cancel_keyboard())
        return WAITING_DEPOSIT_AMOUNT

    async def handle_deposit_amount(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Process the top-up amount"""
        user_id = update.effective_user.id
        try:
            transaction = await self.wallet_service.deposit(user_id, update.message.text)
            balance = await self.wallet_service.get_balance(user_id)
        except InvalidAmount as e:
            await update.message.reply_text(
                self.messages.error(e),
                reply_markup=self.keyboards.cancel_keyboard()
            )
            return WAITING_DEPOSIT_AMOUNT
        except ShopError as e:
            await update.message.reply_text(
                self.messages.error(e),
                reply_markup=self.keyboards.back_to_menu()
            )
            return ConversationHandler.END

        await update.message.reply_text(
            self.messages.deposit_success(transaction, balance),
            reply_markup=self.keyboards.wallet_menu()
        )
        return ConversationHandler.END

    async def show_transactions(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        transactions = await self.wallet_service.get_transactions(update.effective_user.id, limit=10)
        await self.reply(update, self.messages.transactions(transactions), self.keyboards.wallet_menu())

    def conversation_handler(self) -> ConversationHandler:
        return ConversationHandler(
            entry_points=[CallbackQueryHandler(self.start_deposit, pattern="^wallet_deposit$")],
            states={
                WAITING_DEPOSIT_AMOUNT: [
                    MessageHandler(filters.TEXT & ~filters.COMMAND, self.handle_deposit_amount)
                ],
            },
            fallbacks=[
                CallbackQueryHandler(self.cancel_conversation, pattern="^cancel$"),
                CommandHandler("cancel", self.cancel_conversation),
            ],
        )
