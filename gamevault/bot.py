# gamevault/bot.py
import asyncio
import logging
from telegram import Update
from telegram.ext import (
    Application,
    CallbackQueryHandler,
    CommandHandler,
    ContextTypes,
    MessageHandler,
    filters
)
from .config import Config
from .database import Store
from .database.fixtures import INITIAL_PRODUCTS
from .handlers import (
    CallbackHandler,
    ProductManagementHandler,
    UserHandler,
    WalletHandler
)
from .utils.messages import Messages


class GameVaultBot:
    def __init__(self, store: Store, token: str = None):
        """Build the application and its handlers"""
        self.store = store
        self.logger = logging.getLogger(__name__)
        self.application = Application.builder().token(token or Config.TELEGRAM_TOKEN).build()

        self.user_handler = UserHandler(store)
        self.wallet_handler = WalletHandler(store)
        self.product_handler = ProductManagementHandler(store)
        self.callback_handler = CallbackHandler(
            self.user_handler, self.wallet_handler, self.product_handler
        )
        self.setup_handlers()

    def setup_handlers(self):
        """Register bot handlers"""
        self.application.add_handler(CommandHandler("start", self.user_handler.start))
        self.application.add_handler(CommandHandler("profile", self.user_handler.show_profile))
        self.application.add_handler(CommandHandler("wallet", self.wallet_handler.show_wallet))
        self.application.add_handler(CommandHandler("setadmin", self.user_handler.set_admin))

        # Conversations first, so their entry buttons win over the router
        self.application.add_handler(self.wallet_handler.conversation_handler())
        self.application.add_handler(self.product_handler.conversation_handler())

        self.application.add_handler(CallbackQueryHandler(self.callback_handler.handle_callback))

        # Free text searches the catalog
        self.application.add_handler(
            MessageHandler(
                filters.TEXT & ~filters.COMMAND,
                self.user_handler.handle_search
            )
        )
        self.application.add_error_handler(self.on_error)

    async def on_error(self, update: object, context: ContextTypes.DEFAULT_TYPE):
        """Log unhandled errors and tell the user something went wrong"""
        self.logger.error(f"Error while handling update: {context.error}", exc_info=context.error)
        if isinstance(update, Update) and update.effective_message:
            await update.effective_message.reply_text(Messages.error(context.error))

    async def start(self):
        """Open the store and poll until cancelled"""
        await self.store.connect()
        if Config.SEED_CATALOG:
            await self.store.seed_products(INITIAL_PRODUCTS)
        try:
            async with self.application:
                await self.application.start()
                await self.application.updater.start_polling()
                self.logger.info("Bot is polling")
                try:
                    await asyncio.Event().wait()
                finally:
                    await self.application.updater.stop()
                    await self.application.stop()
        finally:
            await self.store.close()
