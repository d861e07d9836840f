# gamevault/handlers/user_handlers.py
from telegram import Update
from telegram.ext import ContextTypes
from .base_handler import BaseHandler
from ..constants import CATEGORY_ALL
from ..errors import InsufficientFunds, ShopError


class UserHandler(BaseHandler):
    """Storefront and profile handlers"""

    async def start(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """/start: register the Telegram user and show the main menu"""
        tg_user = update.effective_user
        user = await self.user_service.register_user(
            user_id=tg_user.id,
            username=tg_user.username,
            first_name=tg_user.first_name
        )
        await update.message.reply_text(
            self.messages.welcome(user),
            reply_markup=self.keyboards.main_menu(user.is_admin)
        )

    async def show_main_menu(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        is_admin = await self.is_admin(update.effective_user.id)
        await self.reply(update, "🏠 Main menu:", self.keyboards.main_menu(is_admin))

    async def show_catalog(self, update: Update, context: ContextTypes.DEFAULT_TYPE,
                           category: str = CATEGORY_ALL):
        """Product list of a category, filtered by the last search"""
        context.user_data['category'] = category
        search_text = context.user_data.get('search', "")
        products = await self.product_service.list_products(category, search_text)
        await self.reply(
            update,
            self.messages.catalog_header(category, search_text, len(products)),
            self.keyboards.catalog(products, category)
        )

    async def handle_search(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Free text outside a conversation searches the catalog"""
        search_text = update.message.text.strip()
        # "-" clears the search
        context.user_data['search'] = "" if search_text == "-" else search_text
        await self.show_catalog(update, context, context.user_data.get('category', CATEGORY_ALL))

    async def show_product(self, update: Update, context: ContextTypes.DEFAULT_TYPE, product_id: str):
        try:
            product = await self.product_service.get_product(product_id)
        except ShopError as e:
            await self.reply(update, self.messages.error(e), self.keyboards.back_to_menu())
            return
        await self.reply(
            update,
            self.messages.format_product(product),
            self.keyboards.product_menu(product)
        )

    async def buy_product(self, update: Update, context: ContextTypes.DEFAULT_TYPE, product_id: str):
        """Buy a product with the wallet balance"""
        try:
            order = await self.order_service.purchase(update.effective_user.id, product_id)
        except ShopError as e:
            markup = (self.keyboards.wallet_menu() if isinstance(e, InsufficientFunds)
                      else self.keyboards.back_to_menu())
            await self.reply(update, self.messages.error(e), markup)
            return
        await self.reply(update, self.messages.purchase_success(order), self.keyboards.back_to_menu())

    async def show_profile(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Balance and order history"""
        try:
            user = await self.user_service.get_user(update.effective_user.id)
            orders = await self.order_service.get_user_orders(user.id)
        except ShopError as e:
            await self.reply(update, self.messages.error(e), self.keyboards.back_to_menu())
            return
        await self.reply(
            update,
            self.messages.profile(user, orders),
            self.keyboards.main_menu(user.is_admin)
        )

    async def set_admin(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """/setadmin <user_id> [on|off]: grant or revoke admin rights"""
        args = context.args or []
        if not args:
            await update.message.reply_text("Usage: /setadmin <user_id> [on|off]")
            return
        is_admin = len(args) < 2 or args[1].lower() != "off"
        try:
            user = await self.user_service.set_admin(update.effective_user.id, args[0], is_admin)
        except ShopError as e:
            await update.message.reply_text(self.messages.error(e))
            return
        change = "granted to" if user.is_admin else "revoked from"
        await update.message.reply_text(f"✅ Admin rights {change} {user.username}.")
