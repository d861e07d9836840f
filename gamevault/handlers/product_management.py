# gamevault/handlers/product_management.py
from decimal import Decimal, InvalidOperation
from telegram import Update
from telegram.ext import (
    CallbackQueryHandler, CommandHandler, ContextTypes,
    ConversationHandler, MessageHandler, filters
)
from .base_handler import BaseHandler
from ..constants import (
    EDITABLE_FIELDS,
    WAITING_CATEGORY,
    WAITING_DELIVERY_DATA,
    WAITING_DESCRIPTION,
    WAITING_EDIT_VALUE,
    WAITING_INITIAL_STOCK,
    WAITING_PRICE,
    WAITING_PRODUCT_TITLE,
)
from ..errors import ShopError, ValidationError

TEXT = filters.TEXT & ~filters.COMMAND

# "-" clears an optional field
OPTIONAL_FIELDS = {"description": "", "region": None, "image_url": "", "auto_delivery_data": None}


class ProductManagementHandler(BaseHandler):
    """Admin product management"""

    async def _deny(self, update: Update) -> bool:
        if await self.is_admin(update.effective_user.id):
            return False
        await self.reply(update, "⛔️ You do not have access to this section.", self.keyboards.back_to_menu())
        return True

    async def show_admin_menu(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        if await self._deny(update):
            return
        products = await self.product_service.list_products()
        await self.reply(
            update,
            "🛠 Product management\nPick a product to edit it:",
            self.keyboards.admin_menu(products)
        )

    async def show_product(self, update: Update, context: ContextTypes.DEFAULT_TYPE, product_id: str):
        if await self._deny(update):
            return
        try:
            product = await self.product_service.get_product(product_id)
        except ShopError as e:
            await self.reply(update, self.messages.error(e), self.keyboards.back_to_menu())
            return
        text = self.messages.format_product(product)
        text += f"\n\n🔐 Delivery data:\n{product.auto_delivery_data or '-'}"
        await self.reply(update, text, self.keyboards.admin_product(product.id))

    async def confirm_delete(self, update: Update, context: ContextTypes.DEFAULT_TYPE, product_id: str):
        if await self._deny(update):
            return
        await self.reply(
            update,
            "❓ Delete this product? Past orders keep their copy of it.",
            self.keyboards.confirm_delete(product_id)
        )

    async def delete_product(self, update: Update, context: ContextTypes.DEFAULT_TYPE, product_id: str):
        try:
            await self.product_service.delete_product(update.effective_user.id, product_id)
        except ShopError as e:
            await self.reply(update, self.messages.error(e), self.keyboards.back_to_menu())
            return
        await self.show_admin_menu(update, context)

    # Add product conversation

    async def start_add_product(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        if await self._deny(update):
            return ConversationHandler.END
        context.user_data['new_product'] = {}
        await self.reply(update, "🏷 Enter the product title:", self.keyboards.cancel_keyboard())
        return WAITING_PRODUCT_TITLE

    async def handle_product_title(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        context.user_data['new_product']['title'] = update.message.text.strip()
        await update.message.reply_text(
            "📝 Enter the description (\"-\" to skip):",
            reply_markup=self.keyboards.cancel_keyboard()
        )
        return WAITING_DESCRIPTION

    async def handle_product_description(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        text = update.message.text.strip()
        context.user_data['new_product']['description'] = "" if text == "-" else text
        await update.message.reply_text(
            "💰 Enter the price:",
            reply_markup=self.keyboards.cancel_keyboard()
        )
        return WAITING_PRICE

    async def handle_product_price(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        try:
            price = Decimal(update.message.text.strip())
        except InvalidOperation:
            price = None
        if price is None or not price.is_finite() or price < 0:
            await update.message.reply_text("❌ Enter a valid price, e.g. 9.99:")
            return WAITING_PRICE

        context.user_data['new_product']['price'] = price
        await update.message.reply_text(
            "🗂 Choose the category:",
            reply_markup=self.keyboards.categories_select()
        )
        return WAITING_CATEGORY

    async def handle_category_selection(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        query = update.callback_query
        await query.answer()
        context.user_data['new_product']['category'] = query.data.split('_', 1)[1]
        await query.edit_message_text(
            "📦 Enter the initial stock:",
            reply_markup=self.keyboards.cancel_keyboard()
        )
        return WAITING_INITIAL_STOCK

    async def handle_initial_stock(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        text = update.message.text.strip()
        if not text.isdigit():
            await update.message.reply_text("❌ Stock must be a whole number of 0 or more:")
            return WAITING_INITIAL_STOCK

        context.user_data['new_product']['stock'] = int(text)
        await update.message.reply_text(
            "🔐 Enter the delivery data sent to buyers (\"-\" for none):",
            reply_markup=self.keyboards.cancel_keyboard()
        )
        return WAITING_DELIVERY_DATA

    async def handle_delivery_data(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Last step: save the product"""
        text = update.message.text
        product_data = context.user_data.pop('new_product')
        product_data['auto_delivery_data'] = None if text.strip() == "-" else text

        try:
            product = await self.product_service.add_product(update.effective_user.id, product_data)
        except ShopError as e:
            await update.message.reply_text(self.messages.error(e), reply_markup=self.keyboards.back_to_menu())
            return ConversationHandler.END

        await update.message.reply_text(
            "✅ Product added.\n\n" + self.messages.format_product(product),
            reply_markup=self.keyboards.admin_product(product.id)
        )
        return ConversationHandler.END

    # Edit field conversation

    async def start_edit(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        if await self._deny(update):
            return ConversationHandler.END
        field, product_id = update.callback_query.data[len("admin_edit_"):].rsplit('_', 1)
        if field not in EDITABLE_FIELDS:
            await self.reply(update, "⚠️ This field cannot be edited.", self.keyboards.admin_product(product_id))
            return ConversationHandler.END

        context.user_data['edit'] = (field, product_id)
        hint = " (\"-\" to clear)" if field in OPTIONAL_FIELDS else ""
        await self.reply(update, f"✏️ Enter the new {field}{hint}:", self.keyboards.cancel_keyboard())
        return WAITING_EDIT_VALUE

    async def handle_edit_value(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        field, product_id = context.user_data['edit']
        value = update.message.text.strip()
        if value == "-" and field in OPTIONAL_FIELDS:
            value = OPTIONAL_FIELDS[field]

        admin_id = update.effective_user.id
        try:
            if field == "image_url":
                product = await self.product_service.set_image_url(admin_id, product_id, value)
            else:
                product = await self.product_service.update_product(admin_id, product_id, {field: value})
        except ValidationError as e:
            await update.message.reply_text(self.messages.error(e), reply_markup=self.keyboards.cancel_keyboard())
            return WAITING_EDIT_VALUE
        except ShopError as e:
            await update.message.reply_text(self.messages.error(e), reply_markup=self.keyboards.back_to_menu())
            return ConversationHandler.END

        context.user_data.pop('edit', None)
        await update.message.reply_text(
            "✅ Saved.\n\n" + self.messages.format_product(product),
            reply_markup=self.keyboards.admin_product(product.id)
        )
        return ConversationHandler.END

    def conversation_handler(self) -> ConversationHandler:
        fallbacks = [
            CallbackQueryHandler(self.cancel_conversation, pattern="^cancel$"),
            CommandHandler("cancel", self.cancel_conversation),
        ]
        return ConversationHandler(
            entry_points=[
                CallbackQueryHandler(self.start_add_product, pattern="^admin_add$"),
                CallbackQueryHandler(self.start_edit, pattern="^admin_edit_"),
            ],
            states={
                WAITING_PRODUCT_TITLE: [MessageHandler(TEXT, self.handle_product_title)],
                WAITING_DESCRIPTION: [MessageHandler(TEXT, self.handle_product_description)],
                WAITING_PRICE: [MessageHandler(TEXT, self.handle_product_price)],
                WAITING_CATEGORY: [
                    CallbackQueryHandler(self.handle_category_selection, pattern="^newcategory_")
                ],
                WAITING_INITIAL_STOCK: [MessageHandler(TEXT, self.handle_initial_stock)],
                WAITING_DELIVERY_DATA: [MessageHandler(TEXT, self.handle_delivery_data)],
                WAITING_EDIT_VALUE: [MessageHandler(TEXT, self.handle_edit_value)],
            },
            fallbacks=fallbacks,
        )
