# gamevault/constants.py

# Catalog wildcard: no category filter
CATEGORY_ALL = "ALL"

# Conversation states
(
    WAITING_DEPOSIT_AMOUNT,
    WAITING_PRODUCT_TITLE,
    WAITING_DESCRIPTION,
    WAITING_PRICE,
    WAITING_CATEGORY,
    WAITING_INITIAL_STOCK,
    WAITING_DELIVERY_DATA,
    WAITING_EDIT_VALUE,
) = range(8)

# Product fields an admin may edit from the bot
EDITABLE_FIELDS = (
    "title", "description", "price", "stock", "region", "image_url", "auto_delivery_data"
)
