# gamevault/database/fixtures.py
from decimal import Decimal

# Demo catalog inserted into an empty store when SEED_CATALOG is on
INITIAL_PRODUCTS = [
    {
        "title": "Steam Account (CS2 Prime)",
        "description": "High tier account with Prime status enabled. 100+ hours played.",
        "price": Decimal("15.99"),
        "category": "STEAM",
        "stock": 5,
        "image_url": "https://picsum.photos/400/400?random=1",
        "region": "Global",
        "auto_delivery_data": "login: steamuser1\npass: hunter2",
    },
    {
        "title": "1000 Gold (WoW)",
        "description": "Instant delivery of 1000 Gold. Server: Draenor EU.",
        "price": Decimal("9.50"),
        "category": "CURRENCY",
        "stock": 100,
        "image_url": "https://picsum.photos/400/400?random=2",
        "region": "EU",
        "auto_delivery_data": "Contact support with Order ID to claim.",
    },
    {
        "title": "Gmail Aged 2018",
        "description": "Verified phone. Farmed manually. Good for trust factor.",
        "price": Decimal("1.20"),
        "category": "EMAIL",
        "stock": 45,
        "image_url": "https://picsum.photos/400/400?random=3",
        "auto_delivery_data": "email: test@gmail.com\npass: 123456",
    },
    {
        "title": "Cyberpunk 2077 Key",
        "description": "Steam Global Key activation.",
        "price": Decimal("29.99"),
        "category": "KEYS",
        "stock": 2,
        "image_url": "https://picsum.photos/400/400?random=4",
        "auto_delivery_data": "AAAA-BBBB-CCCC-DDDD",
    },
]
