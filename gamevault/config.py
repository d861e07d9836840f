# gamevault/config.py
import os
import logging
from decimal import Decimal
from pathlib import Path
from dotenv import load_dotenv
from typing import List, Optional

# Load environment variables
load_dotenv()

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent


def _optional_decimal(value: Optional[str]) -> Optional[Decimal]:
    if value is None or not value.strip():
        return None
    return Decimal(value.strip())


class Config:
    """Configuration settings for the shop"""

    # Bot settings
    TELEGRAM_TOKEN: str = os.getenv("TELEGRAM_TOKEN", "")

    # Store settings
    STORE_BACKEND: str = os.getenv("STORE_BACKEND", "memory").lower()
    DATABASE_URL: str = os.getenv("DATABASE_URL", "")
    DATA_FILE: Path = Path(os.getenv("DATA_FILE", str(BASE_DIR / "data" / "store.json")))
    SEED_CATALOG: bool = os.getenv("SEED_CATALOG", "true").lower() in ("1", "true", "yes")

    # Admin settings
    ADMIN_IDS: List[int] = [
        int(id_) for id_ in os.getenv("ADMIN_IDS", "").split(",")
        if id_.strip().isdigit()
    ]

    # Wallet settings
    MAX_DEPOSIT_AMOUNT: Optional[Decimal] = _optional_decimal(os.getenv("MAX_DEPOSIT_AMOUNT"))
    CURRENCY: str = os.getenv("CURRENCY", "$")

    # Other settings
    TIMEZONE: str = os.getenv("TZ", "UTC")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Paths
    LOG_DIR = BASE_DIR / "logs"

    @classmethod
    def validate(cls):
        """Check the settings the bot cannot start without"""
        if not cls.TELEGRAM_TOKEN:
            raise ValueError("No TELEGRAM_TOKEN set in environment")
        if cls.STORE_BACKEND not in ("memory", "postgres"):
            raise ValueError(f"Unknown STORE_BACKEND: {cls.STORE_BACKEND}")
        if cls.STORE_BACKEND == "postgres" and not cls.DATABASE_URL:
            raise ValueError("No DATABASE_URL set in environment")


def setup_logging():
    """Configure logging settings"""
    log_format = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    Config.LOG_DIR.mkdir(exist_ok=True)
    log_file = Config.LOG_DIR / "bot.log"

    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format=log_format,
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler()
        ]
    )
    # httpx logs every Telegram poll at INFO
    logging.getLogger("httpx").setLevel(logging.WARNING)
