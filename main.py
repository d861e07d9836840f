# main.py
import asyncio
import logging
from gamevault.bot import GameVaultBot
from gamevault.config import Config, setup_logging
from gamevault.database import create_store


async def main():
    # Setup logging
    setup_logging()
    logger = logging.getLogger(__name__)

    try:
        Config.validate()
        store = create_store(Config.STORE_BACKEND, Config.DATABASE_URL, Config.DATA_FILE)
        bot = GameVaultBot(store)
        logger.info(f"Starting bot with the {Config.STORE_BACKEND} store...")
        await bot.start()
    except Exception as e:
        logger.error(f"Error starting bot: {e}", exc_info=True)
        raise

if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
