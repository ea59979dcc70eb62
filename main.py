import logging
from telegram.ext import Application
from telegram import Update

from ai_bot.core import AdminService, AIResponder, ChatStore, Dispatcher, build_registry
from ai_bot.telegram import setup_handlers
from ai_bot.config import get_settings

# Configure logging
logging.basicConfig(
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    level=logging.INFO
)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

def main():
    """Main function to run the Telegram AI bot"""

    # Load settings
    settings = get_settings()

    # Validate required settings
    missing = settings.missing()
    if missing:
        for name in missing:
            logger.error(f"{name} environment variable is required")
        return

    # Wire the core once; everything is passed explicitly from here
    responder = AIResponder(settings)
    registry = build_registry(responder)
    dispatcher = Dispatcher(registry, ChatStore(), bot_username=settings.telegram_bot_username)
    admin = AdminService(dispatcher, settings)

    # Create Telegram application; per-chat locks keep each chat ordered
    application = (
        Application.builder()
        .token(settings.telegram_token)
        .concurrent_updates(True)
        .build()
    )

    # Setup handlers
    setup_handlers(application, dispatcher)
    application.bot_data["admin"] = admin

    async def post_init(application):
        logger.info(f"🚀 Bot @{settings.telegram_bot_username} using model {settings.ai_model}")
        health = await admin.health()
        logger.info(f"Services available: {health['services']}")

    async def post_shutdown(application):
        await responder.close()
        logger.info("AI client closed")

    application.post_init = post_init
    application.post_shutdown = post_shutdown

    # Run the bot
    logger.info("🤖 Starting Telegram AI Bot")

    try:
        application.run_polling(allowed_updates=Update.ALL_TYPES)
    except KeyboardInterrupt:
        logger.info("Bot stopped by user")
    except Exception as e:
        logger.error(f"Bot crashed: {e}")
        raise

if __name__ == '__main__':
    main()
