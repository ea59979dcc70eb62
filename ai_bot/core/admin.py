import logging
from typing import Dict

from ..config import Settings
from ..models import StrategyIntent
from . import replies
from .dispatcher import Dispatcher
from .sales_advisor import SALES_INTENTS

logger = logging.getLogger(__name__)

class AdminService:
    """Read-mostly view used by health checks and operators.

    main.py keeps the instance in `application.bot_data["admin"]` and logs
    `health()` at startup; external endpoints reuse the same object.

    Every call here probes the AI provider through the strategies, so poll it
    sparingly.
    """

    def __init__(self, dispatcher: Dispatcher, settings: Settings):
        self.dispatcher = dispatcher
        self.settings = settings

    async def health(self) -> Dict:
        return {
            'status': 'UP',
            'timestamp': replies.timestamp(seconds=True),
            'bot': self.settings.telegram_bot_username,
            'services': {
                'jokes': await self.dispatcher.jokes.is_available(),
                'sales': await self.dispatcher.sales.is_available(),
            },
        }

    async def statistics(self) -> Dict:
        availability = await self.dispatcher.registry.status()
        jokes = dict(self.dispatcher.jokes.statistics())
        jokes['available'] = availability.get(StrategyIntent.JOKE, False)
        sales = self.dispatcher.sales
        return {
            'general': self.dispatcher.statistics(),
            'intents': {intent.value: available for intent, available in availability.items()},
            'jokes': jokes,
            'sales': {
                'total_advice': sales.total_advice(),
                'advice_by_type': dict(sales.advisory_count),
                'available': all(availability.get(intent, False) for intent in SALES_INTENTS),
            },
            'config': {
                'bot_username': self.settings.telegram_bot_username,
                'ai_model': self.settings.ai_model,
                'config_valid': self.settings.is_valid(),
            },
        }

    async def clear_chat_context(self, chat_id: str) -> Dict[str, str]:
        """Same clear path as the in-chat /limpiar_contexto command"""
        async with self.dispatcher.store.lock(chat_id):
            self.dispatcher.jokes.clear_chat_context(chat_id)
        logger.info(f"🧹 Context cleared for chat {chat_id} by admin")
        return {
            'message': f"Contexto limpiado para chat: {chat_id}",
            'timestamp': replies.timestamp(seconds=True),
        }
