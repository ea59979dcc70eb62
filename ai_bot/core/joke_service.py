import logging
from typing import Dict, Optional

from ..models import IncomingMessage, StrategyIntent
from . import replies
from .chat_store import ChatStore
from .content_filter import is_appropriate
from .errors import ErrorKind
from .strategies import StrategyRegistry

logger = logging.getLogger(__name__)

class JokeService:
    """Automatic and manual jokes built from buffered chat context"""

    def __init__(self, store: ChatStore, registry: StrategyRegistry):
        self.store = store
        self.registry = registry

    async def process_message(self, message: IncomingMessage) -> Optional[str]:
        """Buffer a freeform message and return a joke if the cadence fires.

        Must be called with the chat's lock held. Only group chats fire; a
        failed or filtered attempt leaves the counter as it is.
        """
        chat_id = message.chat_id
        if not message.text.strip():
            return None

        self.store.buffer.append(chat_id, message.sender_display_name, message.text)
        count = self.store.trigger.increment(chat_id)

        if not message.is_group or not self.store.trigger.should_fire(count):
            return None

        context = self.store.buffer.render(chat_id)
        if not is_appropriate(context):
            logger.info(f"Context not appropriate for a joke in chat {chat_id}")
            return None

        outcome = await self.registry.dispatch(StrategyIntent.JOKE, context)
        if not outcome.ok:
            logger.error(f"Automatic joke failed for chat {chat_id}: {outcome.error}")
            return None

        self.store.trigger.reset(chat_id)
        logger.info(f"😄 Joke generated for chat {chat_id}")
        return outcome.text

    async def manual_joke(self, chat_id: str) -> str:
        """Joke on demand; ignores the cadence and the content filter"""
        context = self.store.buffer.render(chat_id) or replies.EMPTY_CONTEXT_TOPIC
        outcome = await self.registry.dispatch(StrategyIntent.JOKE, context)
        if outcome.ok:
            return outcome.text
        logger.error(f"Manual joke failed for chat {chat_id}: {outcome.error}")
        if outcome.error_kind is ErrorKind.STRATEGY_UNAVAILABLE:
            return replies.JOKES_UNAVAILABLE
        return replies.JOKE_FAILED

    async def is_available(self) -> bool:
        return await self.registry.is_available(StrategyIntent.JOKE)

    def clear_chat_context(self, chat_id: str):
        self.store.clear(chat_id)

    def statistics(self) -> Dict[str, int]:
        return {
            'active_chats': len(self.store.buffer),
            'pending_messages': self.store.trigger.total(),
        }
