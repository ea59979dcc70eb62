import logging
from typing import Awaitable, Callable, Dict, Optional

from ..models import ChatState, IncomingMessage, StrategyIntent
from . import replies
from .chat_store import ChatStore
from .errors import StrategyNotFound
from .joke_service import JokeService
from .sales_advisor import SalesAdvisor
from .strategies import StrategyRegistry

logger = logging.getLogger(__name__)

# Payload commands: command -> (intent, awaiting state, prompt when no payload is attached)
PAYLOAD_COMMANDS = {
    '/rechazar_devolucion': (StrategyIntent.REFUND_REJECTION, ChatState.AWAITING_REFUND_INPUT, replies.REFUND_PROMPT),
    '/upselling': (StrategyIntent.UPSELLING, ChatState.AWAITING_UPSELL_INPUT, replies.PAYLOAD_PROMPT),
    '/motivar_compra': (StrategyIntent.PURCHASE_MOTIVATION, ChatState.AWAITING_MOTIVATION_INPUT, replies.PAYLOAD_PROMPT),
}

AWAITING_INTENTS = {state: intent for intent, state, _ in PAYLOAD_COMMANDS.values()}

class Dispatcher:
    """Entry point for every inbound message.

    Commands are handled immediately; freeform text is either the deferred
    payload of a pending sales command or chatter for the joke cadence. All
    of a chat's processing runs under that chat's lock, so messages from one
    chat are handled strictly one after another while other chats proceed.
    """

    def __init__(self, registry: StrategyRegistry, store: ChatStore = None, bot_username: str = ''):
        self.registry = registry
        self.store = store or ChatStore()
        self.bot_username = bot_username
        self.jokes = JokeService(self.store, registry)
        self.sales = SalesAdvisor(registry)

        self._commands: Dict[str, Callable[[IncomingMessage, str], Awaitable[Optional[str]]]] = {
            '/start': self._start,
            '/help': self._help,
            '/chiste': self._joke,
            '/analisis_general': self._general_analysis,
            '/ayuda_ventas': self._sales_help,
            '/estado': self._status,
            '/limpiar_contexto': self._clear_context,
        }

    async def handle(self, message: IncomingMessage) -> Optional[str]:
        """Process one message and return the reply text, if any.

        Never raises for message-level failures: unexpected errors are logged
        and turned into a generic apology for that chat only.
        """
        if not message.text or not message.text.strip():
            return None

        logger.info(f"Processing message from {message.sender_display_name}: {message.text[:50]}")

        async with self.store.lock(message.chat_id):
            self.store.session(message.chat_id).touch()
            try:
                if message.is_command:
                    return await self._handle_command(message)
                return await self._handle_freeform(message)
            except StrategyNotFound as e:
                logger.critical(f"Strategy wiring is broken: {e}")
                return replies.GENERIC_ERROR
            except Exception as e:
                logger.exception(f"Error processing message for chat {message.chat_id}: {e}")
                return replies.GENERIC_ERROR

    async def _handle_command(self, message: IncomingMessage) -> Optional[str]:
        command, argument = message.split_command(self.bot_username)
        if '@' in command:
            # Addressed to another bot in the group
            return None

        if command in PAYLOAD_COMMANDS:
            return await self._payload_command(message, command, argument)

        handler = self._commands.get(command)
        if handler is None:
            return replies.unknown_command(command)
        return await handler(message, argument)

    async def _handle_freeform(self, message: IncomingMessage) -> Optional[str]:
        session = self.store.session(message.chat_id)
        intent = AWAITING_INTENTS.get(session.state)
        if intent is not None:
            # The awaited payload is consumed whatever its content
            self.store.set_state(message.chat_id, ChatState.NORMAL)
            return await self.sales.advise(intent, message.text, message.chat_id)
        return await self.jokes.process_message(message)

    async def _payload_command(self, message: IncomingMessage, command: str, argument: str) -> str:
        intent, awaiting_state, prompt = PAYLOAD_COMMANDS[command]
        if not argument.strip():
            self.store.set_state(message.chat_id, awaiting_state)
            return prompt
        self.store.set_state(message.chat_id, ChatState.NORMAL)
        return await self.sales.advise(intent, argument, message.chat_id)

    async def _start(self, message: IncomingMessage, argument: str) -> str:
        self.store.set_state(message.chat_id, ChatState.NORMAL)
        return replies.WELCOME

    async def _help(self, message: IncomingMessage, argument: str) -> str:
        return replies.HELP

    async def _joke(self, message: IncomingMessage, argument: str) -> str:
        return await self.jokes.manual_joke(message.chat_id)

    async def _general_analysis(self, message: IncomingMessage, argument: str) -> str:
        if not argument.strip():
            return replies.ANALYSIS_PROMPT
        return self.sales.general_analysis(argument, message.chat_id)

    async def _sales_help(self, message: IncomingMessage, argument: str) -> str:
        return replies.SALES_HELP

    async def _status(self, message: IncomingMessage, argument: str) -> str:
        joke_stats = self.jokes.statistics()
        return replies.status(
            jokes_available=await self.jokes.is_available(),
            active_chats=joke_stats['active_chats'],
            pending_messages=joke_stats['pending_messages'],
            sales_available=await self.sales.is_available(),
            total_advice=self.sales.total_advice(),
        )

    async def _clear_context(self, message: IncomingMessage, argument: str) -> str:
        self.jokes.clear_chat_context(message.chat_id)
        return replies.CONTEXT_CLEARED

    def statistics(self) -> Dict:
        """Session overview for the administrative surface"""
        sessions = self.store.sessions
        return {
            'active_chats': len(sessions),
            'states': {chat_id: s.state.value for chat_id, s in sessions.items()},
            'last_activity': {chat_id: s.last_activity.isoformat() for chat_id, s in sessions.items()},
        }
