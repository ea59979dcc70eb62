import asyncio
import logging
from typing import Dict

from ..models import ChatState, Session
from .cadence import CadenceTrigger
from .context_buffer import ContextBuffer

logger = logging.getLogger(__name__)

class ChatStore:
    """All per-chat state behind one lock per chat.

    Callers hold ``lock(chat_id)`` around any read-modify-write of a chat's
    session, buffer and counter. Chats never share a lock.
    """

    def __init__(self, buffer: ContextBuffer = None, trigger: CadenceTrigger = None):
        self.buffer = buffer or ContextBuffer()
        self.trigger = trigger or CadenceTrigger()
        self.sessions: Dict[str, Session] = {}
        self._locks: Dict[str, asyncio.Lock] = {}

    def lock(self, chat_id: str) -> asyncio.Lock:
        lock = self._locks.get(chat_id)
        if lock is None:
            lock = self._locks[chat_id] = asyncio.Lock()
        return lock

    def session(self, chat_id: str) -> Session:
        """Get or lazily create the session for a chat"""
        session = self.sessions.get(chat_id)
        if session is None:
            session = self.sessions[chat_id] = Session(chat_id=chat_id)
        return session

    def set_state(self, chat_id: str, state: ChatState):
        session = self.session(chat_id)
        if session.state is not state:
            logger.debug(f"Chat {chat_id}: {session.state.value} -> {state.value}")
        session.state = state

    def clear(self, chat_id: str):
        """Drop buffered context and counter, and return the session to NORMAL"""
        self.buffer.clear(chat_id)
        self.trigger.clear(chat_id)
        if chat_id in self.sessions:
            self.sessions[chat_id].state = ChatState.NORMAL
        logger.info(f"Context cleared for chat {chat_id}")
