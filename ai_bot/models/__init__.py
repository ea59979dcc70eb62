from .intent import StrategyIntent
from .message import ContextEntry, IncomingMessage
from .session import ChatState, Session

__all__ = ['StrategyIntent', 'ContextEntry', 'IncomingMessage', 'ChatState', 'Session']
