from .ai_responder import AIResponder, Responder
from .cadence import CadenceTrigger
from .chat_store import ChatStore
from .context_buffer import ContextBuffer
from .strategies import StrategyOutcome, StrategyRegistry, build_registry
from .dispatcher import Dispatcher
from .admin import AdminService

__all__ = [
    'AIResponder', 'Responder', 'CadenceTrigger', 'ChatStore', 'ContextBuffer',
    'StrategyOutcome', 'StrategyRegistry', 'build_registry', 'Dispatcher', 'AdminService'
]
