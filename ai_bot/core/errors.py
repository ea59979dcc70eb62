from enum import Enum

class ErrorKind(str, Enum):
    """Recoverable failure categories carried in result values"""
    AI_UNAVAILABLE = "ai_unavailable"
    STRATEGY_UNAVAILABLE = "strategy_unavailable"
    VALIDATION_FAILED = "validation_failed"

class BotError(Exception):
    """Base class for all bot errors"""
    kind = None

class AIUnavailable(BotError):
    """Transport or parse failure talking to the AI provider"""
    kind = ErrorKind.AI_UNAVAILABLE

class StrategyUnavailable(BotError):
    """The backing capability of an intent reports not-ready"""
    kind = ErrorKind.STRATEGY_UNAVAILABLE

class ValidationFailed(BotError):
    """A conversation payload failed blank/length checks"""
    kind = ErrorKind.VALIDATION_FAILED

class StrategyNotFound(BotError):
    """No strategy registered for an intent; never user-triggerable"""
