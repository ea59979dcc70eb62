import logging
from collections import Counter
from dataclasses import dataclass
from typing import Optional

from ..models import StrategyIntent
from . import replies
from .errors import ErrorKind, ValidationFailed
from .strategies import StrategyRegistry

logger = logging.getLogger(__name__)

MIN_CONVERSATION_LENGTH = 50
MAX_CONVERSATION_LENGTH = 10_000

SALES_INTENTS = (
    StrategyIntent.REFUND_REJECTION,
    StrategyIntent.UPSELLING,
    StrategyIntent.PURCHASE_MOTIVATION,
)

# intent -> (advice header, topic used in error messages)
ADVICE_LABELS = {
    StrategyIntent.REFUND_REJECTION: ("🚫 ESTRATEGIA: Rechazo de Devolución", "rechazo de devolución"),
    StrategyIntent.UPSELLING: ("📈 ESTRATEGIA: Upselling", "upselling"),
    StrategyIntent.PURCHASE_MOTIVATION: ("💪 ESTRATEGIA: Motivación de Compra", "motivación de compra"),
}

@dataclass
class ValidationResult:
    valid: bool
    error: Optional[ValidationFailed] = None

def validate_conversation(conversation: Optional[str]) -> ValidationResult:
    """A payload must be non-blank and 50..10,000 characters long (inclusive)"""
    if conversation is None or not conversation.strip():
        return ValidationResult(False, ValidationFailed("empty conversation"))
    length = len(conversation)
    if length < MIN_CONVERSATION_LENGTH or length > MAX_CONVERSATION_LENGTH:
        return ValidationResult(False, ValidationFailed(f"conversation length {length} out of range"))
    return ValidationResult(True)

class SalesAdvisor:
    """Sales advice from client/seller conversations"""

    def __init__(self, registry: StrategyRegistry):
        self.registry = registry
        self.advisory_count: Counter = Counter()

    async def advise(self, intent: StrategyIntent, conversation: str, chat_id: str) -> str:
        """Validate the payload, run the intent and format the reply"""
        validation = validate_conversation(conversation)
        if not validation.valid:
            logger.info(f"Rejected conversation from chat {chat_id}: {validation.error}")
            return replies.INVALID_CONVERSATION

        header, topic = ADVICE_LABELS[intent]
        logger.info(f"Analyzing conversation for {intent.value}")
        outcome = await self.registry.dispatch(intent, conversation)

        if outcome.error_kind is ErrorKind.STRATEGY_UNAVAILABLE:
            return replies.advice_unavailable(topic)
        if not outcome.ok:
            return replies.advice_failed(topic)

        self.advisory_count[intent.value] += 1
        logger.info(
            f"Advice '{intent.value}' delivered to chat {chat_id}. "
            f"Conversation of {len(conversation)} characters"
        )
        return replies.advice(header, outcome.text)

    def general_analysis(self, conversation: str, chat_id: str) -> str:
        """Local summary, no AI call"""
        validation = validate_conversation(conversation)
        if not validation.valid:
            return replies.INVALID_CONVERSATION
        logger.info(f"General analysis delivered to chat {chat_id}")
        return replies.general_analysis(conversation)

    async def is_available(self) -> bool:
        """All three sales intents must be available"""
        for intent in SALES_INTENTS:
            if not await self.registry.is_available(intent):
                return False
        return True

    def total_advice(self) -> int:
        return sum(self.advisory_count.values())
