import logging
from dataclasses import dataclass
from typing import Dict, Mapping, Optional

from ..models import StrategyIntent
from .ai_responder import Responder
from .errors import AIUnavailable, BotError, ErrorKind, StrategyNotFound, StrategyUnavailable

logger = logging.getLogger(__name__)

JOKE_MARKER = "😄"
NO_JOKE_FALLBACK = "😅 Lo siento, no se me ocurre un buen chiste en este momento. ¡Pero sigan con la conversación interesante!"

OBJECTIVES = {
    StrategyIntent.REFUND_REJECTION: "rechazar una devolución de manera diplomática y mantener la relación con el cliente",
    StrategyIntent.UPSELLING: "realizar upselling sugiriendo productos mejores o adicionales que aporten valor al cliente",
    StrategyIntent.PURCHASE_MOTIVATION: "motivar al cliente a realizar la compra destacando beneficios y creando urgencia apropiada",
}

@dataclass
class StrategyOutcome:
    """Result of dispatching an intent: text on success, error otherwise"""
    intent: StrategyIntent
    text: Optional[str] = None
    error: Optional[BotError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self.error.kind if self.error else None

class Strategy:
    """Intent-specific framing on top of a responder"""
    name = "base"

    def __init__(self, responder: Responder):
        self.responder = responder

    async def generate(self, text: str) -> str:
        raise NotImplementedError

    async def is_available(self) -> bool:
        return await self.responder.is_available()

class JokeStrategy(Strategy):
    name = "Generación de Chistes"

    async def generate(self, context: str) -> str:
        logger.info(f"Generating joke from context: {context[:100]}")
        joke = await self.responder.generate_joke(context)
        if not joke or not joke.strip():
            return NO_JOKE_FALLBACK
        return f"{JOKE_MARKER} {joke.strip()}"

class SalesAdvisoryStrategy(Strategy):
    """Analyze a client/seller conversation toward a fixed objective"""

    def __init__(self, responder: Responder, name: str, objective: str):
        super().__init__(responder)
        self.name = name
        self.objective = objective

    async def generate(self, conversation: str) -> str:
        logger.info(f"Generating sales advice: {self.name}")
        return await self.responder.analyze_sales_conversation(conversation, self.objective)

class StrategyRegistry:
    """Maps each intent to its strategy.

    Availability is probed live on every ``dispatch`` and ``is_available``
    call; nothing is cached here.
    """

    def __init__(self, strategies: Mapping[StrategyIntent, Strategy]):
        self._strategies: Dict[StrategyIntent, Strategy] = dict(strategies)
        logger.info(f"Strategies registered: {len(self._strategies)}")

    def get(self, intent: StrategyIntent) -> Strategy:
        strategy = self._strategies.get(intent)
        if strategy is None:
            logger.critical(f"No strategy registered for intent {intent!r}")
            raise StrategyNotFound(f"Estrategia no encontrada: {intent}")
        return strategy

    def name(self, intent: StrategyIntent) -> str:
        return self.get(intent).name

    async def is_available(self, intent: StrategyIntent) -> bool:
        return await self.get(intent).is_available()

    async def status(self) -> Dict[StrategyIntent, bool]:
        """Availability of every registered intent"""
        return {intent: await strategy.is_available() for intent, strategy in self._strategies.items()}

    async def dispatch(self, intent: StrategyIntent, text: str) -> StrategyOutcome:
        """Run the strategy for ``intent``.

        Raises StrategyNotFound for an unregistered intent; every other failure
        comes back in the outcome.
        """
        strategy = self.get(intent)

        if not await strategy.is_available():
            logger.warning(f"Strategy unavailable: {strategy.name}")
            return StrategyOutcome(intent, error=StrategyUnavailable(f"Estrategia no disponible: {strategy.name}"))

        logger.info(f"Executing strategy: {strategy.name}")
        try:
            return StrategyOutcome(intent, text=await strategy.generate(text))
        except AIUnavailable as e:
            logger.error(f"Strategy {strategy.name} failed: {e}")
            return StrategyOutcome(intent, error=e)

def build_registry(responder: Responder) -> StrategyRegistry:
    """Wire the closed set of intents to one responder"""
    return StrategyRegistry({
        StrategyIntent.JOKE: JokeStrategy(responder),
        StrategyIntent.REFUND_REJECTION: SalesAdvisoryStrategy(
            responder, "Rechazo de Devolución", OBJECTIVES[StrategyIntent.REFUND_REJECTION]
        ),
        StrategyIntent.UPSELLING: SalesAdvisoryStrategy(
            responder, "Upselling", OBJECTIVES[StrategyIntent.UPSELLING]
        ),
        StrategyIntent.PURCHASE_MOTIVATION: SalesAdvisoryStrategy(
            responder, "Motivación de Compra", OBJECTIVES[StrategyIntent.PURCHASE_MOTIVATION]
        ),
    })
