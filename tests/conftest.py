import asyncio
from typing import List, Optional, Tuple

import pytest

from ai_bot.config import Settings
from ai_bot.core import ChatStore, Dispatcher, build_registry
from ai_bot.core.errors import AIUnavailable

class FakeResponder:
    """In-memory stand-in for the AI provider"""

    def __init__(self, joke: str = "¿Qué le dijo un vendedor a otro? ¡Nos vemos en la caja!", advice: str = "Ofrece un cambio."):
        self.joke = joke
        self.advice = advice
        self.available = True
        self.fail = False
        self.gate: Optional[asyncio.Event] = None
        self.jokes: List[str] = []
        self.analyses: List[Tuple[str, str]] = []
        self.probes = 0

    async def _wait(self):
        if self.gate is not None:
            await self.gate.wait()
        else:
            await asyncio.sleep(0)

    async def generate(self, prompt: str, max_tokens: Optional[int] = None) -> str:
        await self._wait()
        if self.fail:
            raise AIUnavailable("boom")
        return "OK"

    async def generate_joke(self, context: str) -> str:
        self.jokes.append(context)
        await self._wait()
        if self.fail:
            raise AIUnavailable("boom")
        return self.joke

    async def analyze_sales_conversation(self, conversation: str, objective: str) -> str:
        self.analyses.append((conversation, objective))
        await self._wait()
        if self.fail:
            raise AIUnavailable("boom")
        return self.advice

    async def is_available(self) -> bool:
        self.probes += 1
        return self.available

@pytest.fixture
def responder():
    return FakeResponder()

@pytest.fixture
def registry(responder):
    return build_registry(responder)

@pytest.fixture
def store():
    return ChatStore()

@pytest.fixture
def dispatcher(registry, store):
    return Dispatcher(registry, store, bot_username="ventas_bot")

@pytest.fixture
def settings():
    return Settings(
        telegram_token="123:abc",
        telegram_bot_username="ventas_bot",
        ai_api_key="sk-test",
    )

