import logging
from typing import Optional, Protocol

from openai import AsyncOpenAI, OpenAIError

from ..config import Settings
from .errors import AIUnavailable

logger = logging.getLogger(__name__)

JOKE_PROMPT = (
    "Basándote en el siguiente contexto de conversación, genera un chiste apropiado y divertido "
    "que sea relevante al tema discutido. El chiste debe ser respetuoso y adecuado para un entorno de grupo. "
    "Contexto: {context}\n\nGenera solo el chiste, sin explicaciones adicionales."
)

SALES_PROMPT = (
    "Eres un experto consultor de ventas. Analiza la siguiente conversación entre un cliente y un vendedor, "
    "y proporciona consejos específicos para lograr el objetivo: {objective}.\n\n"
    "Conversación:\n{conversation}\n\n"
    "Proporciona consejos concretos y accionables para el vendedor, incluyendo:\n"
    "1. Análisis de la situación actual\n"
    "2. Estrategias recomendadas\n"
    "3. Frases o argumentos específicos que puede usar\n"
    "4. Qué evitar en esta situación"
)

PROBE_PROMPT = "Di 'OK' si puedes responder"
PROBE_MAX_TOKENS = 5

class Responder(Protocol):
    """What the strategies need from an AI backend"""

    async def generate(self, prompt: str, max_tokens: Optional[int] = None) -> str: ...

    async def generate_joke(self, context: str) -> str: ...

    async def analyze_sales_conversation(self, conversation: str, objective: str) -> str: ...

    async def is_available(self) -> bool: ...

class AIResponder:
    """OpenAI-compatible chat completion client.

    ``is_available`` performs a real (tiny) generation, so it costs a network
    round trip and tokens every time it is called.
    """

    def __init__(self, settings: Settings, client: Optional[AsyncOpenAI] = None):
        self.settings = settings
        self.client = client or AsyncOpenAI(
            api_key=settings.ai_api_key,
            base_url=settings.ai_api_url,
            timeout=settings.ai_timeout,
            max_retries=0
        )

    async def generate(self, prompt: str, max_tokens: Optional[int] = None) -> str:
        """Send a single-turn prompt and return the trimmed completion text"""
        try:
            response = await self.client.chat.completions.create(
                model=self.settings.ai_model,
                messages=[{"role": "user", "content": prompt}],
                max_tokens=max_tokens or self.settings.max_tokens,
                temperature=self.settings.temperature
            )
        except OpenAIError as e:
            logger.error(f"AI provider call failed: {e}")
            raise AIUnavailable(f"Error al generar respuesta de IA: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            logger.error(f"Unexpected AI response format: {response!r}")
            raise AIUnavailable("Formato de respuesta inesperado de la API de IA") from e

        return (content or "").strip()

    async def generate_joke(self, context: str) -> str:
        return await self.generate(JOKE_PROMPT.format(context=context))

    async def analyze_sales_conversation(self, conversation: str, objective: str) -> str:
        return await self.generate(SALES_PROMPT.format(objective=objective, conversation=conversation))

    async def is_available(self) -> bool:
        """Probe the provider with a trivial generation"""
        try:
            response = await self.generate(PROBE_PROMPT, max_tokens=PROBE_MAX_TOKENS)
        except AIUnavailable as e:
            logger.warning(f"AI service unavailable: {e}")
            return False
        return bool(response.strip())

    async def close(self):
        await self.client.close()
