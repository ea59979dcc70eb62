import os
from dataclasses import dataclass
from typing import List

@dataclass
class Settings:
    """Application configuration settings"""
    # Required settings
    telegram_token: str
    telegram_bot_username: str
    ai_api_key: str

    # AI provider (any OpenAI-compatible endpoint)
    ai_api_url: str = "https://api.x.ai/v1"
    ai_model: str = "grok-beta"
    max_tokens: int = 1000
    temperature: float = 0.7
    ai_timeout: float = 30.0

    def missing(self) -> List[str]:
        """Names of required environment variables that are not set"""
        required = {
            'TELEGRAM_TOKEN': self.telegram_token,
            'TELEGRAM_BOT_USERNAME': self.telegram_bot_username,
            'AI_API_KEY': self.ai_api_key,
        }
        return [name for name, value in required.items() if not value]

    def is_valid(self) -> bool:
        return not self.missing()

def get_settings() -> Settings:
    """Load settings from environment variables"""
    return Settings(
        telegram_token=os.getenv('TELEGRAM_TOKEN', ''),
        telegram_bot_username=os.getenv('TELEGRAM_BOT_USERNAME', ''),
        ai_api_key=os.getenv('AI_API_KEY', ''),
        ai_api_url=os.getenv('AI_API_URL', 'https://api.x.ai/v1'),
        ai_model=os.getenv('AI_MODEL', 'grok-beta'),
        max_tokens=int(os.getenv('MAX_TOKENS', '1000')),
        temperature=float(os.getenv('TEMPERATURE', '0.7')),
        ai_timeout=float(os.getenv('AI_TIMEOUT', '30'))
    )
