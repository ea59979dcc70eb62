from .handlers import TelegramHandlers, setup_handlers

__all__ = ['TelegramHandlers', 'setup_handlers']
