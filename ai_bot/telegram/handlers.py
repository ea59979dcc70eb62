import logging
from typing import List, Optional

from telegram import Update, User
from telegram.constants import ChatType, MessageLimit
from telegram.ext import Application, ContextTypes, MessageHandler, filters

from ..core import Dispatcher
from ..core import replies
from ..models import IncomingMessage

logger = logging.getLogger(__name__)

GROUP_CHAT_TYPES = (ChatType.GROUP, ChatType.SUPERGROUP)

def split_message(text: str, limit: int = MessageLimit.MAX_TEXT_LENGTH) -> List[str]:
    """Cut text into pieces of at most `limit` characters, preferring line breaks"""
    chunks = []
    while len(text) > limit:
        cut = text.rfind("\n", 0, limit)
        if cut <= 0:
            cut = limit
        chunks.append(text[:cut])
        text = text[cut:].lstrip("\n")
    if text:
        chunks.append(text)
    return chunks

def display_name(user: Optional[User]) -> str:
    """'First Last (@username)', or a placeholder when the sender is unknown"""
    if user is None:
        return "Usuario desconocido"
    name = user.first_name or ""
    if user.last_name:
        name += f" {user.last_name}"
    if user.username:
        name += f" (@{user.username})"
    return name.strip() or "Usuario desconocido"

def to_incoming_message(update: Update) -> Optional[IncomingMessage]:
    """Translate a Telegram update into the bot's message event"""
    message = update.effective_message
    chat = update.effective_chat
    if message is None or chat is None or not message.text or not message.text.strip():
        return None
    return IncomingMessage(
        chat_id=str(chat.id),
        sender_display_name=display_name(update.effective_user),
        text=message.text,
        is_group=chat.type in GROUP_CHAT_TYPES
    )

class TelegramHandlers:
    """Telegram bot handlers feeding the dispatcher"""

    def __init__(self, dispatcher: Dispatcher):
        self.dispatcher = dispatcher

    async def handle_message(self, update: Update, context: ContextTypes.DEFAULT_TYPE):
        """Handle every text message, commands included"""
        incoming = to_incoming_message(update)
        if incoming is None:
            return

        try:
            response = await self.dispatcher.handle(incoming)
        except Exception as e:
            logger.error(f"Error handling message: {e}")
            response = replies.GENERIC_ERROR

        if response:
            await self.send(update, response)

    async def send(self, update: Update, text: str):
        """Reply in as many messages as Telegram's length limit requires"""
        chat_id = update.effective_chat.id
        try:
            for chunk in split_message(text):
                await update.effective_message.reply_text(chunk)
            logger.info(f"Message sent to chat {chat_id}: {text[:50]}")
        except Exception as e:
            logger.error(f"Error sending message to chat {chat_id}: {e}")
            try:
                await update.effective_message.reply_text(replies.GENERIC_ERROR)
            except Exception as e:
                logger.error(f"Could not send apology to chat {chat_id}: {e}")

    async def error_handler(self, update: object, context: ContextTypes.DEFAULT_TYPE):
        logger.error(f"Unhandled error while processing update: {context.error}")

def setup_handlers(application: Application, dispatcher: Dispatcher):
    """Setup all Telegram handlers for the bot"""
    handlers = TelegramHandlers(dispatcher)

    # Commands are parsed by the dispatcher, so one handler covers all text; edits are ignored
    application.add_handler(MessageHandler(filters.TEXT & filters.UpdateType.MESSAGE, handlers.handle_message))
    application.add_error_handler(handlers.error_handler)

    logger.info("Telegram handlers configured")
    return handlers
