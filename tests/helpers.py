from ai_bot.models import IncomingMessage

def group_message(text: str, chat_id: str = "-100", sender: str = "Ana") -> IncomingMessage:
    return IncomingMessage(chat_id=chat_id, sender_display_name=sender, text=text, is_group=True)

def private_message(text: str, chat_id: str = "42", sender: str = "Luis") -> IncomingMessage:
    return IncomingMessage(chat_id=chat_id, sender_display_name=sender, text=text, is_group=False)

# Long enough to pass payload validation
SAMPLE_CONVERSATION = (
    "Cliente: Quiero devolver los zapatos que compré la semana pasada.\n"
    "Vendedor: Entiendo, ¿cuál es el motivo de la devolución?"
)
