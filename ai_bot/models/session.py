from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum

class ChatState(str, Enum):
    """How the next freeform message in a chat is interpreted"""
    NORMAL = "NORMAL"
    AWAITING_REFUND_INPUT = "AWAITING_REFUND_INPUT"
    AWAITING_UPSELL_INPUT = "AWAITING_UPSELL_INPUT"
    AWAITING_MOTIVATION_INPUT = "AWAITING_MOTIVATION_INPUT"

@dataclass
class Session:
    """Per-chat conversational state, created lazily on first message"""
    chat_id: str
    state: ChatState = ChatState.NORMAL
    last_activity: datetime = field(default_factory=datetime.now)

    def touch(self):
        self.last_activity = datetime.now()
