from dataclasses import dataclass
from typing import Optional, Tuple

@dataclass(frozen=True)
class IncomingMessage:
    """Platform-independent inbound message event"""
    chat_id: str
    sender_display_name: str
    text: str
    is_group: bool = False

    @property
    def is_command(self) -> bool:
        return self.text.startswith('/')

    def split_command(self, bot_username: Optional[str] = None) -> Tuple[str, str]:
        """Split a command into (lower-cased name, remainder).

        A trailing ``@botname`` on the command token is dropped so that
        ``/chiste@MyBot`` in a group behaves like ``/chiste``.
        """
        parts = self.text.split(maxsplit=1)
        name = parts[0].lower() if parts else ''
        argument = parts[1] if len(parts) > 1 else ''
        if '@' in name:
            name, _, mention = name.partition('@')
            if bot_username and mention != bot_username.lower().lstrip('@'):
                # Addressed to another bot; keep the full token so it is unknown to us
                name = f"{name}@{mention}"
        return name, argument

@dataclass(frozen=True)
class ContextEntry:
    """One line of buffered chat context"""
    author: str
    text: str

    def render(self) -> str:
        return f"{self.author}: {self.text}"
