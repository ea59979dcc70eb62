from collections import deque
from typing import Deque, Dict, List

from ..models import ContextEntry

MAX_ENTRIES = 10
MAX_RENDERED_CHARS = 1000

class ContextBuffer:
    """Recent messages per chat, used to build joke prompts.

    Each chat keeps at most ``max_entries`` entries (oldest evicted first).
    ``render`` never returns more than ``max_chars`` characters.
    """

    def __init__(self, max_entries: int = MAX_ENTRIES, max_chars: int = MAX_RENDERED_CHARS):
        self.max_entries = max_entries
        self.max_chars = max_chars
        self._entries: Dict[str, Deque[ContextEntry]] = {}

    def append(self, chat_id: str, author: str, text: str):
        entries = self._entries.get(chat_id)
        if entries is None:
            entries = self._entries[chat_id] = deque(maxlen=self.max_entries)
        entries.append(ContextEntry(author=author, text=text))

    def entries(self, chat_id: str) -> List[ContextEntry]:
        return list(self._entries.get(chat_id, ()))

    def render(self, chat_id: str) -> str:
        """Join entries as ``author: text`` lines, oldest first, within the character cap"""
        lines = []
        length = 0
        for entry in self._entries.get(chat_id, ()):
            line = entry.render()
            added = len(line) + (1 if lines else 0)
            if length + added > self.max_chars:
                break
            lines.append(line)
            length += added
        return "\n".join(lines)

    def clear(self, chat_id: str):
        self._entries.pop(chat_id, None)

    def __contains__(self, chat_id: str) -> bool:
        return chat_id in self._entries

    def __len__(self) -> int:
        """Number of chats with buffered context"""
        return len(self._entries)
