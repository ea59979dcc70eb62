from typing import Dict

MIN_MESSAGES_FOR_JOKE = 3
MAX_MESSAGES_FOR_JOKE = 4

class CadenceTrigger:
    """Per-chat message counter that fires inside an inclusive window.

    Counts that climb past the window without firing stay there: a chat whose
    context was rejected at counts 3 and 4 will not fire again until reset.
    """

    def __init__(self, low: int = MIN_MESSAGES_FOR_JOKE, high: int = MAX_MESSAGES_FOR_JOKE):
        self.low = low
        self.high = high
        self._counts: Dict[str, int] = {}

    def increment(self, chat_id: str) -> int:
        count = self._counts.get(chat_id, 0) + 1
        self._counts[chat_id] = count
        return count

    def should_fire(self, count: int) -> bool:
        return self.low <= count <= self.high

    def count(self, chat_id: str) -> int:
        return self._counts.get(chat_id, 0)

    def reset(self, chat_id: str):
        self._counts[chat_id] = 0

    def clear(self, chat_id: str):
        self._counts.pop(chat_id, None)

    def total(self) -> int:
        """Sum of pending counts across all chats"""
        return sum(self._counts.values())
