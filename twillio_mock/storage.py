from typing import List

from .models import Message


class MessageStore:
    """In-memory message list owned by a single server, newest first."""

    def __init__(self) -> None:
        self._messages: List[Message] = []

    def insert_message(self, message: Message) -> Message:
        self._messages.insert(0, message)
        return message

    def list_messages(self) -> List[Message]:
        # copy so callers cannot reorder or truncate the store
        return list(self._messages)

    def clear(self) -> None:
        self._messages.clear()

    def count(self) -> int:
        return len(self._messages)

    def __len__(self) -> int:
        return len(self._messages)
