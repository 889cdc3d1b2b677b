"""Chat assistant domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ChatMessage:
    """One turn of a conversation; any role other than assistant is the user."""

    role: str
    content: str

    @property
    def is_assistant(self) -> bool:
        return self.role == "assistant"
