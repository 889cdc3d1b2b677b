"""Chat assistant proxy."""

import logging
from dataclasses import dataclass
from typing import Protocol

from diet_tracker.domain.chat import ChatMessage
from diet_tracker.errors import ChatUnavailableError, ValidationError

_logger = logging.getLogger(__name__)


class ChatClient(Protocol):
    """Interface for a chat-completion provider."""

    async def complete(
        self,
        prompt: str,
        messages: list[ChatMessage],
        system_prompt: str | None,
    ) -> str:
        """Return the assistant reply or raise ChatUpstreamError."""

    async def close(self) -> None:
        """Release network resources."""


def build_prompt(messages: list[ChatMessage]) -> str:
    """Render a conversation as User:/Assistant: lines awaiting a reply."""
    if not messages:
        return ""
    lines = [
        f"{'Assistant' if message.is_assistant else 'User'}: {message.content}"
        for message in messages
    ]
    return "\n".join(lines) + "\nAssistant:"


@dataclass
class ChatService:
    """Forwards prompts to the configured provider, if any."""

    client: ChatClient | None

    async def complete(
        self,
        prompt: str | None = None,
        messages: list[ChatMessage] | None = None,
        system_prompt: str | None = None,
    ) -> str:
        """Return the assistant reply for a prompt or a conversation."""
        history = messages or []
        effective_prompt = prompt or build_prompt(history)
        if not effective_prompt.strip():
            raise ValidationError("Prompt cannot be empty.", field="prompt")
        if self.client is None:
            raise ChatUnavailableError()
        reply = await self.client.complete(effective_prompt, history, system_prompt)
        _logger.info("Chat completion returned %s characters", len(reply))
        return reply
