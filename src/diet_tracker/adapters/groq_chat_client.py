"""Groq chat-completion client via the OpenAI-compatible API."""

import logging
from dataclasses import dataclass

from openai import APIConnectionError, APIStatusError, AsyncOpenAI

from diet_tracker.domain.chat import ChatMessage
from diet_tracker.errors import ChatUpstreamError
from diet_tracker.services.chat import ChatClient

_logger = logging.getLogger(__name__)

GROQ_BASE_URL = "https://api.groq.com/openai/v1"
UNEXPECTED_RESPONSE = "The assistant service returned an unexpected response."
REJECTED_CREDENTIALS = "Assistant credentials were rejected. Update the Groq API key."


@dataclass
class GroqChatClient(ChatClient):
    """Chat client backed by Groq's OpenAI-compatible endpoint."""

    client: AsyncOpenAI
    model: str = "llama-3.3-70b-versatile"
    temperature: float = 0.7
    max_tokens: int = 512

    @classmethod
    def create(
        cls, api_key: str, model: str, base_url: str = GROQ_BASE_URL
    ) -> "GroqChatClient":
        """Create a Groq client."""
        return cls(client=AsyncOpenAI(api_key=api_key, base_url=base_url), model=model)

    async def complete(
        self,
        prompt: str,
        messages: list[ChatMessage],
        system_prompt: str | None,
    ) -> str:
        """Send the conversation, or the prompt alone, as chat messages."""
        payload: list[dict[str, str]] = []
        if system_prompt:
            payload.append({"role": "system", "content": system_prompt})
        if messages:
            payload.extend(
                {
                    "role": "assistant" if message.is_assistant else "user",
                    "content": message.content,
                }
                for message in messages
            )
        else:
            payload.append({"role": "user", "content": prompt})

        try:
            response = await self.client.chat.completions.create(
                model=self.model,
                messages=payload,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except APIStatusError as exc:
            _logger.warning("Groq request failed: status=%s", exc.status_code)
            raise ChatUpstreamError(
                _friendly_error(exc), status_code=exc.status_code
            ) from exc
        except APIConnectionError as exc:
            _logger.warning("Groq request failed: %s", exc)
            raise ChatUpstreamError(UNEXPECTED_RESPONSE) from exc

        choices = getattr(response, "choices", None) or []
        reply = choices[0].message.content if choices else None
        if not reply or not reply.strip():
            raise ChatUpstreamError("No response generated.")
        return reply.strip()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.client.close()


def _friendly_error(exc: APIStatusError) -> str:
    if exc.status_code in {401, 403}:
        return REJECTED_CREDENTIALS
    body = exc.body
    if isinstance(body, dict):
        error = body.get("error", body)
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return UNEXPECTED_RESPONSE
