"""Hugging Face inference API chat client."""

import logging
from dataclasses import dataclass

import httpx

from diet_tracker.domain.chat import ChatMessage
from diet_tracker.errors import ChatUpstreamError
from diet_tracker.services.chat import ChatClient

_logger = logging.getLogger(__name__)

HUGGINGFACE_BASE_URL = "https://api-inference.huggingface.co/models"
UNEXPECTED_RESPONSE = "The assistant service returned an unexpected response."
REJECTED_CREDENTIALS = (
    "Assistant credentials were rejected. Refresh the Hugging Face API key."
)


@dataclass
class HttpxHuggingFaceClient(ChatClient):
    """HTTPX-backed text-generation client."""

    api_key: str
    model: str
    http_client: httpx.AsyncClient
    base_url: str = HUGGINGFACE_BASE_URL
    max_new_tokens: int = 250
    temperature: float = 0.7

    @classmethod
    def create(cls, api_key: str, model: str) -> "HttpxHuggingFaceClient":
        """Create a client with a managed httpx session."""
        return cls(api_key=api_key, model=model, http_client=httpx.AsyncClient())

    async def complete(
        self,
        prompt: str,
        messages: list[ChatMessage],
        system_prompt: str | None,
    ) -> str:
        """Generate a continuation of the rendered prompt."""
        combined = f"{system_prompt.strip()}\n\n{prompt}" if system_prompt else prompt
        response = await self.http_client.post(
            f"{self.base_url}/{self.model}",
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={
                "inputs": combined,
                "parameters": {
                    "max_new_tokens": self.max_new_tokens,
                    "temperature": self.temperature,
                    "return_full_text": False,
                },
                "options": {"wait_for_model": True},
            },
            timeout=60,
        )
        if response.is_error:
            _logger.warning(
                "Hugging Face request failed: status=%s", response.status_code
            )
            raise ChatUpstreamError(
                _friendly_error(response), status_code=response.status_code
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise ChatUpstreamError(
                "The assistant service returned malformed data."
            ) from exc
        first = data[0] if isinstance(data, list) and data else data
        generated = first.get("generated_text") if isinstance(first, dict) else None
        if not generated or not str(generated).strip():
            raise ChatUpstreamError("No response generated.")
        return str(generated).strip()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def _friendly_error(response: httpx.Response) -> str:
    if response.status_code in {401, 403}:
        return REJECTED_CREDENTIALS
    try:
        payload = response.json()
    except ValueError:
        return UNEXPECTED_RESPONSE
    if isinstance(payload, dict) and payload.get("error"):
        return str(payload["error"])
    return UNEXPECTED_RESPONSE
