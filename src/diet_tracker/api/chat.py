"""Chat assistant endpoint."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, Depends, Request

from diet_tracker.api.deps import current_user
from diet_tracker.api.schemas import ChatRequest
from diet_tracker.domain.chat import ChatMessage

if TYPE_CHECKING:
    from diet_tracker.containers import AppContainer

router = APIRouter(
    prefix="/api/chat", tags=["chat"], dependencies=[Depends(current_user)]
)


@router.post("")
async def create_chat_completion(
    payload: ChatRequest, request: Request
) -> dict[str, str]:
    """Forward a prompt or conversation to the configured assistant."""
    container: AppContainer = request.app.state.container
    reply = await container.chat_service.complete(
        prompt=payload.prompt.strip() if payload.prompt else None,
        messages=[
            ChatMessage(role=message.role, content=message.content.strip())
            for message in payload.messages or []
        ],
        system_prompt=payload.system_prompt.strip() if payload.system_prompt else None,
    )
    return {"reply": reply}
