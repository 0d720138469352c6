"""API routes for the blueprint agent conversation."""

from fastapi import APIRouter, Depends

from blueprint_agent.api.dependencies import get_controller
from blueprint_agent.core.schemas_blueprint import (
    FinalizeRequest,
    FinalizeResponse,
    MessageRequest,
    MessageResponse,
    StartRequest,
    StartResponse,
)
from blueprint_agent.services.conversation import ConversationController

router = APIRouter(prefix="/agent", tags=["agent"])


@router.post("/start", response_model=StartResponse)
async def start_endpoint(
    request: StartRequest,
    controller: ConversationController = Depends(get_controller),
) -> StartResponse:
    """Generate an initial blueprint and open a session."""
    return await controller.start(request.idea, request.email)


@router.post("/message", response_model=MessageResponse)
async def message_endpoint(
    request: MessageRequest,
    controller: ConversationController = Depends(get_controller),
) -> MessageResponse:
    """Revise the blueprint with a follow-up message."""
    return await controller.continue_conversation(request.session_id, request.message)


@router.post("/finalize", response_model=FinalizeResponse)
async def finalize_endpoint(
    request: FinalizeRequest,
    controller: ConversationController = Depends(get_controller),
) -> FinalizeResponse:
    """Render the blueprint to PDF and email it."""
    return await controller.finalize(request.session_id)
