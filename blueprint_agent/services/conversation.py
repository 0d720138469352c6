"""Blueprint conversation lifecycle: start, continue, finalize.

The controller owns no state of its own. Sessions live in the injected
``SessionStore``; text generation, PDF rendering and email delivery are
delegated to narrow collaborators so each can be swapped in tests.
"""

import asyncio
import logging
from typing import Any, Protocol

from blueprint_agent.core.errors import DeliveryError, GenerationError, ValidationError
from blueprint_agent.core.llm import CompletionGateway
from blueprint_agent.core.logging import get_logger, log_with_context
from blueprint_agent.core.schemas_blueprint import (
    ChatMessage,
    FinalizeResponse,
    MessageResponse,
    StartResponse,
)
from blueprint_agent.core.session_store import SessionStore
from blueprint_agent.core.text_normalizer import normalize

logger = get_logger(__name__)

SYSTEM_PROMPT = (
    "You are a professional web design consultant generating detailed website blueprints."
)
START_PROMPT_TEMPLATE = 'Create a detailed website blueprint for this idea: "{idea}".'
FINALIZED_MESSAGE = "Blueprint finalized and emailed!"


class DocumentRenderer(Protocol):
    def render(self, blueprint_text: str) -> bytes: ...


class NotificationSender(Protocol):
    async def send(self, recipient: str, artifact: bytes) -> Any: ...


def build_initial_history(idea: str) -> list[ChatMessage]:
    """System instruction followed by the idea prompt."""
    return [
        ChatMessage(role="system", content=SYSTEM_PROMPT),
        ChatMessage(role="user", content=START_PROMPT_TEMPLATE.format(idea=idea)),
    ]


class ConversationController:
    """Orchestrates a blueprint negotiation against the session store."""

    def __init__(
        self,
        store: SessionStore,
        gateway: CompletionGateway,
        renderer: DocumentRenderer,
        sender: NotificationSender,
    ):
        self.store = store
        self.gateway = gateway
        self.renderer = renderer
        self.sender = sender

    async def start(self, idea: str | None, email: str | None) -> StartResponse:
        """
        Generate a first blueprint and open a session for it.

        No session is created when generation fails.

        Raises:
            ValidationError: If idea or email is missing
            GenerationError: If the completion endpoint returned nothing usable
        """
        idea = (idea or "").strip()
        email = (email or "").strip()
        if not idea or not email:
            raise ValidationError("Idea and email required")
        if "@" not in email:
            raise ValidationError("A valid email address is required")

        history = build_initial_history(idea)
        blueprint = await self._generate(history)

        history.append(ChatMessage(role="assistant", content=blueprint))
        session_id = self.store.create(idea, email, history=history, blueprint=blueprint)

        log_with_context(
            logger, logging.INFO, "Started blueprint session", session_id=session_id
        )
        return StartResponse(session_id=session_id, blueprint=blueprint)

    async def continue_conversation(
        self, session_id: str | None, message: str | None
    ) -> MessageResponse:
        """
        Send a revision request with the whole accumulated history.

        The user message stays in history even when generation fails.

        Raises:
            NotFoundError: If the session is unknown
            ValidationError: If the message is empty
            GenerationError: If the completion endpoint returned nothing usable
        """
        async with self.store.locked(session_id) as session:
            message = (message or "").strip()
            if not message:
                raise ValidationError("Message required")

            session.append("user", message)
            reply = await self._generate(list(session.conversation_history))

            session.append("assistant", reply)
            session.current_blueprint = reply

            log_with_context(
                logger,
                logging.INFO,
                "Revised blueprint",
                session_id=session.id,
                history_length=len(session.conversation_history),
            )
            return MessageResponse(reply=reply, blueprint=reply)

    async def finalize(self, session_id: str | None) -> FinalizeResponse:
        """
        Render the current blueprint to PDF and email it to the requester.

        The session is removed once delivery succeeds; after a failure it is
        kept so the client can retry.

        Raises:
            NotFoundError: If the session is unknown
            ValidationError: If the session has no blueprint text
            DeliveryError: If rendering or delivery fails
        """
        async with self.store.locked(session_id) as session:
            blueprint = session.current_blueprint
            if not blueprint or not blueprint.strip():
                raise ValidationError("Session has no blueprint to finalize")

            try:
                artifact = await asyncio.to_thread(self.renderer.render, blueprint)
            except Exception as e:
                logger.exception(f"Failed to render blueprint for session {session.id}")
                raise DeliveryError("Failed to render blueprint") from e

            try:
                await self.sender.send(session.requester_email, artifact)
            except DeliveryError:
                raise
            except Exception as e:
                logger.exception(f"Failed to send blueprint for session {session.id}")
                raise DeliveryError("Failed to send blueprint email") from e

            self.store.remove(session.id)

        log_with_context(
            logger,
            logging.INFO,
            "Finalized blueprint session",
            session_id=session.id,
            pdf_bytes=len(artifact),
        )
        return FinalizeResponse(message=FINALIZED_MESSAGE)

    async def _generate(self, history: list[ChatMessage]) -> str:
        reply = await self.gateway.complete(history)
        text = normalize(reply)
        if not text:
            raise GenerationError()
        return text
