"""Dependency wiring for the API layer."""

from functools import lru_cache

from blueprint_agent.core.blueprint_blocks import get_classifier
from blueprint_agent.core.config import get_settings
from blueprint_agent.core.email_service import EmailSender
from blueprint_agent.core.llm import ChatCompletionGateway
from blueprint_agent.core.pdf_renderer import BlueprintRenderer
from blueprint_agent.core.session_store import SessionStore
from blueprint_agent.services.conversation import ConversationController


@lru_cache
def get_session_store() -> SessionStore:
    """Process-wide session store."""
    return SessionStore(ttl_seconds=get_settings().SESSION_TTL_SECONDS)


@lru_cache
def get_controller() -> ConversationController:
    """Build the conversation controller from settings."""
    settings = get_settings()
    return ConversationController(
        store=get_session_store(),
        gateway=ChatCompletionGateway(settings),
        renderer=BlueprintRenderer(
            discount_percent=settings.DISCOUNT_PERCENT,
            classifier=get_classifier(settings.HEADING_STRATEGY),
        ),
        sender=EmailSender(settings),
    )
