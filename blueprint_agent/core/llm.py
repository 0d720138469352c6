"""Completion gateway for the OpenAI-compatible chat endpoint."""

from collections.abc import Sequence
from typing import Protocol

from openai import AsyncOpenAI

from blueprint_agent.core.config import Settings, get_settings
from blueprint_agent.core.logging import get_logger
from blueprint_agent.core.schemas_blueprint import ChatMessage
from blueprint_agent.core.text_normalizer import normalize

logger = get_logger(__name__)


class CompletionGateway(Protocol):
    """Anything that maps a message history to generated text."""

    async def complete(self, history: Sequence[ChatMessage]) -> str | None: ...


class ChatCompletionGateway:
    """
    Wraps a single chat-completion call.

    Failures never escape: a non-success response, a network error or a
    missing content field all produce ``None``.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: AsyncOpenAI | None = None,
    ):
        self.settings = settings or get_settings()
        self.client = client or AsyncOpenAI(
            api_key=self.settings.GROQ_API_KEY,
            base_url=self.settings.COMPLETION_BASE_URL,
            timeout=self.settings.COMPLETION_TIMEOUT_SECONDS,
            max_retries=0,
        )

    async def complete(self, history: Sequence[ChatMessage]) -> str | None:
        """
        Send the full history to the completion endpoint.

        Args:
            history: Ordered role-tagged messages

        Returns:
            Normalized reply text, or None if no usable content came back
        """
        model = self.settings.COMPLETION_MODEL
        logger.info(f"Calling {model} with {len(history)} messages")

        try:
            response = await self.client.chat.completions.create(
                model=model,
                messages=[m.model_dump() for m in history],
                max_tokens=self.settings.COMPLETION_MAX_TOKENS,
                temperature=self.settings.COMPLETION_TEMPERATURE,
            )
        except Exception as e:
            logger.warning(f"Completion call to {model} failed: {e}")
            return None

        try:
            raw_output = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError):
            raw_output = None

        if not raw_output:
            logger.warning(f"Completion from {model} returned no content")
            return None

        reply = normalize(raw_output)
        return reply or None
