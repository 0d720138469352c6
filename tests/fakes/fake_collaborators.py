"""In-memory fakes for the conversation controller's collaborators."""

from collections.abc import Sequence

from blueprint_agent.core.errors import DeliveryError
from blueprint_agent.core.schemas_blueprint import ChatMessage


class FakeGateway:
    """Returns queued replies and records every history it was called with."""

    def __init__(self, replies: list[str | None] | None = None):
        self.replies = list(replies or [])
        self.calls: list[list[ChatMessage]] = []

    async def complete(self, history: Sequence[ChatMessage]) -> str | None:
        self.calls.append([m.model_copy() for m in history])
        if not self.replies:
            return None
        return self.replies.pop(0)


class FakeRenderer:
    """Returns fixed bytes, or raises when ``fail`` is set."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.calls: list[str] = []

    def render(self, blueprint_text: str) -> bytes:
        self.calls.append(blueprint_text)
        if self.fail:
            raise RuntimeError("layout failed")
        return b"%PDF-1.4 fake"


class FakeSender:
    """Records deliveries, or raises the configured error."""

    def __init__(self, error: Exception | None = None):
        self.error = error
        self.sent: list[tuple[str, bytes]] = []

    async def send(self, recipient: str, artifact: bytes) -> dict:
        if self.error is not None:
            raise self.error
        self.sent.append((recipient, artifact))
        return {"message_id": "msg-1", "status": "sent"}


def failing_sender() -> FakeSender:
    return FakeSender(error=DeliveryError("Failed to send blueprint email"))
