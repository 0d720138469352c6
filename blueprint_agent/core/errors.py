"""Typed errors raised by the blueprint conversation flow.

Each error carries a stable ``code`` for clients and the HTTP status the
API layer reports it with.
"""

from typing import Any


class BlueprintError(Exception):
    """Base error for the blueprint service."""

    code = "internal.error"
    status_code = 500
    default_message = "Server error"

    def __init__(self, message: str | None = None, *, code: str | None = None) -> None:
        self.message = message or self.default_message
        if code:
            self.code = code
        super().__init__(self.message)

    def to_public_dict(self) -> dict[str, Any]:
        return {"error": self.message, "code": self.code}


class ValidationError(BlueprintError):
    """Missing or malformed caller input."""

    code = "request.invalid"
    status_code = 400
    default_message = "Invalid request"


class NotFoundError(BlueprintError):
    """Unknown, expired or already finalized session id."""

    code = "session.not_found"
    status_code = 400
    default_message = "Invalid session"


class GenerationError(BlueprintError):
    """The completion endpoint failed or returned no content."""

    code = "generation.failed"
    status_code = 500
    default_message = "AI generation failed"


class DeliveryError(BlueprintError):
    """Rendering or mail delivery failed during finalize."""

    code = "delivery.failed"
    status_code = 500
    default_message = "Blueprint delivery failed"
