"""Pydantic schemas for the blueprint conversation endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["system", "user", "assistant"]


class ChatMessage(BaseModel):
    """A single role-tagged entry in a conversation history."""

    role: Role = Field(..., description="Message author role")
    content: str = Field(..., description="Message text")


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# === Requests ===
# Fields are optional so that missing values surface as domain errors (400)


class StartRequest(_CamelModel):
    """Body for POST /agent/start."""

    idea: str | None = Field(None, description="Website idea to turn into a blueprint")
    email: str | None = Field(None, description="Address the final PDF is sent to")


class MessageRequest(_CamelModel):
    """Body for POST /agent/message."""

    session_id: str | None = Field(None, alias="sessionId", description="Session identifier")
    message: str | None = Field(None, description="Revision request from the user")


class FinalizeRequest(_CamelModel):
    """Body for POST /agent/finalize."""

    session_id: str | None = Field(None, alias="sessionId", description="Session identifier")


# === Responses ===


class StartResponse(_CamelModel):
    """Response for POST /agent/start."""

    session_id: str = Field(..., alias="sessionId", description="New session identifier")
    blueprint: str = Field(..., description="Initial blueprint text")


class MessageResponse(_CamelModel):
    """Response for POST /agent/message."""

    reply: str = Field(..., description="Assistant reply")
    blueprint: str = Field(..., description="Current blueprint text")


class FinalizeResponse(_CamelModel):
    """Response for POST /agent/finalize."""

    message: str = Field(..., description="Confirmation message")
