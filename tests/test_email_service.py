"""Tests for blueprint email delivery."""

import base64
import json

import httpx
import pytest

from blueprint_agent.core.config import Settings
from blueprint_agent.core.email_service import (
    BLUEPRINT_BODY_TEXT,
    BLUEPRINT_SUBJECT,
    RESEND_API_URL,
    EmailSender,
)
from blueprint_agent.core.errors import DeliveryError


@pytest.fixture
def settings():
    return Settings(
        GROQ_API_KEY="test-key",
        RESEND_API_KEY="re_test",
        EMAIL_FROM="Blueprints <blueprints@example.com>",
    )


class _Recorder:
    def __init__(self, status_code: int = 200, payload: dict | None = None):
        self.status_code = status_code
        self.payload = payload if payload is not None else {"id": "msg-123"}
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.payload)


class TestSend:
    @pytest.mark.asyncio
    async def test_posts_attachment_to_resend(self, settings):
        recorder = _Recorder()
        sender = EmailSender(settings, transport=httpx.MockTransport(recorder))

        result = await sender.send("a@b.com", b"%PDF-1.4 data")

        assert result == {"message_id": "msg-123", "status": "sent"}
        request = recorder.requests[0]
        assert str(request.url) == RESEND_API_URL
        assert request.headers["Authorization"] == "Bearer re_test"

        body = json.loads(request.content)
        assert body["from"] == "Blueprints <blueprints@example.com>"
        assert body["to"] == ["a@b.com"]
        assert body["subject"] == BLUEPRINT_SUBJECT
        assert body["text"] == BLUEPRINT_BODY_TEXT
        attachment = body["attachments"][0]
        assert attachment["filename"] == "blueprint.pdf"
        assert base64.b64decode(attachment["content"]) == b"%PDF-1.4 data"

    @pytest.mark.asyncio
    async def test_rejected_request_raises_delivery_error(self, settings):
        recorder = _Recorder(status_code=422, payload={"message": "Invalid `to` field"})
        sender = EmailSender(settings, transport=httpx.MockTransport(recorder))

        with pytest.raises(DeliveryError):
            await sender.send("not-an-address", b"pdf")
        assert len(recorder.requests) == 1

    @pytest.mark.asyncio
    async def test_auth_failure_raises_delivery_error(self, settings):
        sender = EmailSender(
            settings, transport=httpx.MockTransport(_Recorder(status_code=401, payload={}))
        )
        with pytest.raises(DeliveryError):
            await sender.send("a@b.com", b"pdf")

    @pytest.mark.asyncio
    async def test_network_failure_raises_delivery_error(self, settings):
        def refuse(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        sender = EmailSender(settings, transport=httpx.MockTransport(refuse))
        with pytest.raises(DeliveryError):
            await sender.send("a@b.com", b"pdf")

    @pytest.mark.asyncio
    async def test_missing_api_key(self, settings):
        settings.RESEND_API_KEY = ""
        with pytest.raises(DeliveryError, match="RESEND_API_KEY not configured"):
            await EmailSender(settings).send("a@b.com", b"pdf")

    @pytest.mark.asyncio
    async def test_missing_sender_address(self, settings):
        settings.EMAIL_FROM = ""
        with pytest.raises(DeliveryError, match="EMAIL_FROM not configured"):
            await EmailSender(settings).send("a@b.com", b"pdf")
