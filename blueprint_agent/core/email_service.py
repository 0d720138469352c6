"""Outbound email delivery of finished blueprints via the Resend API."""

import base64
from typing import Any

import httpx

from blueprint_agent.core.config import Settings, get_settings
from blueprint_agent.core.errors import DeliveryError
from blueprint_agent.core.logging import get_logger

logger = get_logger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"

BLUEPRINT_SUBJECT = "Your Website Blueprint"
BLUEPRINT_BODY_TEXT = "Attached is your generated website blueprint."
BLUEPRINT_FILENAME = "blueprint.pdf"


class EmailSender:
    """
    Delivers a binary attachment to one recipient.

    Any transport failure raises ``DeliveryError`` immediately; there is no
    internal retry.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings or get_settings()
        self._transport = transport

    async def send(
        self,
        recipient: str,
        artifact: bytes,
        subject: str = BLUEPRINT_SUBJECT,
        body_text: str = BLUEPRINT_BODY_TEXT,
        filename: str = BLUEPRINT_FILENAME,
    ) -> dict[str, Any]:
        """
        Send ``artifact`` as an attachment.

        Args:
            recipient: Destination address
            artifact: Attachment bytes
            subject: Email subject
            body_text: Plain text body
            filename: Attachment filename

        Returns:
            Dict with message_id and status

        Raises:
            DeliveryError: If credentials are missing or the transport fails
        """
        settings = self.settings
        if not settings.RESEND_API_KEY:
            raise DeliveryError("RESEND_API_KEY not configured")
        if not settings.EMAIL_FROM:
            raise DeliveryError("EMAIL_FROM not configured")

        payload: dict[str, Any] = {
            "from": settings.EMAIL_FROM,
            "to": [recipient],
            "subject": subject,
            "text": body_text,
            "attachments": [
                {
                    "filename": filename,
                    "content": base64.b64encode(artifact).decode("ascii"),
                }
            ],
        }

        try:
            async with httpx.AsyncClient(
                timeout=settings.EMAIL_TIMEOUT_SECONDS, transport=self._transport
            ) as client:
                response = await client.post(
                    RESEND_API_URL,
                    headers={
                        "Authorization": f"Bearer {settings.RESEND_API_KEY}",
                        "Content-Type": "application/json",
                    },
                    json=payload,
                )
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as e:
            logger.error(
                f"Resend rejected email, status={e.response.status_code} body={e.response.text}"
            )
            raise DeliveryError("Failed to send blueprint email") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Resend email failed: {e}")
            raise DeliveryError("Failed to send blueprint email") from e

        message_id = data.get("id", "") if isinstance(data, dict) else ""
        logger.info(
            f"Resend email sent, subject='{subject}', "
            f"attachment_bytes={len(artifact)}, message_id={message_id}"
        )
        return {"message_id": message_id, "status": "sent"}
