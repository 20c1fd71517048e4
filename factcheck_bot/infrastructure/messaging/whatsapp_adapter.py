"""WhatsApp Cloud API implementation of the messaging platform port."""

import logging
import re
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from ...domain.exceptions import UpstreamError
from ...domain.ports.messaging_platform import MessagingPlatform

logger = logging.getLogger(__name__)

_HTML_TAG = re.compile(r"<[^>]+>")


class WhatsAppConfig(BaseModel):
    """Configuration for the WhatsApp adapter."""

    api_token: str = ""
    api_url: str = "https://graph.facebook.com/v18.0"
    phone_number_id: str = ""
    verify_token: str = ""
    timeout: float = 10.0


class WhatsAppAdapter(MessagingPlatform):
    """Sends replies through the WhatsApp Cloud API.

    WhatsApp has no HTML rendering, so HTML replies are sent with their tags
    stripped.
    """

    def __init__(
        self,
        config: Optional[WhatsAppConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._config = config or WhatsAppConfig()
        self._client = client

    async def initialize(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.api_url,
                timeout=self._config.timeout,
                headers={
                    "Authorization": f"Bearer {self._config.api_token}",
                    "Content-Type": "application/json",
                },
            )
        if not self._config.api_token or not self._config.phone_number_id:
            logger.warning("⚠️ WhatsApp credentials not configured - WhatsApp replies will fail")

    async def shutdown(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _post_message(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        if self._client is None:
            await self.initialize()
        response = await self._client.post(f"/{self._config.phone_number_id}/messages", json=payload)
        response.raise_for_status()
        return response.json()

    async def send_message(
        self,
        chat_id: str,
        text: str,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        if (options or {}).get("parse_mode") == "HTML":
            text = _HTML_TAG.sub("", text)

        payload = {
            "messaging_product": "whatsapp",
            "to": chat_id,
            "type": "text",
            "text": {"body": text},
        }
        try:
            return await self._post_message(payload)
        except httpx.HTTPStatusError as e:
            logger.error(f"❌ WhatsApp send message error: status={e.response.status_code} body={e.response.text[:500]}")
            raise UpstreamError(f"Failed to send WhatsApp message: {e}", e.response.status_code) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"❌ WhatsApp send message error: {e}")
            raise UpstreamError(f"Failed to send WhatsApp message: {e}") from e

    async def mark_as_read(self, message_id: str) -> None:
        payload = {
            "messaging_product": "whatsapp",
            "status": "read",
            "message_id": message_id,
        }
        try:
            await self._post_message(payload)
        except (httpx.HTTPError, ValueError) as e:
            logger.warning(f"⚠️ WhatsApp mark as read error: {e}")

    def verify_webhook(self, mode: Optional[str], token: Optional[str], challenge: Optional[str]) -> Optional[str]:
        """Return the challenge when the subscription request is genuine."""
        if mode == "subscribe" and self._config.verify_token and token == self._config.verify_token:
            return challenge
        return None

    @property
    def platform_name(self) -> str:
        return "whatsapp"

    @property
    def is_available(self) -> bool:
        return bool(self._config.api_token) and self._client is not None
