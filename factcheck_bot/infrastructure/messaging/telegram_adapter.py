"""Telegram Bot API implementation of the messaging platform port."""

import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel

from ...domain.exceptions import UpstreamError
from ...domain.ports.messaging_platform import MessagingPlatform

logger = logging.getLogger(__name__)


class TelegramConfig(BaseModel):
    """Configuration for the Telegram adapter."""

    bot_token: str = ""
    api_url: str = "https://api.telegram.org/bot"
    timeout: float = 10.0


class TelegramAdapter(MessagingPlatform):
    """Sends replies through the Telegram Bot API."""

    def __init__(
        self,
        config: Optional[TelegramConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self._config = config or TelegramConfig()
        self._client = client

    async def initialize(self) -> None:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=f"{self._config.api_url}{self._config.bot_token}",
                timeout=self._config.timeout,
            )
        if not self._config.bot_token:
            logger.warning("⚠️ TELEGRAM_BOT_TOKEN not configured - Telegram replies will fail")

    async def shutdown(self) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def _post(self, method: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        if self._client is None:
            await self.initialize()
        try:
            response = await self._client.post(f"/{method}", json=payload)
            response.raise_for_status()
            return response.json()
        except httpx.HTTPStatusError as e:
            logger.error(f"❌ Telegram {method} error: status={e.response.status_code} body={e.response.text[:500]}")
            raise UpstreamError(f"Telegram {method} failed: {e}", e.response.status_code) from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"❌ Telegram {method} error: {e}")
            raise UpstreamError(f"Telegram {method} failed: {e}") from e

    async def send_message(
        self,
        chat_id: str,
        text: str,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        options = dict(options or {})
        payload: Dict[str, Any] = {
            "chat_id": chat_id,
            "text": text,
            "parse_mode": options.pop("parse_mode", None) or "HTML",
        }
        payload.update(options)
        return await self._post("sendMessage", payload)

    async def send_message_with_keyboard(self, chat_id: str, text: str, buttons: list) -> Dict[str, Any]:
        """Send a message with an inline keyboard.

        ``buttons`` is a list of rows, each a list of ``{"text", "callback_data"}`` dicts.
        """
        keyboard = {
            "inline_keyboard": [
                [{"text": button["text"], "callback_data": button["callback_data"]} for button in row]
                for row in buttons
            ]
        }
        return await self.send_message(chat_id, text, {"reply_markup": keyboard})

    async def acknowledge_callback(self, callback_id: str, text: str = "") -> None:
        await self._post(
            "answerCallbackQuery",
            {"callback_query_id": callback_id, "text": text, "show_alert": False},
        )

    async def mark_as_read(self, message_id: str) -> None:
        # Telegram bots have no read receipts.
        return None

    async def set_webhook(self, url: str) -> Dict[str, Any]:
        return await self._post("setWebhook", {"url": url})

    @property
    def platform_name(self) -> str:
        return "telegram"

    @property
    def is_available(self) -> bool:
        return bool(self._config.bot_token) and self._client is not None
