"""Port for outbound messaging platforms."""

from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class MessagingPlatform(ABC):
    """Abstract interface for chat platforms that deliver bot replies.

    Concrete implementations live in the infrastructure layer (Telegram,
    WhatsApp).
    """

    @abstractmethod
    async def initialize(self) -> None:
        """Initialize the platform client."""
        pass

    @abstractmethod
    async def shutdown(self) -> None:
        """Close the platform client."""
        pass

    @abstractmethod
    async def send_message(
        self,
        chat_id: str,
        text: str,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Deliver a text message.

        Args:
            chat_id: Platform chat / recipient identifier
            text: Message body
            options: Formatting options (``parse_mode`` etc.)

        Returns:
            Platform response payload

        Raises:
            UpstreamError: If delivery fails
        """
        pass

    @abstractmethod
    async def mark_as_read(self, message_id: str) -> None:
        """Acknowledge a received message. Never raises."""
        pass

    @property
    @abstractmethod
    def platform_name(self) -> str:
        """Platform identifier (``telegram``, ``whatsapp``)."""
        pass

    @property
    @abstractmethod
    def is_available(self) -> bool:
        """Whether the client is initialized and usable."""
        pass

    async def acknowledge_callback(self, callback_id: str, text: str = "") -> None:
        """Acknowledge an interactive callback (button press).

        Platforms without callbacks ignore it.
        """
        return None
