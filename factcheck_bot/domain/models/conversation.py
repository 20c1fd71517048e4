"""Domain models for users, conversations and routed replies."""

from datetime import datetime, timezone
from typing import Any, Dict, Optional
from uuid import uuid4

from pydantic import BaseModel, Field, field_validator

from .intent import Intent


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class UserRecord(BaseModel):
    """A chat user on a specific messaging platform."""

    user_id: str = Field(default_factory=lambda: str(uuid4()))
    platform: str
    platform_user_id: str
    preferred_language: str = "en"
    anonymous_mode: bool = False
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow)
    last_active: datetime = Field(default_factory=_utcnow)


class ConversationRecord(BaseModel):
    """One inbound message, its intent label and the reply that was sent."""

    conversation_id: str = Field(default_factory=lambda: str(uuid4()))
    user_id: str
    platform: str
    message_content: str
    intent_type: Intent = Intent.UNKNOWN
    response_content: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)
    created_at: datetime = Field(default_factory=_utcnow)


class InboundMessage(BaseModel):
    """Platform-neutral view of a message received through a webhook."""

    platform: str
    platform_user_id: str
    chat_id: str
    text: Optional[str] = None
    message_id: Optional[str] = None
    user_profile: Dict[str, Any] = Field(default_factory=dict)
    raw: Dict[str, Any] = Field(default_factory=dict)


class RoutedReply(BaseModel):
    """Reply produced by the message router.

    ``options`` is handed to the platform adapter untouched; ``parse_mode``
    tells it how the text is marked up.
    """

    text: str
    options: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("text")
    @classmethod
    def text_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Reply text cannot be empty")
        return value

    @property
    def parse_mode(self) -> Optional[str]:
        return self.options.get("parse_mode")
