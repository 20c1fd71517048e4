"""Ports for persistent record stores."""

from typing import Any, Dict, List, Optional, Protocol

from ..models.conversation import ConversationRecord, UserRecord
from ..models.verification import VerificationRecord


class FactCheckRepository(Protocol):
    """Create-only store of verification records, with lookup and search."""

    async def create(self, record: VerificationRecord) -> VerificationRecord:
        ...

    async def get(self, fact_id: str) -> Optional[VerificationRecord]:
        ...

    async def search(self, query: str, limit: int = 10) -> List[VerificationRecord]:
        """Text search over claim texts, best match first."""
        ...


class ConversationRepository(Protocol):
    """Store of conversation records."""

    async def save(self, conversation: ConversationRecord) -> ConversationRecord:
        ...

    async def list_for_user(self, user_id: str, limit: int = 20) -> List[ConversationRecord]:
        """Newest first."""
        ...


class UserRepository(Protocol):
    """Store of platform users."""

    async def find_or_create(
        self,
        platform: str,
        platform_user_id: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> UserRecord:
        """Return the existing user (refreshing last activity) or create one."""
        ...
