"""In-memory record stores.

Data lives in plain dicts and is lost on restart. These back the record
store ports in development, in tests and in single-process deployments.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from ...domain.models.conversation import ConversationRecord, UserRecord
from ...domain.models.verification import VerificationRecord

logger = logging.getLogger(__name__)

_TERM = re.compile(r"\w+")


def _terms(text: str) -> set:
    return set(_TERM.findall(text.lower()))


class InMemoryFactCheckRepository:
    """Create-only store of verification records."""

    def __init__(self):
        self._records: Dict[str, VerificationRecord] = {}

    async def create(self, record: VerificationRecord) -> VerificationRecord:
        if record.fact_id in self._records:
            raise ValueError(f"Fact-check {record.fact_id} already exists")
        self._records[record.fact_id] = record
        return record

    async def get(self, fact_id: str) -> Optional[VerificationRecord]:
        return self._records.get(fact_id)

    async def search(self, query: str, limit: int = 10) -> List[VerificationRecord]:
        """Rank records by the share of query terms found in the claim text."""
        query_terms = _terms(query)
        if not query_terms:
            return []

        scored: List[Tuple[float, VerificationRecord]] = []
        for record in self._records.values():
            matches = len(query_terms & _terms(record.claim_text))
            if matches:
                scored.append((matches / len(query_terms), record))

        scored.sort(key=lambda item: (item[0], item[1].verified_at), reverse=True)
        return [record for _, record in scored[:limit]]

    def __len__(self) -> int:
        return len(self._records)


class InMemoryConversationRepository:
    """Store of conversation records."""

    def __init__(self):
        self._conversations: Dict[str, ConversationRecord] = {}

    async def save(self, conversation: ConversationRecord) -> ConversationRecord:
        self._conversations[conversation.conversation_id] = conversation
        return conversation

    async def list_for_user(self, user_id: str, limit: int = 20) -> List[ConversationRecord]:
        conversations = [c for c in self._conversations.values() if c.user_id == user_id]
        conversations.sort(key=lambda c: c.created_at, reverse=True)
        return conversations[:limit]

    def __len__(self) -> int:
        return len(self._conversations)


class InMemoryUserRepository:
    """Store of platform users, unique per (platform, platform user id)."""

    def __init__(self):
        self._users: Dict[Tuple[str, str], UserRecord] = {}

    async def find_or_create(
        self,
        platform: str,
        platform_user_id: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> UserRecord:
        key = (platform, platform_user_id)
        user = self._users.get(key)
        if user is not None:
            user.last_active = datetime.now(timezone.utc)
            return user

        user = UserRecord(
            platform=platform,
            platform_user_id=platform_user_id,
            metadata=metadata or {},
        )
        self._users[key] = user
        logger.info(f"👤 Created {platform} user {user.user_id}")
        return user

    def __len__(self) -> int:
        return len(self._users)
