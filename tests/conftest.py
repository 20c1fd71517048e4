"""Test configuration and common fixtures."""

from typing import Any, Dict, List, Optional
from unittest.mock import AsyncMock

import pytest

from factcheck_bot.domain.models.verification import Verdict
from factcheck_bot.domain.ports.fact_check_source import (
    AggregatedResult,
    ClaimReview,
    ReviewedClaim,
)
from factcheck_bot.domain.ports.messaging_platform import MessagingPlatform
from factcheck_bot.domain.services.claim_verifier import ClaimVerifier
from factcheck_bot.infrastructure.cache.memory_cache import MemoryVerificationCache
from factcheck_bot.infrastructure.storage.memory_repository import InMemoryFactCheckRepository


class RecordingPlatform(MessagingPlatform):
    """Messaging platform that records what it is asked to send."""

    def __init__(self, name: str = "telegram", fail_sends: bool = False):
        self._name = name
        self._fail_sends = fail_sends
        self.sent: List[Dict[str, Any]] = []
        self.read: List[str] = []
        self.callbacks: List[str] = []

    async def initialize(self) -> None:
        pass

    async def shutdown(self) -> None:
        pass

    async def send_message(
        self,
        chat_id: str,
        text: str,
        options: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        if self._fail_sends:
            raise RuntimeError("delivery failed")
        self.sent.append({"chat_id": chat_id, "text": text, "options": options or {}})
        return {"ok": True}

    async def mark_as_read(self, message_id: str) -> None:
        self.read.append(message_id)

    async def acknowledge_callback(self, callback_id: str, text: str = "") -> None:
        self.callbacks.append(callback_id)

    @property
    def platform_name(self) -> str:
        return self._name

    @property
    def is_available(self) -> bool:
        return True


@pytest.fixture
def found_result() -> AggregatedResult:
    """An aggregated result with two claims and three reviews."""
    return AggregatedResult(
        found=True,
        overall_rating=Verdict.FALSE,
        claims=[
            ReviewedClaim(
                claim_text="The bridge collapsed",
                claimant="Social media",
                reviews=[
                    ClaimReview(
                        publisher="PolitiFact",
                        url="https://politifact.example/bridge",
                        textual_rating="False",
                    ),
                    ClaimReview(publisher="AFP", url="", textual_rating="Misleading"),
                ],
            ),
            ReviewedClaim(
                claim_text="Bridge collapse video",
                reviews=[
                    ClaimReview(
                        publisher="Snopes",
                        url="https://snopes.example/bridge",
                        textual_rating="False",
                    ),
                ],
            ),
        ],
        total_results=2,
    )


@pytest.fixture
def fact_check_source(found_result: AggregatedResult) -> AsyncMock:
    """A fact-check source that always returns ``found_result``."""
    source = AsyncMock()
    source.provider_name = "MockSource"
    source.search.return_value = found_result
    return source


@pytest.fixture
def verification_cache() -> MemoryVerificationCache:
    return MemoryVerificationCache()


@pytest.fixture
def fact_check_repository() -> InMemoryFactCheckRepository:
    return InMemoryFactCheckRepository()


@pytest.fixture
def claim_verifier(fact_check_source, verification_cache, fact_check_repository) -> ClaimVerifier:
    return ClaimVerifier(
        source=fact_check_source,
        cache=verification_cache,
        repository=fact_check_repository,
    )


@pytest.fixture
def platform_factory():
    """Build recording messaging platforms."""
    return RecordingPlatform
