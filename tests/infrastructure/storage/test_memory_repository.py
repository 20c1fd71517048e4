"""Tests for the in-memory record stores."""

from datetime import datetime, timedelta, timezone

import pytest

from factcheck_bot.domain.models.conversation import ConversationRecord
from factcheck_bot.domain.models.intent import Intent
from factcheck_bot.domain.models.verification import Verdict, VerificationRecord
from factcheck_bot.infrastructure.storage.memory_repository import (
    InMemoryConversationRepository,
    InMemoryFactCheckRepository,
    InMemoryUserRepository,
)

BASE_TIME = datetime(2024, 5, 1, tzinfo=timezone.utc)


def make_record(claim_text: str, minutes: int = 0, **overrides) -> VerificationRecord:
    values = dict(
        claim_text=claim_text,
        verification_status=Verdict.UNVERIFIED,
        explanation="No fact-checks found for this claim.",
        language="en",
        verified_at=BASE_TIME + timedelta(minutes=minutes),
    )
    values.update(overrides)
    return VerificationRecord(**values)


@pytest.mark.asyncio
async def test_fact_check_create_and_get():
    repository = InMemoryFactCheckRepository()
    record = make_record("the bridge collapsed")

    assert await repository.create(record) is record
    assert await repository.get(record.fact_id) == record
    assert await repository.get("missing") is None


@pytest.mark.asyncio
async def test_fact_check_create_rejects_duplicate_id():
    repository = InMemoryFactCheckRepository()
    record = make_record("the bridge collapsed")
    await repository.create(record)

    with pytest.raises(ValueError):
        await repository.create(record)
    assert len(repository) == 1


@pytest.mark.asyncio
async def test_fact_check_search_ranks_by_matched_terms():
    repository = InMemoryFactCheckRepository()
    partial = await repository.create(make_record("the bridge is new", minutes=5))
    full = await repository.create(make_record("the bridge collapsed yesterday", minutes=0))
    await repository.create(make_record("vaccines cause autism"))

    results = await repository.search("Bridge collapsed")

    assert [r.fact_id for r in results] == [full.fact_id, partial.fact_id]


@pytest.mark.asyncio
async def test_fact_check_search_ties_newest_first_and_limit():
    repository = InMemoryFactCheckRepository()
    older = await repository.create(make_record("bridge one", minutes=1))
    newer = await repository.create(make_record("bridge two", minutes=2))

    results = await repository.search("bridge")
    assert [r.fact_id for r in results] == [newer.fact_id, older.fact_id]

    assert len(await repository.search("bridge", limit=1)) == 1


@pytest.mark.asyncio
async def test_fact_check_search_without_terms_is_empty():
    repository = InMemoryFactCheckRepository()
    await repository.create(make_record("bridge"))

    assert await repository.search("?!") == []


@pytest.mark.asyncio
async def test_conversations_listed_newest_first():
    repository = InMemoryConversationRepository()
    for minutes, text in enumerate(["hi", "sos", "is it true"]):
        await repository.save(ConversationRecord(
            user_id="u-1",
            platform="telegram",
            message_content=text,
            intent_type=Intent.UNKNOWN,
            created_at=BASE_TIME + timedelta(minutes=minutes),
        ))
    await repository.save(ConversationRecord(user_id="u-2", platform="telegram", message_content="other"))

    conversations = await repository.list_for_user("u-1")

    assert [c.message_content for c in conversations] == ["is it true", "sos", "hi"]
    assert len(await repository.list_for_user("u-1", limit=2)) == 2
    assert len(repository) == 4


@pytest.mark.asyncio
async def test_find_or_create_user_is_unique_per_platform():
    repository = InMemoryUserRepository()

    first = await repository.find_or_create("telegram", "42", {"username": "ama"})
    again = await repository.find_or_create("telegram", "42")
    other_platform = await repository.find_or_create("whatsapp", "42")

    assert again.user_id == first.user_id
    assert again.metadata == {"username": "ama"}
    assert again.last_active >= first.created_at
    assert other_platform.user_id != first.user_id
    assert other_platform.metadata == {}
    assert len(repository) == 2
