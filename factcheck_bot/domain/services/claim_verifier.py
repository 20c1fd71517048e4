"""Service for verifying claims against an external fact-checking source."""

import logging
from typing import List, Optional

from ..exceptions import InvalidInputError, RecordNotFoundError
from ..models.claim import MAX_CLAIM_LENGTH, cache_key, fingerprint
from ..models.verification import CachedVerificationResult, Verdict, VerificationRecord
from ..ports.fact_check_source import AggregatedResult, FactCheckSource
from ..ports.record_store import FactCheckRepository
from ..ports.verification_cache import VerificationCache

logger = logging.getLogger(__name__)

CACHE_TTL_SECONDS = 86400


def build_explanation(result: AggregatedResult) -> str:
    """Generate the human-readable explanation for an aggregated result."""
    if not result.found:
        return "No fact-check information found for this claim."

    rating = result.overall_rating.value if result.overall_rating else Verdict.UNVERIFIED.value
    first_review = result.first_review
    if first_review:
        return f"According to {first_review.publisher or 'fact-checkers'}, this claim is {rating}."

    return f"Fact-check status: {rating}"


class ClaimVerifier:
    """Cache-aside claim verification.

    Looks the claim up in the verification cache, falls back to the external
    source on a miss, persists an audit record and populates the cache.
    Concurrent misses for the same claim are not deduplicated; each one
    queries the source and stores its own record.
    """

    def __init__(
        self,
        source: FactCheckSource,
        cache: VerificationCache,
        repository: FactCheckRepository,
        cache_ttl: int = CACHE_TTL_SECONDS,
    ):
        """Initialize the verifier.

        Args:
            source: External fact-checking source
            cache: Verification result cache
            repository: Store for verification records
            cache_ttl: Lifetime of cached results in seconds
        """
        self._source = source
        self._cache = cache
        self._repository = repository
        self._cache_ttl = cache_ttl

    async def verify(
        self,
        claim_text: str,
        language_code: str = "en",
        user_id: Optional[str] = None,
    ) -> CachedVerificationResult:
        """Verify a claim.

        Args:
            claim_text: Raw claim text as the user wrote it
            language_code: Language to query the source in
            user_id: Requesting user, for logging only

        Returns:
            The verification result, from cache or freshly computed

        Raises:
            InvalidInputError: If the claim is empty
            UpstreamError: If the external source fails (nothing is stored)
        """
        if not claim_text or not claim_text.strip():
            raise InvalidInputError("Claim text is required")

        normalized = fingerprint(claim_text)
        key = cache_key(normalized)

        cached = await self._cache.get(key)
        if cached is not None:
            logger.info(f"🎯 Fact-check cache hit: {normalized[:50]}")
            return cached

        logger.info(f"🔍 Fact-check cache miss, querying {self._source.provider_name}: {normalized[:50]} (user={user_id})")
        aggregated = await self._source.search(normalized[:MAX_CLAIM_LENGTH], language_code)

        record = await self._create_record(normalized, aggregated, language_code)
        result = CachedVerificationResult.from_record(record, found=aggregated.found)

        await self._cache.set(key, result, self._cache_ttl)
        return result

    async def _create_record(
        self,
        claim_text: str,
        aggregated: AggregatedResult,
        language_code: str,
    ) -> VerificationRecord:
        """Build and persist the audit record for a fresh verification."""
        if aggregated.found and aggregated.overall_rating is not None:
            status = aggregated.overall_rating
        else:
            status = Verdict.UNVERIFIED

        first_review = aggregated.first_review
        record = VerificationRecord(
            claim_text=claim_text,
            verification_status=status,
            explanation=build_explanation(aggregated),
            source_url=first_review.url if first_review else None,
            evidence_links=aggregated.evidence_links(),
            language=language_code,
            raw_response=aggregated.to_payload(),
        )

        stored = await self._repository.create(record)
        logger.info(f"📝 Fact-check record created: {stored.fact_id} ({stored.verification_status.value})")
        return stored

    async def get_by_id(self, fact_id: str) -> VerificationRecord:
        """Fetch a stored record.

        Raises:
            RecordNotFoundError: If no record has this id
        """
        record = await self._repository.get(fact_id)
        if record is None:
            raise RecordNotFoundError("Fact-check not found")
        return record

    async def search(self, query: str, limit: int = 10) -> List[VerificationRecord]:
        """Search stored records by claim text."""
        if not query or not query.strip():
            raise InvalidInputError("Search query is required")
        return await self._repository.search(query, limit)
