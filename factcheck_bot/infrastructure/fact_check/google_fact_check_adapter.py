"""Google Fact Check Tools implementation of the fact-check source port."""

import logging
from typing import Any, Dict, List, Optional

import httpx
from pydantic import BaseModel, Field

from ...domain.exceptions import (
    ConfigurationError,
    RateLimitedError,
    UnauthorizedError,
    UpstreamError,
    UpstreamTimeoutError,
)
from ...domain.models.claim import MAX_CLAIM_LENGTH
from ...domain.models.verification import Verdict
from ...domain.ports.fact_check_source import (
    AggregatedResult,
    ClaimReview,
    FactCheckSource,
    ReviewedClaim,
)

logger = logging.getLogger(__name__)

# Evaluated in this order. "misleading" appears in both of the first two
# lists, so a "Misleading" rating resolves to false.
FALSE_KEYWORDS = ("false", "incorrect", "misleading", "pants on fire")
MISLEADING_KEYWORDS = ("misleading", "mostly false", "half true")
TRUE_KEYWORDS = ("true", "correct", "accurate")


class GoogleFactCheckConfig(BaseModel):
    """Configuration for the Google Fact Check adapter."""

    api_key: str = ""
    base_url: str = "https://factchecktools.googleapis.com/v1alpha1"
    timeout: float = Field(default=10.0, description="Request timeout in seconds")
    page_size: int = Field(default=10, description="Number of claims requested per query")


def determine_overall_rating(ratings: List[str]) -> Verdict:
    """Reconcile free-text ratings from several reviewers into one verdict.

    Args:
        ratings: Textual ratings, in any case

    Returns:
        The first verdict whose keywords match any rating, in the order
        false, misleading, true; unverified when nothing matches
    """
    if not ratings:
        return Verdict.UNVERIFIED

    lower_ratings = [rating.lower() for rating in ratings]

    if any(keyword in rating for rating in lower_ratings for keyword in FALSE_KEYWORDS):
        return Verdict.FALSE
    if any(keyword in rating for rating in lower_ratings for keyword in MISLEADING_KEYWORDS):
        return Verdict.MISLEADING
    if any(keyword in rating for rating in lower_ratings for keyword in TRUE_KEYWORDS):
        return Verdict.TRUE

    return Verdict.UNVERIFIED


def format_response(data: Dict[str, Any]) -> AggregatedResult:
    """Convert a ``claims:search`` payload into an aggregated result."""
    raw_claims = data.get("claims") or []
    if not raw_claims:
        return AggregatedResult(found=False, claims=[])

    claims = [
        ReviewedClaim(
            claim_text=claim.get("text"),
            claimant=claim.get("claimant"),
            claim_date=claim.get("claimDate"),
            reviews=[
                ClaimReview(
                    publisher=(review.get("publisher") or {}).get("name"),
                    url=review.get("url"),
                    title=review.get("title"),
                    review_date=review.get("reviewDate"),
                    textual_rating=review.get("textualRating"),
                    language_code=review.get("languageCode"),
                )
                for review in claim.get("claimReview") or []
            ],
        )
        for claim in raw_claims
    ]

    ratings = [
        (review.textual_rating or "").lower()
        for claim in claims
        for review in claim.reviews
    ]

    return AggregatedResult(
        found=True,
        overall_rating=determine_overall_rating(ratings),
        claims=claims,
        total_results=len(raw_claims),
    )


class GoogleFactCheckAdapter(FactCheckSource):
    """Fact-check source backed by the Google Fact Check Tools API.

    No retries are attempted; failures are classified and raised so the
    caller can decide what to do.
    """

    def __init__(
        self,
        config: Optional[GoogleFactCheckConfig] = None,
        client: Optional[httpx.AsyncClient] = None,
        provider_name: str = "GoogleFactCheck",
    ):
        """Initialize the adapter.

        Args:
            config: Adapter configuration
            client: Pre-built HTTP client (tests inject one with a mock transport)
            provider_name: Name of the provider
        """
        self._config = config or GoogleFactCheckConfig()
        self._client = client
        self._name = provider_name

    async def initialize(self) -> None:
        """Create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._config.base_url,
                timeout=self._config.timeout,
                headers={"Accept": "application/json"},
            )
        if not self._config.api_key:
            logger.warning("⚠️ Google Fact Check API key not configured - fact-checks will fail")

    async def shutdown(self) -> None:
        """Close the HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def search(self, query: str, language_code: str = "en") -> AggregatedResult:
        """Search reviewed claims matching the query and aggregate their ratings."""
        if not self._config.api_key:
            raise ConfigurationError("Google Fact Check API key not configured")

        if self._client is None:
            await self.initialize()

        params = {
            "key": self._config.api_key,
            "query": query[:MAX_CLAIM_LENGTH],
            "languageCode": language_code,
            "pageSize": self._config.page_size,
        }

        logger.info(f"🌐 Google Fact Check API request: query={query[:100]!r} language={language_code}")

        try:
            response = await self._client.get("/claims:search", params=params)
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"❌ Google Fact Check API error: status={status} body={e.response.text[:500]}")
            if status == 429:
                raise RateLimitedError("Rate limit exceeded. Please try again later.", status) from e
            if status == 403:
                raise UnauthorizedError("API key invalid or quota exceeded", status) from e
            raise UpstreamError(f"Fact-check API error: {e}", status) from e
        except httpx.TimeoutException as e:
            logger.error(f"⏱️ Google Fact Check API timed out after {self._config.timeout}s")
            raise UpstreamTimeoutError(f"Fact-check API timed out after {self._config.timeout}s") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"❌ Google Fact Check API error: {type(e).__name__}: {e}")
            raise UpstreamError(f"Fact-check API error: {e}") from e

        try:
            result = format_response(data)
        except (AttributeError, TypeError, ValueError) as e:
            logger.error(f"❌ Malformed Google Fact Check API response: {e}")
            raise UpstreamError(f"Malformed fact-check API response: {e}", response.status_code) from e

        logger.info(f"📚 Google Fact Check API response: status={response.status_code} results={len(result.claims)}")
        return result

    @property
    def provider_name(self) -> str:
        return self._name

    @property
    def is_available(self) -> bool:
        return bool(self._config.api_key) and self._client is not None
