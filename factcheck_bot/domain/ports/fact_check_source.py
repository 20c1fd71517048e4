"""Port for external fact-checking sources."""

from typing import Any, Dict, List, Optional, Protocol

from pydantic import BaseModel, Field

from ..models.verification import Verdict


class ClaimReview(BaseModel):
    """A single third-party review of a claim."""

    publisher: Optional[str] = Field(None, description="Name of the reviewing publisher")
    url: Optional[str] = Field(None, description="URL of the review article")
    title: Optional[str] = Field(None, description="Title of the review article")
    review_date: Optional[str] = Field(None, description="When the review was published")
    textual_rating: Optional[str] = Field(None, description="Publisher's free-text rating")
    language_code: Optional[str] = Field(None, description="Language of the review")


class ReviewedClaim(BaseModel):
    """A claim known to the source together with its reviews."""

    claim_text: Optional[str] = None
    claimant: Optional[str] = None
    claim_date: Optional[str] = None
    reviews: List[ClaimReview] = Field(default_factory=list)


class AggregatedResult(BaseModel):
    """All reviews returned for a query, reduced to one overall rating."""

    found: bool = Field(..., description="Whether the source knew any matching claim")
    overall_rating: Optional[Verdict] = Field(None, description="Rating reconciled across reviews")
    claims: List[ReviewedClaim] = Field(default_factory=list)
    total_results: Optional[int] = None

    @property
    def first_review(self) -> Optional[ClaimReview]:
        """First review of the first claim, if any."""
        if self.claims and self.claims[0].reviews:
            return self.claims[0].reviews[0]
        return None

    def evidence_links(self) -> List[str]:
        """Every review URL across all claims, in order, skipping empty ones."""
        return [
            review.url
            for claim in self.claims
            for review in claim.reviews
            if review.url
        ]

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class FactCheckSource(Protocol):
    """Protocol for third-party claim review sources."""

    async def initialize(self) -> None:
        """Prepare clients and resources."""
        ...

    async def shutdown(self) -> None:
        """Release clients and resources."""
        ...

    async def search(self, query: str, language_code: str = "en") -> AggregatedResult:
        """Look up reviews for a claim and aggregate them.

        Raises:
            ConfigurationError: No credential is configured
            RateLimitedError: Upstream is throttling requests
            UnauthorizedError: Upstream rejected the credential
            UpstreamError: Any other transport or parse failure
        """
        ...

    @property
    def provider_name(self) -> str:
        ...

    @property
    def is_available(self) -> bool:
        ...
