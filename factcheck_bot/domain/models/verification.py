"""Domain models for verification records and cached verification results."""

from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from uuid import uuid4

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Verdict(str, Enum):
    """Possible verification outcomes."""

    TRUE = "true"  # Reviewers rate the claim as true/correct/accurate
    FALSE = "false"  # Reviewers rate the claim as false/incorrect
    MISLEADING = "misleading"  # Partly true, mostly false or out of context
    UNVERIFIED = "unverified"  # No usable rating found


class VerificationRecord(BaseModel):
    """Persisted audit record of one verification against the external source."""

    fact_id: str = Field(default_factory=lambda: str(uuid4()), description="Unique record id")
    claim_text: str = Field(..., description="Normalized claim text that was verified")
    verification_status: Verdict = Field(..., description="Resolved verdict")
    explanation: str = Field(..., description="Human-readable explanation of the verdict")
    source_url: Optional[str] = Field(None, description="Primary review URL")
    evidence_links: List[str] = Field(default_factory=list, description="All review URLs, in order")
    language: str = Field(..., description="Language code used for the query")
    raw_response: Dict[str, Any] = Field(default_factory=dict, description="Aggregated upstream payload")
    verified_at: datetime = Field(default_factory=_utcnow, description="When verification completed")

    class Config:
        """Pydantic model configuration."""
        frozen = True  # Records are never mutated after creation


class CachedVerificationResult(BaseModel):
    """Externally visible projection of a verification record.

    This is what the claim verifier returns and what is stored in the
    verification cache.
    """

    fact_id: str
    claim_text: str
    verification_status: Verdict
    explanation: str
    source_url: Optional[str] = None
    evidence_links: List[str] = Field(default_factory=list)
    verified_at: datetime
    found: bool

    class Config:
        """Pydantic model configuration."""
        frozen = True
        json_schema_extra = {
            "example": {
                "fact_id": "1f0c6c2e-4bd4-4f38-9a55-1b0f7f4c2d11",
                "claim_text": "the bridge collapsed yesterday",
                "verification_status": "false",
                "explanation": "According to PolitiFact, this claim is false.",
                "source_url": "https://www.politifact.com/factchecks/example",
                "evidence_links": ["https://www.politifact.com/factchecks/example"],
                "verified_at": "2024-05-01T12:00:00Z",
                "found": True,
            }
        }

    @classmethod
    def from_record(cls, record: VerificationRecord, found: bool) -> "CachedVerificationResult":
        """Project a stored record into its public shape."""
        return cls(
            fact_id=record.fact_id,
            claim_text=record.claim_text,
            verification_status=record.verification_status,
            explanation=record.explanation,
            source_url=record.source_url,
            evidence_links=list(record.evidence_links),
            verified_at=record.verified_at,
            found=found,
        )
