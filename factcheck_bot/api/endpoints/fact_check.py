"""Fact-checking API endpoints."""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field, field_validator

from ...domain.exceptions import (
    ConfigurationError,
    FactCheckBotError,
    InvalidInputError,
    RateLimitedError,
    RecordNotFoundError,
    UnauthorizedError,
    UpstreamError,
    UpstreamTimeoutError,
)
from ...domain.models.verification import CachedVerificationResult, VerificationRecord
from ...domain.services.claim_verifier import ClaimVerifier
from ...infrastructure.dependencies import get_claim_verifier

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/fact-check", tags=["fact-check"])


class FactCheckRequest(BaseModel):
    """Request model for claim verification."""

    claim_text: str = Field(..., min_length=3, max_length=1000, description="Claim to verify")
    language: str = Field(default="en", min_length=2, max_length=2, description="ISO 639-1 language code")

    @field_validator("claim_text", mode="before")
    @classmethod
    def strip_claim(cls, value):
        return value.strip() if isinstance(value, str) else value


class FactCheckResponse(BaseModel):
    """Response model for claim verification."""

    success: bool = True
    data: CachedVerificationResult


class FactCheckRecordResponse(BaseModel):
    """Response model for a stored fact-check record."""

    success: bool = True
    data: VerificationRecord


class FactCheckSearchResponse(BaseModel):
    """Response model for fact-check search."""

    success: bool = True
    data: List[VerificationRecord]
    count: int


def to_http_exception(error: FactCheckBotError) -> HTTPException:
    """Map a domain error onto an HTTP error response."""
    if isinstance(error, InvalidInputError):
        return HTTPException(status_code=400, detail=str(error))
    if isinstance(error, RecordNotFoundError):
        return HTTPException(status_code=404, detail=str(error))
    if isinstance(error, RateLimitedError):
        return HTTPException(status_code=429, detail=error.message)
    if isinstance(error, ConfigurationError):
        return HTTPException(status_code=503, detail=str(error))
    if isinstance(error, UpstreamTimeoutError):
        return HTTPException(status_code=504, detail=error.message)
    if isinstance(error, (UnauthorizedError, UpstreamError)):
        return HTTPException(status_code=502, detail=str(error))
    return HTTPException(status_code=500, detail=str(error))


@router.post("", response_model=FactCheckResponse)
async def verify_claim(
    request: FactCheckRequest,
    verifier: ClaimVerifier = Depends(get_claim_verifier),
) -> FactCheckResponse:
    """Verify a claim against external fact-checkers.

    Args:
        request: Claim and language

    Returns:
        Verification result

    Raises:
        HTTPException: If the claim is invalid or the upstream source fails
    """
    logger.info(f"Starting fact-check for claim: {request.claim_text[:100]}...")
    try:
        result = await verifier.verify(request.claim_text, request.language)
    except FactCheckBotError as e:
        logger.error(f"Fact-check failed: {type(e).__name__}: {e}")
        raise to_http_exception(e)

    return FactCheckResponse(data=result)


@router.get("/search", response_model=FactCheckSearchResponse)
async def search_fact_checks(
    q: str = Query(..., min_length=1, description="Search query"),
    limit: int = Query(10, ge=1, le=100, description="Maximum number of results"),
    verifier: ClaimVerifier = Depends(get_claim_verifier),
) -> FactCheckSearchResponse:
    """Search stored fact-checks by claim text."""
    try:
        results = await verifier.search(q, limit)
    except FactCheckBotError as e:
        raise to_http_exception(e)

    return FactCheckSearchResponse(data=results, count=len(results))


@router.get("/{fact_id}", response_model=FactCheckRecordResponse)
async def get_fact_check(
    fact_id: str,
    verifier: ClaimVerifier = Depends(get_claim_verifier),
) -> FactCheckRecordResponse:
    """Get a stored fact-check by id."""
    try:
        record = await verifier.get_by_id(fact_id)
    except FactCheckBotError as e:
        raise to_http_exception(e)

    return FactCheckRecordResponse(data=record)
