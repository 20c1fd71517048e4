"""Port for the verification result cache."""

from abc import ABC, abstractmethod
from typing import Optional

from ..models.verification import CachedVerificationResult


class VerificationCache(ABC):
    """Key/value store for verification results with per-entry expiry.

    Implementations must fail open: a broken or unreachable cache behaves
    like an empty one and never raises to the caller.
    """

    @abstractmethod
    async def get(self, key: str) -> Optional[CachedVerificationResult]:
        """Return the cached result, or None on miss or any failure."""
        pass

    @abstractmethod
    async def set(self, key: str, result: CachedVerificationResult, ttl_seconds: int) -> bool:
        """Store a result. Returns False if it could not be written."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove an entry. Returns False on failure."""
        pass

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check whether a live entry exists."""
        pass
