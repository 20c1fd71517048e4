"""In-memory implementation of the verification cache port."""

import logging
import time
from typing import Callable, Optional, Tuple

from cachetools import TLRUCache
from pydantic import BaseModel, Field

from ...domain.models.verification import CachedVerificationResult
from ...domain.ports.verification_cache import VerificationCache

logger = logging.getLogger(__name__)


class MemoryCacheConfig(BaseModel):
    """Configuration for the in-memory cache."""

    maxsize: int = Field(default=10000, description="Maximum number of cached results")


def _entry_expiry(key: str, entry: Tuple[int, str], now: float) -> float:
    ttl_seconds, _ = entry
    return now + ttl_seconds


class MemoryVerificationCache(VerificationCache):
    """Verification cache backed by a ``cachetools.TLRUCache``.

    Values are stored as JSON strings, exactly as they would be in a remote
    key/value store, and each entry carries its own time-to-live. Reads that
    fail to parse are treated as misses.
    """

    def __init__(
        self,
        config: Optional[MemoryCacheConfig] = None,
        timer: Callable[[], float] = time.monotonic,
    ):
        self._config = config or MemoryCacheConfig()
        self._cache = TLRUCache(
            maxsize=self._config.maxsize,
            ttu=_entry_expiry,
            timer=timer,
        )

    async def get(self, key: str) -> Optional[CachedVerificationResult]:
        try:
            entry = self._cache.get(key)
            if entry is None:
                return None
            _, payload = entry
            return CachedVerificationResult.model_validate_json(payload)
        except Exception as e:
            logger.error(f"❌ Cache get error for key {key}: {e}")
            return None

    async def set(self, key: str, result: CachedVerificationResult, ttl_seconds: int) -> bool:
        try:
            self._cache[key] = (ttl_seconds, result.model_dump_json())
            return True
        except Exception as e:
            logger.error(f"❌ Cache set error for key {key}: {e}")
            return False

    async def delete(self, key: str) -> bool:
        try:
            self._cache.pop(key, None)
            return True
        except Exception as e:
            logger.error(f"❌ Cache delete error for key {key}: {e}")
            return False

    async def exists(self, key: str) -> bool:
        try:
            return key in self._cache
        except Exception as e:
            logger.error(f"❌ Cache exists error for key {key}: {e}")
            return False

    def __len__(self) -> int:
        return len(self._cache)
