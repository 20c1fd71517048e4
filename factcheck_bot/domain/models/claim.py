"""Claim fingerprinting: the canonical identity of a claim for caching."""

import hashlib
import re

MAX_CLAIM_LENGTH = 500
CACHE_KEY_PREFIX = "factcheck:"

_WHITESPACE = re.compile(r"\s+")


def fingerprint(claim_text: str) -> str:
    """Normalize claim text into its fingerprint.

    Lower-cases, trims, collapses whitespace runs to one space and caps the
    result at 500 characters. Claims that differ only in case or whitespace
    share a fingerprint.
    """
    normalized = _WHITESPACE.sub(" ", claim_text.lower().strip())
    # The cap can expose a trailing space; trim it so the result is a fixed point.
    return normalized[:MAX_CLAIM_LENGTH].rstrip()


def cache_key(claim_fingerprint: str) -> str:
    """Derive the namespaced, content-addressed cache key for a fingerprint."""
    digest = hashlib.md5(
        claim_fingerprint.lower().strip().encode("utf-8"),
        usedforsecurity=False,
    ).hexdigest()
    return f"{CACHE_KEY_PREFIX}{digest}"
