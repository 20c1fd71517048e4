"""Keyword-based intent classification for inbound chat messages."""

from typing import Dict, Tuple

from ..models.intent import Intent

# Checked in this order; the first intent with a matching keyword wins.
INTENT_KEYWORDS: Tuple[Tuple[Intent, Tuple[str, ...]], ...] = (
    (Intent.SOS, ("help", "emergency", "sos", "danger", "harassment", "abuse", "violence", "hurt")),
    (Intent.FACT_CHECK, ("verify", "check", "true", "false", "fact", "claim", "news", "real", "fake")),
    (Intent.QUESTION, ("how", "what", "why", "when", "where", "explain", "tell me")),
)


class IntentClassifier:
    """Maps free text to an intent by priority-ordered substring matching.

    Keywords match anywhere in the lower-cased text, not only as whole
    words, so "unreal" counts as fact-check. SOS is checked first, so any
    text containing an SOS keyword classifies as SOS.
    """

    def __init__(self, keywords: Tuple[Tuple[Intent, Tuple[str, ...]], ...] = INTENT_KEYWORDS):
        self._keywords = keywords

    def classify(self, text: str) -> Intent:
        """Classify text. Total: always returns an intent."""
        lower_text = (text or "").lower()
        for intent, keywords in self._keywords:
            if any(keyword in lower_text for keyword in keywords):
                return intent
        return Intent.UNKNOWN

    @property
    def keywords(self) -> Dict[Intent, Tuple[str, ...]]:
        return dict(self._keywords)
