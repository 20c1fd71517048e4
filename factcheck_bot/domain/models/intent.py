"""Domain model for message intents."""

from enum import Enum


class Intent(str, Enum):
    """Classified purpose of an inbound message."""

    SOS = "sos"
    FACT_CHECK = "fact-check"
    QUESTION = "question"
    UNKNOWN = "unknown"
