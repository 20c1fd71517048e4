"""Tests for keyword intent classification."""

import itertools

import pytest

from factcheck_bot.domain.models.intent import Intent
from factcheck_bot.domain.services.intent_classifier import INTENT_KEYWORDS, IntentClassifier


@pytest.fixture
def classifier() -> IntentClassifier:
    return IntentClassifier()


@pytest.mark.parametrize(
    "text,expected",
    [
        ("This is an EMERGENCY", Intent.SOS),
        ("I need help, is this news fake?", Intent.SOS),
        ("Please verify this news", Intent.FACT_CHECK),
        ("Is it true that the bridge collapsed?", Intent.FACT_CHECK),
        ("that video looks unreal", Intent.FACT_CHECK),
        ("How does photosynthesis work?", Intent.QUESTION),
        ("Tell me a story", Intent.QUESTION),
        ("Whatever", Intent.QUESTION),
        ("Good morning", Intent.UNKNOWN),
        ("Hi there", Intent.UNKNOWN),
        ("", Intent.UNKNOWN),
        ("   ", Intent.UNKNOWN),
    ],
)
def test_classify(classifier, text, expected):
    assert classifier.classify(text) is expected


def test_fact_check_wins_over_question(classifier):
    # "what" is a question keyword but "true" is checked first.
    assert classifier.classify("What? Is that true?") is Intent.FACT_CHECK


def test_sos_keywords_always_win(classifier):
    keywords = classifier.keywords
    others = keywords[Intent.FACT_CHECK] + keywords[Intent.QUESTION]
    for sos_word, other in itertools.product(keywords[Intent.SOS], others):
        assert classifier.classify(f"{other} {sos_word}") is Intent.SOS
        assert classifier.classify(f"{sos_word.upper()} then {other}") is Intent.SOS


@pytest.mark.parametrize(
    "text",
    ["", "1234", "¿Qué pasa?", "emoji 🚨 only", "\x00\x01", "a" * 10000, "Ṫḧïṡ ïṡ ṳṅïċöḋë"],
)
def test_classify_is_total(classifier, text):
    assert classifier.classify(text) in set(Intent)


def test_classify_handles_none(classifier):
    assert classifier.classify(None) is Intent.UNKNOWN


def test_priority_order():
    assert [intent for intent, _ in INTENT_KEYWORDS] == [Intent.SOS, Intent.FACT_CHECK, Intent.QUESTION]
