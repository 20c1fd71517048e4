"""Routes inbound chat messages to the handler for their intent."""

import logging
from typing import Any, Awaitable, Dict, Optional

from ..models.conversation import RoutedReply
from ..models.intent import Intent
from ..models.verification import CachedVerificationResult, Verdict
from .claim_verifier import ClaimVerifier
from .intent_classifier import IntentClassifier

logger = logging.getLogger(__name__)

HTML = "HTML"

EMPTY_MESSAGE_TEXT = "Please send a message. I can help you with fact-checking and more!"
ROUTING_ERROR_TEXT = "Sorry, I encountered an error. Please try again."
VERIFY_FAILED_TEXT = "Sorry, I could not verify that claim. Please try again with a different query."

SOS_TEXT = (
    "🚨 <b>Emergency Support</b>\n\n"
    "If you're in immediate danger, please:\n"
    "1. Call emergency services: 911 (or your local emergency number)\n"
    "2. Get to a safe location\n"
    "3. Contact trusted friends or family\n\n"
    "For support resources, please contact local authorities or support organizations."
)

QUESTION_TEXT = (
    "I understand you have a question. The AI-powered cultural education feature is coming soon!\n\n"
    "For now, I can help you with:\n"
    "• Fact-checking claims\n"
    "• Emergency support (type \"help\" or \"sos\")"
)

GREETING_TEXT = (
    "👋 <b>Hello! I'm Walansi Kontonbile</b>\n\n"
    "I can help you with:\n"
    "• <b>Fact-checking</b> - Send me a claim to verify\n"
    "• <b>Emergency support</b> - Type \"help\" or \"sos\"\n"
    "• <b>Questions</b> - Ask me anything (coming soon)\n\n"
    "How can I assist you?"
)

VERDICT_EMOJI: Dict[Verdict, str] = {
    Verdict.FALSE: "❌",
    Verdict.TRUE: "✅",
    Verdict.MISLEADING: "⚠️",
    Verdict.UNVERIFIED: "❓",
}


def format_verification(result: CachedVerificationResult) -> str:
    """Render a verification result as an HTML chat message."""
    emoji = VERDICT_EMOJI.get(result.verification_status, "❓")

    text = f"{emoji} <b>Fact-Check Result</b>\n\n"
    text += f"Status: <b>{result.verification_status.value.upper()}</b>\n"
    text += f"\n{result.explanation}"

    if result.source_url:
        text += f"\n\nSource: {result.source_url}"

    if result.evidence_links:
        text += f"\n\nEvidence: {result.evidence_links[0]}"

    return text


class MessageRouter:
    """Top-level entry point for chat messages.

    Classifies the message, dispatches it to the matching handler and always
    returns a well-formed reply: every failure is logged and turned into an
    apology.
    """

    def __init__(
        self,
        classifier: IntentClassifier,
        verifier: ClaimVerifier,
        default_language: str = "en",
    ):
        """Initialize the router.

        Args:
            classifier: Intent classifier
            verifier: Claim verifier used for fact-check intents
            default_language: Language used for verification queries
        """
        self._classifier = classifier
        self._verifier = verifier
        self._language = default_language

    def detect_intent(self, text: str) -> Intent:
        """Classify text with the same classifier routing uses."""
        return self._classifier.classify(text)

    async def route(
        self,
        platform: str,
        user_id: Optional[str],
        chat_id: Optional[str],
        message_text: Optional[str],
        metadata: Optional[Dict[str, Any]] = None,
    ) -> RoutedReply:
        """Route a message and build the reply. Never raises.

        Args:
            platform: Originating platform (telegram, whatsapp, ...)
            user_id: Internal user id
            chat_id: Platform chat id
            message_text: Raw message text
            metadata: Opaque platform payload

        Returns:
            Reply with text and formatting options
        """
        if not message_text or not message_text.strip():
            return RoutedReply(text=EMPTY_MESSAGE_TEXT)

        return await self._reply_or_fallback(
            self._dispatch(platform, user_id, message_text),
            RoutedReply(text=ROUTING_ERROR_TEXT),
            "Message routing error",
        )

    async def _dispatch(self, platform: str, user_id: Optional[str], message_text: str) -> RoutedReply:
        intent = self.detect_intent(message_text)

        logger.info(
            f"📨 Message routed: platform={platform} user={user_id} intent={intent.value} "
            f"language={self._language} length={len(message_text)}"
        )

        if intent is Intent.FACT_CHECK:
            return await self._reply_or_fallback(
                self._handle_fact_check(message_text, user_id),
                RoutedReply(text=VERIFY_FAILED_TEXT),
                "Fact-check routing error",
            )
        if intent is Intent.SOS:
            return self._handle_sos()
        if intent is Intent.QUESTION:
            return self._handle_question()
        return self._handle_default()

    async def _reply_or_fallback(
        self,
        handler: Awaitable[RoutedReply],
        fallback: RoutedReply,
        context: str,
    ) -> RoutedReply:
        """Await a handler, substituting the fallback reply if it fails."""
        try:
            return await handler
        except Exception as e:
            logger.error(f"❌ {context}: {type(e).__name__}: {e}", exc_info=True)
            return fallback

    async def _handle_fact_check(self, message_text: str, user_id: Optional[str]) -> RoutedReply:
        result = await self._verifier.verify(message_text, self._language, user_id)
        return RoutedReply(text=format_verification(result), options={"parse_mode": HTML})

    def _handle_sos(self) -> RoutedReply:
        return RoutedReply(text=SOS_TEXT, options={"parse_mode": HTML})

    def _handle_question(self) -> RoutedReply:
        return RoutedReply(text=QUESTION_TEXT)

    def _handle_default(self) -> RoutedReply:
        return RoutedReply(text=GREETING_TEXT, options={"parse_mode": HTML})
