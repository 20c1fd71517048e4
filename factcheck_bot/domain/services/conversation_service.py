"""Domain service handling inbound platform messages end to end."""

import logging
from typing import Dict, Optional

from ..models.conversation import ConversationRecord, InboundMessage
from ..ports.messaging_platform import MessagingPlatform
from ..ports.record_store import ConversationRepository, UserRepository
from .message_router import MessageRouter

logger = logging.getLogger(__name__)

NON_TEXT_REPLY = "Please send a text message."
PROCESSING_ERROR_REPLY = "Sorry, I encountered an error processing your message. Please try again."
CALLBACK_REPLY = "Callback received. Feature coming soon!"


class ConversationService:
    """Coordinates users, routing, conversation records and reply delivery.

    This is what platform webhooks call. It never raises: if anything goes
    wrong the user gets an apology and the error is logged.
    """

    def __init__(
        self,
        router: MessageRouter,
        users: UserRepository,
        conversations: ConversationRepository,
        platforms: Dict[str, MessagingPlatform],
    ):
        """Initialize the service.

        Args:
            router: Message router
            users: User store
            conversations: Conversation record store
            platforms: Messaging platform adapters keyed by platform name
        """
        self._router = router
        self._users = users
        self._conversations = conversations
        self._platforms = platforms

    def get_platform(self, name: str) -> Optional[MessagingPlatform]:
        return self._platforms.get(name)

    async def handle_message(self, message: InboundMessage) -> Optional[ConversationRecord]:
        """Route an inbound message and deliver the reply.

        Args:
            message: Normalized inbound message

        Returns:
            The saved conversation record, or None if nothing was routed
        """
        platform = self._platforms.get(message.platform)
        if platform is None:
            logger.error(f"❌ No messaging adapter for platform '{message.platform}'")
            return None

        text = message.text or ""
        logger.info(
            f"📥 {message.platform} message received: chat={message.chat_id} "
            f"user={message.platform_user_id} text={text[:50]!r}"
        )

        if message.message_id:
            await platform.mark_as_read(message.message_id)

        if not text.strip():
            await self._safe_send(platform, message.chat_id, NON_TEXT_REPLY)
            return None

        try:
            user = await self._users.find_or_create(
                message.platform,
                message.platform_user_id,
                message.user_profile,
            )

            reply = await self._router.route(
                platform=message.platform,
                user_id=user.user_id,
                chat_id=message.chat_id,
                message_text=text,
                metadata=message.raw,
            )

            conversation = ConversationRecord(
                user_id=user.user_id,
                platform=message.platform,
                message_content=text,
                intent_type=self._router.detect_intent(text),
                response_content=reply.text,
                metadata={"chat_id": message.chat_id, "message_id": message.message_id},
            )
            await self._conversations.save(conversation)

            await platform.send_message(message.chat_id, reply.text, reply.options)

            logger.info(
                f"✅ {message.platform} message processed: conversation={conversation.conversation_id} "
                f"intent={conversation.intent_type.value}"
            )
            return conversation

        except Exception as e:
            logger.error(f"❌ Error processing {message.platform} message: {e}", exc_info=True)
            await self._safe_send(platform, message.chat_id, PROCESSING_ERROR_REPLY)
            return None

    async def handle_callback(
        self,
        platform_name: str,
        chat_id: str,
        callback_id: str,
        data: Optional[str] = None,
    ) -> None:
        """Acknowledge an interactive callback. Callback actions are not implemented yet."""
        platform = self._platforms.get(platform_name)
        if platform is None:
            logger.error(f"❌ No messaging adapter for platform '{platform_name}'")
            return

        logger.info(f"🔘 {platform_name} callback received: chat={chat_id} data={data}")
        try:
            await platform.acknowledge_callback(callback_id, "Processing...")
            await platform.send_message(chat_id, CALLBACK_REPLY)
        except Exception as e:
            logger.error(f"❌ Error handling {platform_name} callback: {e}")

    async def _safe_send(self, platform: MessagingPlatform, chat_id: str, text: str) -> None:
        try:
            await platform.send_message(chat_id, text)
        except Exception as send_error:
            logger.error(f"❌ Failed to send message to {chat_id}: {send_error}")
