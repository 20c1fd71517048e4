"""Webhook endpoints for messaging platforms.

Platforms retry deliveries that are not acknowledged, so these handlers
always answer 200 even when processing fails.
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse

from ...domain.models.conversation import InboundMessage
from ...domain.services.conversation_service import ConversationService
from ...infrastructure.dependencies import get_conversation_service, get_whatsapp_adapter
from ...infrastructure.messaging.whatsapp_adapter import WhatsAppAdapter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/webhooks", tags=["webhooks"])


def parse_telegram_message(message: Dict[str, Any]) -> InboundMessage:
    """Convert a Telegram ``message`` object into an inbound message."""
    sender = message.get("from") or {}
    return InboundMessage(
        platform="telegram",
        platform_user_id=str(sender.get("id", "")),
        chat_id=str(message["chat"]["id"]),
        text=message.get("text"),
        user_profile={
            "username": sender.get("username") or sender.get("first_name") or "User",
            "first_name": sender.get("first_name"),
            "last_name": sender.get("last_name"),
        },
        raw=message,
    )


def parse_whatsapp_messages(body: Dict[str, Any]) -> List[InboundMessage]:
    """Extract inbound messages from a WhatsApp Business webhook payload."""
    if body.get("object") != "whatsapp_business_account":
        return []

    entries = body.get("entry") or []
    if not entries or not entries[0].get("changes"):
        return []

    value = entries[0]["changes"][0].get("value") or {}
    messages = []
    for message in value.get("messages") or []:
        sender = message.get("from", "")
        messages.append(
            InboundMessage(
                platform="whatsapp",
                platform_user_id=sender,
                chat_id=sender,
                text=(message.get("text") or {}).get("body", ""),
                message_id=message.get("id"),
                user_profile={"phone_number": sender},
                raw=message,
            )
        )
    return messages


@router.get("")
async def list_webhooks() -> Dict[str, Any]:
    """List webhook endpoints."""
    return {
        "message": "Webhook endpoints",
        "endpoints": {
            "telegram": "/webhooks/telegram",
            "whatsapp": "/webhooks/whatsapp",
        },
    }


@router.post("/telegram")
async def telegram_webhook(
    request: Request,
    service: ConversationService = Depends(get_conversation_service),
) -> Dict[str, bool]:
    """Handle a Telegram update."""
    try:
        update = await request.json()
        if update.get("message"):
            await service.handle_message(parse_telegram_message(update["message"]))
        elif update.get("callback_query"):
            callback = update["callback_query"]
            await service.handle_callback(
                "telegram",
                chat_id=str(callback["message"]["chat"]["id"]),
                callback_id=str(callback["id"]),
                data=callback.get("data"),
            )
    except Exception as e:
        logger.error(f"❌ Telegram webhook error: {type(e).__name__}: {e}", exc_info=True)

    return {"ok": True}


@router.get("/whatsapp", response_class=PlainTextResponse)
async def whatsapp_verification(
    mode: Optional[str] = Query(None, alias="hub.mode"),
    token: Optional[str] = Query(None, alias="hub.verify_token"),
    challenge: Optional[str] = Query(None, alias="hub.challenge"),
    whatsapp: WhatsAppAdapter = Depends(get_whatsapp_adapter),
) -> PlainTextResponse:
    """Answer the WhatsApp webhook subscription challenge."""
    verified = whatsapp.verify_webhook(mode, token, challenge)
    if verified is not None:
        logger.info("✅ WhatsApp webhook verified")
        return PlainTextResponse(verified, status_code=200)

    logger.warning("⚠️ WhatsApp webhook verification failed")
    return PlainTextResponse("Forbidden", status_code=403)


@router.post("/whatsapp", response_class=PlainTextResponse)
async def whatsapp_webhook(
    request: Request,
    service: ConversationService = Depends(get_conversation_service),
) -> PlainTextResponse:
    """Handle a WhatsApp Business webhook delivery."""
    try:
        body = await request.json()
        for message in parse_whatsapp_messages(body):
            await service.handle_message(message)
    except Exception as e:
        logger.error(f"❌ WhatsApp webhook error: {type(e).__name__}: {e}", exc_info=True)

    return PlainTextResponse("OK", status_code=200)
