import json
from typing import Optional
from urllib.parse import parse_qsl

from fastapi import APIRouter, BackgroundTasks, Depends, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import PlainTextResponse, Response

from app.config import Settings, get_settings
from app.dependencies import get_completion_service, get_retrier, get_telegram_service
from app.logging_config import get_logger
from app.schemas.telegram import TelegramUpdate, TelegramWebhookResponse
from app.services.agent_router import select_agent
from app.services.alert_service import notify_operators
from app.services.completion_service import CompletionService, generate_agent_reply
from app.services.conversation_service import ConversationRecord, log_conversation
from app.services.durable_write import DurableWriteRetrier
from app.services.errors import CompletionUnavailable
from app.services.telegram_service import TelegramService
from app.services.twilio_service import (
    is_valid_nigerian_phone,
    normalize_sender,
    render_twiml_message,
    verify_signature,
)

logger = get_logger("webhooks")

router = APIRouter(prefix="/webhooks")

MSG_UNSUPPORTED_NUMBER = "Only Nigerian (+234) numbers are supported for now."
MSG_AI_UNAVAILABLE = "Sorry, our assistant is unavailable right now. Please try again in a few minutes."


def twiml_response(text: str) -> Response:
    return Response(content=render_twiml_message(text), media_type="text/xml")


def reply_or_apology(
    message: str,
    agent_id,
    completion_service: CompletionService,
    settings: Settings,
) -> tuple[str, bool]:
    """Return (reply, from_model). Channels always get text back."""
    try:
        return generate_agent_reply(message, agent_id, completion_service), True
    except CompletionUnavailable as e:
        logger.error(
            "Completion unavailable, sending apology",
            extra={"context": {"agent": agent_id.value, "error": str(e)}},
        )
        notify_operators(
            "ERROR",
            "Both completion providers failed",
            {"agent": agent_id.value, "error": str(e)[:300]},
            bot_token=settings.alert_bot_token,
            chat_id=settings.alert_chat_id,
        )
        return MSG_AI_UNAVAILABLE, False


async def parse_twilio_form(request: Request) -> dict[str, str]:
    raw = await request.body()
    return dict(parse_qsl(raw.decode("utf-8", errors="replace"), keep_blank_values=True))


def twilio_request_url(request: Request, settings: Settings) -> str:
    url = (settings.public_url or "").rstrip("/") + request.url.path
    if request.url.query:
        url += f"?{request.url.query}"
    return url


@router.post("/twilio")
async def handle_twilio_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    completion_service: CompletionService = Depends(get_completion_service),
    retrier: DurableWriteRetrier = Depends(get_retrier),
):
    """WhatsApp messages relayed by Twilio; answers with TwiML."""
    params = await parse_twilio_form(request)

    if settings.twilio_auth_token:
        signature = request.headers.get("X-Twilio-Signature")
        url = twilio_request_url(request, settings)
        if not verify_signature(settings.twilio_auth_token, url, params, signature):
            logger.warning("Twilio signature rejected", extra={"context": {"url": url}})
            return PlainTextResponse("Forbidden", status_code=403)
    else:
        logger.warning("TWILIO_AUTH_TOKEN not set, skipping signature check")

    try:
        body = params.get("Body", "")
        sender = normalize_sender(params.get("From"))

        if not is_valid_nigerian_phone(sender):
            return twiml_response(MSG_UNSUPPORTED_NUMBER)

        agent_id = select_agent(body)
        reply, from_model = await run_in_threadpool(reply_or_apology, body, agent_id, completion_service, settings)

        if from_model:
            background_tasks.add_task(
                log_conversation,
                retrier,
                ConversationRecord(
                    session_id=sender,
                    platform="whatsapp",
                    message=body,
                    response=reply,
                    agent=agent_id.value,
                ),
            )

        return twiml_response(reply)
    except Exception as e:
        logger.error(f"Twilio webhook error: {e}", exc_info=True)
        return PlainTextResponse("Internal error", status_code=500)


async def parse_telegram_update(request: Request) -> Optional[dict]:
    """Decode the update body, tolerating non-utf-8 bytes."""
    raw = await request.body()
    try:
        return json.loads(raw.decode("utf-8", errors="replace"))
    except ValueError:
        logger.error("Failed to decode Telegram webhook payload")
        return None


def answer_telegram_text(
    update: TelegramUpdate,
    completion_service: CompletionService,
    telegram: TelegramService,
    settings: Settings,
) -> Optional[ConversationRecord]:
    message = update.message
    chat_id = message.chat.id
    agent_id = select_agent(message.text)
    reply, from_model = reply_or_apology(message.text, agent_id, completion_service, settings)

    telegram.send_message(chat_id, reply)

    if not from_model:
        return None
    return ConversationRecord(
        session_id=f"tg_{chat_id}",
        platform="telegram",
        message=message.text,
        response=reply,
        agent=agent_id.value,
    )


@router.post("/telegram", response_model=TelegramWebhookResponse)
async def handle_telegram_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
    settings: Settings = Depends(get_settings),
    completion_service: CompletionService = Depends(get_completion_service),
    telegram: TelegramService = Depends(get_telegram_service),
    retrier: DurableWriteRetrier = Depends(get_retrier),
):
    """Bot updates from Telegram. Always 200 so Telegram does not redeliver."""
    try:
        body = await parse_telegram_update(request)
        if not isinstance(body, dict):
            return TelegramWebhookResponse()

        update = TelegramUpdate(**body)
        if not update.message or not update.message.text:
            return TelegramWebhookResponse()

        record = await run_in_threadpool(answer_telegram_text, update, completion_service, telegram, settings)
        if record:
            background_tasks.add_task(log_conversation, retrier, record)
    except Exception as e:
        logger.error(f"Telegram webhook error: {e}", exc_info=True)

    return TelegramWebhookResponse()
