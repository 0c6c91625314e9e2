import logging
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Optional

from load_responder.models import LoadInfo
from load_responder.services.email_parser import parse_inbound_email
from load_responder.services.reference_extractor import extract_load_reference
from load_responder.services.response_formatter import fallback_reply, format_response

if TYPE_CHECKING:
    from load_responder.config import Settings
    from load_responder.services.quotefactory_client import QuoteFactoryClient

logger = logging.getLogger(__name__)

RESPONSE_MODE = "http-lookup"


def _timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


def fallback_envelope() -> dict[str, Any]:
    reply = fallback_reply()
    return {
        "success": True,
        "message": "Error processing - fallback response",
        "responseSubject": reply.subject,
        "responseBody": reply.body,
        "timestamp": _timestamp(),
    }


async def _lookup_load(lookup_client: "QuoteFactoryClient", load_reference: str) -> Optional[LoadInfo]:
    try:
        return await lookup_client.lookup(load_reference)
    except Exception as exc:
        logger.warning(
            "Load lookup failed; replying without details",
            extra={"event": "load_lookup_failed", "load_reference": load_reference, "error": repr(exc)},
        )
        return None


async def handle_inbound_email(
    payload: dict[str, Any],
    settings: "Settings",
    lookup_client: "QuoteFactoryClient",
    alert_service: Any | None = None,
) -> dict[str, Any]:
    try:
        message = parse_inbound_email(payload, settings.default_subject)
        load_reference = extract_load_reference(message.body_text)

        load_info: Optional[LoadInfo] = None
        lookup_attempted = bool(load_reference and settings.lookup_configured)
        if lookup_attempted:
            load_info = await _lookup_load(lookup_client, load_reference)
        elif load_reference:
            logger.info(
                "Load lookup not configured; sending processing reply",
                extra={"event": "load_lookup_skipped", "load_reference": load_reference},
            )

        reply = format_response(
            load_reference,
            load_info,
            message.subject,
            message.body_text,
            signature=settings.reply_signature,
        )
        logger.info(
            "Processed inbound load email",
            extra={
                "event": "inbound_email_processed",
                "email_id": message.id,
                "load_reference": load_reference,
                "lookup_attempted": lookup_attempted,
                "lookup_success": load_info is not None,
            },
        )
        return {
            "success": True,
            "loadReference": load_reference,
            "loadInfo": load_info.to_dict() if load_info else None,
            "responseSubject": reply.subject,
            "responseBody": reply.body,
            "quotefactoryAttempted": lookup_attempted,
            "quotefactorySuccess": load_info is not None,
            "replyToEmailId": message.id,
            "timestamp": _timestamp(),
            "mode": RESPONSE_MODE,
        }
    except Exception as exc:
        logger.exception("Inbound email processing failed", extra={"event": "inbound_email_failed"})
        if alert_service:
            await alert_service.notify(
                alert_type="inbound_email_processing_error",
                summary="Unhandled exception while processing inbound load email; sent fallback reply",
                context={"email_id": str(payload.get("id") or "unknown")},
                error=exc,
            )
        return fallback_envelope()
