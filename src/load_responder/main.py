import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from load_responder.config import get_settings
from load_responder.services.alerts import AlertService
from load_responder.services.logging_config import configure_logging
from load_responder.services.quotefactory_client import QuoteFactoryClient
from load_responder.services.retry import RetryPolicy
from load_responder.webhooks.email_handler import fallback_envelope, handle_inbound_email

settings = get_settings()
configure_logging(settings.log_level)
logger = logging.getLogger(__name__)

lookup_client = QuoteFactoryClient(
    settings.quotefactory_username,
    settings.quotefactory_password,
    base_url=settings.quotefactory_base_url,
    search_path=settings.quotefactory_search_path,
    timeout_seconds=settings.lookup_timeout_seconds,
    retry_policy=RetryPolicy.from_settings(settings),
)
alert_service = AlertService(settings)

app = FastAPI(title="Load Responder", version="0.1.0")


@app.on_event("startup")
def startup() -> None:
    if not settings.lookup_configured:
        logger.warning(
            "QuoteFactory lookup disabled or missing credentials; replies will not include load details",
            extra={"event": "lookup_not_configured"},
        )
    logger.info("Application startup complete", extra={"event": "startup_complete"})


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok", "env": settings.app_env}


@app.post("/api/webhook")
@app.post("/webhooks/email")
async def email_webhook(request: Request) -> JSONResponse:
    logger.info("Received inbound email webhook", extra={"event": "email_webhook_received"})
    try:
        payload = await request.json()
    except Exception:
        logger.warning("Invalid email webhook payload", extra={"event": "email_webhook_invalid_json"})
        return JSONResponse(fallback_envelope())

    if not isinstance(payload, dict):
        logger.warning("Email webhook payload is not an object", extra={"event": "email_webhook_invalid_payload"})
        return JSONResponse(fallback_envelope())

    result = await handle_inbound_email(payload, settings, lookup_client, alert_service)
    return JSONResponse(result)


def run() -> None:
    import uvicorn

    uvicorn.run(app, host=settings.app_host, port=settings.app_port, log_config=None)


if __name__ == "__main__":
    run()
