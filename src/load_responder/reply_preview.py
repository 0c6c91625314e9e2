from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from load_responder.config import get_settings
from load_responder.services.logging_config import configure_logging
from load_responder.services.quotefactory_client import QuoteFactoryClient
from load_responder.services.retry import RetryPolicy
from load_responder.webhooks.email_handler import handle_inbound_email


async def _run(subject: str, body_text: str, lookup: bool) -> dict:
    settings = get_settings().model_copy(update={"lookup_enabled": lookup})
    configure_logging(settings.log_level)

    lookup_client = QuoteFactoryClient(
        settings.quotefactory_username,
        settings.quotefactory_password,
        base_url=settings.quotefactory_base_url,
        search_path=settings.quotefactory_search_path,
        timeout_seconds=settings.lookup_timeout_seconds,
        retry_policy=RetryPolicy.from_settings(settings),
    )
    payload = {"id": "reply-preview", "subject": subject, "bodyPreview": body_text}
    return await handle_inbound_email(payload, settings, lookup_client)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Preview the automated reply for an inbound load email.")
    parser.add_argument("file", nargs="?", help="File holding the email body; reads stdin when omitted.")
    parser.add_argument("--subject", default="Load Inquiry", help="Subject of the inbound email.")
    parser.add_argument(
        "--lookup",
        action="store_true",
        help="Query QuoteFactory for load details (needs credentials in the environment).",
    )
    args = parser.parse_args(argv)

    body_text = Path(args.file).read_text(encoding="utf-8") if args.file else sys.stdin.read()
    payload = asyncio.run(_run(args.subject, body_text, args.lookup))
    print(json.dumps(payload, indent=2, sort_keys=True))
    return 0 if payload.get("loadReference") else 1


if __name__ == "__main__":
    raise SystemExit(main())
