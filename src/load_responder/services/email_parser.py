import re
from typing import Any

from load_responder.models import EmailMessage


def html_to_text(html: str) -> str:
    text = re.sub(r"<br\s*/?>", "\n", html, flags=re.IGNORECASE)
    text = re.sub(r"</p>", "\n\n", text, flags=re.IGNORECASE)
    text = re.sub(r"<[^>]+>", "", text)
    text = text.replace("&nbsp;", " ")
    text = text.replace("&amp;", "&")
    text = re.sub(r"\n{3,}", "\n\n", text)
    return text.strip()


def _body_content(body: Any) -> str:
    if not isinstance(body, dict):
        return ""
    content = body.get("content") or ""
    if (body.get("contentType") or "").lower() == "html":
        return html_to_text(content)
    return content


def parse_inbound_email(payload: dict[str, Any], default_subject: str = "Load Inquiry") -> EmailMessage:
    """Build an EmailMessage from an upstream automation payload.

    Zapier sends the whole message as a string under ``JSON``; Outlook style
    payloads carry ``bodyPreview`` and a ``body`` object. The first non-empty
    source wins, in that order.
    """
    zapier_text = payload.get("JSON") or ""
    if not isinstance(zapier_text, str):
        zapier_text = str(zapier_text)

    body_text = zapier_text or (payload.get("bodyPreview") or "") or _body_content(payload.get("body"))

    return EmailMessage(
        subject=payload.get("subject") or default_subject,
        body_text=body_text,
        id=str(payload.get("id") or "unknown"),
    )
