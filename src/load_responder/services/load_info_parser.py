import re
from typing import Optional

from load_responder.models import NOT_AVAILABLE, LoadInfo

PICKUP_RE = re.compile(r"(?:Pickup|Origin|From)[:\s]*([^\n]{10,80})", re.IGNORECASE)
DELIVERY_RE = re.compile(r"(?:Delivery|Destination|To)[:\s]*([^\n]{10,80})", re.IGNORECASE)
WEIGHT_RE = re.compile(r"(?:Weight|Pounds|lbs)[:\s]*([^\n]{5,30})", re.IGNORECASE)
RATE_RE = re.compile(r"(?:Rate|Price|Cost)[:\s]*\$?([^\n]{3,20})", re.IGNORECASE)

PENDING_DETAILS = "Details being retrieved..."


def _field(pattern: re.Pattern[str], text: str) -> str:
    match = pattern.search(text)
    if not match:
        return NOT_AVAILABLE
    return match.group(1).strip() or NOT_AVAILABLE


def parse_load_info(page_text: str) -> Optional[LoadInfo]:
    """Pull shipment details out of a search result's visible text.

    Returns None when the text neither yields a pickup/delivery value nor
    mentions pickup or delivery at all.
    """
    text = page_text or ""
    info = LoadInfo(
        pickup=_field(PICKUP_RE, text),
        delivery=_field(DELIVERY_RE, text),
        weight=_field(WEIGHT_RE, text),
        rate=_field(RATE_RE, text),
    )

    lowered = text.lower()
    if info.pickup != NOT_AVAILABLE or info.delivery != NOT_AVAILABLE:
        return info
    if "pickup" in lowered or "delivery" in lowered:
        return info
    return None


def pending_load_info() -> LoadInfo:
    return LoadInfo(
        pickup=PENDING_DETAILS,
        delivery=PENDING_DETAILS,
        weight="TBD",
        rate="Quote being prepared...",
    )
