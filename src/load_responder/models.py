from dataclasses import asdict, dataclass
from typing import Any

NOT_AVAILABLE = "N/A"


@dataclass(frozen=True)
class EmailMessage:
    subject: str
    body_text: str
    id: str


@dataclass(frozen=True)
class LoadInfo:
    """Shipment details for one load; fields the lookup could not read hold "N/A"."""

    pickup: str = NOT_AVAILABLE
    delivery: str = NOT_AVAILABLE
    weight: str = NOT_AVAILABLE
    rate: str = NOT_AVAILABLE

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ReplyEmail:
    subject: str
    body: str
