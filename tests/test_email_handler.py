import asyncio
from dataclasses import dataclass

from load_responder.models import LoadInfo
from load_responder.webhooks.email_handler import handle_inbound_email


class _FakeLookupClient:
    def __init__(self, info: LoadInfo | None = None, fail: bool = False) -> None:
        self.info = info
        self.fail = fail
        self.calls: list[str] = []

    async def lookup(self, load_reference: str) -> LoadInfo | None:
        self.calls.append(load_reference)
        if self.fail:
            raise RuntimeError("simulated QuoteFactory outage")
        return self.info


class _FakeAlertService:
    def __init__(self) -> None:
        self.calls: list[dict] = []

    async def notify(self, *, alert_type: str, summary: str, context: dict | None = None, error: Exception | None = None) -> None:
        self.calls.append({"alert_type": alert_type, "context": context or {}, "error": repr(error) if error else ""})


@dataclass
class _SettingsStub:
    lookup_configured: bool = True
    reply_signature: str = "Balto Booking"
    default_subject: str = "Load Inquiry"


def test_reply_includes_looked_up_details() -> None:
    info = LoadInfo(pickup="Dallas, TX", delivery="Houston, TX", weight="42,000 lbs", rate="1,850")
    lookup_client = _FakeLookupClient(info=info)
    payload = {"id": "msg-1", "subject": "Dallas to Houston", "bodyPreview": "Is order #123456 still open?"}

    result = asyncio.run(handle_inbound_email(payload, _SettingsStub(), lookup_client))

    assert lookup_client.calls == ["123456"]
    assert result["success"] is True
    assert result["loadReference"] == "123456"
    assert result["loadInfo"] == {"pickup": "Dallas, TX", "delivery": "Houston, TX", "weight": "42,000 lbs", "rate": "1,850"}
    assert result["responseSubject"] == "Re: Dallas to Houston"
    assert "Dallas, TX" in result["responseBody"]
    assert result["quotefactoryAttempted"] is True
    assert result["quotefactorySuccess"] is True
    assert result["replyToEmailId"] == "msg-1"


def test_lookup_failure_is_treated_as_missing_details() -> None:
    lookup_client = _FakeLookupClient(fail=True)
    alerts = _FakeAlertService()
    payload = {"id": "msg-2", "subject": "Load X", "JSON": "order #654321"}

    result = asyncio.run(handle_inbound_email(payload, _SettingsStub(), lookup_client, alerts))

    assert lookup_client.calls == ["654321"]
    assert result["loadReference"] == "654321"
    assert result["loadInfo"] is None
    assert result["quotefactoryAttempted"] is True
    assert result["quotefactorySuccess"] is False
    assert "currently pulling the complete details" in result["responseBody"]
    assert alerts.calls == []


def test_lookup_skipped_when_not_configured() -> None:
    lookup_client = _FakeLookupClient(info=LoadInfo())
    payload = {"subject": "Load X", "bodyPreview": "order #654321"}

    result = asyncio.run(handle_inbound_email(payload, _SettingsStub(lookup_configured=False), lookup_client))

    assert lookup_client.calls == []
    assert result["loadReference"] == "654321"
    assert result["quotefactoryAttempted"] is False
    assert result["replyToEmailId"] == "unknown"


def test_missing_reference_asks_for_dat_number() -> None:
    lookup_client = _FakeLookupClient(info=LoadInfo())
    payload = {"subject": "Hi", "bodyPreview": "Do you have a truck for us next week?"}

    result = asyncio.run(handle_inbound_email(payload, _SettingsStub(), lookup_client))

    assert lookup_client.calls == []
    assert result["loadReference"] is None
    assert result["loadInfo"] is None
    assert result["responseSubject"] == "Re: Hi - DAT Reference Number Needed"


def test_unexpected_error_returns_fallback_and_alerts() -> None:
    alerts = _FakeAlertService()
    payload = {"id": "msg-3", "subject": "Load X", "bodyPreview": "order #654321"}

    result = asyncio.run(handle_inbound_email(payload, object(), _FakeLookupClient(), alerts))

    assert result["success"] is True
    assert result["message"] == "Error processing - fallback response"
    assert result["responseSubject"] == "Re: Load Inquiry"
    assert "loadReference" not in result
    assert len(alerts.calls) == 1
    assert alerts.calls[0]["alert_type"] == "inbound_email_processing_error"
    assert alerts.calls[0]["context"] == {"email_id": "msg-3"}
