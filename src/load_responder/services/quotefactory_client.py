import logging
from typing import Optional

import httpx

from load_responder.models import LoadInfo
from load_responder.services.load_info_parser import parse_load_info, pending_load_info
from load_responder.services.retry import RetryPolicy, with_retry

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class QuoteFactoryClient:
    """Looks up shipment details for a load reference on QuoteFactory."""

    def __init__(
        self,
        username: str,
        password: str,
        *,
        base_url: str = "https://app.quotefactory.com",
        search_path: str = "/api/shipment/search",
        timeout_seconds: float = 5.0,
        retry_policy: RetryPolicy | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.username = username
        self.password = password
        self.search_url = base_url.rstrip("/") + "/" + search_path.lstrip("/")
        self.timeout_seconds = max(1.0, timeout_seconds)
        self.retry_policy = retry_policy or RetryPolicy()
        self._transport = transport

    async def lookup(self, load_reference: str) -> Optional[LoadInfo]:
        if not (self.username and self.password):
            raise RuntimeError("QUOTEFACTORY_USERNAME and QUOTEFACTORY_PASSWORD are required for load lookup")

        headers = {"User-Agent": USER_AGENT, "Accept": "application/json, text/plain, */*"}

        async def _call() -> httpx.Response:
            async with httpx.AsyncClient(
                timeout=self.timeout_seconds,
                auth=(self.username, self.password),
                transport=self._transport,
            ) as client:
                return await client.get(self.search_url, headers=headers, params={"q": load_reference})

        try:
            response = await with_retry(
                operation="quotefactory_search",
                call=_call,
                policy=self.retry_policy,
                logger=logger,
            )
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                logger.info(
                    "Load not found in QuoteFactory",
                    extra={"event": "quotefactory_load_not_found", "load_reference": load_reference},
                )
                return None
            raise

        info = parse_load_info(response.text)
        if info is None:
            logger.info(
                "Load exists but details were not readable",
                extra={"event": "quotefactory_details_pending", "load_reference": load_reference},
            )
            return pending_load_info()

        logger.info(
            "Fetched load details from QuoteFactory",
            extra={"event": "quotefactory_lookup_success", "load_reference": load_reference, **info.to_dict()},
        )
        return info
