"""Client for the Midtrans relay that lists provider-side transactions."""
import logging
from typing import Any, Optional

import httpx

from app.config import settings
from app.utils.errors import InternalError, UpstreamUnavailable

logger = logging.getLogger(__name__)


def extract_transactions(payload: Any) -> list:
    """Pull the provider transaction list out of a relay response body.

    The relay answers either ``{"data": [...]}`` or
    ``{"data": {"transactions": [...]}}``.

    Raises:
        UpstreamUnavailable: If ``data`` is missing or does not hold a list.
    """
    if not isinstance(payload, dict) or payload.get("data") is None:
        raise UpstreamUnavailable("Failed to fetch transaction data from Midtrans")

    data = payload["data"]
    if isinstance(data, dict) and "transactions" in data:
        data = data["transactions"]

    if not isinstance(data, list):
        raise UpstreamUnavailable("Invalid data format received from Midtrans")
    return data


class MidtransClient:
    """Fetches the full Midtrans transaction list in a single GET."""

    def __init__(
        self,
        data_url: Optional[str] = None,
        param: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.data_url = data_url or settings.MIDTRANS_DATA_URL
        self.param = param or settings.MIDTRANS_DATA_PARAM
        self.timeout = timeout or settings.MIDTRANS_TIMEOUT_SECONDS
        self._transport = transport

    async def fetch_transactions(self) -> list:
        """Return the provider transaction records.

        Raises:
            UpstreamUnavailable: The relay answered with an unusable body.
            InternalError: The request failed or returned a non-2xx status.
        """
        logger.info(f"Fetching Midtrans transactions from {self.data_url}")
        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
                response = await client.get(self.data_url, params={"param": self.param})
                response.raise_for_status()
        except httpx.HTTPError as e:
            logger.exception(f"Midtrans request failed: {e}")
            raise InternalError() from e

        try:
            payload = response.json()
        except ValueError as e:
            logger.warning("Midtrans relay returned a non-JSON body")
            raise UpstreamUnavailable("Failed to fetch transaction data from Midtrans") from e

        try:
            return extract_transactions(payload)
        except UpstreamUnavailable as e:
            logger.warning(f"Unusable Midtrans payload: {e.message}")
            raise


def get_midtrans_client() -> MidtransClient:
    """FastAPI dependency; overridden in tests with a client on a mock transport."""
    return MidtransClient()
