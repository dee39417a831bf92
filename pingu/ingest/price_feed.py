"""Pyth Hermes client for signed price update payloads."""

import base64
import binascii
import logging

import httpx

from pingu.rpc.errors import PriceFeedError

logger = logging.getLogger(__name__)

HERMES_BASE_URL = "https://hermes.pyth.network"


class PriceFeedClient:
    def __init__(self, base_url: str = HERMES_BASE_URL, timeout: float = 30.0):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def get_price_updates(self, feed_id: str) -> list[bytes]:
        """Fetch the latest price update payloads for a feed.

        Failures raise PriceFeedError; they are local and never retried
        across RPC endpoints.
        """
        feed = feed_id[2:] if feed_id.startswith("0x") else feed_id
        url = f"{self.base_url}/api/latest_vaas"
        try:
            resp = httpx.get(url, params={"ids[]": feed}, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (httpx.HTTPStatusError, httpx.RequestError) as e:
            logger.error("Hermes request failed for feed=%s: %s", feed, e)
            raise PriceFeedError(f"Failed to fetch price update: {e}") from e
        except ValueError as e:
            raise PriceFeedError(f"Malformed price update response: {e}") from e

        if not isinstance(data, list) or not data:
            raise PriceFeedError(f"No price update returned for feed {feed}")
        try:
            updates = [base64.b64decode(vaa, validate=True) for vaa in data]
        except (binascii.Error, TypeError, ValueError) as e:
            raise PriceFeedError(f"Failed to decode price update: {e}") from e

        logger.debug("Fetched %d price updates for feed=%s", len(updates), feed)
        return updates
