"""Funding rate scanner across all listed markets."""

import logging

from pingu.models.reporting import FundingScan, FundingSnapshot
from pingu.reader import Reader
from pingu.rpc.errors import PinguError

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.01  # percent per 8 h


class FundingScanner:
    def __init__(self, reader: Reader, threshold: float = DEFAULT_THRESHOLD):
        self.reader = reader
        self.threshold = threshold

    def scan(self, asset: str | None = None) -> FundingScan:
        """Read every market's funding rate, highest absolute rate first.

        Markets whose rate cannot be read are skipped and listed in
        ``skipped``; a failure to list markets propagates.
        """
        asset_name = asset or self.reader.client.config.default_asset
        result = FundingScan(asset=asset_name, threshold=self.threshold)

        markets = self.reader.get_markets()
        logger.info("Scanning funding for %d markets", len(markets))
        for info in markets:
            try:
                rate = self.reader.get_funding_rate(info.market, asset_name)
            except PinguError as e:
                logger.warning("Skipping %s: %s", info.market, e)
                result.skipped.append(info.market)
                continue
            result.snapshots.append(
                FundingSnapshot(market=info.market, rate=rate, category=info.category)
            )

        result.snapshots.sort(key=lambda s: abs(s.rate), reverse=True)
        return result
