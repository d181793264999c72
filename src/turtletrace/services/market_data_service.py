"""Market data service: cached, failure-tolerant access to the quote source."""

import asyncio
import logging
from datetime import datetime
from typing import Iterable, Optional

from turtletrace.core.timezone import now_market
from turtletrace.domain.views import Quote
from turtletrace.providers.market_data_provider import MarketDataProvider
from turtletrace.services.position_ledger import normalize_symbol

logger = logging.getLogger(__name__)


class MarketDataService:
    """
    Service for fetching quotes.

    Wraps a provider with a per-symbol TTL cache and graceful degradation:
    when the provider raises, the last cached quote (if any) is served.
    """

    def __init__(
        self,
        provider: MarketDataProvider,
        cache_ttl_seconds: int = 60,
    ):
        self._provider = provider
        self._cache_ttl = cache_ttl_seconds
        self._quote_cache: dict[str, tuple[Quote, datetime]] = {}

    @property
    def provider(self) -> MarketDataProvider:
        return self._provider

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        """
        Fetch one quote, using the cache while it is within TTL.

        Returns None when the symbol is not recognized, or when the
        provider fails and nothing is cached for the symbol.
        """
        symbol = normalize_symbol(symbol)
        cached = self._quote_cache.get(symbol)
        if cached and self._is_fresh(cached[1]):
            return cached[0]

        try:
            quote = await self._provider.get_quote(symbol)
        except Exception as e:
            logger.warning("Quote lookup for %s failed: %s", symbol, e)
            return cached[0] if cached else None

        if quote is not None:
            self._quote_cache[symbol] = (quote, now_market())
        return quote

    async def get_quotes(self, symbols: Iterable[str]) -> dict[str, Quote]:
        """
        Fetch quotes for many symbols concurrently.

        Each lookup runs as its own task and all are awaited together; a
        failed or unrecognized symbol is simply absent from the result.
        """
        unique = list(dict.fromkeys(normalize_symbol(s) for s in symbols))
        if not unique:
            return {}

        results = await asyncio.gather(
            *(self.get_quote(s) for s in unique),
            return_exceptions=True,
        )

        quotes: dict[str, Quote] = {}
        for symbol, result in zip(unique, results):
            if isinstance(result, BaseException):
                logger.warning("Quote lookup for %s raised: %r", symbol, result)
            elif result is not None:
                quotes[symbol] = result
        return quotes

    def clear_cache(self) -> None:
        self._quote_cache.clear()

    def _is_fresh(self, fetched_at: datetime) -> bool:
        elapsed = (now_market() - fetched_at).total_seconds()
        return elapsed < self._cache_ttl
