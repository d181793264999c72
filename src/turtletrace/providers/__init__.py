"""Quote source implementations."""

from turtletrace.config.settings import Settings
from turtletrace.providers.market_data_provider import MarketDataProvider
from turtletrace.providers.stub_provider import StubMarketDataProvider
from turtletrace.providers.eastmoney_provider import EastMoneyMarketDataProvider


def create_provider(settings: Settings) -> MarketDataProvider:
    """Build the quote source selected by ``settings.quote_provider``."""
    if settings.quote_provider == "eastmoney":
        return EastMoneyMarketDataProvider(
            timeout_seconds=settings.quote_fetch_timeout_seconds,
        )
    return StubMarketDataProvider()


__all__ = [
    "MarketDataProvider",
    "StubMarketDataProvider",
    "EastMoneyMarketDataProvider",
    "create_provider",
]
