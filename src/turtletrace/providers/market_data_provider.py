"""Market data provider protocol and base types."""

from typing import Optional, Protocol

from turtletrace.domain.views import Quote


class MarketDataProvider(Protocol):
    """
    Protocol for quote sources.

    ``None`` means the symbol is not recognized. Implementations may also
    raise on transport failures; MarketDataService absorbs both cases.
    """

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        """Fetch the latest quote for one symbol."""
        ...
