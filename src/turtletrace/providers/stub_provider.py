"""Stub market data provider for offline/testing use."""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional

from turtletrace.core.timezone import now_market
from turtletrace.domain.views import Quote

_CENT = Decimal("0.01")

# Deterministic fake quotes: symbol -> (name, price, prev_close)
_STUB_QUOTES: dict[str, tuple[str, Decimal, Decimal]] = {
    "600519.SH": ("贵州茅台", Decimal("1688.00"), Decimal("1675.50")),
    "601318.SH": ("中国平安", Decimal("42.35"), Decimal("42.80")),
    "600036.SH": ("招商银行", Decimal("33.12"), Decimal("32.90")),
    "000858.SZ": ("五粮液", Decimal("146.20"), Decimal("145.00")),
    "000333.SZ": ("美的集团", Decimal("63.45"), Decimal("63.80")),
    "300750.SZ": ("宁德时代", Decimal("188.60"), Decimal("185.30")),
    "002594.SZ": ("比亚迪", Decimal("245.10"), Decimal("248.00")),
    "601012.SH": ("隆基绿能", Decimal("21.56"), Decimal("21.40")),
}


class StubMarketDataProvider:
    """
    Stub provider with deterministic fake quotes for offline operation.

    Only the symbols in its table are recognized; anything else yields None,
    the same way a real source reports an unknown code.
    """

    def __init__(self, quotes: Optional[dict[str, tuple[str, Decimal, Decimal]]] = None):
        self._quotes = dict(_STUB_QUOTES if quotes is None else quotes)

    @property
    def symbols(self) -> list[str]:
        return sorted(self._quotes)

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        """Return the stub quote for ``symbol``, or None if unknown."""
        key = symbol.strip().upper()
        if key not in self._quotes:
            return None

        name, price, prev_close = self._quotes[key]
        change = price - prev_close
        change_percent = (change / prev_close * 100).quantize(_CENT, rounding=ROUND_HALF_UP)
        return Quote(
            symbol=key,
            name=name,
            price=price,
            change=change,
            change_percent=change_percent,
            open_price=prev_close,
            high_price=max(price, prev_close),
            low_price=min(price, prev_close),
            prev_close=prev_close,
            volume=Decimal("0"),
            timestamp=now_market(),
        )
