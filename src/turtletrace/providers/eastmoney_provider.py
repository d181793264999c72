"""EastMoney push2 quote provider for Shanghai and Shenzhen listings."""

import logging
import re
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

import httpx

from turtletrace.core.timezone import now_market
from turtletrace.domain.views import Quote

logger = logging.getLogger(__name__)

QUOTE_URL = "https://push2.eastmoney.com/api/qt/stock/get"

# f43 last, f44 high, f45 low, f46 open, f58 name, f60 previous close
QUOTE_FIELDS = "f43,f44,f45,f46,f58,f60"

_CENT = Decimal("0.01")
_SUFFIX_RE = re.compile(r"^(\d{6})\.(SH|SZ)$")
_PREFIX_RE = re.compile(r"^(SH|SZ)\.?(\d{6})$")
_BARE_RE = re.compile(r"^\d{6}$")


def to_secid(symbol: str) -> str:
    """
    Convert a symbol to EastMoney's ``<market>.<code>`` security id.

    Accepts ``600519.SH``, ``SH600519``, ``SH.600519`` and bare six-digit
    codes (Shanghai when the code starts with 5, 6 or 9, Shenzhen otherwise).
    Shanghai maps to market 1 and Shenzhen to market 0.

    Raises:
        ValueError: If the symbol matches none of those forms.
    """
    value = symbol.strip().upper()
    match = _SUFFIX_RE.match(value)
    if match:
        code, market = match.group(1), match.group(2)
    else:
        match = _PREFIX_RE.match(value)
        if match:
            market, code = match.group(1), match.group(2)
        elif _BARE_RE.match(value):
            code = value
            market = "SH" if value[0] in "569" else "SZ"
        else:
            raise ValueError(f"Unsupported symbol format: {symbol}")
    prefix = "1" if market == "SH" else "0"
    return f"{prefix}.{code}"


def _price(value: Any) -> Optional[Decimal]:
    # Suspended listings report "-" instead of a number
    if value is None or value == "-":
        return None
    try:
        return Decimal(str(value)).quantize(_CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return None


class EastMoneyMarketDataProvider:
    """
    Live quote source backed by the public EastMoney quote endpoint.

    Every failure (bad symbol, HTTP error, malformed payload) is logged and
    reported as ``None``, which callers treat as "symbol not recognized".
    """

    def __init__(
        self,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._timeout = timeout_seconds
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self._timeout, transport=self._transport)

    async def get_quote(self, symbol: str) -> Optional[Quote]:
        try:
            secid = to_secid(symbol)
        except ValueError as e:
            logger.warning("%s", e)
            return None

        params = {"fltt": "2", "invt": "2", "secid": secid, "fields": QUOTE_FIELDS}
        try:
            async with self._client() as client:
                resp = await client.get(QUOTE_URL, params=params)
                resp.raise_for_status()
                payload = resp.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Quote request for %s failed: %s", symbol, e)
            return None

        return self._parse(symbol.strip().upper(), payload)

    @staticmethod
    def _parse(symbol: str, payload: Any) -> Optional[Quote]:
        data = payload.get("data") if isinstance(payload, dict) else None
        if not data or not data.get("f58"):
            logger.info("No quote data for %s", symbol)
            return None

        price = _price(data.get("f43"))
        if price is None:
            logger.info("Quote for %s has no last price", symbol)
            return None

        prev_close = _price(data.get("f60"))
        if prev_close:
            change = price - prev_close
            change_percent = (change / prev_close * 100).quantize(_CENT, rounding=ROUND_HALF_UP)
        else:
            change = Decimal("0")
            change_percent = Decimal("0")

        return Quote(
            symbol=symbol,
            name=str(data["f58"]),
            price=price,
            change=change,
            change_percent=change_percent,
            open_price=_price(data.get("f46")),
            high_price=_price(data.get("f44")),
            low_price=_price(data.get("f45")),
            prev_close=prev_close,
            # The endpoint fields requested do not include volume
            volume=Decimal("0"),
            timestamp=now_market(),
        )
