"""Typed wrappers for the Kraken REST endpoints.

`KrakenEndpoints` maps keyword arguments onto the string parameters each
endpoint expects and hands them to `self._call`. Both clients mix it in:
on KrakenClient the wrappers return the result mapping, on
AsyncKrakenClient they return an awaitable of it.

[See API Reference](https://docs.kraken.com/rest/)
"""
from enum import Enum
from typing import Dict, Iterable, Optional, Type, TypeVar, Union

from .encoding import RequestCategory
from .errors import ValidationError
from .types import (
    PRICED_ORDER_TYPES,
    SECONDARY_PRICED_ORDER_TYPES,
    AssetPairInfo,
    CloseOrderType,
    ClosedOrdersTime,
    LedgerType,
    OHLCInterval,
    OpenPositionConsolidation,
    OrderDirection,
    OrderFlag,
    OrderTrigger,
    OrderType,
    TimeInForce,
    TradesHistoryType,
)

E = TypeVar("E", bound=Enum)

MAX_QUERY_TXIDS = 50
MAX_BOOK_DEPTH = 500


def _option(enum_cls: Type[E], value: Union[E, str]) -> E:
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValidationError(f"Invalid {enum_cls.__name__} {value!r}; expected one of: {allowed}")


def _bool(value: bool) -> str:
    return "true" if value else "false"


def _joined(values: Iterable[str]) -> str:
    return ",".join(str(v) for v in values)


def _put_optional(params: Dict[str, str], **values) -> Dict[str, str]:
    for key, value in values.items():
        if value is not None:
            params[key] = str(value)
    return params


class KrakenEndpoints:
    """Endpoint wrappers; the host class supplies `_call(category, method, params)`."""

    def _public(self, method: str, params: Optional[Dict[str, str]] = None):
        return self._call(RequestCategory.PUBLIC, method, params or {})

    def _private(self, method: str, params: Optional[Dict[str, str]] = None):
        return self._call(RequestCategory.PRIVATE, method, params or {})

    # Market data

    def server_time(self):
        """Get the server's time."""
        return self._public("Time")

    def system_status(self):
        """Get the current system status or trading mode."""
        return self._public("SystemStatus")

    def assets(self, assets: Optional[Iterable[str]] = None, aclass: str = "currency"):
        """Get information about assets available for deposit, withdrawal, trading and staking.

        Args:
            assets: Assets to get info on (e.g. ["XBT", "ETH"]); all when omitted
            aclass: Asset class
        """
        params: Dict[str, str] = {}
        if assets is not None:
            params["asset"] = _joined(assets)
        params["aclass"] = aclass
        return self._public("Assets", params)

    def asset_pairs(
        self,
        pairs: Optional[Iterable[str]] = None,
        info: Union[AssetPairInfo, str] = AssetPairInfo.INFO,
    ):
        """Get tradable asset pairs."""
        params: Dict[str, str] = {}
        if pairs is not None:
            params["pair"] = _joined(pairs)
        params["info"] = _option(AssetPairInfo, info).value
        return self._public("AssetPairs", params)

    def ticker(self, pair: str):
        """Get ticker information for an asset pair (e.g. "XBTUSD")."""
        return self._public("Ticker", {"pair": pair})

    def ohlc_data(
        self,
        pair: str,
        interval: Union[OHLCInterval, str] = OHLCInterval.I1MIN,
        since: Optional[int] = None,
    ):
        """Get OHLC data.

        The last entry is the current, not-yet-committed frame and is always
        present regardless of `since`.
        """
        params = {"pair": pair, "interval": _option(OHLCInterval, interval).value}
        return self._public("OHLC", _put_optional(params, since=since))

    def order_book(self, pair: str, count: int = 100):
        """Get the order book, `count` levels per side (1..500)."""
        if not 1 <= count <= MAX_BOOK_DEPTH:
            raise ValidationError(f"count must be between 1 and {MAX_BOOK_DEPTH}, got {count}")
        return self._public("Depth", {"pair": pair, "count": str(count)})

    def trades(self, pair: str, since: Optional[int] = None):
        """Get the last 1000 trades, or those since `since`."""
        return self._public("Trades", _put_optional({"pair": pair}, since=since))

    def spread(self, pair: str, since: Optional[int] = None):
        """Get recent bid/ask spreads."""
        return self._public("Spread", _put_optional({"pair": pair}, since=since))

    # Account data

    def account_balance(self):
        """Get all cash balances, net of pending withdrawals."""
        return self._private("Balance")

    def trade_balance(self, asset: str = "ZUSD"):
        return self._private("TradeBalance", {"asset": asset})

    def open_orders(self, trades: bool = False, userref: Optional[int] = None):
        params = {"trades": _bool(trades)}
        return self._private("OpenOrders", _put_optional(params, userref=userref))

    def closed_orders(
        self,
        trades: bool = False,
        userref: Optional[int] = None,
        start: Optional[int] = None,
        end: Optional[int] = None,
        ofs: Optional[int] = None,
        closetime: Union[ClosedOrdersTime, str] = ClosedOrdersTime.BOTH,
    ):
        """Get orders that have been closed (filled or cancelled), 50 at a time.

        If an order's txid is given for `start` or `end`, the order's opening
        time is used.
        """
        params = {"trades": _bool(trades)}
        _put_optional(params, userref=userref, start=start, end=end, ofs=ofs)
        params["closetime"] = _option(ClosedOrdersTime, closetime).value
        return self._private("ClosedOrders", params)

    def query_orders(self, txids: Iterable[str], trades: bool = False, userref: Optional[int] = None):
        txids = [t for t in txids if t]
        if not txids:
            raise ValidationError("query_orders needs at least one txid")
        if len(txids) > MAX_QUERY_TXIDS:
            raise ValidationError(f"query_orders accepts at most {MAX_QUERY_TXIDS} txids")
        params = {"txid": _joined(txids), "trades": _bool(trades)}
        return self._private("QueryOrders", _put_optional(params, userref=userref))

    def trades_history(
        self,
        trade_type: Union[TradesHistoryType, str] = TradesHistoryType.ALL,
        trades: bool = False,
        start: Optional[int] = None,
        end: Optional[int] = None,
        ofs: Optional[int] = None,
    ):
        params = {"type": _option(TradesHistoryType, trade_type).value, "trades": _bool(trades)}
        return self._private("TradesHistory", _put_optional(params, start=start, end=end, ofs=ofs))

    def query_trades(self, txids: Optional[Iterable[str]] = None, trades: bool = False):
        params: Dict[str, str] = {}
        if txids is not None:
            params["txid"] = _joined(txids)
        params["trades"] = _bool(trades)
        return self._private("QueryTrades", params)

    def open_positions(
        self,
        txids: Optional[Iterable[str]] = None,
        docalcs: bool = False,
        consolidation: Union[OpenPositionConsolidation, str] = OpenPositionConsolidation.MARKET,
    ):
        params: Dict[str, str] = {}
        if txids is not None:
            params["txid"] = _joined(txids)
        params["docalcs"] = _bool(docalcs)
        params["consolidation"] = _option(OpenPositionConsolidation, consolidation).value
        return self._private("OpenPositions", params)

    def ledgers_info(
        self,
        asset: Iterable[str] = ("all",),
        aclass: str = "currency",
        ledger_type: Union[LedgerType, str] = LedgerType.ALL,
        start: Optional[int] = None,
        end: Optional[int] = None,
        ofs: Optional[int] = None,
    ):
        params = {
            "asset": _joined(asset),
            "aclass": aclass,
            "type": _option(LedgerType, ledger_type).value,
        }
        return self._private("Ledgers", _put_optional(params, start=start, end=end, ofs=ofs))

    def query_ledgers(self, ids: Optional[Iterable[str]] = None, trades: bool = False):
        params: Dict[str, str] = {}
        if ids is not None:
            params["id"] = _joined(ids)
        params["trades"] = _bool(trades)
        return self._private("QueryLedgers", params)

    def trade_volume(self, pairs: Iterable[str], fee_info: Optional[bool] = None):
        params = {"pair": _joined(pairs)}
        if fee_info is not None:
            params["fee-info"] = _bool(fee_info)
        return self._private("TradeVolume", params)

    # Trading

    def add_order(
        self,
        order_type: Union[OrderType, str],
        direction: Union[OrderDirection, str],
        pair: str,
        volume: Optional[str] = None,
        price: Optional[str] = None,
        price2: Optional[str] = None,
        trigger: Union[OrderTrigger, str] = OrderTrigger.LAST,
        leverage: Optional[str] = None,
        oflags: Optional[Iterable[Union[OrderFlag, str]]] = None,
        timeinforce: Union[TimeInForce, str] = TimeInForce.GTC,
        starttm: str = "0",
        expiretm: str = "0",
        close_order_type: Optional[Union[CloseOrderType, str]] = None,
        close_price: Optional[str] = None,
        close_price2: Optional[str] = None,
        deadline: Optional[str] = None,
        validate: bool = False,
        userref: Optional[int] = None,
    ):
        """Place a new order.

        Arguments are checked before anything is sent; missing or
        inconsistent ones raise ValidationError.

        Args:
            order_type: market, limit, stop-loss, ...
            direction: buy or sell
            pair: Asset pair (e.g. "XBTUSD")
            volume: Order quantity in base asset
            price: Limit price, or trigger price for stop/take-profit types
            price2: Limit price for the *-limit types
            timeinforce: GTD requires `expiretm`
            validate: Validate inputs on Kraken's side without submitting
        """
        order_type = _option(OrderType, order_type)
        direction = _option(OrderDirection, direction)
        flags = [_option(OrderFlag, f) for f in oflags] if oflags is not None else None
        timeinforce = _option(TimeInForce, timeinforce)

        if not pair:
            raise ValidationError("add_order requires a pair")
        if volume is None:
            raise ValidationError("add_order requires a volume")
        if order_type in PRICED_ORDER_TYPES and price is None:
            raise ValidationError(f"{order_type.value} orders require a price")
        if order_type in SECONDARY_PRICED_ORDER_TYPES and price2 is None:
            raise ValidationError(f"{order_type.value} orders require price2")
        if timeinforce == TimeInForce.GTD and str(expiretm) == "0":
            raise ValidationError("GTD orders require an expiretm")
        if flags and OrderFlag.FCIB in flags and OrderFlag.GCIQ in flags:
            raise ValidationError("fcib and gciq order flags are mutually exclusive")
        if close_order_type is None and (close_price is not None or close_price2 is not None):
            raise ValidationError("close_price requires close_order_type")

        params = {
            "ordertype": order_type.value,
            "type": direction.value,
            "pair": pair,
            "volume": str(volume),
            "trigger": _option(OrderTrigger, trigger).value,
            "timeinforce": timeinforce.value,
            "starttm": str(starttm),
            "expiretm": str(expiretm),
            "validate": _bool(validate),
        }
        _put_optional(params, price=price, price2=price2, leverage=leverage)
        if flags:
            params["oflags"] = _joined(f.value for f in flags)
        if close_order_type is not None:
            params["close[ordertype]"] = _option(CloseOrderType, close_order_type).value
        _put_optional(params, **{"close[price]": close_price, "close[price2]": close_price2})
        _put_optional(params, deadline=deadline, userref=userref)
        return self._private("AddOrder", params)

    def cancel_order(self, txid: str):
        """Cancel an open order by txid or userref."""
        return self._private("CancelOrder", {"txid": str(txid)})

    def cancel_all_orders(self):
        return self._private("CancelAll")

    def cancel_all_after(self, timeout: int):
        """Dead man's switch: cancel all orders after `timeout` seconds; 0 disables it."""
        if timeout < 0:
            raise ValidationError(f"timeout must be non-negative, got {timeout}")
        return self._private("CancelAllOrdersAfter", {"timeout": str(timeout)})
