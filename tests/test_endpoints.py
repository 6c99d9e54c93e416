import pytest

from krakenapi.encoding import RequestCategory
from krakenapi.endpoints import KrakenEndpoints
from krakenapi.errors import ValidationError
from krakenapi.types import LedgerType, OHLCInterval, OrderFlag, OrderType, TimeInForce


class RecordingEndpoints(KrakenEndpoints):
    """Captures what each wrapper hands to the core instead of sending it."""

    def __init__(self):
        self.calls = []

    def _call(self, category, method, params=None):
        self.calls.append((category, method, params))
        return {"method": method}

    @property
    def last(self):
        return self.calls[-1]


@pytest.fixture
def kraken():
    return RecordingEndpoints()


def test_server_time(kraken):
    assert kraken.server_time() == {"method": "Time"}
    assert kraken.last == (RequestCategory.PUBLIC, "Time", {})


def test_assets_joins_list(kraken):
    kraken.assets(["XBT", "ETH"])
    assert kraken.last == (RequestCategory.PUBLIC, "Assets", {"asset": "XBT,ETH", "aclass": "currency"})


def test_ohlc_uses_wire_interval_and_optional_since(kraken):
    kraken.ohlc_data("XBTEUR", interval=OHLCInterval.I15MIN)
    assert kraken.last[2] == {"pair": "XBTEUR", "interval": "15"}
    kraken.ohlc_data("XBTEUR", interval="60", since=1548111600)
    assert kraken.last[2] == {"pair": "XBTEUR", "interval": "60", "since": "1548111600"}


def test_unknown_option_string_is_rejected(kraken):
    with pytest.raises(ValidationError, match="OHLCInterval"):
        kraken.ohlc_data("XBTEUR", interval="7")
    assert kraken.calls == []


def test_order_book_depth_bounds(kraken):
    kraken.order_book("XBTEUR", count=10)
    assert kraken.last == (RequestCategory.PUBLIC, "Depth", {"pair": "XBTEUR", "count": "10"})
    with pytest.raises(ValidationError):
        kraken.order_book("XBTEUR", count=0)


def test_account_balance_is_private_with_no_params(kraken):
    kraken.account_balance()
    assert kraken.last == (RequestCategory.PRIVATE, "Balance", {})


def test_closed_orders_params(kraken):
    kraken.closed_orders(trades=True, start=1, ofs=50, closetime="close")
    assert kraken.last[1:] == (
        "ClosedOrders",
        {"trades": "true", "start": "1", "ofs": "50", "closetime": "close"},
    )


def test_query_orders_limits(kraken):
    kraken.query_orders(["OQCLML-BW3P3-BUCMWZ"], userref=7)
    assert kraken.last[2] == {"txid": "OQCLML-BW3P3-BUCMWZ", "trades": "false", "userref": "7"}
    with pytest.raises(ValidationError):
        kraken.query_orders([""])
    with pytest.raises(ValidationError):
        kraken.query_orders([f"T{i}" for i in range(51)])


def test_trades_history_type(kraken):
    kraken.trades_history(trade_type="closed position")
    assert kraken.last[2] == {"type": "closed position", "trades": "false"}


def test_ledgers_defaults(kraken):
    kraken.ledgers_info(ledger_type=LedgerType.DEPOSIT)
    assert kraken.last[1:] == ("Ledgers", {"asset": "all", "aclass": "currency", "type": "deposit"})


def test_trade_volume_fee_info(kraken):
    kraken.trade_volume(["XBTUSD", "XETHZEUR"], fee_info=True)
    assert kraken.last[2] == {"pair": "XBTUSD,XETHZEUR", "fee-info": "true"}


def test_add_order_limit(kraken):
    kraken.add_order(
        OrderType.LIMIT,
        "buy",
        "XBTUSD",
        volume="1.25",
        price="37500",
        oflags=[OrderFlag.POST, "fcib"],
        close_order_type="stop-loss",
        close_price="30000",
        userref=42,
    )
    category, method, params = kraken.last
    assert (category, method) == (RequestCategory.PRIVATE, "AddOrder")
    assert params == {
        "ordertype": "limit",
        "type": "buy",
        "pair": "XBTUSD",
        "volume": "1.25",
        "trigger": "last",
        "timeinforce": "GTC",
        "starttm": "0",
        "expiretm": "0",
        "validate": "false",
        "price": "37500",
        "oflags": "post,fcib",
        "close[ordertype]": "stop-loss",
        "close[price]": "30000",
        "userref": "42",
    }


def test_add_order_market_needs_no_price(kraken):
    kraken.add_order("market", "sell", "XBTUSD", volume="0.5", validate=True)
    assert kraken.last[2]["validate"] == "true"
    assert "price" not in kraken.last[2]


@pytest.mark.parametrize(
    "kwargs, message",
    [
        ({"order_type": "limit", "volume": "1"}, "price"),
        ({"order_type": "stop-loss-limit", "volume": "1", "price": "1"}, "price2"),
        ({"order_type": "market"}, "volume"),
        ({"order_type": "market", "volume": "1", "timeinforce": TimeInForce.GTD}, "expiretm"),
        ({"order_type": "market", "volume": "1", "oflags": ["fcib", "gciq"]}, "mutually exclusive"),
        ({"order_type": "market", "volume": "1", "close_price": "1"}, "close_order_type"),
        ({"order_type": "iceberg", "volume": "1"}, "OrderType"),
    ],
)
def test_add_order_validation(kraken, kwargs, message):
    with pytest.raises(ValidationError, match=message):
        kraken.add_order(direction="buy", pair="XBTUSD", **kwargs)
    assert kraken.calls == []


def test_add_order_requires_pair(kraken):
    with pytest.raises(ValidationError, match="pair"):
        kraken.add_order("market", "buy", "", volume="1")


def test_cancel_endpoints(kraken):
    kraken.cancel_order("OYVGEW-VYV5B-UUEXSK")
    assert kraken.last[1:] == ("CancelOrder", {"txid": "OYVGEW-VYV5B-UUEXSK"})
    kraken.cancel_all_orders()
    assert kraken.last[1:] == ("CancelAll", {})
    kraken.cancel_all_after(60)
    assert kraken.last[1:] == ("CancelAllOrdersAfter", {"timeout": "60"})
