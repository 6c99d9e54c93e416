"""Option enums for endpoint parameters.

Each member's value is the exact string Kraken expects on the wire.
"""
from enum import Enum


class AssetPairInfo(str, Enum):
    """Info to retrieve when getting tradable asset pairs."""
    INFO = "info"
    LEVERAGE = "leverage"
    FEES = "fees"
    MARGIN = "margin"


class OHLCInterval(str, Enum):
    """Time frame interval in minutes for OHLC data."""
    I1MIN = "1"
    I5MIN = "5"
    I15MIN = "15"
    I30MIN = "30"
    I60MIN = "60"
    I240MIN = "240"
    I1440MIN = "1440"
    I10080MIN = "10080"
    I21600MIN = "21600"


class ClosedOrdersTime(str, Enum):
    BOTH = "both"
    OPEN = "open"
    CLOSE = "close"


class TradesHistoryType(str, Enum):
    ALL = "all"
    ANY_POSITION = "any position"
    CLOSED_POSITION = "closed position"
    CLOSING_POSITION = "closing position"
    NO_POSITION = "no position"


class OpenPositionConsolidation(str, Enum):
    MARKET = "market"
    PAIR = "pair"


class LedgerType(str, Enum):
    ALL = "all"
    DEPOSIT = "deposit"
    WITHDRAWAL = "withdrawal"
    TRADE = "trade"
    MARGIN = "margin"
    ROLLOVER = "rollover"
    CREDIT = "credit"
    TRANSFER = "transfer"
    SETTLED = "settled"
    STAKING = "staking"
    SALE = "sale"


class OrderType(str, Enum):
    MARKET = "market"
    LIMIT = "limit"
    STOP_LOSS = "stop-loss"
    TAKE_PROFIT = "take-profit"
    STOP_LOSS_LIMIT = "stop-loss-limit"
    TAKE_PROFIT_LIMIT = "take-profit-limit"
    SETTLE_POSITION = "settle-position"


class OrderDirection(str, Enum):
    BUY = "buy"
    SELL = "sell"


class OrderTrigger(str, Enum):
    """Price signal used to trigger stop-loss and take-profit orders."""
    INDEX = "index"
    LAST = "last"


class OrderFlag(str, Enum):
    """Order flags.

    POST: post-only order (limit orders only)
    FCIB: prefer fee in base currency, mutually exclusive with GCIQ
    GCIQ: prefer fee in quote currency, mutually exclusive with FCIB
    NOMPP: disable market price protection for market orders
    """
    POST = "post"
    FCIB = "fcib"
    GCIQ = "gciq"
    NOMPP = "nompp"


class TimeInForce(str, Enum):
    """GTC is the default; GTD requires an `expiretm`."""
    GTC = "GTC"
    IOC = "IOC"
    GTD = "GTD"


class CloseOrderType(str, Enum):
    """Conditional close order type."""
    LIMIT = "limit"
    STOP_LOSS = "stop-loss"
    TAKE_PROFIT = "take-profit"
    STOP_LOSS_LIMIT = "stop-loss-limit"
    TAKE_PROFIT_LIMIT = "take-profit-limit"


# Order types whose `price` is required, and those that also need `price2`.
PRICED_ORDER_TYPES = frozenset({
    OrderType.LIMIT,
    OrderType.STOP_LOSS,
    OrderType.TAKE_PROFIT,
    OrderType.STOP_LOSS_LIMIT,
    OrderType.TAKE_PROFIT_LIMIT,
})
SECONDARY_PRICED_ORDER_TYPES = frozenset({
    OrderType.STOP_LOSS_LIMIT,
    OrderType.TAKE_PROFIT_LIMIT,
})
