"""Error taxonomy for Kraken REST API calls.

Every failed call surfaces exactly one of these:

- NetworkingError: transport failure or malformed response body
- APIError: Kraken reported an error, or returned no usable result
- ConfigurationError: bad credentials or an unusable URL
- ValidationError: request arguments rejected before anything is sent
- UnknownError: last-resort wrapper for anything unclassified
"""
from typing import List, Optional


class KrakenError(Exception):
    """Base class for all errors raised by this package."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NetworkingError(KrakenError):
    pass


class APIError(KrakenError):
    """Kraken returned a non-empty `error` array or no `result`.

    Kraken formats messages as `<severity><category>:<msg>`, e.g.
    `EGeneral:Invalid arguments`. Only the first message becomes the reason;
    the full list is kept on `errors`.
    """

    def __init__(self, reason: str, errors: Optional[List[str]] = None):
        super().__init__(reason)
        self.errors = list(errors) if errors else [reason]

    @property
    def severity(self) -> Optional[str]:
        """`E` for error, `W` for warning, None if the message is unstructured."""
        head = self.reason.split(":", 1)[0]
        if ":" in self.reason and head[:1] in ("E", "W") and len(head) > 1:
            return head[0]
        return None

    @property
    def category(self) -> Optional[str]:
        """Error category such as `General`, `Auth`, `Order`."""
        if self.severity is None:
            return None
        return self.reason.split(":", 1)[0][1:]


class ConfigurationError(KrakenError):
    pass


class ValidationError(ConfigurationError):
    """Raised by endpoint wrappers when required arguments are missing or inconsistent."""
    pass


class UnknownError(KrakenError):
    @classmethod
    def wrap(cls, exc: BaseException) -> "UnknownError":
        err = cls(str(exc) or exc.__class__.__name__)
        err.__cause__ = exc
        return err
