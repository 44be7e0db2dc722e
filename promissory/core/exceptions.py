"""Future exception hierarchy."""

from typing import Any, List


class FutureError(Exception):
    """Base exception for all future operations."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnhandledRejectionError(FutureError):
    """A future rejected with no rejection handler attached."""

    def __init__(self, reason: Any):
        self.reason = reason
        super().__init__(f"Unhandled rejection: {reason!r}")


class AggregateRejectionError(FutureError):
    """Every input of an any-combinator rejected.

    ``reasons`` holds the rejection reasons in input order.
    """

    def __init__(self, reasons: List[Any]):
        self.reasons = list(reasons)
        super().__init__(f"All {len(self.reasons)} futures were rejected")


class RejectionError(FutureError):
    """Wraps a non-exception rejection reason when it has to be raised."""

    def __init__(self, reason: Any):
        self.reason = reason
        super().__init__(f"Future rejected: {reason!r}")


class FutureNotReadyError(FutureError):
    """Value requested from a future that has not settled."""
    pass
