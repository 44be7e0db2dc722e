"""Future state and settlement types."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class FutureState(Enum):
    """Lifecycle state of a future."""
    PENDING = "pending"
    FULFILLED = "fulfilled"
    REJECTED = "rejected"

    @property
    def is_settled(self) -> bool:
        return self is not FutureState.PENDING


class SettleStatus(str, Enum):
    """Outcome tag used by all_settled."""
    FULFILLED = "fulfilled"
    REJECTED = "rejected"


@dataclass(frozen=True)
class Settlement:
    """Outcome of one input of all_settled.

    Only one of ``value`` and ``reason`` is meaningful, depending on
    ``status``.
    """

    status: SettleStatus
    value: Any = None
    reason: Any = None

    @classmethod
    def fulfilled(cls, value: Any) -> "Settlement":
        return cls(SettleStatus.FULFILLED, value=value)

    @classmethod
    def rejected(cls, reason: Any) -> "Settlement":
        return cls(SettleStatus.REJECTED, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status is SettleStatus.FULFILLED

    def as_dict(self) -> Dict[str, Any]:
        if self.ok:
            return {"status": self.status.value, "value": self.value}
        return {"status": self.status.value, "reason": self.reason}

    def __repr__(self) -> str:
        if self.ok:
            return f"Settlement(fulfilled, value={self.value!r})"
        return f"Settlement(rejected, reason={self.reason!r})"
