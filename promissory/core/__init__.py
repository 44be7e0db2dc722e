"""
promissory core

Settle-once futures with synchronous continuation chaining.
"""

from .future import Future
from .combinators import (
    when_all, when_all_settled, when_race, when_any,
    map_all, filter_all, reduce_all,
)
from .types import FutureState, SettleStatus, Settlement
from .exceptions import (
    FutureError, UnhandledRejectionError, AggregateRejectionError,
    RejectionError, FutureNotReadyError,
)
from .config import FutureSettings, configure, get_settings, reset_settings

__all__ = [
    'Future',
    'when_all',
    'when_all_settled',
    'when_race',
    'when_any',
    'map_all',
    'filter_all',
    'reduce_all',
    'FutureState',
    'SettleStatus',
    'Settlement',
    'FutureError',
    'UnhandledRejectionError',
    'AggregateRejectionError',
    'RejectionError',
    'FutureNotReadyError',
    'FutureSettings',
    'configure',
    'get_settings',
    'reset_settings',
]
