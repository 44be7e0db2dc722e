"""
promissory - Synchronous Futures for Python

A settle-once future (promise) that runs continuations on the call stack
that settles it, with no event loop in between.

Features:
- then / catch / finally_ chaining with error propagation
- Transparent flattening of future-valued results
- all, all_settled, race and any combinators
- Loud unhandled-rejection reporting
- Awaitable from asyncio coroutines
"""

from .core import (
    Future,
    when_all, when_all_settled, when_race, when_any,
    map_all, filter_all, reduce_all,
    FutureState, SettleStatus, Settlement,
    FutureError, UnhandledRejectionError, AggregateRejectionError,
    RejectionError, FutureNotReadyError,
    FutureSettings, configure, get_settings, reset_settings,
)

__version__ = "0.1.0"

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
