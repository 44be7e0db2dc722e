"""
Future Combinators

Multi-future patterns built only on Future's public contract. Each
returns a new Future and leaves its inputs untouched. Inputs may be any
iterable; plain values are treated as already-fulfilled futures.
"""

from typing import Any, Callable, Iterable, List, TypeVar

from .exceptions import AggregateRejectionError
from .future import Future
from .types import Settlement

T = TypeVar('T')
U = TypeVar('U')


def _as_futures(futures: Iterable[Any]) -> List[Future]:
    return [f if isinstance(f, Future) else Future.resolve(f) for f in futures]


def when_all(futures: Iterable[Any]) -> Future:
    """
    Wait for all futures to fulfill.

    Args:
        futures: Futures (or plain values) to join

    Returns:
        Future of the list of values, in input order. Rejects with the
        first rejection reason; later settlements are ignored.

    Example:
        when_all([load_user(uid), load_orders(uid)]).then(render)
    """
    inputs = _as_futures(futures)

    def resolver(fulfill, reject):
        if not inputs:
            fulfill([])
            return

        results: List[Any] = [None] * len(inputs)
        completed = 0

        def collect(index: int, value: Any) -> None:
            nonlocal completed
            results[index] = value
            completed += 1
            if completed == len(inputs):
                fulfill(results)

        for index, future in enumerate(inputs):
            future.then(lambda value, index=index: collect(index, value), reject)

    return Future(resolver)


def when_all_settled(futures: Iterable[Any]) -> Future:
    """
    Wait for every future to settle, either way.

    Returns:
        Future of a list of Settlement records, in input order. Never
        rejects.
    """
    inputs = _as_futures(futures)

    def resolver(fulfill, reject):
        if not inputs:
            fulfill([])
            return

        results: List[Any] = [None] * len(inputs)
        completed = 0

        def record(index: int, settlement: Settlement) -> None:
            nonlocal completed
            results[index] = settlement
            completed += 1
            if completed == len(inputs):
                fulfill(results)

        for index, future in enumerate(inputs):
            future.then(
                lambda value, index=index: record(index, Settlement.fulfilled(value)),
                lambda reason, index=index: record(index, Settlement.rejected(reason)),
            )

    return Future(resolver)


def when_race(futures: Iterable[Any]) -> Future:
    """
    Settle like whichever future settles first.

    Every input feeds the same fulfill/reject pair; the first call wins
    and the rest are no-ops. With no inputs the result stays pending.
    """
    inputs = _as_futures(futures)

    def resolver(fulfill, reject):
        for future in inputs:
            future.then(fulfill, reject)

    return Future(resolver)


def when_any(futures: Iterable[Any]) -> Future:
    """
    Wait for the first future to fulfill.

    Returns:
        Future of the first fulfilled value. Rejects with an
        AggregateRejectionError holding every reason, in input order,
        once all inputs have rejected (immediately when there are none).
    """
    inputs = _as_futures(futures)

    def resolver(fulfill, reject):
        if not inputs:
            reject(AggregateRejectionError([]))
            return

        reasons: List[Any] = [None] * len(inputs)
        rejected = 0

        def fail(index: int, reason: Any) -> None:
            nonlocal rejected
            reasons[index] = reason
            rejected += 1
            if rejected == len(inputs):
                reject(AggregateRejectionError(reasons))

        for index, future in enumerate(inputs):
            future.then(fulfill, lambda reason, index=index: fail(index, reason))

    return Future(resolver)


def map_all(func: Callable[[T], U], futures: Iterable[Any]) -> Future:
    """
    Map a function over the values of futures.

    Example:
        map_all(lambda item: item.price, [get_item(i) for i in ids])
    """
    return when_all(futures).then(lambda results: [func(r) for r in results])


def filter_all(predicate: Callable[[T], bool], futures: Iterable[Any]) -> Future:
    """Keep the values of futures that satisfy ``predicate``."""
    return when_all(futures).then(lambda results: [r for r in results if predicate(r)])


def reduce_all(func: Callable[[U, T], U], futures: Iterable[Any], initial: U) -> Future:
    """
    Reduce the values of futures.

    Args:
        func: Reduction function
        futures: Futures to join
        initial: Initial accumulator value

    Returns:
        Future of the reduced value
    """
    def reduce(results: List[Any]) -> Any:
        accumulator = initial
        for result in results:
            accumulator = func(accumulator, result)
        return accumulator

    return when_all(futures).then(reduce)
