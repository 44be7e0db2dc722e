"""
Synchronous Future

Settle-once future with continuation chaining. There is no scheduler:
continuations run on the call stack of whatever settles the future, or
inside then() when the future has already settled.
"""

import asyncio
import logging
from collections import deque
from typing import Any, Callable, Deque, Generic, Iterable, Optional, Tuple, TypeVar

from .config import get_settings
from .exceptions import FutureNotReadyError, RejectionError, UnhandledRejectionError
from .types import FutureState

T = TypeVar('T')

logger = logging.getLogger(__name__)

Settle = Callable[[Any], None]
Resolver = Callable[[Settle, Settle], Any]


def _reject_then_reraise(reject: Settle, error: UnhandledRejectionError) -> None:
    """Settle the dependent future with ``error``, then keep raising it."""
    try:
        reject(error)
    except UnhandledRejectionError:
        # ``error`` is already on its way to the caller.
        pass
    raise error


class Future(Generic[T]):
    """
    Eventual result of an operation: a value or a rejection reason.

    The resolver runs synchronously, once, and receives ``fulfill`` and
    ``reject`` capabilities bound to this future. Only the first settle
    call has any effect.

    Examples:
        f = Future(lambda fulfill, reject: fulfill(21))
        f.then(lambda x: x * 2).then(print)          # prints 42 right away

        f, fulfill, reject = Future.with_resolvers()
        f.then(print).catch(log_error)
        fulfill("done")                              # prints "done" here
    """

    def __init__(self, resolver: Optional[Resolver] = None):
        """
        Create a future.

        Args:
            resolver: Called immediately as ``resolver(fulfill, reject)``.
                Anything it raises rejects the future.
        """
        self._state = FutureState.PENDING
        self._value: Any = None
        self._locked = False
        self._handled = False
        self._draining = False
        self._constructing = True
        self._on_fulfilled: Deque[Settle] = deque()
        self._on_rejected: Deque[Settle] = deque()

        try:
            if resolver is not None:
                try:
                    resolver(self._fulfill, self._reject)
                except UnhandledRejectionError as e:
                    # The caller sees the error, so this future counts as handled.
                    self._handled = True
                    _reject_then_reraise(self._reject, e)
                except Exception as e:
                    self._reject(e)
        finally:
            self._constructing = False

    # -- settlement -------------------------------------------------------

    def _fulfill(self, value: Any = None) -> None:
        if self._state.is_settled or self._locked:
            return
        if value is self:
            self._settle(FutureState.REJECTED, TypeError("Future cannot be resolved with itself"))
        elif isinstance(value, Future):
            self._adopt(value)
        else:
            self._settle(FutureState.FULFILLED, value)

    def _reject(self, reason: Any = None) -> None:
        if self._state.is_settled or self._locked:
            return
        if reason is self:
            self._settle(FutureState.REJECTED, TypeError("Future cannot be rejected with itself"))
        elif isinstance(reason, Future):
            self._adopt(reason)
        else:
            self._settle(FutureState.REJECTED, reason)

    def _adopt(self, other: 'Future') -> None:
        # Locked: the outcome now belongs to ``other``.
        self._locked = True
        logger.debug(f"{self!r} adopting {other!r}")
        other._subscribe(
            lambda value: self._settle(FutureState.FULFILLED, value),
            lambda reason: self._settle(FutureState.REJECTED, reason),
        )

    def _settle(self, state: FutureState, value: Any) -> None:
        if self._state.is_settled:
            return
        self._state = state
        self._value = value
        logger.debug(f"{self!r} settled")

        if state is FutureState.FULFILLED:
            self._on_rejected.clear()
            self._drain(self._on_fulfilled)
            return

        self._on_fulfilled.clear()
        if not self._on_rejected:
            self._report_unhandled()
            return
        self._drain(self._on_rejected)

    def _report_unhandled(self) -> None:
        # During construction nobody can have attached a handler yet;
        # __del__ reports it if nobody ever does.
        if self._constructing:
            return
        policy = get_settings().unhandled_rejection
        if policy == "ignore":
            return
        self._handled = True
        if policy == "log":
            logger.error(f"Unhandled rejection: {self._value!r}")
            return
        raise UnhandledRejectionError(self._value)

    def _drain(self, queue: Deque[Settle]) -> None:
        """
        Run and remove every continuation in ``queue``.

        Continuations appended while draining run in the same pass. An
        unhandled rejection raised by a continuation is re-raised once the
        queue is empty, so sibling continuations still run.
        """
        lifo = get_settings().drain_order == "lifo"
        deferred: Optional[UnhandledRejectionError] = None
        self._draining = True
        try:
            while queue:
                callback = queue.pop() if lifo else queue.popleft()
                try:
                    callback(self._value)
                except UnhandledRejectionError as e:
                    if deferred is None:
                        deferred = e
        finally:
            self._draining = False
        if deferred is not None:
            raise deferred

    def _subscribe(self, on_fulfilled: Settle, on_rejected: Settle) -> None:
        self._handled = True
        if self._state is FutureState.PENDING:
            self._on_fulfilled.append(on_fulfilled)
            self._on_rejected.append(on_rejected)
            return

        if self._state is FutureState.FULFILLED:
            queue, callback = self._on_fulfilled, on_fulfilled
        else:
            queue, callback = self._on_rejected, on_rejected
        queue.append(callback)
        if not self._draining:
            self._drain(queue)

    # -- chaining ---------------------------------------------------------

    def then(
        self,
        on_fulfilled: Optional[Callable[[T], Any]] = None,
        on_rejected: Optional[Callable[[Any], Any]] = None,
    ) -> 'Future':
        """
        Chain continuations.

        Args:
            on_fulfilled: Receives the value; its return value fulfills the
                returned future. Missing: the value passes through.
            on_rejected: Receives the reason; its return value fulfills the
                returned future. Missing: the rejection passes through.

        Returns:
            New future for the handler's result. A handler that raises
            rejects it; a handler that returns a future makes it follow
            that future (return ``Future.reject(reason)`` to rethrow a
            non-exception reason).

        Example:
            future.then(lambda x: x * 2).then(str).catch(lambda e: "n/a")
        """
        def resolver(fulfill: Settle, reject: Settle) -> None:
            def fulfilled(value: Any) -> None:
                if on_fulfilled is None:
                    fulfill(value)
                    return
                try:
                    result = on_fulfilled(value)
                except UnhandledRejectionError as e:
                    _reject_then_reraise(reject, e)
                except Exception as e:
                    reject(e)
                    return
                fulfill(result)

            def rejected(reason: Any) -> None:
                if on_rejected is None:
                    reject(reason)
                    return
                try:
                    result = on_rejected(reason)
                except UnhandledRejectionError as e:
                    _reject_then_reraise(reject, e)
                except Exception as e:
                    reject(e)
                    return
                fulfill(result)

            self._subscribe(fulfilled, rejected)

        return Future(resolver)

    def catch(self, on_rejected: Callable[[Any], Any]) -> 'Future':
        """Handle a rejection; fulfilled values pass through."""
        return self.then(None, on_rejected)

    def finally_(self, on_settled: Callable[[], Any]) -> 'Future':
        """
        Run ``on_settled()`` on either outcome.

        The value or reason continues down the chain unchanged. If
        ``on_settled`` raises, the returned future rejects with that error.
        """
        def after_value(value: Any) -> Any:
            on_settled()
            return value

        def after_reason(reason: Any) -> 'Future':
            on_settled()
            return Future.reject(reason)

        return self.then(after_value, after_reason)

    # -- inspection -------------------------------------------------------

    @property
    def state(self) -> FutureState:
        return self._state

    def is_ready(self) -> bool:
        """Check if future has settled."""
        return self._state.is_settled

    def failed(self) -> bool:
        """Check if future has been rejected."""
        return self._state is FutureState.REJECTED

    def get(self) -> T:
        """
        Get the value without waiting.

        Returns:
            The future's value

        Raises:
            The rejection reason (wrapped in RejectionError when it is not
            an exception), or FutureNotReadyError while pending
        """
        if self._state is FutureState.FULFILLED:
            return self._value
        if self._state is FutureState.REJECTED:
            self._handled = True
            if isinstance(self._value, BaseException):
                raise self._value
            raise RejectionError(self._value)
        raise FutureNotReadyError("Future not ready")

    def __await__(self):
        """
        Make future awaitable.

        Parks the awaiting coroutine on an asyncio future that is woken
        by this future's settlement.
        """
        async def _await_impl():
            if self._state is FutureState.PENDING:
                waiter = asyncio.get_running_loop().create_future()

                def wake(_: Any) -> None:
                    if not waiter.done():
                        waiter.set_result(None)

                self._subscribe(wake, wake)
                await waiter
            return self.get()

        return _await_impl().__await__()

    def __repr__(self) -> str:
        if self._state is FutureState.PENDING:
            return f"<Future pending at {id(self):#x}>"
        label = "value" if self._state is FutureState.FULFILLED else "reason"
        return f"<Future {self._state.value} {label}={self._value!r}>"

    def __del__(self):
        """Log a rejection nobody attached a handler to."""
        try:
            if self._state is not FutureState.REJECTED or self._handled:
                return
            if get_settings().unhandled_rejection != "ignore":
                logger.error(f"Future rejection was never handled: {self._value!r}")
        except Exception:
            pass  # Module state may be gone at interpreter shutdown

    # -- constructors and combinators -------------------------------------

    @staticmethod
    def resolve(value: Any = None) -> 'Future':
        """Create a fulfilled future (a future argument is returned as-is)."""
        if isinstance(value, Future):
            return value
        return Future(lambda fulfill, reject: fulfill(value))

    @staticmethod
    def reject(reason: Any) -> 'Future':
        """Create a rejected future."""
        return Future(lambda fulfill, reject: reject(reason))

    @staticmethod
    def with_resolvers() -> Tuple['Future', Settle, Settle]:
        """
        Create a pending future with its capabilities.

        Returns:
            (future, fulfill, reject)
        """
        future = Future()
        return future, future._fulfill, future._reject

    @staticmethod
    def all(futures: Iterable[Any]) -> 'Future':
        """Fulfill with every value, in input order; reject on first rejection."""
        from .combinators import when_all
        return when_all(futures)

    @staticmethod
    def all_settled(futures: Iterable[Any]) -> 'Future':
        """Fulfill with a Settlement per input once all have settled."""
        from .combinators import when_all_settled
        return when_all_settled(futures)

    @staticmethod
    def race(futures: Iterable[Any]) -> 'Future':
        """Settle like the first input to settle."""
        from .combinators import when_race
        return when_race(futures)

    @staticmethod
    def any(futures: Iterable[Any]) -> 'Future':
        """Fulfill with the first value; reject once every input rejected."""
        from .combinators import when_any
        return when_any(futures)
