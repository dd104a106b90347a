"""Minimal push-based reactive primitives.

Provides just enough dataflow for the localization service:

    Subscription          - idempotent disposal handle (context manager)
    CompositeSubscription - disposes a group of subscriptions together
    Observable            - cold sequence defined by a subscribe function
    Subject               - hot multicast stream (error stream)
    ReactiveProperty      - current value + change notifications; emits the
                            current value on subscribe and only distinct
                            values afterwards (current locale, busy flag)
    combine_latest        - joins two sequences, emitting a pair whenever
                            either side emits once both have a value

Observers are plain callables ``on_next(value) -> None``. An observer that
raises is logged and skipped; it never breaks delivery to other observers
or the publishing code path.

Thread Safety:
    Subject and ReactiveProperty guard their observer tables with a lock and
    deliver outside it, so an observer may subscribe or dispose from inside a
    callback. combine_latest serializes its two inputs with a reentrant lock.

Python 3.13+.
"""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Callable
from typing import Self

__all__ = [
    "CompositeSubscription",
    "Observable",
    "ReactiveProperty",
    "ReadOnlyReactiveProperty",
    "Subject",
    "Subscription",
    "combine_latest",
]

logger = logging.getLogger(__name__)

type Observer[T] = Callable[[T], None]
"""Callback receiving each emitted value."""


class _Missing:
    """Sentinel type for 'no value yet'."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<MISSING>"


_MISSING = _Missing()


def _deliver[T](observer: Observer[T], value: T) -> None:
    try:
        observer(value)
    except Exception:
        logger.exception("Observer %r raised while handling %r", observer, value)


class Subscription:
    """Handle returned by subscribe(); dispose() stops delivery.

    dispose() is idempotent and thread-safe. The dispose action runs at most
    once.

    Example:
        >>> with service.observe("UI", "Menu.Play").subscribe(label.set_text):
        ...     run_screen()
    """

    __slots__ = ("_dispose_action", "_disposed", "_lock")

    def __init__(self, dispose_action: Callable[[], None] | None = None) -> None:
        self._dispose_action = dispose_action
        self._disposed = False
        self._lock = threading.Lock()

    @property
    def disposed(self) -> bool:
        """True once dispose() has been called."""
        return self._disposed

    def dispose(self) -> None:
        """Release the subscription. Safe to call more than once."""
        with self._lock:
            if self._disposed:
                return
            self._disposed = True
            action, self._dispose_action = self._dispose_action, None
        if action is not None:
            action()

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: object,
    ) -> None:
        self.dispose()


class CompositeSubscription(Subscription):
    """Subscription that owns other subscriptions.

    Subscriptions added after dispose() are disposed immediately.
    """

    __slots__ = ("_children",)

    def __init__(self, *children: Subscription) -> None:
        super().__init__(self._dispose_children)
        self._children: list[Subscription] = list(children)

    def add(self, child: Subscription) -> None:
        """Take ownership of child."""
        with self._lock:
            if not self._disposed:
                self._children.append(child)
                return
        child.dispose()

    def _dispose_children(self) -> None:
        children, self._children = self._children, []
        for child in children:
            child.dispose()


class Observable[T]:
    """Push-based sequence of values.

    The base class delegates to a subscribe function (cold observable):
    each subscribe() call runs it anew.

    Example:
        >>> greetings = Observable.of("Hello", "Hi").map(str.upper)
        >>> seen = []
        >>> greetings.subscribe(seen.append).dispose()
        >>> seen
        ['HELLO', 'HI']
    """

    __slots__ = ("_subscribe_fn",)

    def __init__(
        self, subscribe_fn: Callable[[Observer[T]], Subscription] | None = None
    ) -> None:
        self._subscribe_fn = subscribe_fn

    @classmethod
    def of(cls, *values: T) -> Observable[T]:
        """Observable that synchronously emits values to each subscriber."""

        def subscribe(observer: Observer[T]) -> Subscription:
            for value in values:
                _deliver(observer, value)
            return Subscription()

        return Observable(subscribe)

    def subscribe(self, on_next: Observer[T]) -> Subscription:
        """Start receiving values.

        Args:
            on_next: Callback invoked with each value

        Returns:
            Subscription; dispose it to stop receiving values
        """
        if self._subscribe_fn is None:
            msg = f"{type(self).__name__} must override subscribe()"
            raise NotImplementedError(msg)
        return self._subscribe_fn(on_next)

    def map[R](self, selector: Callable[[T], R]) -> Observable[R]:
        """Observable of selector(value) for each value of this one."""

        def subscribe(observer: Observer[R]) -> Subscription:
            return self.subscribe(lambda value: observer(selector(value)))

        return Observable(subscribe)


class Subject[T](Observable[T]):
    """Hot multicast stream: values go to the observers present at emit time.

    After dispose(), on_next() is a no-op and subscribe() returns an already
    disposed Subscription.
    """

    __slots__ = ("_closed", "_ids", "_lock", "_observers")

    def __init__(self) -> None:
        super().__init__()
        self._observers: dict[int, Observer[T]] = {}
        self._ids = itertools.count()
        self._lock = threading.Lock()
        self._closed = False

    @property
    def observer_count(self) -> int:
        """Number of live observers."""
        with self._lock:
            return len(self._observers)

    @property
    def closed(self) -> bool:
        """True once dispose() has been called."""
        return self._closed

    def subscribe(self, on_next: Observer[T]) -> Subscription:
        with self._lock:
            if self._closed:
                subscription = Subscription()
                subscription.dispose()
                return subscription
            observer_id = next(self._ids)
            self._observers[observer_id] = on_next
        return Subscription(lambda: self._remove(observer_id))

    def on_next(self, value: T) -> None:
        """Deliver value to every current observer."""
        with self._lock:
            if self._closed:
                return
            observers = tuple(self._observers.values())
        for observer in observers:
            _deliver(observer, value)

    def dispose(self) -> None:
        """Drop all observers and stop accepting values. Idempotent."""
        with self._lock:
            self._closed = True
            self._observers.clear()

    def _remove(self, observer_id: int) -> None:
        with self._lock:
            self._observers.pop(observer_id, None)


class ReadOnlyReactiveProperty[T](Subject[T]):
    """Subject with a current value.

    subscribe() delivers the current value immediately, then every later
    distinct value. The public surface is read-only; owners use
    ReactiveProperty to change the value.
    """

    __slots__ = ("_value",)

    def __init__(self, initial: T) -> None:
        super().__init__()
        self._value = initial

    @property
    def value(self) -> T:
        """Current value."""
        return self._value

    def subscribe(self, on_next: Observer[T]) -> Subscription:
        subscription = super().subscribe(on_next)
        if not subscription.disposed:
            _deliver(on_next, self._value)
        return subscription


class ReactiveProperty[T](ReadOnlyReactiveProperty[T]):
    """Owner-side reactive property: set_value() publishes changes."""

    __slots__ = ()

    def set_value(self, value: T) -> bool:
        """Change the value and notify observers if it differs.

        Returns:
            True if the value changed and was published
        """
        with self._lock:
            if self._closed or value == self._value:
                return False
            self._value = value
        self.on_next(value)
        return True


def combine_latest[A, B](
    first: Observable[A],
    second: Observable[B],
    *,
    second_seed: B | _Missing = _MISSING,
) -> Observable[tuple[A, B]]:
    """Combine two sequences, pairing each new value with the other's latest.

    Nothing is emitted until both sides have a value. ``second_seed``
    pre-fills the second side so the first emission of ``first`` produces
    a pair immediately.

    The second sequence is subscribed before the first, so a second that
    emits synchronously on subscribe is folded into the first pair instead
    of producing an extra emission.

    Args:
        first: Primary sequence
        second: Secondary sequence
        second_seed: Initial value for the second side (optional)

    Returns:
        Observable of (latest_first, latest_second) pairs
    """

    def subscribe(observer: Observer[tuple[A, B]]) -> Subscription:
        lock = threading.RLock()
        latest: list[object] = [_MISSING, second_seed]
        composite = CompositeSubscription()

        def emit_if_ready() -> None:
            if composite.disposed:
                return
            left, right = latest
            if left is _MISSING or right is _MISSING:
                return
            _deliver(observer, (left, right))  # type: ignore[arg-type]

        def on_first(value: A) -> None:
            with lock:
                latest[0] = value
                emit_if_ready()

        def on_second(value: B) -> None:
            with lock:
                latest[1] = value
                emit_if_ready()

        composite.add(second.subscribe(on_second))
        composite.add(first.subscribe(on_first))
        return composite

    return Observable(subscribe)
