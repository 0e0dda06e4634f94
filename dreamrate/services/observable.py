"""Minimal observable value holder used for process-wide auth state."""

from typing import Callable, Generic, List, TypeVar

T = TypeVar("T")
Subscriber = Callable[[T], None]


class Writable(Generic[T]):
    """
    A value that notifies subscribers whenever it is set.

    Subscribers are called immediately with the current value and then after
    every `set`, in subscription order.
    """

    def __init__(self, value: T) -> None:
        self._value = value
        self._subscribers: List[Subscriber] = []

    def get(self) -> T:
        return self._value

    def set(self, value: T) -> None:
        self._value = value
        self.notify()

    def assign(self, value: T) -> None:
        """Replace the value without notifying; pair with `notify`."""
        self._value = value

    def notify(self) -> None:
        for callback in list(self._subscribers):
            callback(self._value)

    def update(self, fn: Callable[[T], T]) -> None:
        self.set(fn(self._value))

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a subscriber.

        Returns:
            A callable that removes the subscriber; calling it twice is harmless.
        """
        self._subscribers.append(callback)
        callback(self._value)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    @property
    def subscriber_count(self) -> int:
        return len(self._subscribers)
