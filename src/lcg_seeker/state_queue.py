import threading
from typing import Generic, Optional, TypeVar


T = TypeVar("T")


class SingleSlotQueue(Generic[T]):
    """Thread-safe, latest-wins hand-off between one producer and one consumer."""

    def __init__(self) -> None:
        self._condition = threading.Condition()
        self._value: Optional[T] = None
        self._pending = False
        self._closed = False

    @property
    def closed(self) -> bool:
        with self._condition:
            return self._closed

    def publish(self, item: T) -> bool:
        """Replace any unread item. Returns False once the queue is closed."""
        with self._condition:
            if self._closed:
                return False
            self._value = item
            self._pending = True
            self._condition.notify()
            return True

    def close(self) -> None:
        """Close the queue. A pending item is still delivered before get() returns None."""
        with self._condition:
            self._closed = True
            self._condition.notify_all()

    def get(self, timeout: Optional[float] = None) -> Optional[T]:
        """Blocks until an item is pending or the queue is closed. Returns None on close."""
        with self._condition:
            ok = self._condition.wait_for(lambda: self._pending or self._closed, timeout)
            if not ok:
                raise TimeoutError("queue get() timed out")
            if not self._pending:
                return None
            item, self._value = self._value, None
            self._pending = False
            return item
