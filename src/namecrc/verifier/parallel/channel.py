"""Single-use completion channel for one dispatched job."""

from queue import Full, Queue
from typing import Generic, Optional, TypeVar

from ..errors import ChannelClosedError, DispatchError

T = TypeVar("T")

# Placed on the queue when a channel is closed without a value
_CLOSED = object()


class OneShotChannel(Generic[T]):
    """Carries exactly one value from one producer to one consumer.

    The producer either sends a value or closes the channel; the
    consumer blocks in recv() until one of the two happens. Sending
    twice, or sending after close, is a handoff defect and raises
    DispatchError.
    """

    def __init__(self) -> None:
        self._queue: Queue = Queue(maxsize=1)
        self._completed = False

    @property
    def completed(self) -> bool:
        """Whether a value was sent or the channel was closed."""
        return self._completed

    def send(self, value: T) -> None:
        if self._completed:
            raise DispatchError("channel already completed")
        try:
            self._queue.put_nowait(value)
        except Full:
            raise DispatchError("channel already completed")
        self._completed = True

    def close(self) -> None:
        """Close without a value. No-op once completed."""
        if self._completed:
            return
        self._completed = True
        self._queue.put_nowait(_CLOSED)

    def recv(self, timeout: Optional[float] = None) -> T:
        """Wait for the value.

        Raises:
            queue.Empty: If timeout elapsed before the producer finished
            ChannelClosedError: If the producer closed without sending
        """
        item = self._queue.get(timeout=timeout)
        if item is _CLOSED:
            raise ChannelClosedError("channel closed without a value")
        return item

    def try_recv(self) -> T:
        """Non-blocking recv(); raises queue.Empty if nothing is there yet."""
        item = self._queue.get_nowait()
        if item is _CLOSED:
            raise ChannelClosedError("channel closed without a value")
        return item
