import logging
import threading
from queue import Empty, Full, Queue
from typing import Callable, Optional

RefreshCallback = Callable[[], None]


class RefreshSignal:
    """At most one pending "refresh needed" marker.

    Posting while a marker is already pending drops the new post.
    """

    def __init__(self):
        self._queue: Queue = Queue(maxsize=1)

    def post(self) -> bool:
        """Mark a refresh as pending.

        Returns:
            True if posted, False if one was already pending
        """
        try:
            self._queue.put_nowait(True)
        except Full:
            return False
        return True

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Consume the pending marker, waiting up to timeout for one."""
        try:
            self._queue.get(timeout=timeout)
        except Empty:
            return False
        return True

    @property
    def pending(self) -> bool:
        return self._queue.full()


class RefreshPump:
    """Delivers coalesced refresh signals to a single subscriber on its own thread."""

    def __init__(
        self,
        signal: Optional[RefreshSignal] = None,
        poll_interval: float = 0.5,
        logger: Optional[logging.Logger] = None,
    ):
        self.signal = signal or RefreshSignal()
        self.poll_interval = poll_interval
        self.logger = logger or logging.getLogger("RefreshPump")
        self._callback: Optional[RefreshCallback] = None
        self._callback_lock = threading.Lock()
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    def subscribe(self, callback: Optional[RefreshCallback]) -> None:
        """Register the subscriber, replacing any previous one."""
        with self._callback_lock:
            self._callback = callback

    def post(self) -> bool:
        return self.signal.post()

    def start(self) -> None:
        if self._thread and self._thread.is_alive():
            return
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, name="refresh-pump", daemon=True)
        self._thread.start()

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread:
            self._thread.join(timeout)
            self._thread = None

    def deliver(self) -> None:
        """Call the current subscriber once, logging its failures."""
        with self._callback_lock:
            callback = self._callback
        if callback is None:
            return
        try:
            callback()
        except Exception:
            self.logger.exception("Refresh subscriber failed")

    def _run(self) -> None:
        while not self._stop_event.is_set():
            if self.signal.wait(self.poll_interval):
                self.deliver()
