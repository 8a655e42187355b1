"""Background execution of git actions with callbacks on the UI thread."""

import queue
import threading
from typing import Any, Callable, List, Optional

from smart_git_commit.log import get_logger

logger = get_logger("worker")

Callback = Callable[[], None]


class BackgroundWorker:
    """Runs jobs on daemon threads and queues their callbacks.

    Callbacks never run on a worker thread. They are dispatched by
    ``process_events`` or ``wait`` on whichever thread owns the UI loop.
    """

    def __init__(self):
        self._events: "queue.Queue[Callback]" = queue.Queue()
        self._threads: List[threading.Thread] = []

    def submit(
        self,
        fn: Callable[[], Any],
        on_success: Optional[Callable[[Any], None]] = None,
        on_error: Optional[Callable[[Exception], None]] = None,
    ) -> threading.Thread:
        """Start ``fn`` on a new thread."""

        def run():
            try:
                result = fn()
            except Exception as e:
                logger.debug("Background job failed: %s", e)
                if on_error is not None:
                    self._events.put(lambda err=e: on_error(err))
                else:
                    logger.error("Unhandled background error: %s", e)
            else:
                if on_success is not None:
                    self._events.put(lambda: on_success(result))

        thread = threading.Thread(target=run, name="smart-git-worker", daemon=True)
        self._threads.append(thread)
        thread.start()
        return thread

    @property
    def busy(self) -> bool:
        self._threads = [t for t in self._threads if t.is_alive()]
        return bool(self._threads)

    def process_events(self, block: bool = False, timeout: Optional[float] = None) -> int:
        """Run queued callbacks on the calling thread.

        Returns:
            Number of callbacks dispatched
        """
        dispatched = 0
        while True:
            try:
                callback = self._events.get(block=block and dispatched == 0, timeout=timeout)
            except queue.Empty:
                return dispatched
            callback()
            dispatched += 1

    def wait(self, timeout: Optional[float] = None) -> int:
        """Join outstanding jobs, then dispatch their callbacks."""
        for thread in list(self._threads):
            thread.join(timeout)
        self._threads = [t for t in self._threads if t.is_alive()]
        return self.process_events()
