# homeclean/notifier.py
"""
Fire-and-forget dispatch for notification jobs.

Jobs go into a bounded queue drained by one daemon thread. The request
path never waits on a job and never sees its outcome: a full queue drops
the job, a failing job is logged and forgotten. Nothing is retried.
"""

from __future__ import annotations

import queue
import threading
from typing import Any, Callable

from homeclean.logging import get_logger

logger = get_logger(__name__)


class Notifier:
    def __init__(self, maxsize: int = 100) -> None:
        self._q: queue.Queue = queue.Queue(maxsize=max(1, int(maxsize)))
        self._lock = threading.Lock()
        self._thread: threading.Thread | None = None

    def _ensure_worker(self) -> None:
        with self._lock:
            if self._thread is None or not self._thread.is_alive():
                self._thread = threading.Thread(target=self._worker, name="notifier", daemon=True)
                self._thread.start()

    def _worker(self) -> None:
        while True:
            name, fn, args, kwargs = self._q.get()
            try:
                fn(*args, **kwargs)
                logger.debug("notify.done", extra={"job": name})
            except Exception as e:
                logger.exception("notify.failed", extra={"job": name, "error": str(e)})
            finally:
                self._q.task_done()

    def submit(self, fn: Callable[..., Any], *args: Any, **kwargs: Any) -> bool:
        """Queues fn(*args, **kwargs). Returns False when the job was dropped."""
        name = getattr(fn, "__name__", repr(fn))
        self._ensure_worker()
        try:
            self._q.put_nowait((name, fn, args, kwargs))
        except queue.Full:
            logger.warning("notify.dropped", extra={"job": name, "queue_size": self._q.maxsize})
            return False
        logger.debug("notify.queued", extra={"job": name, "pending": self._q.qsize()})
        return True

    def join(self) -> None:
        """Blocks until every queued job has run."""
        self._q.join()
