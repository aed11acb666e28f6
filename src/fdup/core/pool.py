"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/pool.py
Bounded hashing worker pool.

Paths submitted by the walker go into a bounded queue consumed by a fixed number of
worker threads. Submission never waits for a hash to finish; it only blocks while the
queue is full, which caps open file descriptors and memory on very large trees.

Per path a worker:
  • opens and streams the file through the hasher
  • on any OSError counts the file as unprocessable and moves on
  • on success updates the processed counters and hands (path, digest, size)
    to the digest callback
"""

import logging
import queue
import threading
from typing import Callable, List, Optional

from fdup.core.interfaces import Hasher
from fdup.core.models import ScanConfig, ScanCounters

logger = logging.getLogger(__name__)

_SENTINEL = None


class HashingPool:
    """
    Fixed set of hashing threads fed from a bounded queue.

    Usage:
        with HashingPool(hasher, on_digest, counters, workers=8) as pool:
            for path in walker.walk(root):
                pool.submit(path)
        # leaving the block drains the queue and joins the workers
    """

    def __init__(
        self,
        hasher: Hasher,
        on_digest: Callable[[str, bytes, int], None],
        counters: Optional[ScanCounters] = None,
        workers: Optional[int] = None,
        queue_size: Optional[int] = None,
        stopped_flag: Optional[Callable[[], bool]] = None
    ):
        self.hasher = hasher
        self.on_digest = on_digest
        self.counters = counters or ScanCounters()
        self.workers = workers or ScanConfig.default_workers()
        self.stopped_flag = stopped_flag
        self._queue: "queue.Queue[Optional[str]]" = queue.Queue(
            maxsize=queue_size or self.workers * ScanConfig.QUEUE_SLOTS_PER_WORKER
        )
        self._threads: List[threading.Thread] = []
        self._errors: List[BaseException] = []
        self._errors_lock = threading.Lock()
        self._closed = False
        self._sentinels_sent = 0
        self._cancelled = threading.Event()

    def start(self) -> None:
        if self._threads:
            raise RuntimeError("Hashing pool already started")
        for i in range(self.workers):
            thread = threading.Thread(target=self._run, name=f"fdup-hasher-{i}", daemon=True)
            thread.start()
            self._threads.append(thread)
        logger.debug(f"Started {self.workers} hashing workers")

    def submit(self, path: str) -> None:
        if self._closed:
            raise RuntimeError("Cannot submit to a closed hashing pool")
        self._queue.put(path)

    def cancel(self) -> None:
        """Skip every path still queued. Hashes already in progress complete."""
        self._cancelled.set()

    def join(self, raise_errors: bool = True) -> None:
        """
        Wait until every submitted path has been processed, then stop the workers.
        Re-raises the first unexpected error a worker ran into unless `raise_errors` is False.
        Safe to call again after an interrupted join.
        """
        self._closed = True
        while self._sentinels_sent < len(self._threads):
            self._queue.put(_SENTINEL)
            self._sentinels_sent += 1
        for thread in self._threads:
            thread.join()
        logger.debug("Hashing workers finished")

        if self._errors and raise_errors:
            raise self._errors[0]

    def _is_stopped(self) -> bool:
        return self._cancelled.is_set() or bool(self.stopped_flag and self.stopped_flag())

    def _run(self) -> None:
        while True:
            path = self._queue.get()
            try:
                if path is _SENTINEL:
                    return
                if self._is_stopped():
                    continue
                self._process(path)
            except Exception as e:
                logger.exception(f"Unexpected error while processing {path}")
                with self._errors_lock:
                    self._errors.append(e)
            finally:
                self._queue.task_done()

    def _process(self, path: str) -> None:
        try:
            digest, size = self.hasher.compute_digest(path)
        except OSError as e:
            logger.debug(f"Unable to hash {path}: {e}")
            self.counters.record_unprocessable()
            return

        self.counters.record_processed(size)
        self.on_digest(path, digest, size)

    def __enter__(self) -> "HashingPool":
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if exc_type is not None and issubclass(exc_type, KeyboardInterrupt):
            self.cancel()
        # An exception already on its way out takes precedence over worker errors
        self.join(raise_errors=exc_type is None)
