"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

engine.py
Concurrent duplicate detection engine.

PIPELINE
--------
roots (in command-line order) → TreeWalker → HashingPool → DuplicateIndex → RemovalPolicy

Roots are walked one after another on the calling thread. Every eligible file is
queued for hashing; digests are recorded in the index as workers finish them, and in
deletion mode each newly discovered duplicate is handed to the removal policy.
The run returns once the walk has ended and the hashing queue is drained.

All mutable state lives on the engine instance: counters, index and policy.
"""

import logging
import threading
import time
from typing import Callable, Iterable, Optional

from fdup.core.hasher import HasherImpl
from fdup.core.index import DuplicateIndex
from fdup.core.interfaces import Hasher, TreeWalker
from fdup.core.models import Root, ScanCounters, ScanResult, ScanConfig
from fdup.core.pool import HashingPool
from fdup.core.removal import RemovalPolicy
from fdup.core.scanner import TreeWalkerImpl

logger = logging.getLogger(__name__)


class DuplicateFinderImpl:
    """
    Engine context for one run.

    Args:
        walker: Traversal of a single root
        hasher: Whole-file digest computation
        removal_policy: Set to enable deletion mode, None for discovery mode
        counters: Shared progress counters (pass your own to poll them during the run)
        workers: Number of hashing threads
        queue_size: Capacity of the hashing queue
    """

    def __init__(
        self,
        walker: Optional[TreeWalker] = None,
        hasher: Optional[Hasher] = None,
        removal_policy: Optional[RemovalPolicy] = None,
        counters: Optional[ScanCounters] = None,
        workers: Optional[int] = None,
        queue_size: Optional[int] = None
    ):
        self.walker = walker or TreeWalkerImpl()
        self.hasher = hasher or HasherImpl()
        self.removal_policy = removal_policy
        self.counters = counters or ScanCounters()
        self.workers = workers or ScanConfig.default_workers()
        self.queue_size = queue_size
        self.index = DuplicateIndex(self.counters, keep_duplicates=removal_policy is None)
        self._abort = threading.Event()

    @property
    def delete(self) -> bool:
        return self.removal_policy is not None

    def find_duplicates(
        self,
        roots: Iterable[Root],
        stopped_flag: Optional[Callable[[], bool]] = None
    ) -> ScanResult:
        """
        Walk every root, hash every eligible file and collect the result.

        Args:
            roots: Normalized roots; walked in ascending `order`
            stopped_flag: Function that returns True if the run should stop early.
                Stopping ends the walk and skips queued files; hashes already
                in progress still complete.

        Raises:
            RuntimeError: If a root cannot be traversed. Work already queued is
                drained before the error propagates.
            KeyboardInterrupt: Re-raised once queued files are skipped and every
                hashing worker has stopped.
        """
        roots = sorted(roots, key=lambda r: r.order)
        total_start_time = time.time()

        def is_stopped() -> bool:
            return self._abort.is_set() or bool(stopped_flag and stopped_flag())

        pool = HashingPool(
            self.hasher,
            self._on_digest,
            counters=self.counters,
            workers=self.workers,
            queue_size=self.queue_size,
            stopped_flag=is_stopped
        )

        try:
            with pool:
                for root in roots:
                    if is_stopped():
                        break
                    logger.info(f"Scanning {root.path}")
                    for path in self.walker.walk(root.path, stopped_flag=is_stopped):
                        pool.submit(path)
        except KeyboardInterrupt:
            # Ctrl+C may land during the walk or while the pool drains; either way
            # skip whatever is still queued and let in-flight hashes finish
            self._abort.set()
            pool.cancel()
            pool.join(raise_errors=False)
            raise

        progress = self.counters.snapshot()
        logger.info(
            f"Hashed {progress.files_processed} files in {time.time() - total_start_time:.3f}s, "
            f"{progress.duplicates_found} duplicates, {progress.files_unprocessable} unprocessable"
        )

        return ScanResult(
            groups=self.index.groups(),
            progress=progress,
            roots=list(roots),
            removed=self.removal_policy.removed if self.removal_policy else [],
            unable_to_remove=self.removal_policy.unable_to_remove if self.removal_policy else [],
            delete=self.delete,
            stopped=is_stopped(),
        )

    def _on_digest(self, path: str, digest: bytes, size: int) -> None:
        # The index lock is released before any filesystem delete happens
        if self.index.record(digest, path, size) and self.removal_policy is not None:
            self.removal_policy.handle(path)
