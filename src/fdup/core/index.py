"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/index.py
Thread-safe digest → paths index; the single source of truth for "is this a duplicate".
"""

import threading
from typing import Dict, List, Optional

from fdup.core.models import DuplicateGroup, ScanCounters


class DuplicateIndex:
    """
    Maps each digest to the ordered list of paths that produced it.

    The first path recorded for a digest is the original. Later paths with the
    same digest are duplicates: they bump the duplicate counters and, unless
    duplicates are being removed, are appended to the group for reporting.
    All access is serialized by a single lock.
    """

    def __init__(self, counters: Optional[ScanCounters] = None, keep_duplicates: bool = True):
        self.counters = counters or ScanCounters()
        self.keep_duplicates = keep_duplicates
        self._groups: Dict[bytes, List[str]] = {}
        self._lock = threading.Lock()

    def record(self, digest: bytes, path: str, size: int) -> bool:
        """
        Index `path` under `digest`.
        Returns True if an earlier path already produced this digest.
        """
        with self._lock:
            paths = self._groups.get(digest)
            if paths is None:
                self._groups[digest] = [path]
                return False
            self.counters.record_duplicate(size)
            if self.keep_duplicates:
                paths.append(path)
            return True

    def groups(self) -> List[DuplicateGroup]:
        """Reportable groups (two or more paths), in first-seen digest order."""
        with self._lock:
            return [
                DuplicateGroup(digest=digest, files=list(paths))
                for digest, paths in self._groups.items()
                if len(paths) > 1
            ]
