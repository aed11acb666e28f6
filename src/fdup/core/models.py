"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for root normalization, duplicate indexing, removal outcomes and progress counters.
"""

import os
import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from fdup.core.filters import normalize_extensions


# =============================
# Enums
# =============================

class HashAlgorithmName(Enum):
    """
    Digest algorithm used as the duplicate equality key.
    """
    SHA256 = "sha256"
    XXHASH = "xxhash"

    @property
    def display_name(self) -> str:
        """Human-readable name for help text."""
        mapping = {
            HashAlgorithmName.SHA256: "SHA-256",
            HashAlgorithmName.XXHASH: "XXH3-128",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class RemovalOutcome(Enum):
    REMOVED = "removed"
    UNABLE_TO_REMOVE = "unable-to-remove"


# =============================
# Config
# =============================

class ScanConfig:
    CHUNK_SIZE = 1024 * 1024  # Bytes read per digest update
    QUEUE_SLOTS_PER_WORKER = 64
    PROGRESS_INTERVAL = 0.25  # Seconds between progress redraws

    @staticmethod
    def default_workers() -> int:
        return min(32, (os.cpu_count() or 1) + 4)


# ======================
#  Core Data Models
# ======================

@dataclass(frozen=True)
class Root:
    """
    A canonical, symlink-free directory to scan.
    `order` is the position of its first occurrence on the command line.
    """
    path: str
    order: int

    def __repr__(self):
        return f"<Root path={self.path}, order={self.order}>"


@dataclass
class DuplicateGroup:
    """
    Paths sharing one digest, in first-seen order.
    The first path is the kept original, the rest are its duplicates.
    """
    digest: bytes
    files: List[str]

    @property
    def original(self) -> str:
        return self.files[0]

    @property
    def duplicates(self) -> List[str]:
        return self.files[1:]

    def __repr__(self):
        return f"<DuplicateGroup digest={self.digest.hex()[:12]}, count={len(self.files)}>"


class AtomicCounter:
    """Integer counter whose increments and reads are atomic across threads."""

    def __init__(self, value: int = 0):
        self._value = value
        self._lock = threading.Lock()

    def add(self, amount: int = 1) -> int:
        with self._lock:
            self._value += amount
            return self._value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def __repr__(self):
        return f"<AtomicCounter {self.value}>"


@dataclass(frozen=True)
class ScanProgress:
    """Point-in-time copy of the scan counters, safe to hand to a renderer."""
    files_processed: int = 0
    files_unprocessable: int = 0
    bytes_processed: int = 0
    duplicates_found: int = 0
    duplicate_bytes: int = 0


class ScanCounters:
    """
    Monotonic counters written by hashing workers and read by the progress reporter.
    """

    def __init__(self):
        self.files_processed = AtomicCounter()
        self.files_unprocessable = AtomicCounter()
        self.bytes_processed = AtomicCounter()
        self.duplicates_found = AtomicCounter()
        self.duplicate_bytes = AtomicCounter()

    def record_processed(self, size: int) -> None:
        self.files_processed.add(1)
        self.bytes_processed.add(size)

    def record_unprocessable(self) -> None:
        self.files_unprocessable.add(1)

    def record_duplicate(self, size: int) -> None:
        self.duplicates_found.add(1)
        self.duplicate_bytes.add(size)

    def snapshot(self) -> ScanProgress:
        return ScanProgress(
            files_processed=self.files_processed.value,
            files_unprocessable=self.files_unprocessable.value,
            bytes_processed=self.bytes_processed.value,
            duplicates_found=self.duplicates_found.value,
            duplicate_bytes=self.duplicate_bytes.value,
        )


@dataclass
class ScanResult:
    """
    Final outcome of a run.
    In discovery mode `groups` holds every reportable group. In deletion mode duplicates
    are never appended to their groups, so `groups` is empty and the removal lists carry the outcome.
    """
    groups: List[DuplicateGroup]
    progress: ScanProgress
    roots: List[Root] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    unable_to_remove: List[str] = field(default_factory=list)
    delete: bool = False
    stopped: bool = False

    @property
    def has_duplicates(self) -> bool:
        return self.progress.duplicates_found > 0


"""
DTO for scan parameters with built-in validation.
Interface-agnostic — used by the CLI and by library callers.
"""

@dataclass
class ScanParams:
    """Parameters for a scan with validation."""
    roots: List[str] = field(default_factory=list)
    extensions: List[str] = field(default_factory=list)
    include_hidden: bool = False
    delete: bool = False
    last_only: bool = False
    case_sensitive: bool = False
    use_trash: bool = False
    algorithm: HashAlgorithmName = HashAlgorithmName.SHA256
    workers: int = field(default_factory=ScanConfig.default_workers)
    queue_size: Optional[int] = None

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if isinstance(self.algorithm, str):
            try:
                self.algorithm = HashAlgorithmName(self.algorithm.lower())
            except ValueError:
                raise ValueError(f"Unknown hash algorithm: '{self.algorithm}'")

        if self.workers < 1:
            raise ValueError("Worker count must be at least 1")

        if self.queue_size is None:
            self.queue_size = self.workers * ScanConfig.QUEUE_SLOTS_PER_WORKER
        elif self.queue_size < 1:
            raise ValueError("Queue size must be at least 1")

        self.extensions = normalize_extensions(self.extensions, self.case_sensitive)

    @staticmethod
    def from_human_readable(
            roots: Optional[List[str]] = None,
            extensions_str: str = "",
            include_hidden: bool = False,
            delete: bool = False,
            last_only: bool = False,
            case_sensitive: bool = False,
            use_trash: bool = False,
            algorithm: str = "sha256",
            workers: Optional[int] = None,
    ) -> 'ScanParams':
        """
        Factory method to create params from human-readable inputs.
        `extensions_str` is a comma-separated list such as "jpg, .PNG".
        """
        ext_list = [extensions_str] if extensions_str else []

        return ScanParams(
            roots=list(roots or []),
            extensions=ext_list,
            include_hidden=include_hidden,
            delete=delete,
            last_only=last_only,
            case_sensitive=case_sensitive,
            use_trash=use_trash,
            algorithm=HashAlgorithmName(algorithm.lower()),
            workers=workers if workers is not None else ScanConfig.default_workers(),
        )
