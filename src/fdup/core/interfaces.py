"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the duplicate finder.
These protocols enforce structural typing using Python's `typing.Protocol` so that
tests and callers can swap in their own implementations.

Key Components:
---------------
- HashState / HashAlgorithm: Incremental digest functions (SHA-256, xxHash, ...).
- Hasher: Streams a whole file through a HashAlgorithm.
- TreeWalker: Enumerates eligible files under one root.
- Remover: Deletes a single file from storage.
"""

from typing import Protocol, Iterator, Tuple, Optional, Callable


class HashState(Protocol):
    """Running digest as returned by hashlib / xxhash constructors."""
    def update(self, data: bytes) -> None: ...
    def digest(self) -> bytes: ...


class HashAlgorithm(Protocol):
    """
    Interface for incremental hash algorithms.

    Allows plugging in different hashing functions like SHA-256 or xxHash
    without affecting the rest of the duplicate detection logic.
    """
    name: str

    def new(self) -> HashState:
        """Returns a fresh incremental hashing state."""
        ...


class Hasher(Protocol):
    """Interface for computing the content digest of a whole file."""
    def compute_digest(self, path: str) -> Tuple[bytes, int]:
        """
        Returns (digest, bytes read).
        Raises OSError if the file cannot be opened or read to the end.
        """
        ...


class TreeWalker(Protocol):
    """
    Interface for traversing one root and yielding paths eligible for hashing.
    """
    def walk(
        self,
        root: str,
        stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Iterator[str]:
        """
        Args:
            root: Canonical root directory.
            stopped_flag: Function that returns True if traversal should end early.

        Returns:
            Iterator over file paths to hash.

        Raises:
            RuntimeError: If the root itself cannot be traversed.
        """
        ...


class Remover(Protocol):
    """Deletes a file; raises on failure."""
    def __call__(self, path: str) -> None: ...
