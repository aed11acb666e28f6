"""
Core duplicate detection engine — roots, walker, hasher, worker pool, index and removal policy.

This package contains the concurrency-critical foundation of fdup:
- RootSet: canonical, non-overlapping roots in command-line order
- ExtensionFilter / TreeWalkerImpl: eligible files under each root
- HasherImpl + Sha256AlgorithmImpl / XXHashAlgorithmImpl: whole-file content digests
- HashingPool: bounded queue feeding a fixed set of hashing threads
- DuplicateIndex: lock-guarded digest → paths mapping
- RemovalPolicy: optional deletion of duplicates, optionally limited to the last root
- DuplicateFinderImpl: engine context tying everything together

All components are pure Python with no UI dependencies.
"""

from .filters import ExtensionFilter, normalize_extensions
from .roots import RootSet, is_within
from .scanner import TreeWalkerImpl
from .hasher import HasherImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl, algorithm_for
from .index import DuplicateIndex
from .pool import HashingPool
from .removal import RemovalPolicy
from .engine import DuplicateFinderImpl
from .models import (
    Root, DuplicateGroup, RemovalOutcome, HashAlgorithmName,
    AtomicCounter, ScanCounters, ScanProgress, ScanParams, ScanResult, ScanConfig)

__all__ = [
    "ExtensionFilter",
    "normalize_extensions",
    "RootSet",
    "is_within",
    "TreeWalkerImpl",
    "HasherImpl",
    "Sha256AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "algorithm_for",
    "DuplicateIndex",
    "HashingPool",
    "RemovalPolicy",
    "DuplicateFinderImpl",
    "Root",
    "DuplicateGroup",
    "RemovalOutcome",
    "HashAlgorithmName",
    "AtomicCounter",
    "ScanCounters",
    "ScanProgress",
    "ScanParams",
    "ScanResult",
    "ScanConfig",
]
