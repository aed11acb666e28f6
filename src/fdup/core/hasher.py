"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

hasher.py
Implements whole-file content hashing with pluggable hash algorithms.

SHA-256 is the default key: its collision probability is treated as zero, so
equal digests mean equal content. xxHash (XXH3-128) is available for speed on
trusted data.
"""

import hashlib
from typing import Dict, Tuple

import xxhash

from fdup.core.interfaces import HashAlgorithm, HashState
from fdup.core.models import HashAlgorithmName, ScanConfig


# Use the same way to implement and use any other hashing algorithm
class Sha256AlgorithmImpl(HashAlgorithm):
    name = "sha256"

    def new(self) -> HashState:
        return hashlib.sha256()


class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxhash"

    def new(self) -> HashState:
        return xxhash.xxh3_128()


ALGORITHMS: Dict[HashAlgorithmName, type] = {
    HashAlgorithmName.SHA256: Sha256AlgorithmImpl,
    HashAlgorithmName.XXHASH: XXHashAlgorithmImpl,
}


def algorithm_for(name: HashAlgorithmName) -> HashAlgorithm:
    return ALGORITHMS[name]()


class HasherImpl:
    """
    Streams the full content of a file through the configured algorithm.
    Partial digests are never returned: any read error propagates as OSError.
    """

    def __init__(self, algorithm: HashAlgorithm = None, chunk_size: int = ScanConfig.CHUNK_SIZE):
        self.algorithm = algorithm or Sha256AlgorithmImpl()
        self.chunk_size = chunk_size

    def compute_digest(self, path: str) -> Tuple[bytes, int]:
        state = self.algorithm.new()
        size = 0
        with open(path, 'rb') as f:
            while True:
                data = f.read(self.chunk_size)
                if not data:
                    break
                state.update(data)
                size += len(data)
        return state.digest(), size
