"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/hasher.py
Implements file hashing with pluggable hash algorithms.

HasherImpl streams whole files through the identity-key algorithm (SHA-256)
and hashes leading chunks with a fast non-cryptographic algorithm (xxHash64)
for the pre-screen stage.
"""

import hashlib
import logging

import xxhash

from dedupkit.core.models import FileCandidate
from dedupkit.core.errors import SkippedEntryError
from dedupkit.core.interfaces import Hasher, HashAlgorithm

logger = logging.getLogger(__name__)

READ_BLOCK_SIZE = 1024 * 1024  # bytes read per iteration when streaming a file
FRONT_CHUNK_SIZE = 64 * 1024   # bytes compared by the pre-screen front hash


# Use the same way to implement and use any other hashing algorithm
class Sha256AlgorithmImpl(HashAlgorithm):
    name = "sha256"

    @staticmethod
    def new():
        return hashlib.sha256()


class XXHashAlgorithmImpl(HashAlgorithm):
    name = "xxh64"

    @staticmethod
    def new():
        return xxhash.xxh64()


class HasherImpl(Hasher):
    """
    A hasher that supports any algorithm via the HashAlgorithm interface.
    Nothing is cached: every call reads the file again.
    """

    def __init__(self, algorithm: HashAlgorithm = None, front_algorithm: HashAlgorithm = None):
        self.algorithm = algorithm or Sha256AlgorithmImpl()
        self.front_algorithm = front_algorithm or XXHashAlgorithmImpl()

    def compute_full_hash(self, candidate: FileCandidate) -> str:
        """Streams the whole file and returns the lowercase hex digest."""
        digest = self.algorithm.new()
        try:
            with open(candidate.path, 'rb') as f:
                for block in iter(lambda: f.read(READ_BLOCK_SIZE), b''):
                    digest.update(block)
        except OSError as e:
            logger.debug(f"Error reading full content of {candidate.path}: {e}")
            raise SkippedEntryError(f"Cannot read {candidate.path}: {e}") from e
        return digest.hexdigest()

    def compute_front_hash(self, candidate: FileCandidate) -> bytes:
        """Hashes the first FRONT_CHUNK_SIZE bytes of a file."""
        digest = self.front_algorithm.new()
        try:
            with open(candidate.path, 'rb') as f:
                digest.update(f.read(FRONT_CHUNK_SIZE))
        except OSError as e:
            logger.debug(f"Error reading front chunk of {candidate.path}: {e}")
            raise SkippedEntryError(f"Cannot read {candidate.path}: {e}") from e
        return digest.digest()
