"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/extractor.py
Identity keys for files: content hash or base name.
"""

import os

from dedupkit.core.models import FileCandidate, KeyStrategy
from dedupkit.core.interfaces import KeyExtractor, Hasher
from dedupkit.core.hasher import HasherImpl


class HashKeyExtractor(KeyExtractor):
    """Key = lowercase hex SHA-256 of the whole file."""

    def __init__(self, hasher: Hasher = None):
        self.hasher = hasher or HasherImpl()

    def compute_key(self, candidate: FileCandidate) -> str:
        return self.hasher.compute_full_hash(candidate)


class NameKeyExtractor(KeyExtractor):
    """Key = base name with extension. File content is never read."""

    def compute_key(self, candidate: FileCandidate) -> str:
        return os.path.basename(candidate.path)


def get_key_extractor(strategy: KeyStrategy, hasher: Hasher = None) -> KeyExtractor:
    """Returns the extractor for the given strategy."""
    strategy = KeyStrategy(strategy)
    if strategy == KeyStrategy.HASH:
        return HashKeyExtractor(hasher)
    return NameKeyExtractor()
