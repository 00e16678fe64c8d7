"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

interfaces.py

Defines core interfaces (Protocols) used throughout the dedupe pipeline.
These protocols enforce structural typing using Python's `typing.Protocol` so
that walkers, hashers and key extractors can be swapped in tests.

Key Components:
---------------
- HashAlgorithm: Factory for streaming hash objects (e.g., SHA-256, xxHash64).
- Hasher: Interface for computing full-content and front-chunk hashes of files.
- TreeWalker: Interface for enumerating regular files under a root directory.
- KeyExtractor: Interface for computing the identity key of a file.
"""

from typing import Protocol, Iterator, List, Optional, Callable
from dedupkit.core.models import FileCandidate


class HashAlgorithm(Protocol):
    """
    Interface for generic hash algorithms.

    Returns a fresh hashlib-style object (update/digest/hexdigest), so files can
    be streamed through it block by block.
    """
    name: str

    def new(self):
        ...


class Hasher(Protocol):
    """Interface for hashing a file or a part of it."""
    def compute_full_hash(self, candidate: FileCandidate) -> str: ...
    def compute_front_hash(self, candidate: FileCandidate) -> bytes: ...


class TreeWalker(Protocol):
    """
    Interface for walking a directory tree.

    Attributes:
        skipped: Paths that could not be examined during the last walk.
    """
    skipped: List[str]

    def walk(
        self,
        root: str,
        recursive: bool,
        stopped_flag: Optional[Callable[[], bool]] = None
    ) -> Iterator[FileCandidate]:
        """
        Lazily yield regular files under root in deterministic order.

        Raises:
            TraversalError: root is missing or cannot be listed.
        """
        ...


class KeyExtractor(Protocol):
    """Interface for computing identity keys."""
    def compute_key(self, candidate: FileCandidate) -> str:
        """
        Raises:
            SkippedEntryError: the file could not be read (hash strategy only).
        """
        ...
