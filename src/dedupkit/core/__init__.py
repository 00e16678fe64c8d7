"""
Core dedupe engine — walker, key extraction, grouper, planner and execution engine.

This package contains the whole pipeline:
- TreeWalkerImpl: lexical depth-first traversal, recursive or single level
- HasherImpl + Sha256AlgorithmImpl / XXHashAlgorithmImpl: streaming full hash and pre-screen front hash
- HashKeyExtractor / NameKeyExtractor: identity keys
- DuplicateGrouper + SizeStage / FrontHashStage: grouping and pre-screening
- DispositionPlanner: retain-first keep/drop policy
- ExecutionEngine: preview or apply removals
- Models: FileCandidate, DuplicateGroup, RemovalOutcome, DedupeReport, DedupeParams

All components are pure Python with no UI dependencies.
"""

from .models import (
    FileCandidate, DuplicateGroup, RemovalOutcome, DedupeReport, DedupeParams,
    KeyStrategy, Action, RemovalMethod)
from .errors import DedupeError, TraversalError, SkippedEntryError, RemovalError, ConfigError
from .walker import TreeWalkerImpl
from .hasher import HasherImpl, Sha256AlgorithmImpl, XXHashAlgorithmImpl
from .extractor import HashKeyExtractor, NameKeyExtractor, get_key_extractor
from .grouper import DuplicateGrouper
from .stages import SizeStage, FrontHashStage
from .planner import DispositionPlanner
from .engine import ExecutionEngine

__all__ = [
    "FileCandidate",
    "DuplicateGroup",
    "RemovalOutcome",
    "DedupeReport",
    "DedupeParams",
    "KeyStrategy",
    "Action",
    "RemovalMethod",
    "DedupeError",
    "TraversalError",
    "SkippedEntryError",
    "RemovalError",
    "ConfigError",
    "TreeWalkerImpl",
    "HasherImpl",
    "Sha256AlgorithmImpl",
    "XXHashAlgorithmImpl",
    "HashKeyExtractor",
    "NameKeyExtractor",
    "get_key_extractor",
    "DuplicateGrouper",
    "SizeStage",
    "FrontHashStage",
    "DispositionPlanner",
    "ExecutionEngine",
]
