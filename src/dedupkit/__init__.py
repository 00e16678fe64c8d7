"""
dedupkit — duplicate file finder with safe removal.

Core features:
- Two comparison methods: HASH (SHA-256 of whole file content) and NAME (base name only)
- Deterministic retain-first policy: the first file found is always kept
- Preview (dry run) before anything is removed
- Permanent deletion or move to system trash (via send2trash)
- JSON and plain text reports
"""
from pathlib import Path

# Get version
try:
    from importlib.metadata import version as _version, PackageNotFoundError
    __version__ = _version("dedupkit")
except PackageNotFoundError:
    try:
        import tomllib  # Python 3.11+
    except ImportError:
        import tomli as tomllib  # Python < 3.11: pip install tomli

    try:
        with open(Path(__file__).resolve().parents[2] / "pyproject.toml", "rb") as f:
            __version__ = tomllib.load(f)["project"]["version"]
    except (OSError, KeyError):
        __version__ = "0.0.0"

# Public API — only what users should import directly
from dedupkit.commands import DedupeCommand
from dedupkit.core import (
    DedupeParams, DedupeReport, DuplicateGroup, RemovalOutcome, FileCandidate,
    KeyStrategy, Action, RemovalMethod,
    DedupeError, TraversalError, SkippedEntryError, RemovalError, ConfigError,
)
from dedupkit.report import ReportRenderer
from dedupkit.services.file_service import FileService

__all__ = [
    "DedupeCommand",
    "DedupeParams",
    "DedupeReport",
    "DuplicateGroup",
    "RemovalOutcome",
    "FileCandidate",
    "KeyStrategy",
    "Action",
    "RemovalMethod",
    "DedupeError",
    "TraversalError",
    "SkippedEntryError",
    "RemovalError",
    "ConfigError",
    "ReportRenderer",
    "FileService",
    "__version__",
]
