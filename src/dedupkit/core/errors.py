"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/errors.py
Exception types raised by the dedupe engine.

Only TraversalError is fatal. SkippedEntryError and RemovalError are caught
inside the pipeline and end up in the report instead of propagating.
"""


class DedupeError(Exception):
    """Base class for all dedupkit errors."""
    code = "DEDUPE_ERROR"


class TraversalError(DedupeError):
    """Root path is missing, not a directory or cannot be listed."""
    code = "TRAVERSAL_ERROR"


class SkippedEntryError(DedupeError, OSError):
    """A single file could not be read while computing its key."""
    code = "SKIPPED_ENTRY"


class RemovalError(DedupeError, OSError):
    """A single file could not be removed."""
    code = "REMOVAL_ERROR"


class ConfigError(DedupeError, ValueError):
    """Configuration file is unreadable or holds invalid values."""
    code = "CONFIG_ERROR"
