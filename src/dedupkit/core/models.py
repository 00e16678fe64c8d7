"""
Copyright (c) 2026 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/models.py
Data models for duplicate detection and removal.
"""

from dataclasses import dataclass, field
from typing import List, Optional
from enum import Enum


# =============================
# Enums
# =============================

class KeyStrategy(Enum):
    """
    How the identity key of a file is computed.
    """
    HASH = "hash"
    NAME = "name"

    @property
    def display_name(self) -> str:
        """Human-readable name for UI display."""
        mapping = {
            KeyStrategy.HASH: "Content hash",
            KeyStrategy.NAME: "File name",
        }
        return mapping.get(self, self.value)

    @property
    def description(self) -> str:
        """Detailed description for help text."""
        mapping = {
            KeyStrategy.HASH:
                "SHA-256 of the whole file (finds copies under any name)",
            KeyStrategy.NAME:
                "Base name only (same name in different folders, content ignored)",
        }
        return mapping.get(self, self.value)

    def __repr__(self) -> str:
        return self.value


class Action(Enum):
    LIST = "list"
    DELETE = "delete"


class RemovalMethod(Enum):
    """
    How a removable file is taken off the file system.
    """
    UNLINK = "unlink"
    TRASH = "trash"

    @property
    def display_name(self) -> str:
        mapping = {
            RemovalMethod.UNLINK: "Delete permanently",
            RemovalMethod.TRASH: "Move to trash",
        }
        return mapping.get(self, self.value)


# ======================
#  Core Data Models
# ======================

@dataclass
class FileCandidate:
    """
    A regular file found by the walker.
    Lives for one pass only.
    """
    path: str
    size: int = 0  # in bytes, from lstat
    is_directory: bool = False

    def __repr__(self):
        return f"<FileCandidate path={self.path}, size={self.size}>"


@dataclass
class DuplicateGroup:
    """
    Files sharing one identity key, in walk order.
    members[0] is retained, the rest are removable.
    """
    key: str
    members: List[str]

    def __post_init__(self):
        if len(self.members) < 2:
            raise ValueError(
                f"Duplicate group '{self.key}' needs at least 2 members, got {len(self.members)}"
            )

    @property
    def keep(self) -> str:
        return self.members[0]

    @property
    def duplicates(self) -> List[str]:
        return self.members[1:]

    @property
    def count(self) -> int:
        """How many files in this group would be removed."""
        return len(self.members) - 1

    def __repr__(self):
        return f"<DuplicateGroup key={self.key}, members={len(self.members)}>"


@dataclass
class RemovalOutcome:
    """Result of one removal attempt. Independent of every other attempt."""
    path: str
    removed: bool
    error: Optional[str] = None


@dataclass
class DedupeReport:
    """
    The single value handed to the reporter.
    removal_outcomes stays empty in preview mode.
    """
    root_path: str
    key_strategy: KeyStrategy
    groups: List[DuplicateGroup] = field(default_factory=list)
    removal_outcomes: List[RemovalOutcome] = field(default_factory=list)
    preview_mode: bool = True
    action: Action = Action.LIST
    dry_run: bool = False
    skipped: List[str] = field(default_factory=list)
    interrupted: bool = False

    @property
    def count(self) -> int:
        return len(self.groups)

    @property
    def to_delete(self) -> int:
        """Number of files marked for removal (only when the action is delete)."""
        if self.action != Action.DELETE:
            return 0
        return sum(group.count for group in self.groups)

    @property
    def removed_count(self) -> int:
        return sum(1 for outcome in self.removal_outcomes if outcome.removed)

    @property
    def failed_count(self) -> int:
        return sum(1 for outcome in self.removal_outcomes if not outcome.removed)

    def __repr__(self):
        return (f"<DedupeReport root={self.root_path}, groups={len(self.groups)}, "
                f"outcomes={len(self.removal_outcomes)}, preview={self.preview_mode}>")


"""
DTO for dedupe parameters with built-in validation.
Interface-agnostic — built by the CLI, consumed by the core.
"""

@dataclass
class DedupeParams:
    """Parameters for one dedupe run, validated on creation."""
    root_path: str
    key_strategy: KeyStrategy = KeyStrategy.HASH
    recursive: bool = False
    action: Action = Action.LIST
    dry_run: bool = False
    removal_method: RemovalMethod = RemovalMethod.UNLINK
    workers: int = 1
    prescreen: bool = True

    def __post_init__(self):
        """Validate parameters immediately after creation."""
        if not self.root_path:
            raise ValueError("Root path cannot be empty")

        # Accept plain strings ("hash", "delete", ...) from config files and callers
        self.key_strategy = KeyStrategy(self.key_strategy)
        self.action = Action(self.action)
        self.removal_method = RemovalMethod(self.removal_method)

        if not isinstance(self.workers, int) or isinstance(self.workers, bool):
            raise ValueError("Workers must be an integer")
        if self.workers < 1:
            raise ValueError("Workers must be at least 1")

    @property
    def apply_mode(self) -> bool:
        """True only when files will really be removed."""
        return self.action == Action.DELETE and not self.dry_run
