"""
Type definitions and data classes for the file relocator.

This module defines:
- Candidate: Data class for a discovered file eligible for relocation
- MoveStatus: Enum for move operation outcomes
- MoveErrorKind: Enum classifying per-file move failures
- MoveResult: Data class representing the result of a move operation
- TraversalWarning: Data class for unreadable entries met during the walk
- RunReport: Aggregated outcome of one run
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


@dataclass(frozen=True)
class Candidate:
    """
    Represents a file discovered during the source tree walk.

    Attributes:
        path: The full absolute path to the file
        name: The file's basename (e.g., "invoice.pdf")
        extension: Text after the final dot, without the dot ("pdf")
    """
    path: str
    name: str
    extension: str


class MoveStatus(Enum):
    """Status of a file move operation."""
    MOVED = "moved"                      # Moved successfully
    DRY_RUN = "dry_run"                  # Would move (dry run mode)
    SKIPPED_MISSING = "skipped_missing"  # Source disappeared before the move
    FAILED = "failed"                    # See MoveErrorKind


class MoveErrorKind(Enum):
    """Reason a move failed."""
    CONFLICT = "conflict"                    # Destination name already taken
    PERMISSION_DENIED = "permission_denied"
    CROSS_VOLUME = "cross_volume"            # Copy+delete fallback failed
    OTHER = "other"


@dataclass
class MoveResult:
    """Result of a move operation."""
    source_path: str
    dest_path: Optional[str]
    status: MoveStatus
    message: str
    error_kind: Optional[MoveErrorKind] = None

    @property
    def moved(self) -> bool:
        return self.status == MoveStatus.MOVED

    @property
    def skipped(self) -> bool:
        return self.status in (MoveStatus.DRY_RUN, MoveStatus.SKIPPED_MISSING)

    @property
    def failed(self) -> bool:
        return self.status == MoveStatus.FAILED


@dataclass
class TraversalWarning:
    """An entry or subtree that could not be read during the walk."""
    path: str
    message: str


@dataclass
class RunReport:
    """
    Aggregated outcome of one relocation run.

    Attributes:
        results: One MoveResult per processed candidate, in walk order
        warnings: Traversal problems met while walking the source tree
        dry_run: Whether the run was a simulation
    """
    results: List[MoveResult] = field(default_factory=list)
    warnings: List[TraversalWarning] = field(default_factory=list)
    dry_run: bool = False

    @property
    def moved_count(self) -> int:
        return sum(1 for r in self.results if r.moved)

    @property
    def skipped_count(self) -> int:
        return sum(1 for r in self.results if r.skipped)

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if r.failed)

    @property
    def failures(self) -> List[MoveResult]:
        return [r for r in self.results if r.failed]

    @property
    def has_failures(self) -> bool:
        return self.failed_count > 0
