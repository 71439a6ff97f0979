"""
Relocator: orchestrates one sweep of the source tree into the target directory.
"""

import logging
from pathlib import Path
from typing import Callable, Dict, Iterator, List, Optional, Set, Tuple

from . import mover, scanner
from .config import RelocatorConfig
from .types import Candidate, MoveResult, MoveStatus, RunReport, TraversalWarning

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[MoveResult], None]


class Relocator:
    """
    Moves every file matching the configured extensions from the source
    tree into the flat target directory.

    Per-file failures are collected rather than raised, so one bad file
    never stops the rest of the run.
    """

    def __init__(self, config: RelocatorConfig):
        """
        Initialize the relocator with resolved settings.

        Args:
            config: The run configuration
        """
        self.config = config

        # Destination names used during this run (catches same-named
        # files from different subfolders, including in dry-run mode)
        self._claimed_names: Set[str] = set()
        self._warnings: List[TraversalWarning] = []

        # Statistics
        self._stats: Dict[MoveStatus, int] = {status: 0 for status in MoveStatus}

    def resolve_directories(self) -> Tuple[Path, Path]:
        """Return the (source_dir, target_dir) this relocator works on."""
        return self.config.source_dir, self.config.target_dir

    def ensure_target_exists(self) -> None:
        """Create the target directory if needed (see mover.ensure_target_exists)."""
        mover.ensure_target_exists(self.config.target_dir, dry_run=self.config.dry_run)

    def enumerate_candidates(self) -> Iterator[Candidate]:
        """
        Lazily walk the source tree for matching files.

        Traversal warnings are collected on the relocator as they occur.
        The returned iterator can be consumed once.
        """
        return scanner.enumerate_candidates(
            self.config.source_dir,
            self.config.extensions,
            case_sensitive=self.config.case_sensitive,
            exclude=self.config.target_dir,
            on_warning=self._warnings.append,
        )

    def move_candidate(self, candidate: Candidate) -> MoveResult:
        """Move one candidate into the target directory and count the outcome."""
        result = mover.move_candidate(
            candidate,
            self.config.target_dir,
            dry_run=self.config.dry_run,
            claimed=self._claimed_names,
        )
        self._stats[result.status] += 1
        return result

    def run(self, progress_callback: Optional[ProgressCallback] = None) -> RunReport:
        """
        Relocate all matching files.

        Args:
            progress_callback: Optional callable(result) invoked per file

        Returns:
            RunReport with every result and traversal warning

        Raises:
            TargetDirectoryError: If the target directory cannot be created
        """
        self.reset_stats()
        source_dir, target_dir = self.resolve_directories()
        self.ensure_target_exists()

        logger.info(
            f"Relocating *.{{{','.join(self.config.extensions)}}} "
            f"from {source_dir} to {target_dir}"
        )

        report = RunReport(warnings=self._warnings, dry_run=self.config.dry_run)

        for i, candidate in enumerate(self.enumerate_candidates()):
            result = self.move_candidate(candidate)
            report.results.append(result)

            if progress_callback:
                progress_callback(result)

            # Log progress every 100 files
            if (i + 1) % 100 == 0:
                logger.info(f"Processed {i + 1} files...")

        logger.info(
            f"Completed: moved={report.moved_count} skipped={report.skipped_count} "
            f"failed={report.failed_count} warnings={len(report.warnings)}"
        )
        return report

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about move operations.

        Returns:
            Dictionary mapping status names to counts
        """
        return {status.value: count for status, count in self._stats.items()}

    def get_summary(self) -> str:
        """
        Get a human-readable summary of move operations.

        Returns:
            Formatted summary string
        """
        stats = self.get_stats()
        total = sum(stats.values())

        lines = [f"Relocation Summary ({total} total):"]

        if self.config.dry_run:
            lines.append(f"  Would move: {stats['dry_run']}")
        else:
            lines.append(f"  Moved: {stats['moved']}")

        if stats["skipped_missing"]:
            lines.append(f"  Skipped (source missing): {stats['skipped_missing']}")

        if stats["failed"]:
            lines.append(f"  Failed: {stats['failed']}")

        if self._warnings:
            lines.append(f"  Traversal warnings: {len(self._warnings)}")

        return "\n".join(lines)

    def reset_stats(self) -> None:
        """Reset statistics, warnings and claimed names for a new run."""
        self._stats = {status: 0 for status in MoveStatus}
        self._claimed_names.clear()
        self._warnings = []
