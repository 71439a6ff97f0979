"""
File mover for relocating candidates into the target directory.

This module is responsible for:
- Creating the target directory (idempotently)
- Moving candidates into the flat target directory
- Reporting name conflicts instead of overwriting or renaming
- Supporting dry-run mode (no actual moves)
- Catching and recording per-file errors (permissions, cross-volume, etc.)
"""

import logging
from pathlib import Path
from typing import Optional, Set, Union

from .errors import TargetDirectoryError
from .types import Candidate, MoveErrorKind, MoveResult, MoveStatus
from .utils import safe_move

logger = logging.getLogger(__name__)


def ensure_target_exists(target_dir: Union[str, Path], dry_run: bool = False) -> None:
    """
    Create the target directory and any missing parents.

    Succeeds without changes if the directory already exists. In dry-run
    mode nothing is created.

    Args:
        target_dir: Directory that will receive moved files
        dry_run: If True, only log what would be created

    Raises:
        TargetDirectoryError: If the path exists but is not a directory, or
                              creation fails (e.g., permission denied)
    """
    target_dir = Path(target_dir)

    if target_dir.is_dir():
        return

    if target_dir.exists():
        raise TargetDirectoryError(f"Target path is not a directory: {target_dir}")

    if dry_run:
        logger.info(f"[DRY RUN] Would create target directory: {target_dir}")
        return

    try:
        target_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise TargetDirectoryError(
            f"Failed to create target directory {target_dir}: {e}"
        ) from e

    logger.info(f"Created target directory: {target_dir}")


def move_candidate(
    candidate: Candidate,
    target_dir: Union[str, Path],
    dry_run: bool = False,
    claimed: Optional[Set[str]] = None
) -> MoveResult:
    """
    Move a single candidate into target_dir, keeping its file name.

    Handles:
    - Name conflicts (destination exists or already claimed this run)
    - Missing source (skips with SKIPPED_MISSING status)
    - Same-volume moves via a rename that never replaces the destination
    - Cross-volume moves via copy+delete

    Args:
        candidate: The file to move
        target_dir: Destination directory
        dry_run: If True, simulate the move without performing it
        claimed: Optional set of destination names already used in this run;
                 updated with this candidate's name when it moves

    Returns:
        MoveResult with status and details
    """
    src_path = Path(candidate.path)
    dest_path = Path(target_dir) / candidate.name
    claimed = claimed if claimed is not None else set()

    if dest_path.exists() or dest_path.is_symlink() or candidate.name in claimed:
        logger.warning(f"Destination already exists, leaving source in place: {dest_path}")
        return MoveResult(
            source_path=str(src_path),
            dest_path=str(dest_path),
            status=MoveStatus.FAILED,
            message="Destination already exists",
            error_kind=MoveErrorKind.CONFLICT,
        )

    if not src_path.exists():
        logger.info(f"Source missing (already moved?): {src_path}")
        return MoveResult(
            source_path=str(src_path),
            dest_path=None,
            status=MoveStatus.SKIPPED_MISSING,
            message="Source file no longer exists",
        )

    claimed.add(candidate.name)

    if dry_run:
        logger.info(f"[DRY RUN] {src_path} -> {dest_path}")
        return MoveResult(
            source_path=str(src_path),
            dest_path=str(dest_path),
            status=MoveStatus.DRY_RUN,
            message="Would move",
        )

    logger.info(f"Moving: {src_path} -> {dest_path}")
    success, message, error_kind = safe_move(src_path, dest_path)

    if not success:
        # Free the name so a later candidate is judged against the disk only
        claimed.discard(candidate.name)
        logger.error(f"Failed to move {src_path}: {message}")
        return MoveResult(
            source_path=str(src_path),
            dest_path=str(dest_path),
            status=MoveStatus.FAILED,
            message=message,
            error_kind=error_kind or MoveErrorKind.OTHER,
        )

    return MoveResult(
        source_path=str(src_path),
        dest_path=str(dest_path),
        status=MoveStatus.MOVED,
        message=message,
    )
