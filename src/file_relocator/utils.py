"""
Filesystem move primitives.

This module provides:
- is_same_volume(): Check whether a file and a directory share a device
- safe_move(): Move a single file without ever replacing an existing
  destination, with an explicit copy+delete fallback for cross-volume moves
"""

import errno
import logging
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional, Tuple, Union

from .types import MoveErrorKind

logger = logging.getLogger(__name__)

# Prefix for in-flight copies written into the target directory
PARTIAL_PREFIX = ".relocating-"

# os.link errors meaning the filesystem cannot hard-link (FAT, some network mounts)
NO_HARDLINK_ERRNOS = {
    errno.EPERM, errno.ENOTSUP, errno.EOPNOTSUPP, errno.ENOSYS, errno.EMLINK
}

MoveOutcome = Tuple[bool, str, Optional[MoveErrorKind]]


def is_same_volume(src: Union[str, Path], dest_dir: Union[str, Path]) -> bool:
    """
    Check whether src and dest_dir reside on the same device.

    Args:
        src: Source file path
        dest_dir: Existing destination directory

    Returns:
        True if both report the same st_dev
    """
    return os.stat(src).st_dev == os.stat(dest_dir).st_dev


def rename_no_clobber(src: str, dest: str) -> None:
    """
    Rename src to dest on the same volume, refusing to replace dest.

    Hard-links src as dest (which fails if dest exists), then unlinks src.
    On filesystems without hard links it checks for dest and falls back
    to os.rename.

    Raises:
        FileExistsError: If dest already exists
        OSError: For any other failure; src is left in place
    """
    try:
        os.link(src, dest)
    except FileExistsError:
        raise
    except OSError as e:
        if e.errno not in NO_HARDLINK_ERRNOS:
            raise
        logger.debug(f"Hard links unsupported ({e}), falling back to rename")
        if os.path.lexists(dest):
            raise FileExistsError(errno.EEXIST, "Destination already exists", dest)
        os.rename(src, dest)
        return

    try:
        os.unlink(src)
    except OSError:
        # Keep a single copy: drop the new name, leave the source
        os.unlink(dest)
        raise


def safe_move(src: Union[str, Path], dest: Union[str, Path]) -> MoveOutcome:
    """
    Move a single file from src to dest.

    This function:
    - Uses rename_no_clobber when source and destination share a volume
    - Falls back to copy + delete when they do not, or when the link
      reports EXDEV
    - Reports an existing destination as a conflict, never replacing it
    - Provides clear error messages for common failures

    Args:
        src: Source file path
        dest: Destination file path (its parent must exist)

    Returns:
        Tuple of (success, message, error_kind)
        On success: (True, "Moved successfully", None)
        On failure: (False, "Error description", MoveErrorKind)
    """
    src_str = str(src)
    dest_str = str(dest)

    try:
        if not is_same_volume(src_str, os.path.dirname(dest_str)):
            logger.info(f"Cross-volume move detected, using copy+delete: {src_str}")
            return _copy_and_delete(src_str, dest_str)

        rename_no_clobber(src_str, dest_str)
        return (True, "Moved successfully", None)

    except FileExistsError:
        return (False, "Destination already exists", MoveErrorKind.CONFLICT)

    except PermissionError as e:
        return (False, f"Permission denied: {e}", MoveErrorKind.PERMISSION_DENIED)

    except OSError as e:
        if e.errno == errno.EXDEV:
            # Bind mounts and overlays can share st_dev but still refuse links
            logger.info(f"Link crossed devices, using copy+delete: {src_str}")
            return _copy_and_delete(src_str, dest_str)
        return (False, f"OSError: {e}", MoveErrorKind.OTHER)


def _copy_and_delete(src: str, dest: str) -> MoveOutcome:
    """
    Move across volumes by copying, then deleting the source.

    The copy is written to a uniquely named hidden file inside the
    destination directory and renamed into place only once complete, so
    dest never holds a partial file and no existing file is overwritten.

    Args:
        src: Source file path
        dest: Destination file path

    Returns:
        Tuple of (success, message, error_kind)
    """
    dest_dir, dest_name = os.path.split(dest)

    try:
        fd, partial = tempfile.mkstemp(dir=dest_dir, prefix=f"{PARTIAL_PREFIX}{dest_name}.")
        os.close(fd)
    except PermissionError as e:
        return (False, f"Permission denied during copy: {e}", MoveErrorKind.PERMISSION_DENIED)
    except OSError as e:
        return (False, f"Cross-volume copy failed: {e}", MoveErrorKind.CROSS_VOLUME)

    try:
        shutil.copy2(src, partial)
        rename_no_clobber(partial, dest)
    except FileExistsError:
        _cleanup_partial_copy(partial)
        return (False, "Destination appeared during copy", MoveErrorKind.CONFLICT)
    except PermissionError as e:
        _cleanup_partial_copy(partial)
        return (False, f"Permission denied during copy: {e}", MoveErrorKind.PERMISSION_DENIED)
    except OSError as e:
        _cleanup_partial_copy(partial)
        return (False, f"Cross-volume copy failed: {e}", MoveErrorKind.CROSS_VOLUME)

    try:
        os.unlink(src)
    except OSError as e:
        # Keep the source; drop the copy so the file is not duplicated
        logger.error(f"Could not delete source after copy, rolling back: {src}: {e}")
        _cleanup_partial_copy(dest)
        kind = (
            MoveErrorKind.PERMISSION_DENIED
            if isinstance(e, PermissionError)
            else MoveErrorKind.CROSS_VOLUME
        )
        return (False, f"Could not delete source after copy: {e}", kind)

    logger.info("Moved via copy+delete fallback")
    return (True, "Moved successfully (via copy+delete)", None)


def _cleanup_partial_copy(path: str) -> None:
    """Attempt to remove a copy left behind by a failed move."""
    try:
        if os.path.exists(path):
            os.unlink(path)
            logger.debug(f"Cleaned up partial copy at {path}")
    except OSError as e:
        logger.warning(f"Could not clean up partial copy at {path}: {e}")
