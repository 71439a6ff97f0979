"""
Source tree scanner for discovering relocation candidates.

This module is responsible for:
- Walking the source tree recursively (symlinks are not followed)
- Selecting regular files whose extension matches the filter
- Reporting unreadable subtrees and non-regular matching entries as
  warnings instead of aborting the walk or dropping them silently
- Pruning the target directory when it lives inside the source tree
"""

import logging
import os
import stat
from pathlib import Path
from typing import Callable, Iterable, Iterator, Optional, Union

from .types import Candidate, TraversalWarning

logger = logging.getLogger(__name__)

WarningCallback = Callable[[TraversalWarning], None]


def get_extension(name: str) -> str:
    """
    Return the extension of a file name without the leading dot.

    Dotfiles have no extension: ".pdf" -> "", "a.tar.gz" -> "gz".
    """
    return os.path.splitext(name)[1][1:]


def matches_extension(
    name: str,
    extensions: Iterable[str],
    case_sensitive: bool = True
) -> bool:
    """Check whether a file name carries one of the given extensions."""
    ext = get_extension(name)
    if not ext:
        return False
    if case_sensitive:
        return ext in extensions
    ext = ext.casefold()
    return any(ext == wanted.casefold() for wanted in extensions)


def enumerate_candidates(
    source_dir: Union[str, Path],
    extensions: Iterable[str],
    case_sensitive: bool = True,
    exclude: Optional[Union[str, Path]] = None,
    on_warning: Optional[WarningCallback] = None
) -> Iterator[Candidate]:
    """
    Lazily yield matching files under source_dir.

    The walk is top-down and does not follow symbolic links. Directories
    that cannot be listed, and matching entries that are not regular files
    (symlinks, broken links, devices) or cannot be stat-ed, are passed to
    on_warning as TraversalWarning and skipped. Each directory
    is listed before its files are yielded, so moving yielded files out
    while iterating is safe.

    Args:
        source_dir: Root directory to walk
        extensions: Extensions to match, without leading dots
        case_sensitive: Compare extensions case-sensitively
        exclude: Optional directory to prune from the walk (the target)
        on_warning: Optional callable receiving TraversalWarning objects

    Yields:
        Candidate for each matching regular file
    """
    extensions = tuple(extensions)
    exclude_real = os.path.realpath(str(exclude)) if exclude is not None else None

    def warn(path: str, message: str) -> None:
        logger.warning(f"Skipping {path}: {message}")
        if on_warning:
            on_warning(TraversalWarning(path=path, message=message))

    def on_walk_error(error: OSError) -> None:
        warn(error.filename or str(source_dir), error.strerror or str(error))

    for dirpath, dirnames, filenames in os.walk(
        str(source_dir), onerror=on_walk_error, followlinks=False
    ):
        if exclude_real is not None:
            kept = []
            for dirname in dirnames:
                if os.path.realpath(os.path.join(dirpath, dirname)) == exclude_real:
                    logger.debug(f"Pruning target directory from walk: {dirname}")
                    continue
                kept.append(dirname)
            dirnames[:] = kept

        for filename in filenames:
            if not matches_extension(filename, extensions, case_sensitive):
                continue

            path = os.path.join(dirpath, filename)
            try:
                mode = os.lstat(path).st_mode
            except OSError as e:
                warn(path, e.strerror or str(e))
                continue

            if stat.S_ISLNK(mode):
                warn(path, "symbolic link, not moved")
                continue
            if not stat.S_ISREG(mode):
                warn(path, "not a regular file, not moved")
                continue

            yield Candidate(
                path=os.path.abspath(path),
                name=filename,
                extension=get_extension(filename),
            )
