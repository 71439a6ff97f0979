"""
Run configuration for the file relocator.

This module is responsible for:
- Deriving default source/target directories from $HOME
- Letting explicit paths override those defaults
- Normalizing the extension filter
- Validating the resolved directories before any filesystem mutation

The resulting RelocatorConfig is built once at startup and passed
explicitly to the relocation logic.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional, Tuple, Union

from .errors import ConfigError

logger = logging.getLogger(__name__)

HOME_ENV_VAR = "HOME"
DEFAULT_SOURCE_SUFFIX = Path("Downloads")
DEFAULT_TARGET_SUFFIX = Path("Documents") / "PDFs"
DEFAULT_EXTENSIONS = ("pdf",)


@dataclass(frozen=True)
class RelocatorConfig:
    """
    Settings for one relocation run.

    Attributes:
        source_dir: Root of the tree to sweep
        target_dir: Flat directory receiving matched files
        extensions: Extensions to match, without leading dots
        case_sensitive: Compare extensions case-sensitively
        dry_run: Report what would move without touching the filesystem
    """
    source_dir: Path
    target_dir: Path
    extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    case_sensitive: bool = True
    dry_run: bool = False


def _expand(path: Union[str, Path]) -> Path:
    return Path(os.path.abspath(os.path.expanduser(str(path))))


def resolve_directories(
    source: Optional[Union[str, Path]] = None,
    target: Optional[Union[str, Path]] = None,
    environ: Optional[Mapping[str, str]] = None
) -> Tuple[Path, Path]:
    """
    Resolve the source and target directories.

    Explicit paths win. Any path not given explicitly is derived from the
    HOME variable: $HOME/Downloads for the source and
    $HOME/Documents/PDFs for the target.

    Args:
        source: Optional explicit source directory
        target: Optional explicit target directory
        environ: Environment mapping (defaults to os.environ)

    Returns:
        Tuple of absolute (source_dir, target_dir)

    Raises:
        ConfigError: If a default is needed and HOME is unset or empty
    """
    if environ is None:
        environ = os.environ

    home: Optional[Path] = None
    if source is None or target is None:
        home_value = environ.get(HOME_ENV_VAR, "").strip()
        if not home_value:
            raise ConfigError(
                f"Could not determine the home directory: ${HOME_ENV_VAR} is not set "
                f"(pass --source and --target explicitly)"
            )
        home = Path(home_value)

    source_dir = _expand(source) if source is not None else _expand(home / DEFAULT_SOURCE_SUFFIX)
    target_dir = _expand(target) if target is not None else _expand(home / DEFAULT_TARGET_SUFFIX)

    logger.debug(f"Resolved directories: source={source_dir} target={target_dir}")
    return source_dir, target_dir


def normalize_extensions(values: Optional[Iterable[str]]) -> Tuple[str, ...]:
    """
    Normalize an extension filter.

    Strips whitespace and leading dots ("  .pdf" -> "pdf") and removes
    duplicates while preserving order. None yields the default filter.

    Raises:
        ConfigError: If an extension is empty or the filter ends up empty
    """
    if values is None:
        return DEFAULT_EXTENSIONS

    extensions = []
    for value in values:
        ext = value.strip().lstrip(".")
        if not ext:
            raise ConfigError(f"Invalid extension: {value!r}")
        if ext not in extensions:
            extensions.append(ext)

    if not extensions:
        raise ConfigError("At least one extension is required")

    return tuple(extensions)


def build_config(
    source: Optional[Union[str, Path]] = None,
    target: Optional[Union[str, Path]] = None,
    extensions: Optional[Iterable[str]] = None,
    case_sensitive: bool = True,
    dry_run: bool = False,
    environ: Optional[Mapping[str, str]] = None
) -> RelocatorConfig:
    """
    Build and validate a RelocatorConfig.

    Raises:
        ConfigError: If directories cannot be determined, the source is not
                     an existing directory, or source and target coincide
    """
    source_dir, target_dir = resolve_directories(source, target, environ)

    if not source_dir.exists():
        raise ConfigError(f"Source directory does not exist: {source_dir}")
    if not source_dir.is_dir():
        raise ConfigError(f"Source path is not a directory: {source_dir}")

    if source_dir.resolve() == target_dir.resolve():
        raise ConfigError(
            f"Source and target are the same directory: {source_dir}"
        )

    return RelocatorConfig(
        source_dir=source_dir,
        target_dir=target_dir,
        extensions=normalize_extensions(extensions),
        case_sensitive=case_sensitive,
        dry_run=dry_run,
    )
