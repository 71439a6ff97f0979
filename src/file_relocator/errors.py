"""Exception types for fatal relocation errors.

Per-file move failures are not exceptions; they are recorded as
MoveResult entries (see types.py).
"""


class RelocatorError(Exception):
    """Base error for the project."""


class ConfigError(RelocatorError):
    """Source or target directory cannot be determined or is unusable."""


class TargetDirectoryError(RelocatorError, OSError):
    """The target directory cannot be created or is not a directory."""
