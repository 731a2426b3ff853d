# ==============================================================================
# File: errors.py
_MAJOR_VERSION = 0
_MINOR_VERSION = 1
# Version: <Automatically calculated via dynamic import of target module>
# ------------------------------------------------------------------------------
# CHANGELOG:
_CHANGELOG_ENTRIES = [
    "Initial exception hierarchy rooted at DircatError.",
    "Added RootAccessError / EntryAccessError carrying the failing path and the OS error.",
    "Added ConfigNotFoundError and InvalidConfigError for the config loader.",
    "BadPatternError now also subclasses ValueError.",
]
# ------------------------------------------------------------------------------
from pathlib import Path
from typing import Optional, Union


class DircatError(Exception):
    """Base class for every error raised by dircat."""


class RootAccessError(DircatError):
    """The scan root could not be listed. Fatal for the whole bundle."""

    def __init__(self, root: Union[str, Path], cause: Optional[BaseException] = None):
        self.root = Path(root)
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"cannot read root directory {self.root}{detail}")


class EntryAccessError(DircatError):
    """
    A single file could not be read. The walker recovers from this by skipping
    the entry, so it never escapes a bundle call.
    """

    def __init__(self, path: Union[str, Path], cause: Optional[BaseException] = None):
        self.path = Path(path)
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"cannot read {self.path}{detail}")


class ConfigError(DircatError):
    pass


class ConfigNotFoundError(ConfigError):
    pass


class InvalidConfigError(ConfigError):
    pass


class BadPatternError(DircatError, ValueError):
    """Raised for a syntactically malformed glob pattern."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"bad glob pattern {pattern!r}: {reason}")
