from __future__ import annotations


class WrapperError(Exception):
    """Base class for every failure that ends a wrapper run."""

    exit_code = 1


class UsageError(WrapperError):
    """Missing or empty positional arguments."""


class MissingResourceError(WrapperError):
    """A required file, directory or archive is absent."""


class InvalidConfigError(WrapperError):
    """Unsupported reference version, bad numeric input, bad settings file."""


class ToolError(WrapperError):
    """MELT (or the Java runtime launching it) exited non-zero."""

    def __init__(self, message: str, exit_code: int) -> None:
        super().__init__(message)
        self.exit_code = exit_code
