"""Exceptions raised by pathlength.

Every error raised by the library itself derives from PathLengthError, and
also from the builtin exception that best describes it, so callers can catch
either.
"""

from typing import Optional


class PathLengthError(Exception):
    """Base class for all pathlength errors."""


class InvalidExpressionError(PathLengthError, ValueError):
    """Raised when an operator or filter expression cannot be parsed.

    Always raised before any filesystem I/O takes place.
    """

    def __init__(self, message: str, expression: Optional[str] = None):
        super().__init__(message)
        self.expression = expression


class InvalidArgumentError(PathLengthError, ValueError):
    """Raised when a Filter or ScanOptions is built from invalid values."""


class PathResolutionError(PathLengthError, OSError):
    """Raised when the scan root cannot be resolved to a canonical path.

    Carries the errno and filename of the underlying OSError, which is
    also chained as ``__cause__``.
    """

    @classmethod
    def from_os_error(cls, path: str, error: OSError) -> 'PathResolutionError':
        """Build a resolution error that mirrors an OSError.

        Args:
            path: The path that failed to resolve
            error: The error raised while resolving it

        Returns:
            PathResolutionError with the same errno and strerror
        """
        if error.errno is not None:
            return cls(error.errno, error.strerror or str(error), path)
        return cls(f"Unable to resolve path '{path}': {error}")
