"""pathlength - Check the lengths of file system paths.

pathlength scans a directory, optionally recursively, and reports the
character length of every path it finds. Paths can be filtered by length
with expressions such as "gte 200" or "<= 50".

Library use:
━━━━━━━━━━━━━━━━━━━━━━━━━━
    from pathlength import PathLength

    results = await PathLength().check(cwd='/srv', filter='gt 200', recursive=True)
━━━━━━━━━━━━━━━━━━━━━━━━━━

Command line use:
    pathlength --recursive --filter "gt 200" --style json /srv
"""

__version__ = "1.0.0"

from .errors import (
    PathLengthError,
    InvalidExpressionError,
    InvalidArgumentError,
    PathResolutionError,
)
from .core import (
    Operator,
    EQUALS,
    GREATER_THAN,
    GREATER_THAN_OR_EQUAL_TO,
    LESS_THAN,
    LESS_THAN_OR_EQUAL_TO,
    NOT_EQUALS,
    OPERATORS,
    Filter,
    Result,
)
from .config import ScanOptions
from .aio import (
    PathLength,
    EventType,
    check_path_lengths,
    find_paths,
    find_long_paths,
)

__all__ = [
    "__version__",
    # Errors
    "PathLengthError",
    "InvalidExpressionError",
    "InvalidArgumentError",
    "PathResolutionError",
    # Core
    "Operator",
    "EQUALS",
    "GREATER_THAN",
    "GREATER_THAN_OR_EQUAL_TO",
    "LESS_THAN",
    "LESS_THAN_OR_EQUAL_TO",
    "NOT_EQUALS",
    "OPERATORS",
    "Filter",
    "Result",
    # Configuration
    "ScanOptions",
    # Engine
    "PathLength",
    "EventType",
    "check_path_lengths",
    "find_paths",
    "find_long_paths",
]
