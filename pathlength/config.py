"""Configuration system for pathlength.

This module defines how callers specify a scan: where to start, which
paths to keep, how many to keep, and how to react to unreadable
directories.
"""

import os
from dataclasses import dataclass, field, fields, replace
from typing import Any, List, Optional, Union

from .core import Filter
from .errors import InvalidArgumentError

DEFAULT_LIMIT = -1              # Negative means unlimited
DEFAULT_MAX_CONCURRENT = 100    # Concurrent filesystem calls per adapter

FilterSpec = Union[Filter, str, None]


@dataclass(frozen=True)
class ScanOptions:
    """Immutable configuration for a single scan.

    Use ScanOptions.create() to build one from raw values; it parses
    string filters and fills in defaults.
    """

    cwd: str = field(default_factory=os.getcwd)  # Root path of the scan
    filter: Optional[Filter] = None              # None accepts every path
    force: bool = False                          # Treat unreadable directories as empty
    limit: int = DEFAULT_LIMIT                   # Maximum number of results
    recursive: bool = False                      # Descend below the root's children

    @classmethod
    def create(
        cls,
        cwd: Union[str, os.PathLike, None] = None,
        filter: FilterSpec = None,
        force: bool = False,
        limit: Optional[int] = None,
        recursive: bool = False
    ) -> 'ScanOptions':
        """Create validated options from raw values.

        Args:
            cwd: Root path (defaults to the process working directory)
            filter: Filter or filter expression such as "gte 20"
            force: Ignore errors when listing directories
            limit: Maximum number of results (None or negative for unlimited)
            recursive: Scan beyond the root's immediate children

        Returns:
            ScanOptions ready to hand to the engine

        Raises:
            InvalidExpressionError: If filter is an unparseable string
            InvalidArgumentError: If any other value is invalid
        """
        if isinstance(filter, str):
            filter = Filter.parse(filter)

        options = cls(
            cwd=os.fspath(cwd) if cwd is not None else os.getcwd(),
            filter=filter,
            force=force,
            limit=DEFAULT_LIMIT if limit is None else limit,
            recursive=recursive,
        )

        errors = options.validate()
        if errors:
            raise InvalidArgumentError("; ".join(errors))

        return options

    @classmethod
    def coerce(cls, options: Any = None, **overrides: Any) -> 'ScanOptions':
        """Build options from a ScanOptions, a mapping, or keywords.

        Keyword overrides win over values taken from options.
        """
        if isinstance(options, ScanOptions):
            return options.with_overrides(**overrides) if overrides else options

        values = dict(options or {})
        values.update(overrides)

        unknown = set(values) - {f.name for f in fields(cls)}
        if unknown:
            raise InvalidArgumentError(f"Unknown option(s): {', '.join(sorted(unknown))}")

        return cls.create(**values)

    def with_overrides(self, **overrides: Any) -> 'ScanOptions':
        """Return a copy with some values replaced and re-validated."""
        if overrides.get('cwd') is not None:
            overrides['cwd'] = os.fspath(overrides['cwd'])
        if isinstance(overrides.get('filter'), str):
            overrides['filter'] = Filter.parse(overrides['filter'])
        if 'limit' in overrides and overrides['limit'] is None:
            overrides['limit'] = DEFAULT_LIMIT

        options = replace(self, **overrides)

        errors = options.validate()
        if errors:
            raise InvalidArgumentError("; ".join(errors))

        return options

    @property
    def has_limit(self) -> bool:
        """Whether the number of results is capped."""
        return self.limit >= 0

    def validate(self) -> List[str]:
        """Validate configuration for consistency.

        Returns:
            List of validation errors (empty if valid)
        """
        errors = []

        if not isinstance(self.cwd, str) or not self.cwd:
            errors.append("cwd must be a non-empty path")

        if self.filter is not None and not isinstance(self.filter, Filter):
            errors.append(f"filter must be a Filter or expression: {self.filter!r}")

        if isinstance(self.limit, bool) or not isinstance(self.limit, int):
            errors.append(f"limit must be an integer: {self.limit!r}")

        if not isinstance(self.force, bool):
            errors.append("force must be a boolean")

        if not isinstance(self.recursive, bool):
            errors.append("recursive must be a boolean")

        return errors
