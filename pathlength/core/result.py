"""Result record for an accepted path."""

from dataclasses import dataclass
from typing import Any, Dict


@dataclass(frozen=True)
class Result:
    """A path accepted during a scan.

    Attributes:
        path: Resolved, absolute path
        length: Number of characters in path
        is_directory: Whether the path is a directory (symlinks never are)
    """

    path: str
    length: int
    is_directory: bool

    @classmethod
    def for_path(cls, path: str, is_directory: bool) -> 'Result':
        """Create a result, measuring the length of path."""
        return cls(path=path, length=len(path), is_directory=is_directory)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable form used by output styles."""
        return {
            'directory': self.is_directory,
            'length': self.length,
            'path': self.path,
        }
