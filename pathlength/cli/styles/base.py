"""Output style abstraction.

A Style renders the results of a scan by subscribing handlers to the
engine's events before the scan starts. Styles are kept in a
StyleRegistry owned by the CLI.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, TextIO, Type, Union

from ...aio import PathLength

logger = logging.getLogger(__name__)


class Style(ABC):
    """Base class for output styles.

    Subclasses set ``name`` and implement apply().
    """

    name: str = ''

    @abstractmethod
    def apply(self, engine: PathLength, output_stream: TextIO, pretty: bool = False) -> None:
        """Subscribe to engine so its next scans are written to output_stream.

        Args:
            engine: Engine whose events should be rendered
            output_stream: Text stream to write to
            pretty: Enable pretty formatting where the style supports it
        """
        pass

    def __str__(self) -> str:
        return self.name


class StyleRegistry:
    """Maps style names to style instances and tracks the default."""

    def __init__(self):
        self._styles: Dict[str, Style] = {}
        self._default: Optional[Style] = None

    def register(self, style: Union[Style, Type[Style]], default: bool = False) -> Style:
        """Register a style instance or class.

        Args:
            style: Style instance, or a Style subclass to instantiate
            default: Make this the style used when none is requested

        Returns:
            The registered instance
        """
        instance = style() if isinstance(style, type) else style
        name = instance.name

        if not name:
            raise ValueError(f"Style has no name: {instance!r}")

        if name in self._styles:
            logger.debug("Overwriting registered style: %s", name)

        self._styles[name] = instance

        if default:
            logger.debug('Setting default style to "%s"', name)
            self._default = instance

        return instance

    def lookup(self, name: str) -> Optional[Style]:
        """Get the style registered under name, or None."""
        return self._styles.get(name)

    def get_default(self) -> Optional[Style]:
        """Get the default style."""
        return self._default

    def names(self) -> List[str]:
        """Get the names of all registered styles, sorted."""
        return sorted(self._styles)

    def __contains__(self, name: str) -> bool:
        return name in self._styles

    def __len__(self) -> int:
        return len(self._styles)
