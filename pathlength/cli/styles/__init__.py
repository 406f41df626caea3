"""Output styles for the pathlength CLI."""

from .base import Style, StyleRegistry
from .json_style import JsonStyle
from .table_style import TableStyle
from .xml_style import XmlStyle
from .yaml_style import YamlStyle


def create_default_registry() -> StyleRegistry:
    """Create a registry holding every built-in style.

    Returns:
        StyleRegistry with json, table (default), xml and yaml
    """
    registry = StyleRegistry()
    registry.register(JsonStyle)
    registry.register(TableStyle, default=True)
    registry.register(XmlStyle)
    registry.register(YamlStyle)
    return registry


__all__ = [
    'Style',
    'StyleRegistry',
    'JsonStyle',
    'TableStyle',
    'XmlStyle',
    'YamlStyle',
    'create_default_registry',
]
