"""Command line interface for pathlength."""

from .main import CLI, main

__all__ = [
    'CLI',
    'main',
]
