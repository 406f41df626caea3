"""Core value types for pathlength.

These components are pure and perform no I/O: comparison operators, the
length filter built on them, and the result record.
"""

from .operator import (
    Operator,
    EQUALS,
    GREATER_THAN,
    GREATER_THAN_OR_EQUAL_TO,
    LESS_THAN,
    LESS_THAN_OR_EQUAL_TO,
    NOT_EQUALS,
    OPERATORS,
    parse as parse_operator,
)
from .filter import Filter
from .result import Result

__all__ = [
    # Operators
    'Operator',
    'EQUALS',
    'GREATER_THAN',
    'GREATER_THAN_OR_EQUAL_TO',
    'LESS_THAN',
    'LESS_THAN_OR_EQUAL_TO',
    'NOT_EQUALS',
    'OPERATORS',
    'parse_operator',
    # Filter
    'Filter',
    # Result
    'Result',
]
