"""Path length filters.

A Filter pairs an Operator with a non-negative operand and accepts a path
when ``operator.evaluate(len(path), operand)`` holds. Filters are usually
parsed from an expression such as ``"gte 20"``, ``">=20"`` or ``"ne 3"``.
"""

import logging
import math
from dataclasses import dataclass
from numbers import Real
from typing import Union

from . import operator as operators
from .operator import Operator
from ..errors import InvalidArgumentError, InvalidExpressionError

logger = logging.getLogger(__name__)

_DIGITS = frozenset('0123456789')


@dataclass(frozen=True, init=False)
class Filter:
    """Accepts or rejects paths based on their character length.

    Attributes:
        operator: Comparison applied to the path length
        operand: Non-negative integer the length is compared against
    """

    operator: Operator
    operand: int

    def __init__(self, operator: Union[Operator, str], operand: Union[int, float, str]):
        """Create a filter from an operator and an operand.

        Args:
            operator: Operator constant or an operator token (e.g. ">=")
            operand: Number (rounded to the nearest integer) or digit string

        Raises:
            InvalidArgumentError: If the operator is missing or unknown, or
                the operand is not a number or is negative
        """
        if isinstance(operator, str):
            try:
                operator = operators.parse(operator)
            except InvalidExpressionError as e:
                raise InvalidArgumentError(str(e)) from e
        if not isinstance(operator, Operator):
            raise InvalidArgumentError("Operator must be specified")

        if isinstance(operand, str):
            digits = operand.strip()
            if not digits or not set(digits) <= _DIGITS:
                raise InvalidArgumentError(f"Operand must be a number: {operand}")
            try:
                operand = int(digits)
            except ValueError as e:  # longer than sys.get_int_max_str_digits()
                raise InvalidArgumentError(f"Operand has too many digits: {len(digits)}") from e
        if isinstance(operand, bool) or not isinstance(operand, Real):
            raise InvalidArgumentError(f"Operand must be a number: {operand}")

        # Integers are kept exact, other reals round with halves going up
        if not isinstance(operand, int):
            if math.isnan(operand):
                raise InvalidArgumentError(f"Operand must be a number: {operand}")
            if operand < 0:
                raise InvalidArgumentError(f"Operand must be positive: {operand}")
            if math.isinf(operand):
                raise InvalidArgumentError(f"Operand must be finite: {operand}")
            operand = math.floor(operand + 0.5)
        elif operand < 0:
            raise InvalidArgumentError(f"Operand must be positive: {operand}")

        object.__setattr__(self, 'operator', operator)
        object.__setattr__(self, 'operand', int(operand))

    @classmethod
    def parse(cls, expression: str) -> 'Filter':
        """Parse a filter expression.

        The expression is an operator token followed by an optional run of
        whitespace and a run of digits. The operator token is every leading
        character that is neither a digit nor whitespace.

        Args:
            expression: Filter text, e.g. "gte 20" or "<=100"

        Returns:
            Parsed Filter

        Raises:
            InvalidExpressionError: If the expression is malformed or the
                operator is unknown
        """
        logger.debug('Attempting to parse filter from "%s"', expression)

        value = expression.strip()
        length = len(value)

        position = 0
        while position < length and not (value[position] in _DIGITS or value[position].isspace()):
            position += 1
        operator_token = value[:position]

        while position < length and value[position].isspace():
            position += 1

        operand_start = position
        while position < length and value[position] in _DIGITS:
            position += 1
        operand_token = value[operand_start:position]

        if not operator_token or not operand_token or position != length:
            raise InvalidExpressionError(f"Invalid filter: {value}", expression=expression)

        try:
            operand = int(operand_token)
        except ValueError as e:  # longer than sys.get_int_max_str_digits()
            raise InvalidExpressionError(f"Invalid filter: operand has too many digits ({len(operand_token)})",
                                         expression=expression) from e

        result = cls(operators.parse(operator_token), operand)

        logger.debug('Filter "%s" parsed from "%s"', result, value)

        return result

    def check(self, path: str) -> bool:
        """Check whether the length of path satisfies this filter."""
        return self.operator.evaluate(len(path), self.operand)

    def __str__(self) -> str:
        return f"{self.operator} {self.operand}"
