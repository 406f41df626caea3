"""Comparison operators used by length filters.

Six operators exist, each exposed as a module constant. An operator is
looked up from text by its canonical name or any of its aliases:

    eq  (=, ==, ===)     gt  (>)     gte (>=)
    lt  (<)              lte (<=)    ne  (!, !=, !==)
"""

import logging
from dataclasses import dataclass, field
from typing import Callable, Tuple

from ..errors import InvalidExpressionError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Operator:
    """A named comparison between two integers.

    Attributes:
        name: Canonical name, also used when formatting filters
        aliases: Alternative tokens that resolve to this operator
        evaluator: Binary predicate applied by evaluate()
    """

    name: str
    aliases: Tuple[str, ...]
    evaluator: Callable[[int, int], bool] = field(compare=False, repr=False)

    def evaluate(self, lhs: int, rhs: int) -> bool:
        """Compare lhs against rhs."""
        return self.evaluator(lhs, rhs)

    def matches(self, token: str) -> bool:
        """Check if token is this operator's name or one of its aliases."""
        return token == self.name or token in self.aliases

    def __str__(self) -> str:
        return self.name


EQUALS = Operator('eq', ('=', '==', '==='), lambda lhs, rhs: lhs == rhs)

GREATER_THAN = Operator('gt', ('>',), lambda lhs, rhs: lhs > rhs)

GREATER_THAN_OR_EQUAL_TO = Operator('gte', ('>=',), lambda lhs, rhs: lhs >= rhs)

LESS_THAN = Operator('lt', ('<',), lambda lhs, rhs: lhs < rhs)

LESS_THAN_OR_EQUAL_TO = Operator('lte', ('<=',), lambda lhs, rhs: lhs <= rhs)

NOT_EQUALS = Operator('ne', ('!', '!=', '!=='), lambda lhs, rhs: lhs != rhs)

OPERATORS: Tuple[Operator, ...] = (
    EQUALS,
    GREATER_THAN,
    GREATER_THAN_OR_EQUAL_TO,
    LESS_THAN,
    LESS_THAN_OR_EQUAL_TO,
    NOT_EQUALS,
)


def parse(token: str) -> Operator:
    """Resolve an operator from its name or alias.

    Matching is exact and case-sensitive, after surrounding whitespace is
    stripped.

    Args:
        token: Operator text, e.g. "gte" or ">="

    Returns:
        The matching Operator constant

    Raises:
        InvalidExpressionError: If no operator matches
    """
    logger.debug('Attempting to parse operator from "%s"', token)

    value = token.strip()

    for operator in OPERATORS:
        if operator.matches(value):
            logger.debug('Operator "%s" parsed from "%s"', operator, value)
            return operator

    raise InvalidExpressionError(f"Invalid operator: {value}", expression=token)
