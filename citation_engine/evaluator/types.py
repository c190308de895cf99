"""
Value types for the template evaluator.

An addend evaluates to either an ExpressionValue (a [...] group, valued by the
collapse rule) or a LiteralText (a {...} group, valued by its raw content).
"""

from dataclasses import dataclass
from typing import List, Union


EXPRESSION_OPEN = '['
EXPRESSION_CLOSE = ']'
LITERAL_OPEN = '{'
LITERAL_CLOSE = '}'
OPERATOR = '+'
ESCAPE = '\\'

GROUP_OPENERS = (EXPRESSION_OPEN, LITERAL_OPEN)
ESCAPABLE = (EXPRESSION_OPEN, EXPRESSION_CLOSE, LITERAL_OPEN, LITERAL_CLOSE)


@dataclass(frozen=True)
class ExpressionValue:
    """Rendered value of an expression addend."""
    text: str

    @property
    def is_empty(self) -> bool:
        return self.text == ''


@dataclass(frozen=True)
class LiteralText:
    """Raw content of a literal addend."""
    text: str


AddendValue = Union[ExpressionValue, LiteralText]

# One statement is the ordered list of raw addend spans joined by '+'
Statement = List[str]
