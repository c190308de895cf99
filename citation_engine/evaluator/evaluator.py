"""
Template evaluation with the collapse-on-empty rule.

A statement renders every addend in order unless one of its expression
addends is empty, in which case only the expression values are kept and the
literal separators between them vanish.
"""

import logging
from typing import Optional

from ..exceptions import MalformedTemplateError
from .parser import StatementSplitter
from .types import (
    EXPRESSION_CLOSE,
    EXPRESSION_OPEN,
    GROUP_OPENERS,
    LITERAL_CLOSE,
    LITERAL_OPEN,
    AddendValue,
    ExpressionValue,
    LiteralText,
    Statement,
)


logger = logging.getLogger(__name__)


class TemplateEvaluator:
    """
    Evaluates a fully substituted template string.

    Holds no state between calls; the same text always renders the same way.
    """

    def __init__(self, splitter: Optional[StatementSplitter] = None):
        """
        Initialize the evaluator.

        Args:
            splitter: Statement splitter to use (default StatementSplitter)
        """
        self.splitter = splitter or StatementSplitter()

    def evaluate(self, text: str) -> str:
        """
        Evaluate text as a group tree.

        Args:
            text: Substituted template text

        Returns:
            Rendered string. Empty text and text not starting with '[' or '{'
            are returned unchanged.

        Raises:
            MalformedTemplateError: If the group structure cannot be evaluated
        """
        try:
            return self._evaluate(text)
        except RecursionError:
            raise MalformedTemplateError("Template nesting is too deep to evaluate", text)

    def _evaluate(self, text: str) -> str:
        if not text or text[0] not in GROUP_OPENERS:
            return text

        statements = self.splitter.split(text)
        logger.debug(f"Evaluating {len(statements)} statement(s) in {text!r}")
        return ''.join(self._evaluate_statement(statement) for statement in statements)

    def _evaluate_statement(self, statement: Statement) -> str:
        """
        Apply the collapse rule to one statement.

        Args:
            statement: Raw addend spans joined by '+'

        Returns:
            Expression values only if any of them is empty, else every
            addend value in order
        """
        values = [self._evaluate_addend(addend) for addend in statement]
        expressions = [value for value in values if isinstance(value, ExpressionValue)]

        if any(expression.is_empty for expression in expressions):
            return ''.join(expression.text for expression in expressions)
        return ''.join(value.text for value in values)

    def _evaluate_addend(self, addend: str) -> AddendValue:
        """
        Classify and evaluate a single addend span.

        Args:
            addend: Raw span including its outer delimiters

        Returns:
            ExpressionValue for [...] spans, LiteralText for {...} spans

        Raises:
            MalformedTemplateError: If the span is neither
        """
        if len(addend) >= 2:
            if addend[0] == EXPRESSION_OPEN and addend[-1] == EXPRESSION_CLOSE:
                return ExpressionValue(self._evaluate(addend[1:-1]))
            if addend[0] == LITERAL_OPEN and addend[-1] == LITERAL_CLOSE:
                return LiteralText(addend[1:-1])

        raise MalformedTemplateError(f"Unbalanced group: {addend!r}", addend)
