"""
Statement splitting for citation templates.
Breaks group content into statements of '+'-joined addend spans.
"""

import logging
from typing import List

from .types import (
    ESCAPABLE,
    ESCAPE,
    EXPRESSION_CLOSE,
    EXPRESSION_OPEN,
    LITERAL_CLOSE,
    LITERAL_OPEN,
    OPERATOR,
    Statement,
)


logger = logging.getLogger(__name__)


class StatementSplitter:
    """
    Splits one group's content into statements.

    Scanning keeps separate balance counters for [...] and {...} plus the
    delimiter kind that opened the current addend. The addend ends when the
    counter for that kind returns to zero:
    - followed by '+': the addend joins the current statement
    - otherwise: the addend closes the current statement

    Brackets inside an open literal are opaque and never counted.
    """

    def split(self, content: str) -> List[Statement]:
        """
        Split content into statements.

        Args:
            content: Group content starting with '[' or '{'

        Returns:
            Statements in order, each a list of raw addend spans
            (outer delimiters included). Trailing text that never forms a
            complete addend is dropped.
        """
        statements: List[Statement] = []
        statement: Statement = []
        addend: List[str] = []
        brackets = 0
        braces = 0
        active = content[:1]
        length = len(content)

        i = 0
        while i < length:
            ch = content[i]

            if ch == ESCAPE and i < length - 1 and content[i + 1] in ESCAPABLE:
                # Expressions keep the backslash, literals drop it
                if active != LITERAL_OPEN:
                    addend.append(ch)
                addend.append(content[i + 1])
                i += 2
                continue

            addend.append(ch)
            if ch == LITERAL_OPEN:
                braces += 1
            elif ch == LITERAL_CLOSE:
                braces -= 1
            elif braces <= 0:
                if ch == EXPRESSION_OPEN:
                    brackets += 1
                elif ch == EXPRESSION_CLOSE:
                    brackets -= 1

            closed = (
                (active == EXPRESSION_OPEN and brackets == 0)
                or (active == LITERAL_OPEN and braces == 0)
            )
            if closed:
                statement.append(''.join(addend))
                addend = []

                if i == length - 1:
                    statements.append(statement)
                    statement = []
                elif content[i + 1] == OPERATOR:
                    i += 1
                    active = content[i + 1:i + 2]
                else:
                    statements.append(statement)
                    statement = []
                    active = content[i + 1]

            i += 1

        if addend or statement:
            dropped = statement + [''.join(addend)]
            logger.debug(f"Dropping unterminated statement: {dropped!r}")

        return statements
