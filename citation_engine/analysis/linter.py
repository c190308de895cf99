"""
Static checks over raw template text.
Reports bracket/brace imbalance and stylistic warnings without evaluating.
"""

import re
from typing import List, Optional, Sequence, Tuple

from ..exceptions import LintIssue
from ..template.substitution import PlaceholderSubstitutor


OPENERS = {'[': ']', '{': '}'}
CLOSERS = {']': '[', '}': '{'}


class TemplateLinter:
    """
    Lints templates for structural and stylistic problems.

    Every check is a pure function of the text: nothing is cached between
    calls and nothing is raised. Callers holding fold tokens must expand them
    before linting.
    """

    EMPTY_LITERAL_PATTERN = re.compile(r'\{\s*\}')
    DOUBLED_OPERATOR_PATTERN = re.compile(r'\+\s*\+')

    UNCLOSED_MESSAGE = 'Unclosed bracket/brace detected'
    EMPTY_LITERAL_MESSAGE = 'Warning: empty {} literal'
    DOUBLED_OPERATOR_MESSAGE = "Warning: doubled '+' between addends"

    def __init__(self):
        """Initialize the linter."""
        self.substitutor = PlaceholderSubstitutor()

    def lint(self, template: str) -> List[str]:
        """
        Lint a template.

        Args:
            template: Raw template text

        Returns:
            Issue messages in scan order, followed by warnings.
            Empty when the template is balanced and warning-free.
        """
        issues = []
        stack: List[str] = []

        for i, ch in enumerate(template):
            if ch in OPENERS:
                stack.append(ch)
            elif ch in CLOSERS:
                last = stack.pop() if stack else None
                if last != CLOSERS[ch]:
                    issues.append(f"Unmatched '{ch}' at {i}")

        if stack:
            issues.append(self.UNCLOSED_MESSAGE)
        if self.EMPTY_LITERAL_PATTERN.search(template):
            issues.append(self.EMPTY_LITERAL_MESSAGE)
        if self.DOUBLED_OPERATOR_PATTERN.search(template):
            issues.append(self.DOUBLED_OPERATOR_MESSAGE)

        return issues

    def markers(
        self,
        text: str,
        pieces: Sequence[str] = (),
        arg_count: Optional[int] = None
    ) -> List[LintIssue]:
        """
        Produce positional diagnostics for an editor.

        Args:
            text: Template text, possibly containing [*] fold tokens
            pieces: Collapsed pieces the fold tokens stand for
            arg_count: Number of declared arguments; enables the
                placeholder drift warning when given

        Returns:
            Errors for each unmatched closer and each unclosed opener
            (at their indices in the expanded text), then the drift warning
        """
        expanded = self.substitutor.expand_folds(text, pieces)
        markers = []
        stack: List[Tuple[str, int]] = []

        for i, ch in enumerate(expanded):
            if ch in OPENERS:
                stack.append((ch, i))
            elif ch in CLOSERS:
                last = stack.pop() if stack else None
                if last is None or OPENERS[last[0]] != ch:
                    markers.append(LintIssue(f"Unmatched {ch}", 'error', i))

        for ch, i in stack:
            markers.append(LintIssue(f"Unclosed {ch}", 'error', i))

        if arg_count is not None:
            placeholder_count = self.substitutor.count_placeholders(expanded)
            if placeholder_count != arg_count:
                markers.append(LintIssue(
                    f"%s count ({placeholder_count}) differs from Arguments count ({arg_count})",
                    'warning',
                    0
                ))

        return markers

    def is_balanced_expression(self, text: str) -> bool:
        """
        Check that text is exactly one balanced [...] expression.

        Used to validate a selection before folding it into a [*] token.
        A backslash skips the character after it.

        Args:
            text: Candidate selection

        Returns:
            True if text starts with '[', ends with ']' and both delimiter
            kinds balance without ever going negative
        """
        if not text or text[0] != '[' or text[-1] != ']':
            return False

        brackets = 0
        braces = 0
        i = 0
        while i < len(text):
            ch = text[i]
            if ch == '\\':
                i += 2
                continue
            if ch == '[':
                brackets += 1
            elif ch == ']':
                brackets -= 1
            elif ch == '{':
                braces += 1
            elif ch == '}':
                braces -= 1
            if brackets < 0 or braces < 0:
                return False
            i += 1

        return brackets == 0 and braces == 0
