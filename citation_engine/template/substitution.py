"""
Placeholder substitution for citation templates.
Handles positional %s placeholders and editor fold tokens ([*]).
"""

import re
from typing import Optional, Sequence


FieldValue = Optional[str]


class PlaceholderSubstitutor:
    """
    Performs the purely lexical passes that run before evaluation.

    Supports:
    - placeholders: %s, consumed left to right, one per positional value
    - fold tokens: [*], the Nth token standing for the Nth stored piece
    """

    PLACEHOLDER_PATTERN = re.compile(r'%s')
    FOLD_PATTERN = re.compile(r'\[\*\]')

    def substitute(self, template: str, values: Sequence[FieldValue]) -> str:
        """
        Substitute %s placeholders with positional field values.

        Args:
            template: Template text containing %s placeholders
            values: Field values in placeholder order (None renders empty)

        Returns:
            Template with every placeholder replaced. Missing values become
            empty strings and unused values are ignored.
        """
        remaining = iter(values)

        def replace_placeholder(match):
            value = next(remaining, None)
            return value if value is not None else ''

        return self.PLACEHOLDER_PATTERN.sub(replace_placeholder, template)

    def expand_folds(self, text: str, pieces: Sequence[str]) -> str:
        """
        Replace [*] fold tokens with the collapsed pieces they stand for.

        Args:
            text: Template text possibly containing fold tokens
            pieces: Collapsed substrings, in token order

        Returns:
            Expanded text; tokens without a stored piece expand to ''
        """
        remaining = iter(pieces)
        return self.FOLD_PATTERN.sub(lambda _: next(remaining, ''), text)

    def count_placeholders(self, text: str) -> int:
        """Number of %s placeholders in text."""
        return len(self.PLACEHOLDER_PATTERN.findall(text))
