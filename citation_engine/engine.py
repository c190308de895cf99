"""
Citation engine facade.

The narrow call surface used by editors, the combinations tester and the CLI:
format, format_safe, lint, markers and extract_labels.
"""

import logging
from typing import List, Optional, Sequence

from .analysis import TemplateLinter, extract_labels
from .evaluator import TemplateEvaluator
from .exceptions import LintIssue, MalformedTemplateError
from .template import FieldValue, PlaceholderSubstitutor


logger = logging.getLogger(__name__)

ENGINE_ERROR_PREFIX = 'Engine error: '


class CitationEngine:
    """
    Renders citation templates against positional field values.

    Example:
        >>> engine = CitationEngine()
        >>> engine.format('[[%s]+{, }+[%s]]', 'Smith', '')
        'Smith'
        >>> engine.format('[[%s]+{, }+[%s]]', 'Smith', 'Jones')
        'Smith, Jones'
    """

    def __init__(self, max_combinations: int = 4096):
        """
        Initialize the engine.

        Args:
            max_combinations: Upper bound on rows the combinations tester
                will render for this engine
        """
        self.max_combinations = max_combinations
        self.substitutor = PlaceholderSubstitutor()
        self.evaluator = TemplateEvaluator()
        self.linter = TemplateLinter()

    def substitute(self, template: str, values: Sequence[FieldValue]) -> str:
        """Replace %s placeholders positionally; see PlaceholderSubstitutor."""
        return self.substitutor.substitute(template, values)

    def evaluate(self, text: str) -> str:
        """Evaluate already substituted text; see TemplateEvaluator."""
        return self.evaluator.evaluate(text)

    def format(self, template: str, *values: FieldValue) -> str:
        """
        Substitute placeholders, then evaluate.

        Args:
            template: Template text with %s placeholders
            *values: Field values in placeholder order (None renders empty)

        Returns:
            Rendered citation

        Raises:
            MalformedTemplateError: If the substituted template cannot be evaluated
        """
        filled = self.substitute(template, values)
        return self.evaluate(filled)

    def format_safe(self, template: str, *values: FieldValue) -> str:
        """
        Format, turning evaluator failures into a displayable string.

        Returns:
            The rendered citation, or "Engine error: <message>"
        """
        try:
            return self.format(template, *values)
        except MalformedTemplateError as e:
            logger.warning(f"Failed to format template {template!r}: {e}")
            return f"{ENGINE_ERROR_PREFIX}{e}"

    def lint(self, template: str) -> List[str]:
        """Issue messages for template; see TemplateLinter.lint."""
        return self.linter.lint(template)

    def markers(
        self,
        text: str,
        pieces: Sequence[str] = (),
        arg_count: Optional[int] = None
    ) -> List[LintIssue]:
        """Positional diagnostics for text; see TemplateLinter.markers."""
        return self.linter.markers(text, pieces, arg_count)

    def expand_folds(self, text: str, pieces: Sequence[str]) -> str:
        """Replace [*] fold tokens with their pieces."""
        return self.substitutor.expand_folds(text, pieces)

    def extract_labels(self, spec: str) -> List[str]:
        """Unique argument labels from bracket shorthand."""
        return extract_labels(spec)
