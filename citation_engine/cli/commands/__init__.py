"""CLI command handlers."""

from .render import format_template, lint_template, extract_labels_command, collect_values
from .combos import enumerate_combos
from .check import check_suite

__all__ = [
    'format_template',
    'lint_template',
    'extract_labels_command',
    'collect_values',
    'enumerate_combos',
    'check_suite',
]
