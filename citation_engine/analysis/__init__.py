"""Static analysis module for template linting and label extraction."""

from .linter import TemplateLinter
from .labels import extract_labels

__all__ = ['TemplateLinter', 'extract_labels']
