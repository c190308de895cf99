"""
Template substitution module.
Implements the lexical passes (placeholders, fold tokens) run before evaluation.
"""

from .substitution import PlaceholderSubstitutor, FieldValue

__all__ = ['PlaceholderSubstitutor', 'FieldValue']
