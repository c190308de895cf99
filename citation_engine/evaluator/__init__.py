"""
Template evaluator module.
Splits templates into statements and renders them with the collapse rule.
"""

from .types import ExpressionValue, LiteralText
from .parser import StatementSplitter
from .evaluator import TemplateEvaluator

__all__ = [
    'ExpressionValue',
    'LiteralText',
    'StatementSplitter',
    'TemplateEvaluator',
]
