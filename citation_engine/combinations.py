"""
Combinations tester.

Renders a template once for every non-empty subset of the selected
arguments, with unselected arguments passed as None, so an author can see
how the template collapses when optional fields are missing.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from .engine import CitationEngine
from .template import FieldValue


logger = logging.getLogger(__name__)

TOO_MANY_LABEL = '—'


@dataclass
class ComboRow:
    """One rendered subset of arguments."""
    label: str
    inputs: List[FieldValue] = field(default_factory=list)
    output: str = ''


def subsets(indices: Sequence[int]) -> List[List[int]]:
    """
    Non-empty subsets of indices in bitmask order.

    Bit b of the mask selects indices[b]; masks run from 1 to 2**n - 1.
    """
    n = len(indices)
    return [
        [indices[b] for b in range(n) if mask & (1 << b)]
        for mask in range(1, 1 << n)
    ]


def combination_count(selected: Sequence[int]) -> int:
    """Number of rows a selection would render."""
    return (1 << len(selected)) - 1 if selected else 0


def enumerate_combinations(
    engine: CitationEngine,
    template: str,
    labels: Sequence[str],
    values: Sequence[FieldValue],
    null_mask: Optional[Sequence[bool]] = None,
    selected: Optional[Sequence[int]] = None,
    max_combinations: Optional[int] = None
) -> List[ComboRow]:
    """
    Render template for each non-empty subset of the selected arguments.

    Args:
        engine: Engine used to render each row
        template: Template text with %s placeholders
        labels: Argument labels, one per placeholder position
        values: Argument values aligned with labels
        null_mask: True where an argument is explicitly null
        selected: Argument indices to vary (default: all)
        max_combinations: Row limit (default: engine.max_combinations)

    Returns:
        One ComboRow per subset, or a single explanatory row when the
        selection exceeds the limit
    """
    if selected is None:
        selected = list(range(len(labels)))
    else:
        selected = [i for i in selected if 0 <= i < len(labels)]
    if not selected:
        return []

    limit = engine.max_combinations if max_combinations is None else max_combinations
    total = combination_count(selected)
    if total > limit:
        logger.warning(f"Combination limit exceeded: {total} > {limit}")
        return [ComboRow(
            label=TOO_MANY_LABEL,
            inputs=[],
            output=f"Too many combinations selected ({total}). Reduce selection to ≤ {limit}."
        )]

    null_mask = null_mask or []

    def value_at(i: int) -> FieldValue:
        if i < len(null_mask) and null_mask[i]:
            return None
        return values[i] if i < len(values) else ''

    rows = []
    for subset in subsets(selected):
        inputs = [value_at(i) if i in subset else None for i in range(len(labels))]
        rows.append(ComboRow(
            label=', '.join(labels[i] for i in subset),
            inputs=inputs,
            output=engine.format_safe(template, *inputs),
        ))

    logger.debug(f"Rendered {len(rows)} combination(s)")
    return rows
