"""Combinations command implementation."""

import logging
from argparse import Namespace

from citation_engine.combinations import enumerate_combinations
from citation_engine.engine import CitationEngine

from .render import collect_values


logger = logging.getLogger(__name__)


def enumerate_combos(args: Namespace) -> int:
    """Print one '<labels>\\t<output>' row per argument subset."""
    engine = CitationEngine(max_combinations=args.max_combinations)

    labels = list(args.label)
    if not labels and args.spec:
        labels = engine.extract_labels(args.spec)

    try:
        values = collect_values(args)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 2

    if not labels:
        # Fall back to positional names, one per supplied value
        labels = [f"Arg{i + 1}" for i in range(len(values))]
    if not labels:
        logger.error("No arguments to combine: pass --label, --spec or --value")
        return 2

    null_mask = [value is None for value in values]
    rows = enumerate_combinations(
        engine,
        args.template,
        labels,
        values,
        null_mask=null_mask,
        selected=args.select,
    )

    for row in rows:
        print(f"{row.label}\t{row.output}")
    return 0
