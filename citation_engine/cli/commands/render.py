"""Format, lint and labels command implementations."""

import logging
import sys
from argparse import Namespace
from pathlib import Path
from typing import List

from citation_engine.engine import CitationEngine, ENGINE_ERROR_PREFIX
from citation_engine.exceptions import MalformedTemplateError
from citation_engine.loader import load_values_file
from citation_engine.template import FieldValue


logger = logging.getLogger(__name__)


def collect_values(args: Namespace) -> List[FieldValue]:
    """
    Build positional field values from --values-file, --value and --null.

    File values come first, then --value entries; --null indices are
    applied last.
    """
    values: List[FieldValue] = []

    if getattr(args, 'values_file', None):
        values.extend(load_values_file(Path(args.values_file)))

    values.extend(args.value or [])

    for index in args.null or []:
        if index < 0:
            raise ValueError(f"Invalid --null index: {index}")
        if index >= len(values):
            values.extend([''] * (index + 1 - len(values)))
        values[index] = None

    return values


def format_template(args: Namespace) -> int:
    """Render a template and print the result."""
    engine = CitationEngine()
    try:
        values = collect_values(args)
    except FileNotFoundError as e:
        logger.error(f"File not found: {e}")
        return 1
    except ValueError as e:
        logger.error(f"Validation error: {e}")
        return 2

    template = engine.expand_folds(args.template, args.fold)
    try:
        result = engine.format(template, *values)
    except MalformedTemplateError as e:
        logger.warning(f"Failed to format template {template!r}: {e}")
        print(f"{ENGINE_ERROR_PREFIX}{e}")
        return 1

    print(result)
    return 0


def lint_template(args: Namespace) -> int:
    """Lint a template and print each issue; exit 1 when any is found."""
    engine = CitationEngine()

    if args.markers or args.args is not None:
        markers = engine.markers(args.template, args.fold, args.args)
        for marker in markers:
            print(f"{marker.severity}: {marker.message} (at {marker.index})")
        return 1 if markers else 0

    issues = engine.lint(engine.expand_folds(args.template, args.fold))
    for issue in issues:
        print(issue)
    return 1 if issues else 0


def extract_labels_command(args: Namespace) -> int:
    """Print one extracted label per line."""
    labels = CitationEngine().extract_labels(args.spec)
    if not labels:
        print("No labels found", file=sys.stderr)
        return 1
    for label in labels:
        print(label)
    return 0
