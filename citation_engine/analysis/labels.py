"""Argument label extraction from bracket shorthand."""

import re
from typing import List


LABEL_PATTERN = re.compile(r'\[[^\[\]]+\]')


def extract_labels(spec: str) -> List[str]:
    """
    Extract unique argument labels from shorthand such as "[Author]. [Title]."

    Only non-nested [...] spans match. Labels are trimmed and returned in
    first-seen order with later duplicates dropped.

    Args:
        spec: Free-form shorthand text

    Returns:
        Unique labels; empty when nothing matches
    """
    labels = []
    seen = set()
    for match in LABEL_PATTERN.finditer(spec or ''):
        label = match.group(0)[1:-1].strip()
        if label not in seen:
            seen.add(label)
            labels.append(label)
    return labels
