"""
Style suites: named citation templates with expected outputs.

A suite is loaded and validated by SuiteLoader; SuiteRunner renders every
case and compares the result with the expected string.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .engine import CitationEngine
from .template import FieldValue


logger = logging.getLogger(__name__)


@dataclass
class SuiteCase:
    """Single expected rendering of a template."""
    name: str
    values: List[FieldValue]
    want: str


@dataclass
class TemplateEntry:
    """A named template with its argument labels and cases."""
    name: str
    template: str
    args: List[str] = field(default_factory=list)
    spec: Optional[str] = None
    cases: List[SuiteCase] = field(default_factory=list)


@dataclass
class StyleSuite:
    """A loaded, validated style suite."""
    version: str
    name: str
    templates: List[TemplateEntry] = field(default_factory=list)

    def get(self, name: str) -> Optional[TemplateEntry]:
        for entry in self.templates:
            if entry.name == name:
                return entry
        return None


@dataclass
class CaseResult:
    """Outcome of one suite case."""
    name: str
    got: str
    want: str

    @property
    def passed(self) -> bool:
        return self.got == self.want


class SuiteRunner:
    """Runs every case of a style suite through the engine."""

    def __init__(self, engine: Optional[CitationEngine] = None):
        self.engine = engine or CitationEngine()

    def run(self, suite: StyleSuite, only: Optional[str] = None) -> List[CaseResult]:
        """
        Render each case and compare it with its expected output.

        Args:
            suite: Validated suite
            only: Restrict the run to the template with this name

        Returns:
            One CaseResult per case, named '<template>/<case>'

        Raises:
            KeyError: If only names a template the suite does not define
        """
        entries = suite.templates
        if only is not None:
            entry = suite.get(only)
            if entry is None:
                raise KeyError(f"Template '{only}' not found in suite '{suite.name}'")
            entries = [entry]

        results = []
        for entry in entries:
            for case in entry.cases:
                got = self.engine.format_safe(entry.template, *case.values)
                result = CaseResult(f"{entry.name}/{case.name}", got, case.want)
                if not result.passed:
                    logger.debug(f"Case {result.name} failed: got {got!r}, want {case.want!r}")
                results.append(result)

        passed = sum(1 for r in results if r.passed)
        logger.info(f"Suite '{suite.name}': {passed}/{len(results)} case(s) passed")
        return results
