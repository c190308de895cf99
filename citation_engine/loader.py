"""Style suite loader with strict schema validation."""

import logging
from pathlib import Path
from typing import Any, List, Optional

import yaml

from .analysis import TemplateLinter, extract_labels
from .exceptions import SuiteValidationError, ValidationError
from .suite import StyleSuite, SuiteCase, TemplateEntry
from .template import FieldValue


logger = logging.getLogger(__name__)


class PreservingLoader(yaml.SafeLoader):
    """YAML loader that keeps yes/no/on/off, dates and decimals as written."""
    pass


# Field values such as "No", "2024-05-01" or "1.10" are ordinary citation text
TEXT_TAGS = {
    'tag:yaml.org,2002:float',
    'tag:yaml.org,2002:timestamp',
}
PreservingLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp) for tag, regexp in resolvers
        if tag not in TEXT_TAGS
        and not (tag == 'tag:yaml.org,2002:bool' and first in 'yYnNoO')
    ]
    for first, resolvers in PreservingLoader.yaml_implicit_resolvers.items()
}


class SuiteLoader:
    """Loads and validates style suite YAML."""

    SUPPORTED_VERSIONS = {"1"}
    TOP_LEVEL_FIELDS = {'version', 'name', 'templates'}
    TEMPLATE_FIELDS = {'template', 'spec', 'args', 'cases'}
    CASE_FIELDS = {'name', 'values', 'want'}

    def __init__(self):
        """Initialize loader."""
        self.errors: List[ValidationError] = []
        self.linter = TemplateLinter()

    def load(self, suite_path: Path) -> StyleSuite:
        """Load and validate a suite file."""
        self.errors = []
        try:
            with open(suite_path, 'r', encoding='utf-8') as f:
                document = yaml.load(f, Loader=PreservingLoader)
        except (OSError, yaml.YAMLError) as e:
            self._add_error(f"Failed to load suite: {e}")
            self._raise_validation_errors()

        logger.info(f"Loaded suite file: {suite_path}")
        return self.load_document(document)

    def load_document(self, document: Any) -> StyleSuite:
        """Validate an already parsed suite document."""
        self.errors = []
        if document is None or not isinstance(document, dict):
            self._add_error("Suite must be a YAML object/dictionary")
            self._raise_validation_errors()

        version = document.get('version')
        if version is None:
            self._add_error("'version' field is required")
            version = ""
        elif not isinstance(version, str):
            self._add_error(f"'version' field must be a string, got {type(version).__name__}")
            version = ""
        elif version not in self.SUPPORTED_VERSIONS:
            self._add_error(f"Unsupported version '{version}'. Supported: {sorted(self.SUPPORTED_VERSIONS)}")

        for key in document.keys():
            if key not in self.TOP_LEVEL_FIELDS:
                self._add_error(f"Unknown field '{key}'")

        name = document.get('name', '')
        if not isinstance(name, str):
            self._add_error(f"'name' must be a string, got {type(name).__name__}", 'name')
            name = ''

        templates = document.get('templates')
        entries: List[TemplateEntry] = []
        if not templates:
            self._add_error("'templates' field is required and must not be empty")
        elif not isinstance(templates, dict):
            self._add_error("'templates' must be a dictionary of named templates")
        else:
            for template_name, config in templates.items():
                entry = self._validate_template(str(template_name), config)
                if entry is not None:
                    entries.append(entry)

        if self.errors:
            self._raise_validation_errors()

        return StyleSuite(version=version, name=name, templates=entries)

    def _validate_template(self, name: str, config: Any) -> Optional[TemplateEntry]:
        """Validate one named template and its cases."""
        path = f"templates.{name}"
        if not isinstance(config, dict):
            self._add_error(f"Template '{name}' must be a dictionary", path)
            return None

        for key in config.keys():
            if key not in self.TEMPLATE_FIELDS:
                self._add_error(f"Template '{name}': unknown field '{key}'", path)

        template = config.get('template')
        if not isinstance(template, str):
            self._add_error(f"Template '{name}' missing required 'template' string", path)
            return None

        # Structural problems make every case meaningless; warnings are advisory
        for issue in self.linter.lint(template):
            if issue.startswith('Warning:'):
                logger.warning(f"Template '{name}': {issue}")
            else:
                self._add_error(f"Template '{name}': {issue}", f"{path}.template")

        spec = config.get('spec')
        if spec is not None and not isinstance(spec, str):
            self._add_error(f"Template '{name}': 'spec' must be a string", f"{path}.spec")
            spec = None

        args = config.get('args')
        if args is None:
            args = extract_labels(spec) if spec else []
        elif not isinstance(args, list) or not all(isinstance(a, str) for a in args):
            self._add_error(f"Template '{name}': 'args' must be a list of strings", f"{path}.args")
            args = []

        cases = self._validate_cases(name, config.get('cases', []))
        return TemplateEntry(name=name, template=template, args=args, spec=spec, cases=cases)

    def _validate_cases(self, template_name: str, cases: Any) -> List[SuiteCase]:
        """Validate the cases of one template."""
        path = f"templates.{template_name}.cases"
        if cases is None:
            return []
        if not isinstance(cases, list):
            self._add_error(f"Template '{template_name}': 'cases' must be a list", path)
            return []

        validated = []
        seen_names = set()
        for i, case in enumerate(cases):
            case_path = f"{path}[{i}]"
            if not isinstance(case, dict):
                self._add_error(f"Template '{template_name}': case {i} must be a dictionary", case_path)
                continue

            for key in case.keys():
                if key not in self.CASE_FIELDS:
                    self._add_error(f"Template '{template_name}': case {i} unknown field '{key}'", case_path)

            case_name = case.get('name', str(i))
            if not isinstance(case_name, (str, int)):
                self._add_error(f"Template '{template_name}': case {i} name must be a string", case_path)
                continue
            case_name = str(case_name)
            if case_name in seen_names:
                self._add_error(f"Template '{template_name}': duplicate case name '{case_name}'", case_path)
            seen_names.add(case_name)

            values = self._validate_values(template_name, i, case.get('values', []), case_path)

            want = self._to_text(case.get('want'))
            if want is None:
                self._add_error(f"Template '{template_name}': case {i} missing required 'want' string", case_path)
                continue

            if values is not None:
                validated.append(SuiteCase(name=case_name, values=values, want=want))

        return validated

    def _validate_values(
        self,
        template_name: str,
        index: int,
        values: Any,
        path: str
    ) -> Optional[List[FieldValue]]:
        """Validate case values: strings, numbers (kept as text) or null."""
        if not isinstance(values, list):
            self._add_error(f"Template '{template_name}': case {index} 'values' must be a list", path)
            return None

        validated: List[FieldValue] = []
        for j, value in enumerate(values):
            if value is None:
                validated.append(None)
                continue
            text = self._to_text(value)
            if text is None:
                self._add_error(
                    f"Template '{template_name}': case {index} value {j} must be a string or null, "
                    f"got {type(value).__name__}",
                    f"{path}.values[{j}]"
                )
                return None
            validated.append(text)
        return validated

    def _to_text(self, value: Any) -> Optional[str]:
        """Scalar as text; bare years and page numbers arrive from YAML as numbers."""
        if isinstance(value, bool):
            return None
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float)):
            return str(value)
        return None

    def _add_error(self, message: str, path: str = "", exit_code: int = 2):
        """Add validation error."""
        self.errors.append(ValidationError(message, path, exit_code))

    def _raise_validation_errors(self):
        """Raise SuiteValidationError with accumulated errors."""
        raise SuiteValidationError(self.errors)


def load_values_file(path: Path) -> List[FieldValue]:
    """
    Load positional field values from a JSON or YAML list.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the document is not a list of strings/nulls
    """
    if not path.exists():
        raise FileNotFoundError(f"Values file not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            document = yaml.load(f, Loader=PreservingLoader)
    except yaml.YAMLError as e:
        raise ValueError(f"Failed to parse values file {path}: {e}") from e

    if not isinstance(document, list):
        raise ValueError(f"Values file must contain a list, got {type(document).__name__}")

    values: List[FieldValue] = []
    for i, value in enumerate(document):
        if value is None or isinstance(value, str):
            values.append(value)
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            values.append(str(value))
        else:
            raise ValueError(f"Value {i} must be a string or null, got {type(value).__name__}")
    return values
