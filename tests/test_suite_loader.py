"""Tests for style suite loading, validation and running."""

import pytest
import tempfile
import yaml
from pathlib import Path

from citation_engine.exceptions import SuiteValidationError
from citation_engine.loader import SuiteLoader, load_values_file
from citation_engine.suite import SuiteRunner


def valid_suite() -> dict:
    return {
        "version": "1",
        "name": "apa",
        "templates": {
            "book": {
                "template": "[[%s]+{. }+[%s]]",
                "spec": "[Author]. [Title].",
                "cases": [
                    {"name": "full", "values": ["Smith", "A Book"], "want": "Smith. A Book"},
                    {"name": "no_title", "values": ["Smith", None], "want": "Smith"},
                ]
            }
        }
    }


class TestSuiteLoader:
    """Test strict suite validation."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.workspace = Path(self.temp_dir)
        self.loader = SuiteLoader()

    def write_suite(self, content: dict) -> Path:
        """Helper to write suite YAML."""
        path = self.workspace / "suite.yaml"
        with open(path, 'w') as f:
            yaml.dump(content, f)
        return path

    def test_valid_suite(self):
        """A valid suite loads into typed entries."""
        suite = self.loader.load(self.write_suite(valid_suite()))
        assert suite.version == "1"
        assert suite.name == "apa"
        entry = suite.get("book")
        assert entry is not None
        assert entry.args == ["Author", "Title"]
        assert [case.name for case in entry.cases] == ["full", "no_title"]
        assert entry.cases[1].values == ["Smith", None]

    def test_explicit_args_override_spec(self):
        """'args' wins over labels extracted from 'spec'."""
        content = valid_suite()
        content["templates"]["book"]["args"] = ["Who", "What"]
        suite = self.loader.load(self.write_suite(content))
        assert suite.get("book").args == ["Who", "What"]

    def test_missing_version(self):
        """'version' is required."""
        content = valid_suite()
        del content["version"]
        with pytest.raises(SuiteValidationError) as exc_info:
            self.loader.load(self.write_suite(content))
        assert exc_info.value.exit_code == 2
        assert any("'version' field is required" in err.message for err in exc_info.value.errors)

    def test_numeric_version_rejected(self):
        """An unquoted version is not a string."""
        path = self.workspace / "suite.yaml"
        path.write_text('version: 1\nname: x\ntemplates:\n  t:\n    template: "[a]"\n')
        with pytest.raises(SuiteValidationError) as exc_info:
            self.loader.load(path)
        assert any("must be a string" in err.message for err in exc_info.value.errors)

    def test_unknown_fields_rejected_at_every_level(self):
        """Unknown keys are errors, all reported together."""
        content = valid_suite()
        content["extra"] = True
        content["templates"]["book"]["style"] = "apa"
        content["templates"]["book"]["cases"][0]["note"] = "x"
        with pytest.raises(SuiteValidationError) as exc_info:
            self.loader.load(self.write_suite(content))
        messages = [err.message for err in exc_info.value.errors]
        assert "Unknown field 'extra'" in messages
        assert any("unknown field 'style'" in m for m in messages)
        assert any("unknown field 'note'" in m for m in messages)

    def test_empty_templates_rejected(self):
        """'templates' must not be empty."""
        content = valid_suite()
        content["templates"] = {}
        with pytest.raises(SuiteValidationError):
            self.loader.load(self.write_suite(content))

    def test_unbalanced_template_rejected(self):
        """Templates with structural lint issues are rejected."""
        content = valid_suite()
        content["templates"]["book"]["template"] = "[[%s]+{. }+[%s]"
        with pytest.raises(SuiteValidationError) as exc_info:
            self.loader.load(self.write_suite(content))
        assert any("Unclosed bracket/brace detected" in err.message for err in exc_info.value.errors)

    def test_lint_warnings_do_not_reject(self):
        """Stylistic warnings are advisory."""
        content = valid_suite()
        content["templates"]["book"]["template"] = "[[%s]+{}+[%s]]"
        suite = self.loader.load(self.write_suite(content))
        assert suite.get("book").template == "[[%s]+{}+[%s]]"

    def test_duplicate_case_names(self):
        """Case names must be unique within a template."""
        content = valid_suite()
        content["templates"]["book"]["cases"][1]["name"] = "full"
        with pytest.raises(SuiteValidationError) as exc_info:
            self.loader.load(self.write_suite(content))
        assert any("duplicate case name 'full'" in err.message for err in exc_info.value.errors)

    def test_missing_want(self):
        """Every case needs an expected output."""
        content = valid_suite()
        del content["templates"]["book"]["cases"][0]["want"]
        with pytest.raises(SuiteValidationError) as exc_info:
            self.loader.load(self.write_suite(content))
        assert any("missing required 'want'" in err.message for err in exc_info.value.errors)

    def test_boolean_value_rejected(self):
        """Booleans are not field values."""
        content = valid_suite()
        content["templates"]["book"]["cases"][0]["values"] = [True, "x"]
        with pytest.raises(SuiteValidationError) as exc_info:
            self.loader.load(self.write_suite(content))
        assert any("must be a string or null" in err.message for err in exc_info.value.errors)

    def test_yes_no_and_numbers_kept_as_text(self):
        """YAML yes/no words stay strings and numbers become text."""
        path = self.workspace / "suite.yaml"
        path.write_text(
            'version: "1"\n'
            'name: x\n'
            'templates:\n'
            '  t:\n'
            '    template: "[[%s]+{ }+[%s]]"\n'
            '    cases:\n'
            '      - values: [No, 2020]\n'
            '        want: No 2020\n'
        )
        suite = self.loader.load(path)
        case = suite.get("t").cases[0]
        assert case.name == "0"
        assert case.values == ["No", "2020"]
        assert case.want == "No 2020"

    def test_dates_and_decimals_kept_as_written(self):
        """Access dates and decimal page/edition values load as their text."""
        path = self.workspace / "suite.yaml"
        path.write_text(
            'version: "1"\n'
            'name: x\n'
            'templates:\n'
            '  web:\n'
            '    template: "[[%s]+{, accessed }+[%s]+{, p. }+[%s]]"\n'
            '    cases:\n'
            '      - values: [Smith, 2024-05-01, 1.10]\n'
            '        want: Smith, accessed 2024-05-01, p. 1.10\n'
        )
        suite = self.loader.load(path)
        case = suite.get("web").cases[0]
        assert case.values == ["Smith", "2024-05-01", "1.10"]
        assert case.want == "Smith, accessed 2024-05-01, p. 1.10"

    def test_invalid_yaml(self):
        """Unparseable files are validation errors."""
        path = self.workspace / "suite.yaml"
        path.write_text("version: [unclosed\n")
        with pytest.raises(SuiteValidationError) as exc_info:
            self.loader.load(path)
        assert "Failed to load suite" in exc_info.value.errors[0].message

    def test_non_mapping_document(self):
        """The document must be a mapping."""
        with pytest.raises(SuiteValidationError):
            self.loader.load_document(["not", "a", "suite"])


class TestSuiteRunner:
    """Test running suite cases."""

    def setup_method(self):
        """Set up test fixtures."""
        self.suite = SuiteLoader().load_document(valid_suite())
        self.runner = SuiteRunner()

    def test_all_cases_pass(self):
        """Matching outputs pass."""
        results = self.runner.run(self.suite)
        assert [r.name for r in results] == ["book/full", "book/no_title"]
        assert all(r.passed for r in results)

    def test_failing_case_reports_got_and_want(self):
        """Mismatches carry both strings."""
        self.suite.get("book").cases[0].want = "Smith, A Book"
        results = self.runner.run(self.suite)
        assert results[0].passed is False
        assert results[0].got == "Smith. A Book"
        assert results[0].want == "Smith, A Book"

    def test_only_unknown_template(self):
        """Restricting to an unknown template raises KeyError."""
        with pytest.raises(KeyError):
            self.runner.run(self.suite, only="article")


class TestValuesFile:
    """Test loading field values from a file."""

    def test_json_list(self, tmp_path):
        """JSON lists of strings and nulls load in order."""
        path = tmp_path / "values.json"
        path.write_text('["Smith", null, 12]')
        assert load_values_file(path) == ["Smith", None, "12"]

    def test_dates_and_decimals_kept_as_written(self, tmp_path):
        """Dates and decimals are not reinterpreted."""
        path = tmp_path / "values.yaml"
        path.write_text('[Smith, 2024-05-01, 1.10]')
        assert load_values_file(path) == ["Smith", "2024-05-01", "1.10"]

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            load_values_file(tmp_path / "missing.json")

    def test_not_a_list(self, tmp_path):
        """Objects are rejected."""
        path = tmp_path / "values.json"
        path.write_text('{"a": "b"}')
        with pytest.raises(ValueError):
            load_values_file(path)
