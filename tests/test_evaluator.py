"""Tests for statement splitting and collapse-on-empty evaluation."""

import pytest

from citation_engine.evaluator import StatementSplitter, TemplateEvaluator
from citation_engine.exceptions import MalformedTemplateError


class TestStatementSplitter:
    """Test splitting group content into statements of addends."""

    def setup_method(self):
        """Set up test fixtures."""
        self.splitter = StatementSplitter()

    def test_single_addend(self):
        """One group is one statement with one addend."""
        assert self.splitter.split('[a]') == [['[a]']]

    def test_plus_joins_addends(self):
        """Addends joined by '+' share a statement."""
        assert self.splitter.split('[a]+{, }+[b]') == [['[a]', '{, }', '[b]']]

    def test_adjacent_addends_form_separate_statements(self):
        """Addends without '+' between them start a new statement."""
        assert self.splitter.split('[a]{b}') == [['[a]'], ['{b}']]

    def test_nested_groups_kept_whole(self):
        """Nested groups stay inside their parent addend."""
        assert self.splitter.split('[[a]+{b}]+{c}') == [['[[a]+{b}]', '{c}']]

    def test_brackets_inside_literal_are_opaque(self):
        """Unbalanced brackets in a literal do not affect splitting."""
        assert self.splitter.split('[{a[b}]') == [['[{a[b}]']]

    def test_trailing_text_dropped(self):
        """Text after an addend that never forms a group is discarded."""
        assert self.splitter.split('[a]x[b]') == [['[a]']]

    def test_trailing_operator_drops_statement(self):
        """A statement left open by a trailing '+' is not emitted."""
        assert self.splitter.split('[a]+') == []

    def test_unclosed_group(self):
        """An unclosed group yields no statements."""
        assert self.splitter.split('[a') == []

    def test_expression_escape_keeps_backslash(self):
        """Inside an expression the backslash is retained."""
        assert self.splitter.split('[a\\]b]') == [['[a\\]b]']]

    def test_literal_escape_drops_backslash(self):
        """Inside a literal the backslash is dropped."""
        assert self.splitter.split('{a\\}b}') == [['{a}b}']]


class TestTemplateEvaluator:
    """Test group evaluation."""

    def setup_method(self):
        """Set up test fixtures."""
        self.evaluator = TemplateEvaluator()

    def test_empty_input(self):
        """Empty text evaluates to empty text."""
        assert self.evaluator.evaluate('') == ''

    @pytest.mark.parametrize('text', [
        'plain text',
        'Smith, J.',
        ' [a]',
        '+[a]',
        '}{',
    ])
    def test_passthrough(self, text):
        """Text not starting with '[' or '{' is returned unchanged."""
        assert self.evaluator.evaluate(text) == text

    def test_single_expression(self):
        """An expression group evaluates its content."""
        assert self.evaluator.evaluate('[Smith]') == 'Smith'

    def test_single_literal(self):
        """A literal group yields its raw content."""
        assert self.evaluator.evaluate('{, }') == ', '

    def test_no_expression_statement_never_collapses(self):
        """Literal-only statements always concatenate."""
        assert self.evaluator.evaluate('[{a}+{b}]') == 'ab'

    def test_literal_opacity(self):
        """Literal content is not parsed for nested groups."""
        assert self.evaluator.evaluate('[{a[b}]') == 'a[b'

    def test_full_join_when_all_present(self):
        """Literals are kept when every expression is non-empty."""
        assert self.evaluator.evaluate('[[Smith]+{, }+[Jones]]') == 'Smith, Jones'

    def test_collapse_when_expression_empty(self):
        """An empty expression suppresses every literal in its statement."""
        assert self.evaluator.evaluate('[[Smith]+{, }+[]]') == 'Smith'
        assert self.evaluator.evaluate('[[]+{, }+[Jones]]') == 'Jones'
        assert self.evaluator.evaluate('[[]+{, }+[]]') == ''

    def test_empty_expression_group(self):
        """An empty expression group evaluates to empty."""
        assert self.evaluator.evaluate('[]') == ''

    def test_collapse_propagates_outward(self):
        """A collapsed inner group empties the outer statement's expression."""
        template = '[[Smith]+{ }+[[{(}+[]+{)}]]]'
        assert self.evaluator.evaluate(template) == 'Smith'

    def test_nested_groups_render(self):
        """Nested optional parts render when present."""
        template = '[[Smith]+{ }+[[{(}+[2020]+{)}]]]'
        assert self.evaluator.evaluate(template) == 'Smith (2020)'

    def test_separate_statements_collapse_independently(self):
        """Adjacent statements are evaluated and concatenated separately."""
        assert self.evaluator.evaluate('[[]+{y}]') == ''
        assert self.evaluator.evaluate('[[]{y}]') == 'y'
        assert self.evaluator.evaluate('[a][b]') == 'ab'

    def test_expression_escape_retains_backslash(self):
        """Escaped brackets in expressions keep their backslash."""
        assert self.evaluator.evaluate('[\\[x]') == '\\[x'

    def test_literal_escape_strips_backslash(self):
        """Escaped braces in a top-level literal lose their backslash."""
        assert self.evaluator.evaluate('{a\\{b}') == 'a{b'

    def test_nested_literal_escape(self):
        """An escape inside an expression is kept until the literal is split."""
        assert self.evaluator.evaluate('[{a\\}b}]') == 'a}b'

    def test_unbalanced_group_raises(self):
        """An addend that is not a complete group raises."""
        with pytest.raises(MalformedTemplateError) as exc_info:
            self.evaluator.evaluate('[a}]+{b}')
        assert 'Unbalanced group' in str(exc_info.value)
        assert exc_info.value.text == '{'

    def test_deep_nesting_raises(self):
        """Pathological nesting is reported as a malformed template."""
        text = '[' * 3000 + ']' * 3000
        with pytest.raises(MalformedTemplateError):
            self.evaluator.evaluate(text)

    def test_evaluation_is_repeatable(self):
        """The same text renders the same way on every call."""
        template = '[[A]+{; }+[B]]'
        assert self.evaluator.evaluate(template) == self.evaluator.evaluate(template)
