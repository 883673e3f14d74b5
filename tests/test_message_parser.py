"""Tests for the message template parser.

Covers placeholder syntax, apostrophe quoting, choice styles and the
diagnostics attached to syntax errors.

Python 3.13+.
"""

import math

import pytest
from hypothesis import event, given
from hypothesis import strategies as st

from faultcodes.diagnostics import DiagnosticCode, TemplateSyntaxError
from faultcodes.enums import ArgumentType
from faultcodes.formatting import Pattern, Placeholder, Text, parse_pattern


class TestPlaceholders:
    """Placeholder recognition."""

    def test_plain_text(self) -> None:
        """Text without braces is a single Text element."""
        assert parse_pattern("No placeholders").elements == (Text("No placeholders"),)

    def test_empty_template(self) -> None:
        """The empty template has no elements."""
        assert parse_pattern("").elements == ()

    def test_simple_placeholder(self) -> None:
        """{0} becomes an untyped placeholder."""
        pattern = parse_pattern("Error with one argument: {0}")
        assert pattern.elements == (
            Text("Error with one argument: "),
            Placeholder(index=0, position=25),
        )

    def test_typed_placeholder_with_style(self) -> None:
        """{n,type,style} records type and style."""
        (placeholder,) = parse_pattern("{1,number,#,##0.00}").placeholders
        assert placeholder.index == 1
        assert placeholder.format_type is ArgumentType.NUMBER
        assert placeholder.style == "#,##0.00"

    def test_type_is_case_insensitive_and_trimmed(self) -> None:
        """Whitespace around sections is ignored, the type keyword is case-insensitive."""
        (placeholder,) = parse_pattern("{ 2 , Date , short }").placeholders
        assert placeholder.index == 2
        assert placeholder.format_type is ArgumentType.DATE
        assert placeholder.style == "short"

    def test_placeholders_in_order(self) -> None:
        """Pattern.placeholders lists placeholders in template order."""
        pattern = parse_pattern("{1} before {0}")
        assert [p.index for p in pattern.placeholders] == [1, 0]

    def test_lone_closing_brace_is_text(self) -> None:
        """A '}' outside a placeholder is literal."""
        assert parse_pattern("a } b").elements == (Text("a } b"),)

    def test_result_cached(self) -> None:
        """Parsing the same template twice returns the same Pattern."""
        assert parse_pattern("cached {0}") is parse_pattern("cached {0}")

    def test_pattern_keeps_source(self) -> None:
        """The Pattern records its source text."""
        assert parse_pattern("x {0}").source == "x {0}"


class TestQuoting:
    """Apostrophe quoting rules."""

    def test_doubled_apostrophe(self) -> None:
        """'' is a literal apostrophe."""
        assert parse_pattern("It''s {0}").elements[0] == Text("It's ")

    def test_quoted_braces(self) -> None:
        """Quoted braces are literal text."""
        assert parse_pattern("'{0}'").elements == (Text("{0}"),)

    def test_quoted_brace_around_placeholder(self) -> None:
        """Literal braces can surround a real placeholder."""
        pattern = parse_pattern("Set: '{'{0}'}'")
        assert pattern.elements == (Text("Set: {"), Placeholder(index=0, position=8), Text("}"))

    def test_unterminated_quote_runs_to_end(self) -> None:
        """An unterminated quote quotes the rest of the template."""
        assert parse_pattern("x '{0} y").elements == (Text("x {0} y"),)

    def test_doubled_apostrophe_inside_quote(self) -> None:
        """'' inside a quoted section is an apostrophe."""
        assert parse_pattern("'it''s {0}'").elements == (Text("it's {0}"),)


class TestChoice:
    """Choice style parsing."""

    def test_options_and_limits(self) -> None:
        """Options are parsed with their limits; '<' is exclusive."""
        (placeholder,) = parse_pattern("{0,choice,0#none|1#one|1<many}").placeholders
        limits = [option.limit for option in placeholder.choices]
        assert limits[:2] == [0.0, 1.0]
        assert limits[2] == math.nextafter(1.0, math.inf)
        assert [option.text for option in placeholder.choices] == ["none", "one", "many"]

    def test_infinity_limits(self) -> None:
        """∞ and -∞ are accepted as limits."""
        (placeholder,) = parse_pattern("{0,choice,-∞#low|0#zero|∞#inf}").placeholders
        assert placeholder.choices[0].limit == -math.inf
        assert placeholder.choices[2].limit == math.inf

    def test_nested_pattern(self) -> None:
        """Option text with placeholders is parsed as a nested pattern."""
        (placeholder,) = parse_pattern("{0,choice,0#none|1<{0} files}").placeholders
        nested = placeholder.choices[1].pattern
        assert isinstance(nested, Pattern)
        assert nested.placeholders[0].index == 0
        assert placeholder.choices[0].pattern is None

    def test_quoted_pipe_in_option(self) -> None:
        """A quoted '|' does not split options."""
        (placeholder,) = parse_pattern("{0,choice,0#a'|'b|1#c}").placeholders
        assert [option.text for option in placeholder.choices] == ["a|b", "c"]


class TestSyntaxErrors:
    """Malformed templates raise TemplateSyntaxError with diagnostics."""

    def test_unmatched_brace(self) -> None:
        """An unclosed placeholder reports the brace offset."""
        with pytest.raises(TemplateSyntaxError) as excinfo:
            parse_pattern("Hello {0")
        diagnostic = excinfo.value.diagnostic
        assert diagnostic is not None
        assert diagnostic.code is DiagnosticCode.TEMPLATE_UNMATCHED_BRACE
        assert diagnostic.span is not None
        assert diagnostic.span.start == 6
        assert diagnostic.template == "Hello {0"

    @pytest.mark.parametrize("template", ["{name}", "{-1}", "{}", "{1.5}", "{٣}"])
    def test_invalid_index(self, template: str) -> None:
        """Indexes must be ASCII digits."""
        with pytest.raises(TemplateSyntaxError) as excinfo:
            parse_pattern(template)
        assert excinfo.value.diagnostic is not None
        assert excinfo.value.diagnostic.code is DiagnosticCode.TEMPLATE_INVALID_ARGUMENT_INDEX

    def test_unknown_format_type(self) -> None:
        """Unknown format types are rejected."""
        with pytest.raises(TemplateSyntaxError, match="Unknown format type 'money'"):
            parse_pattern("{0,money}")

    @pytest.mark.parametrize(
        "template",
        ["{0,choice}", "{0,choice,1#a|0#b}", "{0,choice,x#a}", "{0,choice,none}", "{0,choice,NaN#a}"],
    )
    def test_invalid_choice(self, template: str) -> None:
        """Malformed choice styles are rejected."""
        with pytest.raises(TemplateSyntaxError) as excinfo:
            parse_pattern(template)
        assert excinfo.value.diagnostic is not None
        assert excinfo.value.diagnostic.code is DiagnosticCode.TEMPLATE_INVALID_CHOICE

    def test_syntax_error_is_value_error(self) -> None:
        """TemplateSyntaxError can be caught as ValueError."""
        with pytest.raises(ValueError, match="Unmatched"):
            parse_pattern("{")


class TestParserProperties:
    """Property-based parser checks."""

    @given(text=st.text(alphabet=st.characters(exclude_characters="{}'"), max_size=40))
    def test_plain_text_preserved(self, text: str) -> None:
        """Text without braces or quotes parses to itself."""
        event(f"empty={not text}")
        elements = parse_pattern(text).elements
        assert "".join(e.value for e in elements if isinstance(e, Text)) == text
        assert not parse_pattern(text).placeholders

    @given(index=st.integers(min_value=0, max_value=10_000))
    def test_any_index_accepted(self, index: int) -> None:
        """Any non-negative index parses."""
        (placeholder,) = parse_pattern(f"{{{index}}}").placeholders
        assert placeholder.index == index
