"""Tests for locale-aware message formatting.

Covers untyped and typed placeholders (number, date, time, choice),
missing and mismatched arguments and unknown locales.

Python 3.13+.
"""

import logging
from datetime import UTC, date, datetime, time
from decimal import Decimal

import pytest
from babel import Locale
from babel import dates as babel_dates
from babel import numbers as babel_numbers
from hypothesis import event, given
from hypothesis import strategies as st

from faultcodes.formatting import format_message, format_pattern, parse_pattern


class TestUntypedPlaceholders:
    """{n} renders according to the argument's type."""

    def test_string(self) -> None:
        """Strings are inserted as-is."""
        assert format_message("Error with one argument: {0}", ["42"], "en_US") == (
            "Error with one argument: 42"
        )

    def test_integer_grouping(self) -> None:
        """Integers use locale grouping."""
        assert format_message("{0}", [1234567], "en_US") == "1,234,567"
        assert format_message("{0}", [1234567], "de_DE") == "1.234.567"

    def test_float_and_decimal(self) -> None:
        """Floats and Decimals use the locale decimal separator."""
        assert format_message("{0}", [1234.5], "de_DE") == "1.234,5"
        assert format_message("{0}", [Decimal("0.25")], "en_US") == "0.25"

    def test_bool_not_a_number(self) -> None:
        """Booleans render with str()."""
        assert format_message("{0} {1}", [True, False], "de_DE") == "True False"

    def test_none_and_objects(self) -> None:
        """Other values render with str()."""
        assert format_message("{0}/{1}", [None, ["a"]], "en_US") == "None/['a']"

    def test_date(self) -> None:
        """Dates use the short date format."""
        value = date(2024, 3, 15)
        expected = babel_dates.format_date(value, format="short", locale="en_US")
        assert format_message("{0}", [value], "en_US") == expected

    def test_datetime(self) -> None:
        """Datetimes use the short date and time format."""
        value = datetime(2024, 3, 15, 14, 30, tzinfo=UTC)
        expected = babel_dates.format_datetime(value, format="short", locale="de_DE")
        assert format_message("{0}", [value], "de_DE") == expected

    def test_time(self) -> None:
        """Times use the short time format."""
        value = time(14, 30)
        expected = babel_dates.format_time(value, format="short", locale="en_US")
        assert format_message("{0}", [value], "en_US") == expected

    def test_repeated_and_reordered(self) -> None:
        """Placeholders can repeat and appear in any order."""
        assert format_message("{1} {0} {1}", ["a", "b"], "en_US") == "b a b"


class TestMissingArguments:
    """Placeholders without arguments."""

    def test_missing_argument_left_literal(self) -> None:
        """An index with no argument renders as {n}."""
        assert format_message("{0} and {1}", ["a"], "en_US") == "a and {1}"

    def test_no_arguments(self) -> None:
        """Empty argument list leaves every placeholder."""
        assert format_message("x {0} y {2}", [], "en_US") == "x {0} y {2}"

    def test_typed_placeholder_missing(self) -> None:
        """A missing typed argument renders as its index."""
        assert format_message("{0,number,integer}", [], "en_US") == "{0}"

    def test_extra_arguments_ignored(self) -> None:
        """Surplus arguments are not rendered."""
        assert format_message("{0}", ["a", "b"], "en_US") == "a"


class TestNumberStyles:
    """{n,number[,style]}."""

    def test_default_style(self) -> None:
        """Without style, the decimal format is used."""
        assert format_message("{0,number}", [1234.5], "en_US") == "1,234.5"

    def test_integer(self) -> None:
        """integer rounds to whole numbers with grouping."""
        assert format_message("{0,number,integer}", [1234], "en_US") == "1,234"
        assert format_message("{0,number,integer}", [3.7], "en_US") == "4"

    def test_percent(self) -> None:
        """percent multiplies by 100."""
        assert format_message("{0,number,percent}", [0.25], "en_US") == "25%"

    def test_currency(self) -> None:
        """currency uses the territory's currency."""
        assert format_message("{0,number,currency}", [12.5], "en_US") == "$12.50"

    def test_custom_pattern(self) -> None:
        """Other styles are CLDR number patterns."""
        assert format_message("{0,number,#.00}", [3.14159], "en_US") == "3.14"

    def test_currency_without_territory(self, caplog: pytest.LogCaptureFixture) -> None:
        """A locale without territory falls back to str() and logs at DEBUG."""
        with caplog.at_level(logging.DEBUG, logger="faultcodes.formatting.formatter"):
            assert format_message("{0,number,currency}", [12.5], "en") == "12.5"
        assert any("No currency known" in r.getMessage() for r in caplog.records)

    def test_non_number_argument(self) -> None:
        """A non-number argument renders with str()."""
        assert format_message("Total: {0,number}", ["n/a"], "en_US") == "Total: n/a"
        assert format_message("{0,number}", [True], "en_US") == "True"


class TestDateTimeStyles:
    """{n,date[,style]} and {n,time[,style]}."""

    def test_date_default_medium(self) -> None:
        """The default date style is medium."""
        value = date(2024, 3, 15)
        assert format_message("{0,date}", [value], "en_US") == "Mar 15, 2024"

    def test_date_long(self) -> None:
        """Named styles are accepted in any case."""
        value = date(2024, 3, 15)
        assert format_message("{0,date,LONG}", [value], "en_US") == "March 15, 2024"

    def test_date_custom_pattern(self) -> None:
        """Other styles are CLDR date patterns."""
        value = date(2024, 3, 15)
        assert format_message("{0,date,yyyy-MM-dd}", [value], "en_US") == "2024-03-15"

    def test_time_styles(self) -> None:
        """Times use the requested style."""
        value = time(14, 30, 5)
        expected = babel_dates.format_time(value, format="medium", locale="de_DE")
        assert format_message("{0,time}", [value], "de_DE") == expected
        assert format_message("{0,time,HH:mm}", [value], "de_DE") == "14:30"

    def test_time_of_date_is_midnight(self) -> None:
        """A date formatted as time is taken at midnight."""
        assert format_message("{0,time,HH:mm}", [date(2024, 3, 15)], "en_US") == "00:00"

    def test_non_temporal_argument(self) -> None:
        """Arguments that are not dates render with str()."""
        assert format_message("{0,date}", ["yesterday"], "en_US") == "yesterday"
        assert format_message("{0,time}", [5], "en_US") == "5"


class TestChoice:
    """{n,choice,...} option selection."""

    TEMPLATE = "{0,choice,0#no files|1#one file|1<{0,number,integer} files}"

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (0, "no files"),
            (1, "one file"),
            (2, "2 files"),
            (1234, "1,234 files"),
            (-3, "no files"),
            (1.5, "2 files"),
        ],
    )
    def test_selection(self, value: float, expected: str) -> None:
        """The option with the largest limit not above the value wins."""
        assert format_message(self.TEMPLATE, [value], "en_US") == expected

    def test_infinite_limit(self) -> None:
        """∞ limits select only infinity."""
        template = "{0,choice,0#finite|∞#infinite}"
        assert format_message(template, [10**400], "en_US") == "infinite"
        assert format_message(template, [float("inf")], "en_US") == "infinite"

    def test_nested_uses_other_arguments(self) -> None:
        """Nested placeholders can refer to any argument."""
        template = "{0,choice,0#nobody|1#{1} alone|1<{1} and {0} others}"
        assert format_message(template, [3, "Ana"], "en_US") == "Ana and 3 others"

    def test_non_number_argument(self) -> None:
        """A non-number argument renders with str()."""
        assert format_message(self.TEMPLATE, ["many"], "en_US") == "many"

    def test_signaling_nan_rendered_as_text(self, caplog: pytest.LogCaptureFixture) -> None:
        """A signaling NaN cannot be compared to limits and renders with str()."""
        with caplog.at_level(logging.DEBUG, logger="faultcodes.formatting.formatter"):
            result = format_message(self.TEMPLATE, [Decimal("sNaN")], "en_US")
        assert result == "sNaN"
        assert "Argument {0} rendered as text" in caplog.text


class TestLocales:
    """Locale handling."""

    def test_bcp47_and_babel_locale(self) -> None:
        """BCP-47 codes and Babel Locale objects are accepted."""
        assert format_message("{0}", [1234.5], "de-DE") == "1.234,5"
        expected = babel_numbers.format_decimal(1234.5, locale="fr_FR")
        assert format_message("{0}", [1234.5], Locale.parse("fr_FR")) == expected

    def test_unknown_locale_falls_back(self, caplog: pytest.LogCaptureFixture) -> None:
        """Unknown locales format with en_US and log a warning."""
        with caplog.at_level(logging.WARNING, logger="faultcodes.formatting.formatter"):
            assert format_message("{0}", [1234.5], "qq_ZZ") == "1,234.5"
        assert any("qq_ZZ" in r.getMessage() for r in caplog.records)

    def test_format_pattern_reuses_parsed_template(self) -> None:
        """format_pattern() renders a pre-parsed pattern."""
        pattern = parse_pattern("{0} / {1}")
        assert format_pattern(pattern, [1, 2], "en_US") == "1 / 2"
        assert format_pattern(pattern, ["a", "b"], "en_US") == "a / b"


class TestFormatterProperties:
    """Property-based formatting checks."""

    @given(value=st.integers(min_value=-(10**12), max_value=10**12))
    def test_integers_round_trip_without_grouping(self, value: int) -> None:
        """Removing group separators gives back the integer."""
        event(f"sign={'neg' if value < 0 else 'pos'}")
        rendered = format_message("{0}", [value], "en_US")
        assert int(rendered.replace(",", "")) == value

    @given(args=st.lists(st.text(max_size=10), max_size=3))
    def test_never_raises_for_valid_template(self, args: list[str]) -> None:
        """Well-formed templates format any text arguments."""
        event(f"arg_count={len(args)}")
        result = format_message("{0} {1,number} {2,date}", args, "en_US")
        assert isinstance(result, str)
