"""Tests for msgbundle.i18n.messageformat module."""

from datetime import date
from decimal import Decimal

import pytest

from msgbundle.i18n.errors import MessageFormatError
from msgbundle.i18n.messageformat import (
    MessageFormat,
    MessageFormatOptions,
    get_babel_locale,
)

ITEMS = "{count, plural, =0 {no items} one {# item} other {# items}}"


def upper_formatter(value, locale, style):
    return str(value).upper()


@pytest.fixture
def en():
    return MessageFormat("en")


class TestMessageFormatConstruction:
    """Tests for MessageFormat initialization."""

    def test_defaults(self, en):
        """Options default to non-strict USD formatting."""
        assert en.locale == "en"
        assert en.options.strict is False
        assert en.options.currency == "USD"

    def test_unknown_locale_raises(self):
        """Locales without CLDR data are rejected."""
        with pytest.raises(MessageFormatError):
            MessageFormat("xx")

    def test_babel_locale_accepts_bcp47(self):
        """get_babel_locale() accepts hyphenated tags."""
        assert str(get_babel_locale("zh-Hans")) == "zh_Hans"


class TestCompile:
    """Tests for MessageFormat.compile()."""

    def test_plain_text(self, en):
        """Patterns without arguments render unchanged."""
        assert en.compile("Hello, world!")() == "Hello, world!"

    def test_simple_argument(self, en):
        """Plain arguments are substituted."""
        assert en.compile("Hello, {name}!")({"name": "Alice"}) == "Hello, Alice!"

    def test_unclosed_argument_raises(self, en):
        """Malformed patterns raise MessageFormatError."""
        with pytest.raises(MessageFormatError):
            en.compile("Hello, {name")

    def test_missing_variable_raises(self, en):
        """Rendering without a referenced variable raises."""
        with pytest.raises(MessageFormatError):
            en.compile("Hello, {name}!")({})

    def test_compiled_keeps_pattern(self, en):
        """Compiled messages remember their source."""
        compiled = en.compile("Hello, {name}!")
        assert compiled.pattern == "Hello, {name}!"
        assert compiled.locale == "en"


class TestPlural:
    """Tests for plural and selectordinal arguments."""

    @pytest.mark.parametrize(
        "count,expected",
        [(0, "no items"), (1, "1 item"), (5, "5 items"), (1000, "1,000 items")],
    )
    def test_english_plural(self, en, count, expected):
        """Exact, one and other branches are chosen by CLDR rules."""
        assert en.compile(ITEMS)({"count": count}) == expected

    def test_chinese_plural_uses_other(self):
        """Chinese has no "one" category."""
        compiled = MessageFormat("zh").compile(
            "{count, plural, one {one} other {有 # 个}}"
        )
        assert compiled({"count": 1}) == "有 1 个"

    def test_numeric_string_value(self, en):
        """Numeric strings are accepted as plural values."""
        assert en.compile(ITEMS)({"count": "2"}) == "2 items"

    def test_decimal_exact_match(self, en):
        """Exact branches compare numerically."""
        assert en.compile(ITEMS)({"count": Decimal("0")}) == "no items"

    def test_non_numeric_value_raises(self, en):
        """Values that are not numbers raise MessageFormatError."""
        with pytest.raises(MessageFormatError):
            en.compile(ITEMS)({"count": "many"})

    @pytest.mark.parametrize(
        "n,expected", [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th")]
    )
    def test_selectordinal(self, en, n, expected):
        """selectordinal uses ordinal categories."""
        compiled = en.compile(
            "{n, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}"
        )
        assert compiled({"n": n}) == expected

    def test_nested_argument_in_branch(self, en):
        """Branches may reference other variables."""
        compiled = en.compile(
            "{count, plural, one {{name} has # item} other {{name} has # items}}"
        )
        assert compiled({"count": 3, "name": "Bob"}) == "Bob has 3 items"


class TestSelect:
    """Tests for select arguments."""

    PATTERN = "{gender, select, male {He} female {She} other {They}} replied."

    @pytest.mark.parametrize(
        "gender,expected",
        [("male", "He replied."), ("female", "She replied."), ("x", "They replied.")],
    )
    def test_select(self, en, gender, expected):
        """select picks the matching branch, else other."""
        assert en.compile(self.PATTERN)({"gender": gender}) == expected

    def test_boolean_keys(self, en):
        """Booleans select true and false branches."""
        compiled = en.compile("{on, select, true {enabled} other {disabled}}")
        assert compiled({"on": True}) == "enabled"
        assert compiled({"on": False}) == "disabled"


class TestNumberAndDate:
    """Tests for number, date and time arguments."""

    def test_number(self, en):
        assert en.compile("{n, number}")({"n": 1234.5}) == "1,234.5"

    def test_integer(self, en):
        assert en.compile("{n, number, integer}")({"n": 1234}) == "1,234"

    def test_percent(self, en):
        assert en.compile("{n, number, percent}")({"n": 0.25}) == "25%"

    def test_currency_default(self, en):
        """Currency formatting uses the configured currency."""
        assert en.compile("{n, number, currency}")({"n": 9.99}) == "$9.99"

    def test_currency_option(self):
        formatter = MessageFormat("en", MessageFormatOptions(currency="EUR"))
        assert formatter.compile("{n, number, currency}")({"n": 5}) == "€5.00"

    def test_date(self, en):
        compiled = en.compile("{d, date, short}")
        assert compiled({"d": date(2024, 1, 15)}) == "1/15/24"

    def test_date_rejects_text(self, en):
        with pytest.raises(MessageFormatError):
            en.compile("{d, date}")({"d": "yesterday"})


class TestCustomFormatters:
    """Tests for custom formatters and strict mode."""

    def test_custom_formatter(self):
        """Custom formatters receive the value and render the result."""
        formatter = MessageFormat(
            "en", MessageFormatOptions(custom_formatters={"upper": upper_formatter})
        )
        compiled = formatter.compile("Hello, {name, upper}!")
        assert compiled({"name": "world"}) == "Hello, WORLD!"

    def test_custom_formatter_failure_raises(self):
        """Exceptions from custom formatters become MessageFormatError."""

        def broken(value, locale, style):
            raise RuntimeError("boom")

        formatter = MessageFormat(
            "en", MessageFormatOptions(custom_formatters={"broken": broken})
        )
        with pytest.raises(MessageFormatError):
            formatter.compile("{v, broken}")({"v": 1})

    def test_unknown_type_lenient(self, en):
        """Unknown types render the raw value outside strict mode."""
        assert en.compile("{v, upper}")({"v": "x"}) == "x"

    def test_unknown_type_strict(self):
        """Strict mode rejects unknown types at compile time."""
        formatter = MessageFormat("en", MessageFormatOptions(strict=True))
        with pytest.raises(MessageFormatError):
            formatter.compile("{v, upper}")

    def test_strict_plural(self):
        """Strict mode still formats valid plurals."""
        formatter = MessageFormat("en", MessageFormatOptions(strict=True))
        compiled = formatter.compile("{count, plural, one {# item} other {# items}}")
        assert compiled({"count": 1}) == "1 item"

    def test_strict_rejects_boolean_plural(self):
        formatter = MessageFormat("en", MessageFormatOptions(strict=True))
        with pytest.raises(MessageFormatError):
            formatter.compile(ITEMS)({"count": True})


class TestNonFiniteNumbers:
    """Tests for infinite and NaN values."""

    @pytest.mark.parametrize(
        "value",
        [float("inf"), float("-inf"), float("nan"), "nan", "Infinity", Decimal("NaN")],
    )
    @pytest.mark.parametrize(
        "pattern",
        [
            ITEMS,
            "{n, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}",
            "{n, number, integer}",
            "{n, number}",
        ],
    )
    def test_rejected(self, en, pattern, value):
        """Values that are not finite raise MessageFormatError."""
        compiled = en.compile(pattern)
        with pytest.raises(MessageFormatError):
            compiled({"count": value, "n": value})
