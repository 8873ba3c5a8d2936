"""ICU MessageFormat compilation.

Patterns are parsed by pyicumessageformat; plural categories, number and
date formatting come from Babel's CLDR data. A compiled message is a callable
taking the variables mapping and returning the formatted text.

Supported arguments:
    {name}                          plain substitution
    {n, plural, =0 {...} one {...} other {# ...}}
    {n, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}
    {g, select, male {...} other {...}}
    {n, number} / {n, number, integer|percent|currency|<pattern>}
    {d, date[, short|medium|long|full]} / {t, time[, ...]}
    {v, <custom formatter>[, arg]}
"""

import functools
from dataclasses import dataclass, field
from datetime import date, datetime, time
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Mapping, Optional, Union

from babel import Locale, UnknownLocaleError
from babel.dates import format_date, format_datetime, format_time
from babel.numbers import format_currency, format_decimal, format_percent
from pyicumessageformat import Parser

from msgbundle.i18n.errors import MessageFormatError
from msgbundle.i18n.models import Vars

# (value, locale, argument style) -> rendered value
Formatter = Callable[[Any, str, Optional[str]], Any]

BUILTIN_TYPES = frozenset(
    {"plural", "selectordinal", "select", "number", "date", "time"}
)

Number = Union[int, float, Decimal]


@dataclass
class MessageFormatOptions:
    """Options shared by every formatter a bundle creates.

    Attributes:
        strict: Reject argument types that are neither built in nor custom
            formatters at compile time, and non-numeric plural values.
        custom_formatters: Formatters addressed as "{value, name[, arg]}".
        currency: ISO 4217 code used by "{n, number, currency}".
    """

    strict: bool = False
    custom_formatters: Dict[str, Formatter] = field(default_factory=dict)
    currency: str = "USD"


@functools.lru_cache(maxsize=128)
def get_babel_locale(locale_code: str) -> Locale:
    """Get a Babel Locale for a BCP 47 or POSIX code, cached."""
    return Locale.parse(locale_code.replace("-", "_"))


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ", ".join(_to_text(item) for item in value)
    return str(value)


class CompiledMessage:
    """A parsed MessageFormat pattern bound to a locale.

    Attributes:
        pattern: Source pattern.
        locale: Locale code the pattern was compiled for.
    """

    def __init__(
        self,
        pattern: str,
        ast: List[Any],
        locale: str,
        babel_locale: Locale,
        options: MessageFormatOptions,
    ):
        self.pattern = pattern
        self.locale = locale
        self._ast = ast
        self._babel_locale = babel_locale
        self._options = options

    def __call__(self, variables: Optional[Vars] = None) -> str:
        return self._render(self._ast, variables or {}, None)

    def __repr__(self) -> str:
        return f"CompiledMessage({self.pattern!r}, locale={self.locale!r})"

    def _render(
        self,
        nodes: List[Any],
        variables: Mapping[str, Any],
        plural_value: Optional[Number],
    ) -> str:
        parts = []
        for node in nodes:
            if isinstance(node, str):
                parts.append(node)
            elif node.get("hash"):
                if plural_value is None:
                    parts.append("#")
                else:
                    parts.append(self._format_number(plural_value, None))
            else:
                parts.append(self._render_argument(node, variables, plural_value))
        return "".join(parts)

    def _render_argument(
        self,
        node: Mapping[str, Any],
        variables: Mapping[str, Any],
        plural_value: Optional[Number],
    ) -> str:
        name = node.get("name")
        if name not in variables:
            raise MessageFormatError(f"Missing variable: {name}")
        value = variables[name]
        arg_type = node.get("type")
        style = node.get("format")

        if arg_type in ("plural", "selectordinal"):
            return self._render_plural(
                node, value, variables, ordinal=arg_type == "selectordinal"
            )
        if arg_type == "select":
            branch = self._pick_branch(node, self._select_key(value))
            return self._render(branch, variables, plural_value)
        if arg_type == "number":
            return self._format_number(self._to_number(value), style)
        if arg_type in ("date", "time"):
            return self._format_datetime(value, arg_type, style)
        if arg_type in self._options.custom_formatters:
            formatter = self._options.custom_formatters[arg_type]
            try:
                return _to_text(formatter(value, self.locale, style))
            except Exception as e:
                raise MessageFormatError(
                    f"Custom formatter {arg_type!r} failed: {e}"
                ) from e
        if arg_type is not None and self._options.strict:
            raise MessageFormatError(f"Unknown argument type: {arg_type}")
        return _to_text(value)

    def _render_plural(
        self,
        node: Mapping[str, Any],
        value: Any,
        variables: Mapping[str, Any],
        ordinal: bool,
    ) -> str:
        number = self._to_number(value)
        options = node.get("options") or {}

        for key, branch in options.items():
            if key.startswith("="):
                try:
                    exact = Decimal(key[1:])
                except InvalidOperation:
                    continue
                if exact == Decimal(str(number)):
                    return self._render(branch, variables, number)

        adjusted = number - (node.get("offset") or 0)
        if ordinal:
            category = self._babel_locale.ordinal_form(adjusted)
        else:
            category = self._babel_locale.plural_form(abs(adjusted))
        branch = self._pick_branch(node, category)
        return self._render(branch, variables, adjusted)

    def _pick_branch(self, node: Mapping[str, Any], key: str) -> List[Any]:
        options = node.get("options") or {}
        if key in options:
            return options[key]
        if "other" in options:
            return options["other"]
        raise MessageFormatError(
            f"No branch for {key!r} and no 'other' branch in {node.get('name')}"
        )

    @staticmethod
    def _select_key(value: Any) -> str:
        if isinstance(value, bool):
            return "true" if value else "false"
        return _to_text(value)

    def _to_number(self, value: Any) -> Number:
        if isinstance(value, bool):
            if self._options.strict:
                raise MessageFormatError(f"Expected a number, got {value!r}")
            return int(value)
        if isinstance(value, (int, float, Decimal)):
            number = value
        else:
            try:
                number = Decimal(str(value).strip())
            except InvalidOperation as e:
                raise MessageFormatError(f"Expected a number, got {value!r}") from e
        # Plural rules and integer rounding are undefined for inf and NaN
        if not isinstance(number, int) and not Decimal(number).is_finite():
            raise MessageFormatError(f"Expected a finite number, got {value!r}")
        return number

    def _format_number(self, value: Number, style: Optional[str]) -> str:
        try:
            if style is None:
                return format_decimal(value, locale=self._babel_locale)
            if style == "integer":
                return format_decimal(
                    round(value), format="#,##0", locale=self._babel_locale
                )
            if style == "percent":
                return format_percent(value, locale=self._babel_locale)
            if style == "currency":
                return format_currency(
                    value, self._options.currency, locale=self._babel_locale
                )
            return format_decimal(value, format=style, locale=self._babel_locale)
        except (ValueError, TypeError, OverflowError, InvalidOperation) as e:
            raise MessageFormatError(f"Cannot format number {value!r}: {e}") from e

    def _format_datetime(self, value: Any, arg_type: str, style: Optional[str]) -> str:
        fmt = style or "medium"
        try:
            if arg_type == "time":
                if not isinstance(value, (datetime, time)):
                    raise TypeError(f"expected a time, got {type(value).__name__}")
                return format_time(value, format=fmt, locale=self._babel_locale)
            if isinstance(value, datetime):
                return format_datetime(value, format=fmt, locale=self._babel_locale)
            if not isinstance(value, date):
                raise TypeError(f"expected a date, got {type(value).__name__}")
            return format_date(value, format=fmt, locale=self._babel_locale)
        except (ValueError, TypeError, KeyError) as e:
            raise MessageFormatError(f"Cannot format {arg_type} {value!r}: {e}") from e


class MessageFormat:
    """Compiles MessageFormat patterns for one locale.

    Attributes:
        locale: Locale code (usually a base language such as "zh").
        options: Shared formatting options.
    """

    def __init__(self, locale: str, options: Optional[MessageFormatOptions] = None):
        """Initialize the formatter.

        Args:
            locale: Locale code understood by Babel.
            options: Formatting options (default: MessageFormatOptions()).

        Raises:
            MessageFormatError: If Babel has no data for the locale.
        """
        self.locale = locale
        self.options = options or MessageFormatOptions()
        try:
            self._babel_locale = get_babel_locale(locale)
        except (UnknownLocaleError, ValueError, TypeError) as e:
            raise MessageFormatError(f"Unsupported formatter locale: {locale}") from e

    def compile(self, pattern: str) -> CompiledMessage:
        """Compile a pattern.

        Args:
            pattern: MessageFormat pattern.

        Returns:
            CompiledMessage ready to be called with variables.

        Raises:
            MessageFormatError: If the pattern is malformed, or uses an
                unknown argument type in strict mode.
        """
        try:
            ast = Parser().parse(pattern)
        except (SyntaxError, ValueError, TypeError) as e:
            raise MessageFormatError(f"Invalid message pattern: {e}") from e

        if self.options.strict:
            self._check_types(ast)

        return CompiledMessage(
            pattern, ast, self.locale, self._babel_locale, self.options
        )

    def _check_types(self, nodes: List[Any]) -> None:
        for node in nodes:
            if not isinstance(node, dict):
                continue
            arg_type = node.get("type")
            if (
                arg_type is not None
                and arg_type not in BUILTIN_TYPES
                and arg_type not in self.options.custom_formatters
            ):
                raise MessageFormatError(f"Unknown argument type: {arg_type}")
            for branch in (node.get("options") or {}).values():
                self._check_types(branch)
