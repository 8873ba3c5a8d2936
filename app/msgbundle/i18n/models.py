"""Translation models for the i18n engine.

Defines the core data structures shared by the bundle, the index and the
localizers.
"""

import re
from dataclasses import dataclass
from datetime import date, datetime, time
from decimal import Decimal
from enum import IntEnum
from typing import Any, Callable, Mapping, Optional, Sequence, Union

import langcodes
from langcodes.tag_parser import LanguageTagError

# Baseline language used when a bundle configures no locale at all
BASELINE_LOCALE = "en"

_TAG_CHARS = re.compile(r"^[A-Za-z0-9]+(?:[-_][A-Za-z0-9]+)*$")

VarValue = Union[
    str, int, float, Decimal, bool, None, date, datetime, time, Sequence[Any]
]
Vars = Mapping[str, VarValue]

# A compiled message: variables in, formatted text out
MessageFunction = Callable[[Optional[Vars]], str]


class Confidence(IntEnum):
    """How well a supported locale satisfies a desired one."""

    NO = 0
    LOW = 1
    HIGH = 2
    EXACT = 3

    @classmethod
    def from_distance(cls, distance: int) -> "Confidence":
        """Map a langcodes tag distance onto a confidence level.

        Args:
            distance: Result of langcodes.tag_distance (0 = equivalent).

        Returns:
            Matching Confidence.
        """
        if distance <= 0:
            return cls.EXACT
        if distance < 10:
            return cls.HIGH
        if distance < 25:
            return cls.LOW
        return cls.NO


@dataclass(frozen=True)
class LocaleTag:
    """Canonical BCP 47 language tag.

    Frozen to ensure immutability and hashability; two tags are equal when
    their canonical forms are equal (e.g. "zh_hans" and "zh-Hans").

    Attributes:
        tag: Canonical tag string (e.g. "zh-Hans", "en-US").
    """

    tag: str

    def __str__(self) -> str:
        return self.tag

    @classmethod
    def parse(cls, value: str) -> "LocaleTag":
        """Parse and canonicalize a language tag.

        Args:
            value: Tag in any common spelling ("EN-us", "zh_Hans").

        Returns:
            LocaleTag in canonical form.

        Raises:
            ValueError: If value is not a well-formed language tag.
        """
        candidate = (value or "").strip()
        if not _TAG_CHARS.match(candidate):
            raise ValueError(f"Invalid language tag: {value!r}")
        try:
            language = langcodes.Language.get(candidate)
        except (LanguageTagError, ValueError) as e:
            raise ValueError(f"Invalid language tag: {value!r}") from e
        return cls(language.to_tag())

    @property
    def is_undefined(self) -> bool:
        """True for the "und" (undetermined) tag."""
        return self.tag == "und"

    @property
    def base(self) -> str:
        """Base language subtag (e.g. "zh" from "zh-Hans")."""
        language = langcodes.Language.get(self.tag).language
        return language or "und"


@dataclass(frozen=True)
class TranslationUnit:
    """A single translation, compiled once and never mutated.

    Attributes:
        locale: Locale the text was loaded for.
        key: Message key (token or source text, possibly with a context suffix).
        text: Raw translation text.
        compiled: Compiled template, or None when the text did not compile.
    """

    locale: LocaleTag
    key: str
    text: str
    compiled: Optional[MessageFunction] = None
