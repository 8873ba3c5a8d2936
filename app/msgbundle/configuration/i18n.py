"""Translation bundle settings."""

import json
from typing import Any, Dict, List, Optional

from pydantic import Field, field_validator

from msgbundle.configuration.base import FeatureSettings


def _split_csv(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class I18nSettings(FeatureSettings):
    """Configuration for the default translation bundle.

    Environment Variables:
        I18N_DEFAULT_LOCALE: Default locale (default: first configured locale)
        I18N_LOCALES: Comma-separated supported locales (e.g. "en,zh-Hans")
        I18N_FALLBACKS: JSON object mapping a locale to its fallback chain
            (e.g. '{"ja-JP": ["ko-KR"]}')
        I18N_TRANSLATIONS: Comma-separated glob patterns of translation files
        I18N_FORMAT: Translation file format - 'json', 'yaml', 'toml' or 'ini'
        I18N_STRICT_MODE: Reject unknown MessageFormat argument types
        I18N_CURRENCY: Currency code for "{n, number, currency}" arguments

    Example:
        ```python
        from msgbundle.configuration import get_settings

        i18n = get_settings().i18n
        if i18n.translation_patterns:
            bundle.load_glob(*i18n.translation_patterns)
        ```
    """

    default_locale: Optional[str] = Field(
        default=None,
        alias="I18N_DEFAULT_LOCALE",
        description="Locale used when no translation or match is found",
    )
    locales: str = Field(
        default="",
        alias="I18N_LOCALES",
        description="Comma-separated list of supported locales",
    )
    fallbacks: Dict[str, List[str]] = Field(
        default_factory=dict,
        alias="I18N_FALLBACKS",
        description="Locale fallback chains as a JSON object",
    )
    translations: str = Field(
        default="",
        alias="I18N_TRANSLATIONS",
        description="Comma-separated glob patterns of translation files",
    )
    file_format: str = Field(
        default="json",
        alias="I18N_FORMAT",
        description="Translation file format (json, yaml, toml, ini)",
    )
    strict_mode: bool = Field(
        default=False,
        alias="I18N_STRICT_MODE",
        description="Reject unknown MessageFormat argument types",
    )
    currency: str = Field(
        default="USD",
        alias="I18N_CURRENCY",
        description="Currency code used by currency number arguments",
    )

    @field_validator("fallbacks", mode="before")
    @classmethod
    def _parse_fallbacks(cls, v: Optional[Any]) -> Any:
        """Allow `I18N_FALLBACKS` to be provided as a JSON string or a mapping."""
        if v is None:
            return {}

        if isinstance(v, dict):
            return v

        if isinstance(v, str):
            s = v.strip()
            if (s.startswith("'") and s.endswith("'")) or (
                s.startswith('"') and s.endswith('"')
            ):
                s = s[1:-1]
            try:
                parsed = json.loads(s) if s else {}
            except (json.JSONDecodeError, ValueError) as e:
                raise ValueError(
                    f"Invalid I18N_FALLBACKS JSON: {e} (value: {s[:80]}...)"
                ) from e
            if not isinstance(parsed, dict):
                raise ValueError("I18N_FALLBACKS must be a JSON object")
            return parsed

        raise ValueError("I18N_FALLBACKS must be a JSON string or a mapping")

    @field_validator("file_format")
    @classmethod
    def _check_format(cls, v: str) -> str:
        fmt = v.strip().lower()
        if fmt not in ("json", "yaml", "yml", "toml", "ini"):
            raise ValueError(f"Unsupported translation file format: {v}")
        return fmt

    @property
    def locale_list(self) -> List[str]:
        """Supported locales as a list."""
        return _split_csv(self.locales)

    @property
    def translation_patterns(self) -> List[str]:
        """Translation file glob patterns as a list."""
        return _split_csv(self.translations)
