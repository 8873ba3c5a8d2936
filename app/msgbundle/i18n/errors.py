"""Exceptions raised by the i18n engine."""

from typing import Optional


class TranslationLoadError(Exception):
    """A translation source could not be read, expanded or deserialized.

    Attributes:
        path: File path or glob pattern that caused the failure.
    """

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class MessageFormatError(Exception):
    """A MessageFormat pattern could not be compiled or formatted."""
