"""Translation file loading.

Reads translation files from disk, glob patterns or package resources and
merges them by locale. The locale of a file is derived from its name:
everything before the first ".", lowercased, with "_" turned into "-"
(e.g. "zh_CN.music.json" -> "zh-cn"). Several files for the same locale are
merged, later files overriding earlier keys.
"""

import fnmatch
import glob
from importlib.resources.abc import Traversable
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, Iterable, Iterator, List, Sequence, Tuple, Union

from msgbundle.i18n.deserializers import Deserializer, json_deserializer
from msgbundle.i18n.errors import TranslationLoadError
from msgbundle.logging import get_module_logger

logger = get_module_logger()

Messages = Dict[str, Dict[str, str]]
PathLike = Union[str, Path]


def locale_from_filename(path: PathLike) -> str:
    """Derive a locale name from a translation file name.

    Args:
        path: File path (only the base name is used).

    Returns:
        Lowercase, hyphen-separated locale name (e.g. "zh-cn").
    """
    name = PurePosixPath(str(path).replace("\\", "/")).name
    return name.split(".", 1)[0].replace("_", "-").lower()


def expand_globs(
    patterns: Iterable[str],
    glob_fn: Callable[[str], Iterable[str]],
) -> List[str]:
    """Expand glob patterns into a sorted, de-duplicated list of paths.

    Args:
        patterns: Glob patterns.
        glob_fn: Expands one pattern.

    Returns:
        Matching paths.

    Raises:
        TranslationLoadError: If a pattern cannot be expanded.
    """
    files = set()
    for pattern in patterns:
        if not pattern:
            raise TranslationLoadError("Empty glob pattern", path=pattern)
        try:
            files.update(str(match) for match in glob_fn(pattern))
        except (OSError, ValueError) as e:
            raise TranslationLoadError(
                f"Failed to expand glob pattern {pattern!r}: {e}", path=pattern
            ) from e
    return sorted(files)


def _walk(root: Traversable, prefix: str = "") -> Iterator[Tuple[str, Traversable]]:
    for entry in root.iterdir():
        relative = f"{prefix}{entry.name}"
        if entry.is_dir():
            yield from _walk(entry, prefix=f"{relative}/")
        else:
            yield relative, entry


class TranslationFileLoader:
    """Loader for translation files in any deserializable format.

    Attributes:
        deserializer: Turns file bytes into {key: text}.
    """

    def __init__(self, deserializer: Deserializer = json_deserializer):
        self.deserializer = deserializer

    def read_files(self, paths: Sequence[PathLike]) -> Messages:
        """Read and merge translation files.

        Args:
            paths: Translation file paths.

        Returns:
            {locale name: {key: text}}.

        Raises:
            TranslationLoadError: If a file cannot be read or parsed.
        """
        data: Messages = {}
        for path in paths:
            try:
                raw = Path(path).read_bytes()
            except OSError as e:
                logger.error("translation_file_unreadable", file=str(path), error=str(e))
                raise TranslationLoadError(
                    f"Failed to read translation file {str(path)!r}: {e}",
                    path=str(path),
                ) from e
            self._merge(data, str(path), raw)
        return data

    def read_glob(self, patterns: Sequence[str]) -> Messages:
        """Read and merge every file matching the glob patterns.

        Raises:
            TranslationLoadError: If a pattern, file or document is invalid.
        """
        files = expand_globs(patterns, lambda p: glob.glob(p, recursive=True))
        if not files:
            logger.warning("no_translation_files_matched", patterns=list(patterns))
        return self.read_files(files)

    def read_resources(self, root: Traversable, patterns: Sequence[str]) -> Messages:
        """Read translation files bundled as package resources.

        Patterns are matched against paths relative to root
        (e.g. "locales/*.json").

        Args:
            root: Package resource root, e.g. importlib.resources.files("app").
            patterns: Glob patterns relative to root.

        Raises:
            TranslationLoadError: If a pattern, file or document is invalid.
        """
        entries = dict(_walk(root))
        files = expand_globs(
            patterns, lambda p: fnmatch.filter(list(entries), p)
        )
        if not files:
            logger.warning("no_translation_resources_matched", patterns=list(patterns))

        data: Messages = {}
        for relative in files:
            try:
                raw = entries[relative].read_bytes()
            except OSError as e:
                raise TranslationLoadError(
                    f"Failed to read translation resource {relative!r}: {e}",
                    path=relative,
                ) from e
            self._merge(data, relative, raw)
        return data

    def _merge(self, data: Messages, path: str, raw: bytes) -> None:
        try:
            messages = self.deserializer(raw)
        except Exception as e:
            logger.error("translation_file_parse_error", file=path, error=str(e))
            raise TranslationLoadError(
                f"Failed to parse translation file {path!r}: {e}", path=path
            ) from e

        locale = locale_from_filename(path)
        data.setdefault(locale, {}).update(messages)
        logger.debug(
            "translation_file_read",
            file=path,
            locale=locale,
            message_count=len(messages),
        )
