"""Tests for msgbundle.i18n.loader module."""

import pytest

from msgbundle.i18n.deserializers import yaml_deserializer
from msgbundle.i18n.errors import TranslationLoadError
from msgbundle.i18n.loader import (
    TranslationFileLoader,
    expand_globs,
    locale_from_filename,
)
from tests.factories.i18n import write_json


class TestLocaleFromFilename:
    """Tests for locale_from_filename()."""

    @pytest.mark.parametrize(
        "path,expected",
        [
            ("zh-Hans.json", "zh-hans"),
            ("zh_Hans.json", "zh-hans"),
            ("locales/zh-Hans.hello.json", "zh-hans"),
            ("/srv/i18n/en_US.music.yaml", "en-us"),
            ("C:\\i18n\\ja-JP.json", "ja-jp"),
        ],
    )
    def test_locale_names(self, path, expected):
        assert locale_from_filename(path) == expected


class TestExpandGlobs:
    """Tests for expand_globs()."""

    def test_sorted_and_unique(self):
        result = expand_globs(["a", "b"], lambda p: ["z.json", "a.json"])
        assert result == ["a.json", "z.json"]

    def test_empty_pattern_raises(self):
        with pytest.raises(TranslationLoadError):
            expand_globs([""], lambda p: [])

    def test_glob_error_wrapped(self):
        def failing(pattern):
            raise OSError("permission denied")

        with pytest.raises(TranslationLoadError) as exc_info:
            expand_globs(["locales/*.json"], failing)
        assert exc_info.value.path == "locales/*.json"


class TestTranslationFileLoader:
    """Tests for TranslationFileLoader."""

    def test_read_files_merges_by_locale(self, temp_translations_dir):
        """Files for the same locale are merged."""
        loader = TranslationFileLoader()
        data = loader.read_files(
            [
                temp_translations_dir / "zh-Hans.json",
                temp_translations_dir / "zh_Hans.json",
                temp_translations_dir / "zh-Hans.hello.json",
            ]
        )
        assert data == {
            "zh-hans": {
                "message_a": "讯息 A",
                "message_b": "讯息 B",
                "message_c": "讯息 C",
            }
        }

    def test_later_files_win(self, tmp_path):
        first = write_json(tmp_path / "en.json", {"hello": "Hello"})
        second = write_json(tmp_path / "en.extra.json", {"hello": "Hi"})
        data = TranslationFileLoader().read_files([first, second])
        assert data["en"]["hello"] == "Hi"

    def test_missing_file_raises(self, tmp_path):
        missing = tmp_path / "nope.json"
        with pytest.raises(TranslationLoadError) as exc_info:
            TranslationFileLoader().read_files([missing])
        assert exc_info.value.path == str(missing)

    def test_parse_error_raises(self, tmp_path):
        broken = tmp_path / "en.json"
        broken.write_text("{not json")
        with pytest.raises(TranslationLoadError) as exc_info:
            TranslationFileLoader().read_files([broken])
        assert exc_info.value.path == str(broken)

    def test_custom_deserializer(self, tmp_path):
        path = tmp_path / "zh-Hans.yml"
        path.write_text("message_a: 讯息 A\n", encoding="utf-8")
        data = TranslationFileLoader(yaml_deserializer).read_files([path])
        assert data == {"zh-hans": {"message_a": "讯息 A"}}

    def test_read_glob(self, temp_translations_dir):
        data = TranslationFileLoader().read_glob([str(temp_translations_dir / "*.json")])
        assert set(data) == {"en", "zh-hans"}
        assert len(data["zh-hans"]) == 3

    def test_read_glob_recursive(self, tmp_path):
        nested = tmp_path / "locales" / "music"
        nested.mkdir(parents=True)
        write_json(nested / "ja-JP.music.json", {"song": "歌"})
        data = TranslationFileLoader().read_glob([str(tmp_path / "**" / "*.json")])
        assert data == {"ja-jp": {"song": "歌"}}

    def test_read_glob_no_match(self, tmp_path):
        assert TranslationFileLoader().read_glob([str(tmp_path / "*.json")]) == {}

    def test_read_resources(self, tmp_path):
        """Traversable roots are walked and matched relative to root."""
        locales = tmp_path / "locales"
        locales.mkdir()
        write_json(locales / "en.json", {"hello": "Hello"})
        write_json(locales / "ko-KR.json", {"hello": "안녕하세요"})
        (tmp_path / "README.txt").write_text("not a translation")

        data = TranslationFileLoader().read_resources(tmp_path, ["locales/*.json"])
        assert data == {"en": {"hello": "Hello"}, "ko-kr": {"hello": "안녕하세요"}}

    def test_read_resources_parse_error(self, tmp_path):
        (tmp_path / "en.json").write_text("[1, 2]")
        with pytest.raises(TranslationLoadError) as exc_info:
            TranslationFileLoader().read_resources(tmp_path, ["*.json"])
        assert exc_info.value.path == "en.json"
