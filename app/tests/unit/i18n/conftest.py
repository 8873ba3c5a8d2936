"""Feature-level fixtures for i18n engine tests.

Provides bundles, localizers and translation files on disk.
"""

import pytest

from tests.factories.i18n import make_bundle, make_messages, write_json


@pytest.fixture
def messages():
    """Multi-locale message map."""
    return make_messages()


@pytest.fixture
def bundle(messages):
    """Bundle with default en and en, zh-Hans, ja-JP, ko-KR loaded."""
    return make_bundle(messages=messages)


@pytest.fixture
def localizer(bundle):
    """Localizer bound to zh-Hans."""
    return bundle.new_localizer("zh-Hans")


@pytest.fixture
def temp_translations_dir(tmp_path):
    """Create a directory of zh-Hans translation files.

    Returns a directory structure like:
    - zh-Hans.json        message_a
    - zh_Hans.json        message_b
    - zh-Hans.hello.json  message_c
    - en.json             message_a
    """
    write_json(tmp_path / "zh-Hans.json", {"message_a": "讯息 A"})
    write_json(tmp_path / "zh_Hans.json", {"message_b": "讯息 B"})
    write_json(tmp_path / "zh-Hans.hello.json", {"message_c": "讯息 C"})
    write_json(tmp_path / "en.json", {"message_a": "Message A"})
    return tmp_path


@pytest.fixture
def accept_language_headers():
    """Collection of Accept-Language headers for testing."""
    return {
        "chinese": "zh-CN,zh;q=0.9,en-US;q=0.8,en;q=0.7,ja;q=0.6",
        "english": "en-us;q=0.7,en;q=0.3",
        "japanese": "ja-JP,ja;q=0.9,en;q=0.8",
        "german": "de;q=0.9,de-DE;q=0.8",
        "invalid": "not-a-valid-header!!!",
        "empty": "",
    }
