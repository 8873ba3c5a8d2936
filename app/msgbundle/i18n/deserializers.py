"""Deserializers turning translation file bytes into flat key -> text maps.

Each deserializer accepts raw bytes and returns {key: text}. Nested mappings
are flattened with "." so that

    incident:
      created: Incident created

becomes {"incident.created": "Incident created"}.
"""

import configparser
import json
import tomllib
from typing import Any, Callable, Dict, Mapping

import yaml

Deserializer = Callable[[bytes], Dict[str, str]]


def flatten_messages(data: Any, prefix: str = "") -> Dict[str, str]:
    """Flatten nested translation data into {key: text}.

    Args:
        data: Parsed document (mapping at the root).
        prefix: Key prefix for nested namespaces.

    Returns:
        Flat mapping of dotted keys to text.

    Raises:
        ValueError: If the root is not a mapping or a value is a list.
    """
    if data is None:
        return {}
    if not isinstance(data, Mapping):
        raise ValueError(
            f"Expected a mapping of translations, got {type(data).__name__}"
        )

    messages: Dict[str, str] = {}
    for key, value in data.items():
        full_key = f"{prefix}{key}"
        if isinstance(value, Mapping):
            messages.update(flatten_messages(value, prefix=f"{full_key}."))
        elif isinstance(value, (list, tuple)):
            raise ValueError(f"Translation {full_key!r} must be text, got a list")
        elif value is None:
            messages[full_key] = ""
        elif isinstance(value, bool):
            messages[full_key] = "true" if value else "false"
        else:
            messages[full_key] = str(value)
    return messages


def json_deserializer(raw: bytes) -> Dict[str, str]:
    if not raw.strip():
        return {}
    return flatten_messages(json.loads(raw))


def yaml_deserializer(raw: bytes) -> Dict[str, str]:
    return flatten_messages(yaml.safe_load(raw))


def toml_deserializer(raw: bytes) -> Dict[str, str]:
    return flatten_messages(tomllib.loads(raw.decode("utf-8")))


def ini_deserializer(raw: bytes) -> Dict[str, str]:
    """Deserialize INI translations.

    Keys before the first section are used as-is; keys inside a section are
    prefixed with "<section>.". Inline comments after ";" or "#" are kept as
    part of the text.
    """
    parser = configparser.ConfigParser(interpolation=None, default_section="")
    parser.optionxform = str
    parser.read_string("[__root__]\n" + raw.decode("utf-8"))

    messages: Dict[str, str] = {}
    for section in parser.sections():
        prefix = "" if section == "__root__" else f"{section}."
        for key, value in parser.items(section, raw=True):
            messages[f"{prefix}{key}"] = value
    return messages


DESERIALIZERS: Dict[str, Deserializer] = {
    "json": json_deserializer,
    "yaml": yaml_deserializer,
    "yml": yaml_deserializer,
    "toml": toml_deserializer,
    "ini": ini_deserializer,
}


def get_deserializer(name: str) -> Deserializer:
    """Resolve a deserializer by format name.

    Raises:
        ValueError: If the format is not supported.
    """
    try:
        return DESERIALIZERS[name.strip().lower()]
    except KeyError as e:
        raise ValueError(f"Unsupported translation format: {name}") from e
