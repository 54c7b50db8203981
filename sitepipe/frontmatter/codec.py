"""Front matter detection and decoding for YAML, TOML and JSON headers."""

from __future__ import annotations

import json
import re
import tomllib
from dataclasses import dataclass, field
from datetime import date, datetime, time, timezone
from enum import Enum
from typing import Union

import yaml

from sitepipe.errors import DecodeError

FrontMatterValue = Union[
    str, int, float, bool, None, list["FrontMatterValue"], dict[str, "FrontMatterValue"]
]

YAML_DELIM = "---"
TOML_DELIM = "+++"

_BOM = "\ufeff"


class Dialect(str, Enum):
    """Front matter serialization dialects, keyed by their leading mark."""

    yaml = "yaml"
    toml = "toml"
    json = "json"
    none = "none"


_MARKS: dict[str, Dialect] = {
    "-": Dialect.yaml,
    "+": Dialect.toml,
    "{": Dialect.json,
}


@dataclass
class FrontMatter:
    """Decoded header plus the remaining body bytes."""

    dialect: Dialect
    data: dict[str, FrontMatterValue] = field(default_factory=dict)
    body: bytes = b""


def detect_dialect(text: str) -> Dialect:
    """Pick the dialect from the first non-whitespace character."""
    stripped = text.lstrip(_BOM).lstrip()
    if not stripped:
        return Dialect.none
    return _MARKS.get(stripped[0], Dialect.none)


def decode_front_matter(data: bytes) -> FrontMatter:
    """Split raw content into front matter and body.

    Content without a recognised leading mark yields an empty document and
    the whole input as body. Raises DecodeError for malformed headers.
    """
    try:
        text = data.decode("utf-8")
    except UnicodeDecodeError as e:
        raise DecodeError(detect_dialect(data.decode("utf-8", "replace")).value, f"invalid UTF-8: {e}") from e

    dialect = detect_dialect(text)
    if dialect is Dialect.none:
        return FrontMatter(dialect=dialect, data={}, body=data)

    text = text.lstrip(_BOM).lstrip()
    if dialect is Dialect.json:
        payload, rest = _split_json(text)
    else:
        delim = YAML_DELIM if dialect is Dialect.yaml else TOML_DELIM
        payload, rest = _split_delimited(text, delim, dialect)

    if dialect is Dialect.yaml:
        doc = _parse_yaml(payload)
    elif dialect is Dialect.toml:
        doc = _parse_toml(payload)
    else:
        doc = payload

    return FrontMatter(dialect=dialect, data=_normalize_map(doc), body=rest.encode("utf-8"))


# ---------------------------------------------------------------------------
# Block splitting
# ---------------------------------------------------------------------------


def _split_delimited(text: str, delim: str, dialect: Dialect) -> tuple[str, str]:
    """Return (payload, body) for a block fenced by `delim` lines."""
    first_nl = text.find("\n")
    opening = text if first_nl == -1 else text[:first_nl]
    if opening.rstrip() != delim:
        raise DecodeError(dialect.value, f"expected opening {delim!r} delimiter line")

    closing = re.compile(rf"^{re.escape(delim)}[ \t]*\r?$", re.MULTILINE)
    start = first_nl + 1 if first_nl != -1 else len(text)
    match = closing.search(text, start)
    if match is None:
        raise DecodeError(dialect.value, f"missing closing {delim!r} delimiter")

    payload = text[start:match.start()]
    body = text[match.end():]
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]

    if not payload.strip():
        raise DecodeError(dialect.value, "empty front matter document")
    return payload, body


def _split_json(text: str) -> tuple[dict, str]:
    """Decode the leading JSON object; braces are part of the payload."""
    try:
        obj, end = json.JSONDecoder().raw_decode(text)
    except json.JSONDecodeError as e:
        raise DecodeError(Dialect.json.value, str(e)) from e
    if not isinstance(obj, dict):
        raise DecodeError(Dialect.json.value, f"expected an object, got {type(obj).__name__}")
    body = text[end:]
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]
    return obj, body


# ---------------------------------------------------------------------------
# Dialect parsers
# ---------------------------------------------------------------------------


class _StringKeyLoader(yaml.SafeLoader):
    """SafeLoader that turns mapping keys into strings as they are read."""


def _construct_string_key_map(loader: _StringKeyLoader, node: yaml.MappingNode) -> dict:
    loader.flatten_mapping(node)
    mapping = {}
    for key_node, value_node in node.value:
        key = _stringify_key(loader.construct_object(key_node, deep=True))
        mapping[key] = loader.construct_object(value_node, deep=True)
    return mapping


_StringKeyLoader.add_constructor("tag:yaml.org,2002:map", _construct_string_key_map)


def _parse_yaml(payload: str) -> dict:
    try:
        doc = yaml.load(payload, Loader=_StringKeyLoader)
    except yaml.YAMLError as e:
        raise DecodeError(Dialect.yaml.value, str(e)) from e
    if doc is None:
        raise DecodeError(Dialect.yaml.value, "empty front matter document")
    if not isinstance(doc, dict):
        raise DecodeError(Dialect.yaml.value, f"expected a mapping, got {type(doc).__name__}")
    return doc


def _parse_toml(payload: str) -> dict:
    try:
        return tomllib.loads(payload)
    except tomllib.TOMLDecodeError as e:
        raise DecodeError(Dialect.toml.value, str(e)) from e


# ---------------------------------------------------------------------------
# Normalization to the generic value model
# ---------------------------------------------------------------------------


def _normalize_map(doc: dict) -> dict[str, FrontMatterValue]:
    return {_stringify_key(k): _normalize(v) for k, v in doc.items()}


def _normalize(value: object) -> FrontMatterValue:
    """Coerce parser output into str/int/float/bool/None/list/dict."""
    if isinstance(value, dict):
        return _normalize_map(value)
    if isinstance(value, (list, tuple, set)):
        return [_normalize(v) for v in value]
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def _stringify_key(key: object) -> str:
    # YAML allows bool, int and date keys
    if isinstance(key, str):
        return key
    if isinstance(key, bool):
        return "true" if key else "false"
    if isinstance(key, (date, time)):
        return key.isoformat()
    return str(key)
