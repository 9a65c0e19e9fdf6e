"""Parsing of per-library ``info.ini`` metadata files."""
from __future__ import annotations

import configparser
from typing import Any, Dict, Optional

from .errors import MetadataParseError

# Holds keys written before the first ``[section]`` header.
_ROOT_SECTION = "__root__"
_LITERALS: Dict[str, Any] = {"true": True, "false": False, "null": None}


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return value[1:-1]
    return value


def _coerce(value: Optional[str]) -> Any:
    # A key without ``=`` is a flag.
    if value is None:
        return True
    text = _unquote(value)
    return _LITERALS.get(text, text)


def decode_metadata(payload: bytes, source: str = "<metadata>") -> str:
    """Decode raw metadata bytes as UTF-8, tolerating a byte order mark."""

    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise MetadataParseError(f"{source} is not valid UTF-8: {exc}") from exc


def parse_ini(text: str, source: str = "<metadata>") -> Dict[str, Any]:
    """Parse INI text into a mapping.

    Keys outside any section are returned at the top level; each ``[section]``
    becomes a nested mapping. Key case is preserved, bare keys become
    ``True`` and the literals ``true``, ``false`` and ``null`` become JSON
    values.
    """

    parser = configparser.ConfigParser(
        interpolation=None,
        strict=False,
        default_section="\x00defaults",
        delimiters=("=",),
        comment_prefixes=(";", "#"),
        inline_comment_prefixes=(";", "#"),
        allow_no_value=True,
    )
    parser.optionxform = str  # type: ignore[assignment, method-assign]
    # Indented lines are ordinary lines, not continuations.
    lines = "\n".join(line.strip() for line in text.splitlines())
    try:
        parser.read_string(f"[{_ROOT_SECTION}]\n{lines}", source=source)
    except configparser.Error as exc:
        raise MetadataParseError(f"Malformed metadata in {source}: {exc}") from exc

    result: Dict[str, Any] = {}
    for section in parser.sections():
        values = {key: _coerce(value) for key, value in parser.items(section, raw=True)}
        if section == _ROOT_SECTION:
            result.update(values)
        else:
            result[section] = values
    return result


def load_metadata(payload: bytes, source: str = "<metadata>") -> Dict[str, Any]:
    """Decode and parse a downloaded metadata file."""

    return parse_ini(decode_metadata(payload, source), source)
