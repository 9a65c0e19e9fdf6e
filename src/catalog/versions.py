"""Ordering of version identifiers such as ``2.10.1``, ``1.0.0-rc.1`` or ``v3``."""
from __future__ import annotations

import re
from functools import total_ordering
from typing import Iterable, List, Tuple

_TOKEN_RE = re.compile(r"\d+|[^\W\d_]+")

# Rank of a token kind at one position. A release ends where a pre-release
# would continue with letters, so "1.0.0" sorts above "1.0.0-beta" while
# "1.0.0.1" still sorts above "1.0.0".
_ALPHA = 0
_END = 1
_NUMBER = 2

TokenKey = Tuple[int, int, str]


def _tokens(version: str) -> List[TokenKey]:
    text = version.strip()
    if text[:1] in ("v", "V") and text[1:2].isdigit():
        text = text[1:]
    keys: List[TokenKey] = []
    for token in _TOKEN_RE.findall(text):
        if token.isdigit():
            keys.append((_NUMBER, int(token), ""))
        else:
            keys.append((_ALPHA, 0, token.lower()))
    keys.append((_END, 0, ""))
    return keys


@total_ordering
class VersionKey:
    """Sort key giving a total order over arbitrary version strings."""

    __slots__ = ("raw", "_tokens")

    def __init__(self, raw: str) -> None:
        self.raw = raw
        self._tokens = _tokens(raw)

    def _compare(self) -> Tuple[List[TokenKey], str]:
        return self._tokens, self.raw

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, VersionKey):
            return NotImplemented
        return self._compare() == other._compare()

    def __lt__(self, other: "VersionKey") -> bool:
        return self._compare() < other._compare()

    def __hash__(self) -> int:
        return hash(self.raw)

    def __repr__(self) -> str:
        return f"VersionKey({self.raw!r})"


def compare_versions(left: str, right: str) -> int:
    """Return ``-1``, ``0`` or ``1`` as ``left`` is older, equal or newer."""

    a, b = VersionKey(left), VersionKey(right)
    return (a > b) - (a < b)


def sort_descending(versions: Iterable[str]) -> List[str]:
    """Return ``versions`` newest first; ``result[0]`` is the latest release."""

    return sorted(versions, key=VersionKey, reverse=True)
