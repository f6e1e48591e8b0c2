"""Fuzzy entity-name resolution.

A score in 0.0-1.0 combines three measures over casefolded, alphanumeric-only
strings:

* ``ratio``: Ratcliff/Obershelp similarity (``difflib.SequenceMatcher``)
  of the whole input against the whole name.
* input coverage: the share of input characters explained by the name's
  words (``Headers`` also covers ``header``, ``Currencies`` covers
  ``currency``) or its version suffix.
* name coverage: the share of the name's words that occur in the input.

``score = ratio * (0.5 + 0.5 * input_coverage) * (0.75 + 0.25 * name_coverage)``

A candidate must reach the configured threshold. Ties break on the shorter
canonical name, then alphabetically, so identical input always resolves
identically.

Examples (default catalog, threshold 0.6):
    "customersv3"       -> "CustomersV3"   (exact, ignoring case)
    "CustomerV3"        -> "CustomersV3"   (0.95)
    "vendor"            -> "VendorsV2"     (0.80, partial name)
    "ReleasedProduct"   -> "ReleasedProductsV2"
    "SalesOrderHeaders" -> "SalesOrderHeadersV2" (tie with V4, alphabetical)
    "orders"            -> None  (no whole-word match; "Workers" only looks alike)
    "Invoices"          -> None  (every invoice entity names more than the input)
    "xyzzy"             -> None
"""

from __future__ import annotations

import re
from difflib import SequenceMatcher
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from d365mcp.domain.registry import EntityRegistry

DEFAULT_THRESHOLD = 0.6

_WORD = re.compile(r"V\d+(?![a-z])|[A-Z]+(?![a-z])|[A-Z]?[a-z]+|\d+")
_VERSION = re.compile(r"v\d+")
_NON_ALNUM = re.compile(r"[^0-9a-z]+")

# Longest first: inflection left after a stem ("categor" + "ies").
_SUFFIXES = ("ies", "es", "s", "y", "e")


def _normalise(text: str) -> str:
    return _NON_ALNUM.sub("", text.casefold())


def _stem(word: str) -> str:
    for suffix in ("ies", "es", "s"):
        if word.endswith(suffix) and len(word) - len(suffix) >= 3:
            return word[: -len(suffix)]
    return word


@lru_cache(maxsize=1024)
def _name_stems(name: str) -> tuple[tuple[str, ...], tuple[str, ...]]:
    """``(all stems, content stems)`` of a canonical name; content excludes versions."""
    words = [w.casefold() for w in _WORD.findall(name) if len(w) >= 2]
    stems = tuple(w if _VERSION.fullmatch(w) else _stem(w) for w in words)
    content = tuple(s for s in stems if not _VERSION.fullmatch(s))
    return stems, content


def _input_coverage(raw: str, stems: tuple[str, ...]) -> float:
    covered = [False] * len(raw)
    for stem in stems:
        start = raw.find(stem)
        while start != -1:
            end = start + len(stem)
            for suffix in _SUFFIXES:
                if raw.startswith(suffix, end):
                    end += len(suffix)
                    break
            covered[start:end] = [True] * (end - start)
            start = raw.find(stem, start + 1)
    return sum(covered) / len(raw)


def similarity(raw: str, name: str) -> float:
    """Score *raw* against the canonical *name* (1.0 means equal ignoring case)."""
    left, right = _normalise(raw), _normalise(name)
    if not left or not right:
        return 0.0
    if left == right:
        return 1.0
    ratio = SequenceMatcher(None, left, right, autojunk=False).ratio()
    stems, content = _name_stems(name)
    input_coverage = _input_coverage(left, stems)
    name_coverage = sum(s in left for s in content) / len(content) if content else 1.0
    return ratio * (0.5 + 0.5 * input_coverage) * (0.75 + 0.25 * name_coverage)


class EntityMatcher:
    """Resolve user-supplied entity names against an :class:`EntityRegistry`."""

    def __init__(self, registry: EntityRegistry, *, threshold: float = DEFAULT_THRESHOLD) -> None:
        self._registry = registry
        self._threshold = threshold

    @property
    def registry(self) -> EntityRegistry:
        return self._registry

    @property
    def threshold(self) -> float:
        return self._threshold

    def candidates(self, raw: str, *, limit: int = 5) -> list[tuple[str, float]]:
        """Ranked ``(name, score)`` pairs at or above the threshold."""
        if not raw or not raw.strip() or limit < 1:
            return []
        scored = [(name, similarity(raw, name)) for name in self._registry.names]
        ranked = sorted(
            (pair for pair in scored if pair[1] >= self._threshold),
            key=lambda pair: (-pair[1], len(pair[0]), pair[0]),
        )
        return ranked[:limit]

    def resolve(self, raw: str) -> str | None:
        """Return the canonical name for *raw*, or None when nothing is close enough."""
        if not raw or not raw.strip():
            return None
        exact = self._registry.canonical(raw)
        if exact is not None:
            return exact
        best = self.candidates(raw, limit=1)
        return best[0][0] if best else None
