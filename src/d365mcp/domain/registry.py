"""EntityRegistry — the immutable set of canonical entity-set names.

Built once at startup and passed to :class:`~d365mcp.domain.matcher.EntityMatcher`.
Read-only after construction, so it is shared across concurrent tool calls
without locking.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING

from d365mcp.domain.catalog import DEFAULT_ENTITIES

if TYPE_CHECKING:
    from collections.abc import Mapping


@dataclass(frozen=True)
class EntityRegistry:
    """Frozen set of canonical names with a case-insensitive index."""

    names: frozenset[str]
    _by_key: Mapping[str, str] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: dict[str, str] = {}
        for name in sorted(self.names):
            index.setdefault(name.casefold(), name)
        object.__setattr__(self, "_by_key", MappingProxyType(index))

    @classmethod
    def from_names(cls, names: Iterable[str]) -> EntityRegistry:
        """Build a registry from raw names, dropping blanks and whitespace."""
        return cls(frozenset(n.strip() for n in names if n and n.strip()))

    @classmethod
    def default(cls, extra: Iterable[str] = ()) -> EntityRegistry:
        """The shipped catalog, optionally extended with *extra* names."""
        return cls.from_names([*DEFAULT_ENTITIES, *extra])

    def canonical(self, name: str) -> str | None:
        """Return the registry spelling of *name* if it matches ignoring case."""
        return self._by_key.get(name.strip().casefold())

    def __contains__(self, name: object) -> bool:
        return name in self.names

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.names))

    def __len__(self) -> int:
        return len(self.names)
