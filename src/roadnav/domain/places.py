# roadnav/domain/places.py
import re
from collections.abc import Iterable
from dataclasses import dataclass, field
from types import MappingProxyType

from roadnav.domain.entities.geography import Place

_NON_ALPHA = re.compile(r"[^a-zA-Z ]")


def clean_name(s: str) -> str:
    """Lowercase and strip everything but ASCII letters and spaces."""
    return _NON_ALPHA.sub("", s).lower()


@dataclass
class _TrieNode:
    links: dict[str, "_TrieNode"] = field(default_factory=dict)
    names: list[str] = field(default_factory=list)  # display names ending here


class PlaceIndex:
    """
    Immutable name index over named locations: prefix completion on cleaned
    names, and exact cleaned-name lookup returning every matching place.
    Built once; read-only afterwards.
    """

    def __init__(self, places: Iterable[Place]):
        self._root = _TrieNode()
        by_name: dict[str, list[Place]] = {}
        for p in places:
            key = clean_name(p.name)
            if not key:
                continue
            bucket = by_name.setdefault(key, [])
            if not bucket:
                self._add(key, p.name)
            elif p.name not in (q.name for q in bucket):
                self._node(key).names.append(p.name)
            bucket.append(p)
        self._by_name = MappingProxyType({k: tuple(v) for k, v in by_name.items()})

    def __len__(self) -> int:
        return len(self._by_name)

    def _add(self, key: str, display: str) -> None:
        node = self._root
        for ch in key:
            node = node.links.setdefault(ch, _TrieNode())
        node.names.append(display)

    def _node(self, key: str) -> _TrieNode | None:
        node = self._root
        for ch in key:
            node = node.links.get(ch)
            if node is None:
                return None
        return node

    def complete(self, prefix: str, limit: int | None = None) -> list[str]:
        """Display names whose cleaned form starts with the cleaned prefix, sorted."""
        start = self._node(clean_name(prefix))
        if start is None:
            return []
        out: list[str] = []
        stack = [start]
        while stack:
            node = stack.pop()
            out.extend(node.names)
            stack.extend(node.links.values())
        out.sort()
        return out if limit is None else out[:limit]

    def locations(self, name: str) -> tuple[Place, ...]:
        return self._by_name.get(clean_name(name), ())
