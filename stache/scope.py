"""
Layered environment for section rendering.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Iterator


class Scope(Mapping[str, Any]):
    """
    Read-only two-level view: keys of `child` first, then keys of `parent`.

    Neither mapping is copied or modified, so entering a section costs the
    same for a large environment as for a small one.
    """

    __slots__ = ("child", "parent")

    def __init__(self, child: Mapping[str, Any], parent: Mapping[str, Any]):
        self.child = child
        self.parent = parent

    def __getitem__(self, key: str) -> Any:
        if key in self.child:
            return self.child[key]
        return self.parent[key]

    def __contains__(self, key: object) -> bool:
        return key in self.child or key in self.parent

    def __iter__(self) -> Iterator[str]:
        yield from self.child
        for key in self.parent:
            if key not in self.child:
                yield key

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __repr__(self) -> str:
        return f"Scope({self.child!r}, {self.parent!r})"


__all__ = ["Scope"]
