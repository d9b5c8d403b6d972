#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Fragment Registry

Named anchors and the (block, line) position where each one ended up in
the finished output.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

from .lines import TaggedLine


@dataclass(frozen=True)
class FragmentPosition:
    """`block` counts start_block() calls before the anchor; `line` is the output line index."""
    block: int
    line: int


@dataclass
class FragmentRegistry:
    """
    Name -> position mapping. The first occurrence of a name wins; later
    ones are kept in `duplicates` but cannot be looked up by name.
    """
    positions: Dict[str, FragmentPosition] = field(default_factory=dict)
    duplicates: List[Tuple[str, FragmentPosition]] = field(default_factory=list)

    def record(self, name: str, position: FragmentPosition) -> bool:
        """Register an anchor. Returns False if the name was already taken."""
        if name in self.positions:
            self.duplicates.append((name, position))
            return False
        self.positions[name] = position
        return True

    def get(self, name: str) -> Optional[FragmentPosition]:
        return self.positions.get(name)

    def names(self) -> List[str]:
        return list(self.positions)

    def __contains__(self, name: str) -> bool:
        return name in self.positions

    def __len__(self) -> int:
        return len(self.positions)

    @classmethod
    def from_lines(cls, lines: Iterable[TaggedLine]) -> 'FragmentRegistry':
        """Resolve the fragment markers carried by finished lines."""
        registry = cls()
        for index, line in enumerate(lines):
            for marker in line.fragments():
                registry.record(marker.name, FragmentPosition(marker.block, index))
        return registry
