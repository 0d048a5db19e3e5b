"""Symbolic names for branch targets."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, Tuple

from .constants import LABEL_PREFIX

__all__ = ["LabelTable"]


@dataclass
class LabelTable:
    """Map absolute stream positions to lazily minted ``label_N`` names.

    Names are numbered in order of first reference.  A position keeps the name
    it was first given for the lifetime of the table, so resolving the same
    target twice always yields the same label.  One table belongs to a single
    disassembly run.
    """

    prefix: str = LABEL_PREFIX
    _names: Dict[int, str] = field(default_factory=dict)

    def resolve(self, position: int) -> str:
        name = self._names.get(position)
        if name is None:
            name = f"{self.prefix}_{len(self._names)}"
            self._names[position] = name
        return name

    def items(self) -> Iterator[Tuple[int, str]]:
        """Yield ``(position, name)`` pairs in the order names were minted."""

        return iter(self._names.items())

    def __contains__(self, position: object) -> bool:
        return position in self._names

    def __len__(self) -> int:
        return len(self._names)
