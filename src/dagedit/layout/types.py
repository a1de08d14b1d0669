"""Layout types shared by the layout engine and its callers."""

from __future__ import annotations

from dataclasses import dataclass, field

from dagedit.types import Position


@dataclass
class LayoutNode:
    """A positioned node in the layout."""

    id: str
    layer: int
    order: int
    x: float
    y: float
    width: float
    height: float

    @property
    def position(self) -> Position:
        return Position(x=self.x, y=self.y)


@dataclass
class LayoutResult:
    """Self-contained layout output."""

    nodes: list[LayoutNode]
    layer_count: int
    terminal_ids: list[str] = field(default_factory=list)

    def positions(self) -> dict[str, Position]:
        return {n.id: n.position for n in self.nodes}

    def layers(self) -> list[list[str]]:
        grouped: list[list[str]] = [[] for _ in range(self.layer_count)]
        for n in sorted(self.nodes, key=lambda n: (n.layer, n.order)):
            grouped[n.layer].append(n.id)
        return grouped
