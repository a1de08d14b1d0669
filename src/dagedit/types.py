"""Shared small types for dagedit.

Positions and other value types used across the graph model, layout and
session layers.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Position:
    """A 2D canvas position (top-left corner of the node box)."""

    x: float
    y: float

    def to_dict(self) -> dict[str, float]:
        return {"x": self.x, "y": self.y}

    def close_to(self, other: Position, tolerance: float = 1e-6) -> bool:
        return abs(self.x - other.x) <= tolerance and abs(self.y - other.y) <= tolerance
