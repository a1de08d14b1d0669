"""Centralized configuration for dagedit."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class LayoutConfig:
    """Geometry of the layered layout, in canvas units."""

    node_width: float = 172.0
    node_height: float = 36.0
    h_gap: float = 50.0
    v_gap: float = 80.0
    crossing_passes: int = 24


@dataclass
class EditorConfig:
    """Configuration for an edit session."""

    graph_name: str = "Untitled Graph"
    history_size: int = 50
    spawn_origin: tuple[float, float] = (100.0, 100.0)
    spawn_extent: float = 400.0
    layout: LayoutConfig = field(default_factory=LayoutConfig)
