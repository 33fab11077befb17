"""Editor configuration — interaction constants of the path graph engine."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class EditorConfig:
    """Controls visuals and keyboard/drag behaviour of a workspace."""

    # Radius of the circle drawn for each vertex
    vertex_radius: float = 4.0

    # Side of the seed rectangle created by a drag on empty canvas;
    # the drag then scales it about its top-left corner.
    rect_seed_size: float = 10.0

    # Arrow-key nudges
    nudge_step: float = 5.0  # offset per key press
    nudge_scale: float = 1.1  # Shift+arrow scale factor (or its inverse)
    nudge_angle: float = 5.0  # Ctrl+arrow rotation in degrees

    # Traced length at or below which a self-loop counts as degenerate
    zero_length: float = 1e-9

    # Decimal places in generated descriptors
    precision: int = 6
