"""Transform option model shared by the engine and the API."""

from __future__ import annotations

import math

from pydantic import BaseModel, Field

from pathedit.utils.geometry import rotation_terms


class TransformOptions(BaseModel):
    """Affine transform parameters. The default instance is the identity."""

    center: tuple[float, float] | None = Field(
        default=None, description="Scale/rotation centre; defaults to the snapshot bbox centre"
    )
    offset: tuple[float, float] = (0.0, 0.0)
    scale_x: float = 1.0
    scale_y: float | None = Field(default=None, description="Defaults to scale_x")
    rotation: float | tuple[float, float] | None = Field(
        default=None, description="Angle in degrees, or a (sin, cos) pair"
    )

    @property
    def sy(self) -> float:
        return self.scale_x if self.scale_y is None else self.scale_y

    def resolve_rotation(self) -> tuple[float, float, float]:
        """(angle in degrees, sin, cos) of the rotation."""
        if self.rotation is None:
            return 0.0, 0.0, 1.0
        if isinstance(self.rotation, tuple):
            sin, cos = self.rotation
            return math.degrees(math.atan2(sin, cos)), sin, cos
        sin, cos = rotation_terms(self.rotation)
        return float(self.rotation), sin, cos

    @property
    def is_identity(self) -> bool:
        _, sin, cos = self.resolve_rotation()
        return (
            self.offset[0] == 0
            and self.offset[1] == 0
            and self.scale_x == 1
            and self.sy == 1
            and sin == 0
            and cos == 1
        )
