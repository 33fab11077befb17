"""Leaf-node geometry helpers. No engine imports."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray
from svgpathtools import Arc, CubicBezier, Line

Point = tuple[float, float]


@dataclass(frozen=True)
class BBox:
    """Axis-aligned bounding box in SVG getBBox() form."""

    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0

    @classmethod
    def from_extents(cls, xmin: float, ymin: float, xmax: float, ymax: float) -> BBox:
        return cls(xmin, ymin, xmax - xmin, ymax - ymin)

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2, self.y + self.height / 2)


def bbox(points: NDArray[np.float64]) -> tuple[float, float, float, float]:
    """Compute (xmin, ymin, xmax, ymax) bounding box."""
    if len(points) == 0:
        return (0.0, 0.0, 0.0, 0.0)
    return (
        float(np.min(points[:, 0])),
        float(np.min(points[:, 1])),
        float(np.max(points[:, 0])),
        float(np.max(points[:, 1])),
    )


def reflect(point: Point, about: Point) -> Point:
    """Reflect ``point`` through ``about``."""
    return (about[0] * 2 - point[0], about[1] * 2 - point[1])


def lerp(a: Point, b: Point, t: float) -> Point:
    return (a[0] + (b[0] - a[0]) * t, a[1] + (b[1] - a[1]) * t)


def quadratic_to_cubic(start: Point, control: Point, end: Point) -> tuple[Point, Point]:
    """Degree elevation: the two cubic control points of a quadratic curve."""
    return lerp(start, control, 2 / 3), lerp(end, control, 2 / 3)


def clamp(value: float, low: float, high: float) -> float:
    return low if value < low else high if value > high else value


def rotation_terms(angle: float) -> tuple[float, float]:
    """(sin, cos) of an angle in degrees."""
    radians = math.radians(angle)
    return math.sin(radians), math.cos(radians)


# --- svgpathtools bridge -------------------------------------------------
# svgpathtools works in complex numbers: x + y·j.


def _c(point: Point) -> complex:
    return complex(point[0], point[1])


def line_segment(start: Point, end: Point) -> Line:
    return Line(_c(start), _c(end))


def cubic_segment(start: Point, c1: Point, c2: Point, end: Point) -> CubicBezier:
    return CubicBezier(_c(start), _c(c1), _c(c2), _c(end))


def arc_segment(
    start: Point,
    radii: Point,
    rotation: float,
    large_arc: bool,
    sweep: bool,
    end: Point,
) -> Arc | Line:
    """Arc segment following SVG's out-of-range rules.

    Identical endpoints draw nothing, a zero radius draws a straight line.
    Radii too small to reach the end point are scaled up by svgpathtools.
    """
    rx, ry = abs(radii[0]), abs(radii[1])
    if start == end or rx == 0 or ry == 0:
        return line_segment(start, end)
    return Arc(_c(start), complex(rx, ry), rotation, bool(large_arc), bool(sweep), _c(end))


def segments_length(segments: Sequence) -> float:
    """Total traced length. Summed per segment so an all-degenerate list is 0."""
    return float(sum(segment.length() for segment in segments))


def segments_bbox(segments: Sequence) -> BBox | None:
    """Tight bounding box of svgpathtools segments, None when empty."""
    if not segments:
        return None
    extents = np.array([segment.bbox() for segment in segments], dtype=np.float64)
    # svgpathtools order: (xmin, xmax, ymin, ymax)
    return BBox.from_extents(
        float(np.min(extents[:, 0])),
        float(np.min(extents[:, 2])),
        float(np.max(extents[:, 1])),
        float(np.max(extents[:, 3])),
    )
