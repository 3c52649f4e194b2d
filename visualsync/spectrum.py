"""Spectrum display model: smoothed frequency curves drawn as thick polylines."""

from __future__ import annotations

import colorsys
import math
from dataclasses import dataclass
from typing import List, Sequence, Tuple

NUM_POINTS = 1024
LINE_WIDTH = 0.005
SMOOTHING_ALPHA = 0.7
RECENT_FULL = 100
RECENT_STEP = 10
RIGHT_COLOR = (0.5, 0.5, 0.5, 1.0)

Vec2 = Tuple[float, float]
Vec4 = Tuple[float, float, float, float]


@dataclass(frozen=True)
class Vertex2D:
    """A 2D vertex with an RGBA colour."""

    position: Vec2
    color: Vec4


def generate_polyline_quads(points: Sequence[Vertex2D], width: float) -> List[Vertex2D]:
    """Build two triangles per segment along a polyline of the given width."""
    if len(points) < 2:
        raise ValueError("need at least 2 points to generate a polyline")
    half_width = width / 2.0
    vertices: List[Vertex2D] = []
    for p0, p1 in zip(points, points[1:]):
        (x0, y0), (x1, y1) = p0.position, p1.position
        dx, dy = x1 - x0, y1 - y0
        length = math.hypot(dx, dy)
        if length == 0.0:
            raise ValueError("consecutive polyline points must differ")
        nx, ny = -dy / length * half_width, dx / length * half_width

        v0 = (x0 + nx, y0 + ny)
        v1 = (x0 - nx, y0 - ny)
        v2 = (x1 - nx, y1 - ny)
        v3 = (x1 + nx, y1 + ny)

        vertices.extend(
            (
                Vertex2D(v0, p0.color),
                Vertex2D(v1, p0.color),
                Vertex2D(v2, p0.color),
                Vertex2D(v2, p1.color),
                Vertex2D(v3, p1.color),
                Vertex2D(v0, p1.color),
            )
        )
    return vertices


def signed_log_scale(x: float, base: float = 40.0) -> float:
    """Map x in [-1, 1] onto a logarithmic axis in [-1, 1]."""
    abs_x = (x + 1.0) / 2.0
    scaled = math.log(abs_x * (base - 1.0) + 1.0) / math.log(base)
    return -1.0 + scaled * 2.0


def inverse_log_scale(y: float, base: float = 40.0) -> float:
    """Undo signed_log_scale: map a logarithmic position back to linear."""
    abs_y = (y + 1.0) / 2.0
    scaled = (base ** abs_y - 1.0) / (base - 1.0)
    return -1.0 + scaled * 2.0


class SpectrumDisplay:
    """Smooths left and right spectra and turns them into line geometry.

    The left curve is coloured by frequency, its saturation rising while a
    bin stays below its smoothed level; the right curve is drawn in grey.
    """

    def __init__(self, num_points: int = NUM_POINTS) -> None:
        if num_points < 2:
            raise ValueError("a spectrum needs at least 2 points")
        self.num_points = num_points
        self.decay = 0.02
        self.smooth_left: List[float] = [0.0] * num_points
        self.smooth_right: List[float] = [0.0] * num_points
        self.recent_left: List[int] = [RECENT_FULL] * num_points
        self.recent_right: List[int] = [RECENT_FULL] * num_points
        self.line_vertices: List[Vertex2D] = []
        self.line_vertices_right: List[Vertex2D] = []

    @staticmethod
    def _smooth(previous: float, value: float) -> float:
        return SMOOTHING_ALPHA * value + (1.0 - SMOOTHING_ALPHA) * previous

    @staticmethod
    def _recent(previous: int, value: float, smoothed: float) -> int:
        if value > smoothed:
            return RECENT_FULL
        return previous - RECENT_STEP if previous > RECENT_STEP else previous

    def set_frequencies(self, left: Sequence[float], right: Sequence[float]) -> None:
        """Feed one frame of spectrum levels (0..1) for both channels."""
        if len(left) < self.num_points or len(right) < self.num_points:
            raise ValueError(f"each spectrum needs at least {self.num_points} values")
        path_left: List[Vertex2D] = []
        path_right: List[Vertex2D] = []
        for i, (value_l, value_r) in enumerate(zip(left[: self.num_points], right[: self.num_points])):
            smooth_l = self._smooth(self.smooth_left[i], value_l)
            smooth_r = self._smooth(self.smooth_right[i], value_r)
            self.smooth_left[i] = smooth_l
            self.smooth_right[i] = smooth_r
            self.recent_left[i] = self._recent(self.recent_left[i], value_l, smooth_l)
            self.recent_right[i] = self._recent(self.recent_right[i], value_r, smooth_r)

            fraction = i / self.num_points
            saturation = 1.0 - self.recent_left[i] / RECENT_FULL
            red, green, blue = colorsys.hsv_to_rgb(fraction, saturation, 1.0)
            x = fraction * 2.0 - 1.0
            path_left.append(
                Vertex2D((x, smooth_l * 2.0 - (1.0 - LINE_WIDTH)), (red, green, blue, 1.0))
            )
            path_right.append(
                Vertex2D((x, smooth_r * 2.0 - (1.1 - LINE_WIDTH)), RIGHT_COLOR)
            )
        self.line_vertices = generate_polyline_quads(path_left, LINE_WIDTH)
        self.line_vertices_right = generate_polyline_quads(path_right, LINE_WIDTH)