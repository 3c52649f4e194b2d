import math

import pytest

from visualsync.spectrum import (
    SpectrumDisplay,
    Vertex2D,
    generate_polyline_quads,
    inverse_log_scale,
    signed_log_scale,
)

RED = (1.0, 0.0, 0.0, 1.0)
BLUE = (0.0, 0.0, 1.0, 1.0)


def _distance_to_line(point, a, b):
    (px, py), (ax, ay), (bx, by) = point, a, b
    dx, dy = bx - ax, by - ay
    return abs(dx * (py - ay) - dy * (px - ax)) / math.hypot(dx, dy)


def test_quads_count_is_six_per_segment():
    points = [Vertex2D((float(i), float(i % 2)), RED) for i in range(5)]
    assert len(generate_polyline_quads(points, 0.1)) == 24


def test_quad_vertices_lie_half_width_from_segment():
    a, b = (0.0, 0.0), (3.0, 4.0)
    quads = generate_polyline_quads([Vertex2D(a, RED), Vertex2D(b, BLUE)], 0.5)
    for vertex in quads:
        assert _distance_to_line(vertex.position, a, b) == pytest.approx(0.25)


def test_quad_colors_follow_endpoints():
    quads = generate_polyline_quads([Vertex2D((0.0, 0.0), RED), Vertex2D((1.0, 0.0), BLUE)], 1.0)
    assert [v.color for v in quads] == [RED] * 3 + [BLUE] * 3


def test_quad_triangles_share_corners():
    quads = generate_polyline_quads([Vertex2D((0.0, 0.0), RED), Vertex2D((1.0, 0.0), RED)], 1.0)
    assert quads[0].position == quads[5].position
    assert quads[2].position == quads[3].position


def test_quads_need_two_points():
    with pytest.raises(ValueError):
        generate_polyline_quads([Vertex2D((0.0, 0.0), RED)], 1.0)


def test_quads_reject_coincident_points():
    with pytest.raises(ValueError):
        generate_polyline_quads([Vertex2D((1.0, 1.0), RED), Vertex2D((1.0, 1.0), RED)], 1.0)


@pytest.mark.parametrize("edge", [-1.0, 1.0])
def test_log_scales_keep_endpoints(edge):
    assert signed_log_scale(edge, 40) == pytest.approx(edge)
    assert inverse_log_scale(edge, 40) == pytest.approx(edge)


@pytest.mark.parametrize("x", [-0.9, -0.3, 0.0, 0.4, 0.95])
def test_log_scale_round_trip(x):
    assert inverse_log_scale(signed_log_scale(x, 40), 40) == pytest.approx(x)


def test_signed_log_scale_is_increasing_and_stretches_low_end():
    values = [signed_log_scale(x / 10.0) for x in range(-10, 11)]
    assert values == sorted(values)
    assert signed_log_scale(0.0) > 0.0


def test_display_vertex_counts():
    display = SpectrumDisplay(8)
    display.set_frequencies([0.5] * 8, [0.5] * 8)
    assert len(display.line_vertices) == 6 * 7
    assert len(display.line_vertices_right) == 6 * 7


def test_display_rejects_short_input():
    display = SpectrumDisplay(8)
    with pytest.raises(ValueError):
        display.set_frequencies([0.0] * 7, [0.0] * 8)


def test_rising_level_keeps_color_unsaturated():
    display = SpectrumDisplay(4)
    display.set_frequencies([1.0] * 4, [1.0] * 4)
    assert display.recent_left == [100] * 4
    for vertex in display.line_vertices:
        assert vertex.color == pytest.approx((1.0, 1.0, 1.0, 1.0))


def test_right_curve_is_grey():
    display = SpectrumDisplay(4)
    display.set_frequencies([0.2] * 4, [0.8] * 4)
    assert {v.color for v in display.line_vertices_right} == {(0.5, 0.5, 0.5, 1.0)}


def test_recent_decays_to_floor():
    display = SpectrumDisplay(4)
    for _ in range(15):
        display.set_frequencies([0.0] * 4, [0.0] * 4)
    assert display.recent_left == [10] * 4
    assert display.recent_right == [10] * 4
    first = display.line_vertices[0].color
    assert first == pytest.approx((1.0, 0.1, 0.1, 1.0))


def test_smoothing_approaches_input_from_below():
    display = SpectrumDisplay(4)
    levels = []
    for _ in range(5):
        display.set_frequencies([1.0] * 4, [0.0] * 4)
        levels.append(display.smooth_left[0])
    assert levels == sorted(levels)
    assert all(0.0 < level < 1.0 for level in levels)
    assert display.smooth_right == [0.0] * 4


def test_left_curve_spans_x_axis():
    display = SpectrumDisplay(16)
    display.set_frequencies([0.5] * 16, [0.5] * 16)
    xs = [v.position[0] for v in display.line_vertices]
    assert min(xs) < -0.99
    assert max(xs) < 1.0