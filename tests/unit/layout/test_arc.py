"""Unit tests for arc geometry and SVG path data."""

import math

import pytest

from mapburst.layout.arc import ArcGeometry, Scales, arc_path, compute_arc
from mapburst.layout.partition import partition

TAU = 2 * math.pi


@pytest.fixture
def nodes(nested_tree):
    return partition(nested_tree)


class TestComputeArc:
    def test_root_is_a_disc(self, nodes):
        geometry = compute_arc(nodes[0], Scales.for_radius(480))
        assert geometry.start_angle == 0.0
        assert geometry.end_angle == pytest.approx(TAU)
        assert geometry.inner_radius == 0.0
        # sqrt(1/4) of the radius, minus the one pixel separator
        assert geometry.outer_radius == pytest.approx(239.0)

    def test_ring_radii_are_square_root_scaled(self, nodes):
        a = nodes[1]
        geometry = compute_arc(a, Scales.for_radius(480))
        assert geometry.inner_radius == pytest.approx(480 * math.sqrt(0.25))
        assert geometry.outer_radius == pytest.approx(480 * math.sqrt(0.5) - 1)
        assert geometry.end_angle == pytest.approx(0.4 * TAU)

    def test_angles_are_clamped(self, nodes):
        scales = Scales.for_radius(100)
        scales.x.domain = (0.1, 0.4)
        geometry = compute_arc(nodes[2], scales)  # c.js lies outside the zoomed span
        assert geometry.start_angle == pytest.approx(TAU)
        assert geometry.end_angle == pytest.approx(TAU)

    def test_children_angles_sum_to_parent(self, nodes):
        scales = Scales.for_radius(300)
        for node in nodes:
            if node.children:
                parent = compute_arc(node, scales).angle
                children = sum(compute_arc(nodes[i], scales).angle for i in node.children)
                assert children == pytest.approx(parent)

    def test_pad_angle_is_carried(self, nodes):
        assert compute_arc(nodes[1], Scales.for_radius(100), pad_angle=0.05).pad_angle == 0.05


class TestArcPath:
    def test_empty_arc(self):
        assert arc_path(ArcGeometry(0.0, 1.0, 0.0, 0.0)) == "M0,0Z"

    def test_full_disc(self):
        path = arc_path(ArcGeometry(0.0, TAU, 0.0, 100.0))
        assert path.startswith("M0,-100")
        assert path.count("A") == 2
        assert path.endswith("Z")

    def test_full_annulus_draws_both_circles(self):
        path = arc_path(ArcGeometry(0.0, TAU, 50.0, 100.0))
        assert path.count("M") == 2
        assert path.count("A") == 4

    def test_quarter_sector_without_padding(self):
        path = arc_path(ArcGeometry(0.0, math.pi / 2, 0.0, 100.0))
        assert path == "M0,-100A100,100,0,0,1,100,0L0,0Z"

    def test_large_arc_flag(self):
        path = arc_path(ArcGeometry(0.0, 1.5 * math.pi, 50.0, 100.0))
        assert "A100,100,0,1,1," in path
        assert "A50,50,0,1,0," in path

    def test_padding_shrinks_the_sector(self):
        plain = arc_path(ArcGeometry(0.0, math.pi / 2, 50.0, 100.0))
        padded = arc_path(ArcGeometry(0.0, math.pi / 2, 50.0, 100.0, pad_angle=0.01))
        assert plain != padded
        assert not padded.startswith("M0,-100")

    def test_sector_narrower_than_padding_collapses(self):
        path = arc_path(ArcGeometry(0.0, 0.001, 50.0, 100.0, pad_angle=0.1))
        assert "A" not in path
        assert path.endswith("Z")
