import numpy as np
import pytest

from bounce_core.geometry import Box, as_point


def test_box_walls_and_contains():
    box = Box(100.0, 100.0, 400.0, 300.0)
    assert box.bounds() == (100.0, 500.0, 100.0, 400.0)
    assert box.contains(np.array([100.0, 400.0]))
    assert not box.contains(np.array([99.9, 200.0]))


@pytest.mark.parametrize("w,h", [(0.0, 10.0), (10.0, -1.0), (float("nan"), 5.0)])
def test_box_rejects_degenerate_dimensions(w, h):
    with pytest.raises(ValueError):
        Box(0.0, 0.0, w, h)


def test_box_centered_in_canvas():
    box = Box.centered(1600.0, 1000.0, 1200.0, 800.0)
    assert (box.x, box.y, box.w, box.h) == (200.0, 100.0, 1200.0, 800.0)
    assert box.resized(600.0, 400.0).recentered(1600.0, 1000.0) == Box(500.0, 300.0, 600.0, 400.0)


def test_point_helper_rejects_wrong_shape():
    with pytest.raises(ValueError):
        as_point([1.0, 2.0, 3.0])


def test_clamp_moves_outside_points_onto_walls():
    box = Box(0.0, 0.0, 10.0, 10.0)
    assert box.clamp(np.array([-3.0, 12.0])).tolist() == [0.0, 10.0]
    assert box.clamp([4.0, 5.0]).tolist() == [4.0, 5.0]
