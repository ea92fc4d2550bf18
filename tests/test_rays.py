import numpy as np
import pytest

from bounce_core.geometry import heading
from bounce_core.rays import DEFAULT_SPEED, RayConfig, expand_directions


def test_three_vector_fan_angles():
    dirs = expand_directions(np.array([1.0, 0.0]), np.pi / 60, pair_count=1)
    assert len(dirs) == 3
    angles = [heading(d) for d in dirs]
    assert np.allclose(angles, [0.0, -np.pi / 60, np.pi / 60], rtol=0.0, atol=1e-12)


def test_fan_symmetry_and_order():
    base = np.array([-3.0, 2.0])
    step = np.deg2rad(4.0)
    dirs = expand_directions(base, step, pair_count=4)
    assert len(dirs) == 9
    a0 = heading(base)
    assert np.isclose(heading(dirs[0]), a0)
    for i in range(1, 5):
        minus = np.array([np.cos(a0 - i * step), np.sin(a0 - i * step)])
        plus = np.array([np.cos(a0 + i * step), np.sin(a0 + i * step)])
        assert np.allclose(dirs[2 * i - 1] / DEFAULT_SPEED, minus, atol=1e-12)
        assert np.allclose(dirs[2 * i] / DEFAULT_SPEED, plus, atol=1e-12)


def test_fan_uses_fixed_speed_not_drag_length():
    dirs = expand_directions(np.array([300.0, 400.0]), 0.1, pair_count=2, speed=7.5)
    assert np.allclose([np.linalg.norm(d) for d in dirs], 7.5)


def test_zero_pairs_returns_base_only():
    dirs = expand_directions(np.array([0.0, 5.0]), 0.3, pair_count=0)
    assert len(dirs) == 1
    assert np.allclose(dirs[0], [0.0, DEFAULT_SPEED], atol=1e-12)


def test_expander_rejects_bad_input():
    with pytest.raises(ValueError):
        expand_directions(np.array([1.0, 0.0]), 0.1, pair_count=-1)
    with pytest.raises(ValueError):
        expand_directions(np.array([0.0, 0.0]), 0.1, pair_count=1)


def test_ray_config_from_drag():
    cfg = RayConfig.from_drag([10.0, 20.0], [13.0, 24.0])
    assert cfg is not None
    assert cfg.origin.tolist() == [10.0, 20.0]
    assert cfg.direction.tolist() == [3.0, 4.0]
    assert RayConfig.from_drag([10.0, 20.0], [10.0, 20.0]) is None


def test_ray_config_is_immutable_and_detached():
    start = np.array([1.0, 2.0])
    cfg = RayConfig(origin=start, direction=np.array([1.0, 0.0]))
    start[0] = 99.0
    assert cfg.origin[0] == 1.0
    with pytest.raises(ValueError):
        cfg.origin[0] = 5.0
    with pytest.raises(AttributeError):
        cfg.origin = np.array([0.0, 0.0])
