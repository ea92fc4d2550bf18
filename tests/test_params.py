import json

import numpy as np
import pytest

from bounce_core.geometry import Box
from bounce_core.params import SimulationParams, load_params_json


def test_defaults_match_interactive_setup():
    p = SimulationParams()
    assert p.box == Box(0.0, 0.0, 1200.0, 800.0)
    assert np.isclose(p.divergence_deg, 3.0)
    assert (p.pair_count, p.max_bounces, p.speed, p.max_steps, p.decay_rate) == (1, 10, 10.0, 4000, 0.0)
    assert p.rays_per_config == 3


@pytest.mark.parametrize(
    "changes",
    [{"pair_count": -1}, {"max_bounces": -2}, {"max_steps": 0}, {"speed": 0.0}, {"decay_rate": -0.1}],
)
def test_invalid_values_raise(changes):
    with pytest.raises(ValueError):
        SimulationParams(**changes)


def test_replace_accepts_degrees():
    p = SimulationParams().replace(divergence_deg=10.0, max_bounces=3)
    assert np.isclose(p.angle_step, np.pi / 18)
    assert p.max_bounces == 3


def test_from_mapping_and_json_file(tmp_path):
    data = {"box": {"x": 10, "y": 20, "w": 300, "h": 200}, "divergence_deg": 5, "pair_count": 2, "decay_rate": 0.1}
    fp = tmp_path / "params.json"
    fp.write_text(json.dumps(data), encoding="utf-8")
    p = load_params_json(str(fp))
    assert p.box == Box(10.0, 20.0, 300.0, 200.0)
    assert np.isclose(p.divergence_deg, 5.0)
    assert p.pair_count == 2
    assert SimulationParams.from_mapping(p.to_dict()) == p


def test_from_mapping_rejects_unknown_keys():
    with pytest.raises(ValueError, match="Unknown"):
        SimulationParams.from_mapping({"bounce_limit": 3})


@pytest.mark.parametrize("name", ["pair_count", "max_bounces", "max_steps"])
def test_non_integer_counts_raise(name):
    with pytest.raises(ValueError, match="integer"):
        SimulationParams(**{name: 1.5})
    with pytest.raises(ValueError, match="integer"):
        SimulationParams().replace(**{name: 2.0})
