import numpy as np

from analysis.path_stats import contained
from bounce_core.geometry import Box
from bounce_core.params import SimulationParams
from bounce_core.session import RaySession


def _session(**kw):
    return RaySession(SimulationParams(box=Box(100.0, 100.0, 400.0, 300.0), **kw))


def test_commit_retains_config_and_fan():
    s = _session(pair_count=2, max_bounces=4)
    cfg = s.commit_drag([200.0, 200.0], [260.0, 230.0])
    assert cfg is not None
    assert len(s.configs) == 1
    assert len(s.paths) == 5


def test_zero_length_and_outside_drags_create_nothing():
    s = _session()
    assert s.commit_drag([200.0, 200.0], [200.0, 200.0]) is None
    assert s.commit_drag([50.0, 50.0], [80.0, 90.0]) is None
    assert s.configs == ()
    assert s.paths == ()
    assert s.preview_drag([200.0, 200.0], [200.0, 200.0]) == []


def test_preview_is_not_retained():
    s = _session(pair_count=1)
    previews = s.preview_drag([200.0, 200.0], [210.0, 200.0])
    assert len(previews) == 3
    assert s.configs == ()


def test_update_params_recomputes_all_configs():
    s = _session(pair_count=0, max_bounces=2)
    s.commit_drag([100.0, 250.0], [140.0, 250.0])
    s.commit_drag([300.0, 150.0], [300.0, 200.0])
    assert [len(p.segments) for p in s.paths] == [2, 2]

    paths = s.update_params(max_bounces=5)
    assert paths is s.paths
    assert [len(p.segments) for p in s.paths] == [5, 5]
    assert s.paths[0].segments[0][-1].tolist() == [500.0, 250.0]

    s.update_params(pair_count=1)
    assert len(s.paths) == 6


def test_unchanged_params_keep_path_set():
    s = _session()
    s.commit_drag([200.0, 200.0], [230.0, 210.0])
    before = s.paths
    assert s.update_params(max_bounces=s.params.max_bounces) is before


def test_recompute_matches_first_commit():
    s = _session(max_bounces=7)
    s.commit_drag([150.0, 300.0], [170.0, 260.0])
    first = s.paths
    s.recompute()
    assert all(
        np.array_equal(a, b) for pa, pb in zip(first, s.paths) for a, b in zip(pa.segments, pb.segments)
    )


def test_resize_box_recenters_and_recomputes():
    s = RaySession(SimulationParams(box=Box.centered(1000.0, 800.0, 600.0, 400.0), pair_count=0, max_bounces=3))
    s.commit_drag([500.0, 400.0], [520.0, 400.0])
    s.resize_box(400.0, 200.0, canvas=(1000.0, 800.0))
    assert s.params.box == Box(300.0, 300.0, 400.0, 200.0)
    pts = s.paths[0].points()
    assert pts[:, 0].max() <= 700.0
    assert s.paths[0].segments[0][-1].tolist() == [700.0, 400.0]


def test_reset_clears_everything():
    s = _session()
    s.commit_drag([200.0, 200.0], [230.0, 210.0])
    s.reset()
    assert s.configs == () and s.paths == ()


def test_shrinking_box_past_retained_origin_keeps_paths_inside():
    s = RaySession(SimulationParams(box=Box(0.0, 0.0, 600.0, 400.0), pair_count=1, max_bounces=3))
    cfg = s.commit_drag([550.0, 200.0], [570.0, 200.0])
    s.resize_box(300.0, 400.0)
    box = s.params.box
    assert len(s.paths) == 3
    for p in s.paths:
        assert contained(p, box)
        assert p.segments[0][0].tolist() == [300.0, 200.0]
    assert s.configs[0] is cfg
    assert cfg.origin.tolist() == [550.0, 200.0]
