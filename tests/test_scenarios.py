from pathlib import Path

from scenarios import S0_axis_return, S1_corner, S2_fan, S3_step_ceiling
from scenarios.runner import check_case, run_all


def _run_and_check(mod):
    failures = []
    for p in mod.build_sweep_params():
        sim, paths = mod.run_case(p)
        _, rerun = mod.run_case(p)
        failures.extend(check_case(p, sim, paths, rerun))
    return failures


def test_all_scenarios_pass_their_checks():
    for mod in (S0_axis_return, S1_corner, S2_fan, S3_step_ceiling):
        assert _run_and_check(mod) == []


def test_fan_scenario_path_counts():
    counts = [len(S2_fan.run_case(p)[1]) for p in S2_fan.build_sweep_params()]
    assert counts == [1, 3, 7]


def test_check_case_reports_expectation_mismatch():
    p = dict(S0_axis_return.build_sweep_params()[0])
    p["expect_segments"] = 3
    sim, paths = S0_axis_return.run_case(p)
    failures = check_case(p, sim, paths, paths)
    assert any("expected 3 segments" in f for f in failures)


def test_check_case_reports_non_deterministic_rerun():
    p = S1_corner.build_sweep_params()[0]
    sim, paths = S1_corner.run_case(p)
    _, shorter = S1_corner.run_case({**p, "max_bounces": 1})
    failures = check_case(p, sim, paths, shorter)
    assert any("bit-identical" in f for f in failures)


def test_run_all_writes_report(tmp_path: Path):
    report = run_all(out_h5=str(tmp_path / "sweep.h5"), out_plot_dir=str(tmp_path / "plots"))
    text = Path(report).read_text(encoding="utf-8")
    assert "PASS: No automatic failure checks triggered." in text
    assert (tmp_path / "sweep.h5").exists()
    assert (tmp_path / "plots" / "S0" / "s0_b2" / "scene.png").exists()
