import numpy as np
import pytest

from mhd_couette.objectives import DEFAULT_BOUNDS, GOALS, make_fitness, optimize_parameters
from mhd_couette.optimizer import GeneticOptimizer
from mhd_couette.presets import BASELINE
from mhd_couette.types import DampingType, MetricsRecord

BOUNDS = {"x": (0.0, 3.0), "y": (-2.0, 2.0)}


def bowl(c):
    return -((c["x"] - 1.0) ** 2 + (c["y"] + 0.5) ** 2)


def test_finds_the_bowl_minimum():
    res = GeneticOptimizer(bowl, BOUNDS, population_size=20, generations=30, seed=3).optimize()
    assert not res.cancelled
    assert len(res.history) == 30
    assert res.best_fitness > -0.1
    assert res.best_fitness == pytest.approx(bowl(res.best_individual))

    best = [r.best_fitness for r in res.history]
    assert all(b >= a for a, b in zip(best, best[1:]))


def test_candidates_stay_in_bounds():
    seen = []

    def record(c):
        seen.append(c)
        return bowl(c)

    GeneticOptimizer(record, BOUNDS, population_size=10, generations=10, seed=1).optimize()
    assert len(seen) == 100
    for c in seen:
        for k, (lo, hi) in BOUNDS.items():
            assert lo - 1e-12 <= c[k] <= hi + 1e-12


def test_same_seed_same_run():
    a = GeneticOptimizer(bowl, BOUNDS, population_size=8, generations=5, seed=9).optimize()
    b = GeneticOptimizer(bowl, BOUNDS, population_size=8, generations=5, rng=np.random.default_rng(9)).optimize()
    assert a.best_individual == b.best_individual
    assert a.best_fitness == b.best_fitness


def test_cancellation_between_generations():
    reports = []
    res = GeneticOptimizer(bowl, BOUNDS, population_size=6, generations=20, seed=0).optimize(
        on_progress=reports.append,
        should_stop=lambda: len(reports) >= 3,
    )
    assert res.cancelled
    assert len(res.history) == 3
    assert [r.generation for r in reports] == [0, 1, 2]
    assert all(r.total_generations == 20 for r in reports)
    assert res.best_individual is not None


def test_generator_yields_one_generation_at_a_time():
    calls = []

    def count(c):
        calls.append(c)
        return bowl(c)

    it = GeneticOptimizer(count, BOUNDS, population_size=5, generations=4, seed=0).iterate_generations()
    first = next(it)
    assert first.generation == 0
    assert len(calls) == 5
    assert first.best_fitness == first.generation_best


@pytest.mark.parametrize("kwargs", [
    dict(bounds={}),
    dict(bounds={"x": (1.0, 0.0)}),
    dict(bounds=BOUNDS, population_size=1),
    dict(bounds=BOUNDS, generations=0),
    dict(bounds=BOUNDS, tournament_draws=0),
])
def test_bad_configuration(kwargs):
    with pytest.raises(ValueError):
        GeneticOptimizer(bowl, **kwargs)


def fake_metrics(p):
    return MetricsRecord(
        cf_final=1.0, nu_final=p.Bi, tau63=0.0, tau95=p.Ha, overshoot=10.0 * p.lam,
        settling_time=0.0, peak_time=0.0, max_W=p.Re, min_W=0.0, max_theta=1.0, min_theta=0.0,
        damping=DampingType.OVERDAMPED, avg_ns=p.Re, avg_be=0.5, max_residual=0.0,
    )


def test_goal_scores():
    m = fake_metrics(BASELINE.with_updates(Ha=3.0, Bi=2.0, lam=0.2))
    assert GOALS["fast-response"](m) == -3.0
    assert GOALS["min-overshoot"](m) == pytest.approx(-2.0)
    assert GOALS["max-heat"](m) == 2.0
    assert GOALS["balanced"](m) == pytest.approx(2.0 - 1.5 - 0.2)

    f = make_fitness(BASELINE, "fast-response", evaluator=fake_metrics)
    assert f({"Ha": 4.0}) == -4.0
    with pytest.raises(ValueError):
        make_fitness(BASELINE, "cheapest")


def test_optimize_parameters_with_fake_evaluator():
    res, best = optimize_parameters(
        BASELINE, goal="fast-response", population_size=10, generations=10, seed=5, evaluator=fake_metrics,
    )
    assert best.Ha == res.best_individual["Ha"]
    assert best.Ha < 1.0
    assert best.Pr == BASELINE.Pr
    for k, (lo, hi) in DEFAULT_BOUNDS.items():
        assert lo <= getattr(best, k) <= hi


def test_optimize_parameters_with_solver():
    res, best = optimize_parameters(BASELINE.with_updates(N=10), goal="balanced", population_size=4, generations=2)
    assert len(res.history) == 2
    assert np.isfinite(res.best_fitness)
    assert best.N == 10
