from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

import numpy as np

import mhd_couette.config as cfg
from mhd_couette.optimizer import Bounds, FitnessFn, GenerationReport, GeneticOptimizer, OptimizationResult
from mhd_couette.physics import ParameterSet
from mhd_couette.simulation import solve_quick
from mhd_couette.types import MetricsRecord

DEFAULT_BOUNDS: Dict[str, Tuple[float, float]] = {
    "Ha": (0.0, 8.0),
    "Re": (0.5, 4.0),
    "Bi": (0.1, 5.0),
    "lam": (0.0, 0.5),
}

GOALS: Dict[str, Callable[[MetricsRecord], float]] = {
    "fast-response": lambda m: -m.tau95,
    "min-overshoot": lambda m: -m.overshoot,
    "max-heat": lambda m: abs(m.nu_final),
    "min-entropy": lambda m: -m.avg_ns,
    "balanced": lambda m: abs(m.nu_final) - 0.5 * m.tau95 - 0.1 * m.overshoot,
}


def make_fitness(
    base: ParameterSet,
    goal: str = "balanced",
    evaluator: Callable[[ParameterSet], MetricsRecord] = solve_quick,
) -> FitnessFn:
    """Fitness of a candidate = goal score of a quick solve of base updated with the candidate."""
    try:
        score = GOALS[goal]
    except KeyError:
        raise ValueError(f"Unknown goal {goal!r}; known: {sorted(GOALS)}") from None

    def fitness(candidate: Dict[str, float]) -> float:
        return float(score(evaluator(base.with_updates(**candidate))))

    return fitness


def optimize_parameters(
    base: ParameterSet,
    goal: str = "balanced",
    bounds: Bounds = DEFAULT_BOUNDS,
    population_size: int = cfg.POPULATION_SIZE,
    generations: int = cfg.GENERATIONS,
    rng: Optional[np.random.Generator] = None,
    seed: int = cfg.RNG_SEED,
    on_progress: Optional[Callable[[GenerationReport], None]] = None,
    should_stop: Optional[Callable[[], bool]] = None,
    evaluator: Callable[[ParameterSet], MetricsRecord] = solve_quick,
) -> Tuple[OptimizationResult, ParameterSet]:
    opt = GeneticOptimizer(
        make_fitness(base, goal, evaluator),
        bounds,
        population_size=population_size,
        generations=generations,
        rng=rng,
        seed=seed,
    )
    result = opt.optimize(on_progress=on_progress, should_stop=should_stop)
    best = base.with_updates(**result.best_individual) if result.best_individual else base
    return result, best
