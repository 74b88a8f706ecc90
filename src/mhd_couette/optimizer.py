from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Mapping, Optional, Tuple

import numpy as np

import mhd_couette.config as cfg

logger = logging.getLogger(__name__)

Bounds = Mapping[str, Tuple[float, float]]
FitnessFn = Callable[[Dict[str, float]], float]


@dataclass(frozen=True, slots=True)
class GenerationReport:
    generation: int
    total_generations: int
    generation_best: float  # best fitness within this generation
    best_fitness: float     # best over all generations so far
    best_individual: Dict[str, float]


@dataclass
class OptimizationResult:
    best_individual: Optional[Dict[str, float]]
    best_fitness: float
    history: List[GenerationReport] = field(default_factory=list)
    cancelled: bool = False


class GeneticOptimizer:
    """
    Real-coded GA maximising fitness_fn over a box.

    Per generation:
      1) evaluate and sort descending; keep the best-so-far individual
      2) next population = top n_elite unchanged
         + children: two tournament parents -> blend crossover -> per-dimension mutation
    The random source is injected (rng) or seeded, so runs are reproducible.
    """
    def __init__(
        self,
        fitness_fn: FitnessFn,
        bounds: Bounds,
        population_size: int = cfg.POPULATION_SIZE,
        generations: int = cfg.GENERATIONS,
        mutation_rate: float = cfg.MUTATION_RATE,
        mutation_span: float = cfg.MUTATION_SPAN,
        n_elite: int = cfg.N_ELITE,
        tournament_draws: int = cfg.TOURNAMENT_DRAWS,
        rng: Optional[np.random.Generator] = None,
        seed: int = cfg.RNG_SEED,
    ):
        if not bounds:
            raise ValueError("bounds must name at least one search dimension")
        for k, (lo, hi) in bounds.items():
            if not lo <= hi:
                raise ValueError(f"Invalid bounds for {k}: [{lo}, {hi}]")
        if population_size < max(2, n_elite):
            raise ValueError(f"population_size must be >= max(2, n_elite), got {population_size}")
        if generations < 1:
            raise ValueError(f"generations must be >= 1, got {generations}")
        if tournament_draws < 1:
            raise ValueError(f"tournament_draws must be >= 1, got {tournament_draws}")

        self.fitness_fn = fitness_fn
        self.names = list(bounds.keys())
        self.lo = np.array([float(bounds[k][0]) for k in self.names], dtype=np.float64)
        self.hi = np.array([float(bounds[k][1]) for k in self.names], dtype=np.float64)
        self.population_size = int(population_size)
        self.generations = int(generations)
        self.mutation_rate = float(mutation_rate)
        self.mutation_span = float(mutation_span)
        self.n_elite = int(n_elite)
        self.tournament_draws = int(tournament_draws)
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    # -----------------------------
    # operators
    # -----------------------------
    def as_dict(self, x: np.ndarray) -> Dict[str, float]:
        return {k: float(v) for k, v in zip(self.names, x)}

    def random_individual(self) -> np.ndarray:
        return self.lo + self.rng.random(len(self.names)) * (self.hi - self.lo)

    def crossover(self, p1: np.ndarray, p2: np.ndarray) -> np.ndarray:
        a = self.rng.random(len(self.names))
        return a * p1 + (1.0 - a) * p2

    def mutate(self, x: np.ndarray) -> np.ndarray:
        d = len(self.names)
        hit = self.rng.random(d) < self.mutation_rate
        step = (self.rng.random(d) - 0.5) * (self.hi - self.lo) * self.mutation_span
        return np.where(hit, np.clip(x + step, self.lo, self.hi), x)

    def tournament(self, pop: np.ndarray, fit: np.ndarray) -> np.ndarray:
        best = int(self.rng.integers(len(pop)))
        for _ in range(self.tournament_draws - 1):
            c = int(self.rng.integers(len(pop)))
            if fit[c] > fit[best]:
                best = c
        return pop[best]

    def evaluate(self, pop: np.ndarray) -> np.ndarray:
        return np.array([float(self.fitness_fn(self.as_dict(x))) for x in pop], dtype=np.float64)

    # -----------------------------
    # main loop
    # -----------------------------
    def iterate_generations(self) -> Iterator[GenerationReport]:
        """
        Runs one generation per next(); the caller regains control between generations.
        """
        pop = np.array([self.random_individual() for _ in range(self.population_size)])
        best: Optional[np.ndarray] = None
        best_fit = -np.inf

        for g in range(self.generations):
            fit = self.evaluate(pop)
            order = np.argsort(-fit, kind="stable")
            pop = pop[order]
            fit = fit[order]

            if fit[0] > best_fit:
                best_fit = float(fit[0])
                best = pop[0].copy()

            report = GenerationReport(
                generation=g,
                total_generations=self.generations,
                generation_best=float(fit[0]),
                best_fitness=best_fit,
                best_individual=self.as_dict(best) if best is not None else {},
            )
            logger.info("generation %d/%d best=%.6g", g + 1, self.generations, best_fit)

            children = [pop[i].copy() for i in range(self.n_elite)]
            while len(children) < self.population_size:
                p1 = self.tournament(pop, fit)
                p2 = self.tournament(pop, fit)
                children.append(self.mutate(self.crossover(p1, p2)))
            pop = np.array(children)

            yield report

    def optimize(
        self,
        on_progress: Optional[Callable[[GenerationReport], None]] = None,
        should_stop: Optional[Callable[[], bool]] = None,
    ) -> OptimizationResult:
        """
        Drive iterate_generations to the end. should_stop is polled between generations only.
        """
        result = OptimizationResult(best_individual=None, best_fitness=-np.inf)

        for report in self.iterate_generations():
            result.history.append(report)
            if report.best_individual:
                result.best_individual = dict(report.best_individual)
            result.best_fitness = report.best_fitness

            if on_progress is not None:
                on_progress(report)
            if should_stop is not None and should_stop():
                result.cancelled = True
                logger.info("optimisation cancelled after generation %d", report.generation + 1)
                break

        return result
