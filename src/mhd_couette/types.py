from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

import numpy as np

import mhd_couette.config as cfg
from mhd_couette.physics import ParameterSet


class DampingType(Enum):
    """
    Classification of the lower-wall skin-friction response by its overshoot:
    overshoot > 5 %   -> UNDERDAMPED
    overshoot > 0.5 % -> CRITICALLY_DAMPED
    otherwise         -> OVERDAMPED
    """
    UNDERDAMPED = "Underdamped"
    CRITICALLY_DAMPED = "Critically Damped"
    OVERDAMPED = "Overdamped"


@dataclass(frozen=True, slots=True)
class State:
    """
    Velocity W and temperature theta on the N+1 grid nodes at one instant.
    After every completed step: W[0] == 0 and theta[0] == 1.
    """
    W: np.ndarray
    theta: np.ndarray


@dataclass(frozen=True, slots=True)
class Trajectory:
    """
    Sampled history of one transient solve.

    Row k of W / theta is the state at tau[k]; the wall-flux arrays are aligned with tau.
    Samples: tau=0, every save_freq steps, and the last step.
    step_residuals / step_iterations hold one entry per time step (not per sample):
    the max |change| of the last Picard sweep and the number of sweeps taken.
    """
    params: ParameterSet
    eta: np.ndarray
    tau: np.ndarray
    W: np.ndarray
    theta: np.ndarray
    cf_lower: np.ndarray
    cf_upper: np.ndarray
    nu_lower: np.ndarray
    nu_upper: np.ndarray
    step_residuals: np.ndarray
    step_iterations: np.ndarray
    tau_final: float
    dtau: float
    tol: float = cfg.PICARD_TOL  # Picard tolerance the run used

    def __len__(self) -> int:
        return int(self.tau.shape[0])

    def state(self, k: int) -> State:
        return State(W=self.W[k].copy(), theta=self.theta[k].copy())

    @property
    def final_state(self) -> State:
        return self.state(-1)

    @property
    def max_residual(self) -> float:
        if self.step_residuals.size == 0:
            return 0.0
        return float(np.max(self.step_residuals))

    @property
    def unconverged_steps(self) -> int:
        """Steps that ran out of Picard sweeps; they were accepted as-is."""
        return int(np.sum(self.step_residuals >= self.tol))


@dataclass(frozen=True, slots=True)
class EntropyField:
    """Per-node entropy generation on the terminal state."""
    ns_heat: np.ndarray
    ns_fluid: np.ndarray
    ns_magnetic: np.ndarray
    ns: np.ndarray
    be: np.ndarray
    avg_ns: float
    avg_be: float


@dataclass(frozen=True, slots=True)
class EnergySeries:
    """Grid integrals at every saved sample (aligned with Trajectory.tau)."""
    kinetic: np.ndarray
    thermal: np.ndarray
    viscous_dissipation: np.ndarray
    joule_heating: np.ndarray


@dataclass(frozen=True, slots=True)
class MetricsRecord:
    cf_final: float
    nu_final: float
    tau63: float
    tau95: float
    overshoot: float
    settling_time: float
    peak_time: float
    max_W: float
    min_W: float
    max_theta: float
    min_theta: float
    damping: DampingType
    avg_ns: float
    avg_be: float
    max_residual: float


@dataclass(frozen=True, slots=True)
class SolveResult:
    trajectory: Trajectory
    metrics: MetricsRecord
    entropy: EntropyField
    energy: EnergySeries


@dataclass(frozen=True, slots=True)
class ValidationReport:
    warnings: List[str] = field(default_factory=list)
    errors: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True, slots=True)
class SurrogatePrediction:
    """
    Closed-form estimate of the quick-solve outputs.
    confidence: rough trust indicator in [0, 1]; the formulas are not fitted to the solver.
    """
    tau95: float
    overshoot: float
    cf_final: float
    nu_final: float
    settling_time: float
    damping: DampingType
    confidence: float
