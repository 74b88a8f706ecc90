from __future__ import annotations

import mhd_couette.config as cfg
from mhd_couette.diagnostics import compute_metrics, energy_series, entropy_generation
from mhd_couette.grid import Grid
from mhd_couette.physics import ParameterSet
from mhd_couette.transient_solver import solve_transient
from mhd_couette.types import MetricsRecord, SolveResult


def solve(
    params: ParameterSet,
    tau_final: float = cfg.DEFAULT_TAU_FINAL,
    dtau: float = cfg.DEFAULT_DTAU,
    save_freq: int = cfg.DEFAULT_SAVE_FREQ,
) -> SolveResult:
    """Transient solve + diagnostics. Pure: every call owns its own grid and buffers."""
    traj = solve_transient(params, tau_final=tau_final, dtau=dtau, save_freq=save_freq)
    entropy = entropy_generation(params, Grid(params.N), traj.final_state)
    return SolveResult(
        trajectory=traj,
        metrics=compute_metrics(traj, entropy),
        entropy=entropy,
        energy=energy_series(traj),
    )


def solve_quick(params: ParameterSet) -> MetricsRecord:
    """Reduced-cost solve used as the evaluator of the search / sensitivity / sweep tools."""
    traj = solve_transient(
        params,
        tau_final=cfg.QUICK_TAU_FINAL,
        dtau=cfg.QUICK_DTAU,
        save_freq=cfg.QUICK_SAVE_FREQ,
    )
    return compute_metrics(traj)
