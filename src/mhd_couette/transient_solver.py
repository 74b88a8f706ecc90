from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

import mhd_couette.config as cfg
from mhd_couette.exceptions import InvalidSolveInput
from mhd_couette.grid import Grid
from mhd_couette.physics import ParameterSet
from mhd_couette.types import State, Trajectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class StepResult:
    state: State
    residual: float   # max |change| over both fields in the last sweep
    iterations: int


def check_solve_inputs(params: ParameterSet, tau_final: float, dtau: float, save_freq: int) -> None:
    if int(params.N) != params.N or params.N < 1:
        raise InvalidSolveInput(f"N must be a positive integer, got {params.N}")
    if not dtau > 0.0:
        raise InvalidSolveInput(f"dtau must be > 0, got {dtau}")
    if not tau_final > 0.0:
        raise InvalidSolveInput(f"tau_final must be > 0, got {tau_final}")
    if not params.Pr > 0.0:
        raise InvalidSolveInput(f"Pr must be > 0, got {params.Pr}")
    if int(save_freq) != save_freq or save_freq < 1:
        raise InvalidSolveInput(f"save_freq must be an integer >= 1, got {save_freq}")


def initial_state(params: ParameterSet, grid: Grid) -> State:
    """Linear Couette velocity with slip, linear conduction temperature with the Biot drop."""
    W = grid.eta * params.Re / (1.0 + params.lam)
    theta = 1.0 - (params.Bi / (1.0 + params.Bi)) * grid.eta
    return State(W=W, theta=theta)


def wall_fluxes(params: ParameterSet, grid: Grid, state: State) -> Tuple[float, float, float, float]:
    """(Cf_lower, Cf_upper, Nu_lower, Nu_upper) = (A1 W'_0, A1 W'_N, -A3 th'_0, -A3 th'_N)."""
    dW = grid.derivative(state.W)
    dT = grid.derivative(state.theta)
    return (
        float(params.A1 * dW[0]),
        float(params.A1 * dW[-1]),
        float(-params.A3 * dT[0]),
        float(-params.A3 * dT[-1]),
    )


def picard_step(
    params: ParameterSet,
    grid: Grid,
    old: State,
    dtau: float,
    max_iters: int = cfg.PICARD_MAX_ITERS,
    tol: float = cfg.PICARD_TOL,
) -> StepResult:
    """
    One backward-Euler step by fixed-point sweeps.

    Each sweep:
      1) interior W from the previous sweep's neighbours (Jacobi):
           (2A1/h^2 + A2 Ha^2 + A4/dt) W_i = A1/h^2 (W_{i-1}+W_{i+1}) + G + A4/dt W_old_i
      2) W_0 = 0, W_N = (Re + lam/h W_{N-1}) / (1 + lam/h)
      3) interior th with viscous + Joule heating taken from the W of this sweep:
           (2A3/h^2 + A5 Pr/dt) th_i = A3/h^2 (th_{i-1}+th_{i+1}) + S_i + A5 Pr/dt th_old_i
      4) th_0 = 1, th_N = th_{N-1} / (1 + h Bi)
    Stops when max |change| < tol or after max_iters sweeps; the last sweep is accepted either way.
    """
    if max_iters < 1:
        raise ValueError(f"max_iters must be >= 1, got {max_iters}")

    p = params
    h = grid.h
    h2 = h * h

    a_w = p.A1 / h2
    m_w = p.A4 / dtau
    diag_w = 2.0 * a_w + p.A2 * p.Ha * p.Ha + m_w
    slip = p.lam / h

    a_t = p.A3 / h2
    m_t = p.A5 * p.Pr / dtau
    diag_t = 2.0 * a_t + m_t

    visc = p.A1 * p.Pr * p.Ec
    joule = p.A2 * p.Pr * p.Ec * p.Ha * p.Ha

    W_old = old.W
    th_old = old.theta

    W = W_old.copy()
    theta = th_old.copy()
    residual = np.inf
    it = 0

    for it in range(1, max_iters + 1):
        W_prev = W
        th_prev = theta

        W = np.empty_like(W_prev)
        W[1:-1] = (a_w * (W_prev[:-2] + W_prev[2:]) + p.G + m_w * W_old[1:-1]) / diag_w
        W[0] = 0.0
        W[-1] = (p.Re + slip * W[-2]) / (1.0 + slip)

        dW = grid.derivative(W)
        source = visc * dW[1:-1] ** 2 + joule * W[1:-1] ** 2

        theta = np.empty_like(th_prev)
        theta[1:-1] = (a_t * (th_prev[:-2] + th_prev[2:]) + source + m_t * th_old[1:-1]) / diag_t
        theta[0] = 1.0
        theta[-1] = theta[-2] / (1.0 + h * p.Bi)

        residual = float(max(np.max(np.abs(W - W_prev)), np.max(np.abs(theta - th_prev))))
        if residual < tol:
            break

    return StepResult(state=State(W=W, theta=theta), residual=residual, iterations=it)


def solve_transient(
    params: ParameterSet,
    tau_final: float = cfg.DEFAULT_TAU_FINAL,
    dtau: float = cfg.DEFAULT_DTAU,
    save_freq: int = cfg.DEFAULT_SAVE_FREQ,
    max_iters: int = cfg.PICARD_MAX_ITERS,
    tol: float = cfg.PICARD_TOL,
) -> Trajectory:
    """
    March from the initial profiles to tau_final with floor(tau_final/dtau) steps.
    Records tau=0, every save_freq-th step and the last step.
    """
    check_solve_inputs(params, tau_final, dtau, save_freq)

    grid = Grid(params.N)
    n_steps = int(np.floor(tau_final / dtau))
    saved: List[int] = [n for n in range(1, n_steps + 1) if n % save_freq == 0 or n == n_steps]
    n_samples = 1 + len(saved)

    tau = np.zeros(n_samples, dtype=np.float64)
    W_hist = np.zeros((n_samples, grid.n_nodes), dtype=np.float64)
    th_hist = np.zeros((n_samples, grid.n_nodes), dtype=np.float64)
    fluxes = np.zeros((n_samples, 4), dtype=np.float64)
    residuals = np.zeros(n_steps, dtype=np.float64)
    iterations = np.zeros(n_steps, dtype=np.int32)

    state = initial_state(params, grid)
    W_hist[0] = state.W
    th_hist[0] = state.theta
    fluxes[0] = wall_fluxes(params, grid, state)

    k = 1
    for n in range(1, n_steps + 1):
        step = picard_step(params, grid, state, dtau, max_iters=max_iters, tol=tol)
        state = step.state
        residuals[n - 1] = step.residual
        iterations[n - 1] = step.iterations

        if n % save_freq == 0 or n == n_steps:
            tau[k] = n * dtau
            W_hist[k] = state.W
            th_hist[k] = state.theta
            fluxes[k] = wall_fluxes(params, grid, state)
            k += 1

    n_unconverged = int(np.sum(residuals >= tol))
    if n_unconverged:
        logger.debug(
            "%d of %d steps used all %d Picard sweeps (max residual %.3e)",
            n_unconverged, n_steps, max_iters, float(np.max(residuals)),
        )

    return Trajectory(
        params=params,
        eta=grid.eta.copy(),
        tau=tau,
        W=W_hist,
        theta=th_hist,
        cf_lower=fluxes[:, 0].copy(),
        cf_upper=fluxes[:, 1].copy(),
        nu_lower=fluxes[:, 2].copy(),
        nu_upper=fluxes[:, 3].copy(),
        step_residuals=residuals,
        step_iterations=iterations,
        tau_final=float(tau_final),
        dtau=float(dtau),
        tol=float(tol),
    )
