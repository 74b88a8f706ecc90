from __future__ import annotations

from typing import Tuple

import numpy as np

import mhd_couette.config as cfg
from mhd_couette.grid import Grid
from mhd_couette.physics import ParameterSet
from mhd_couette.types import DampingType, EnergySeries, EntropyField, MetricsRecord, State, Trajectory


# -----------------------------
# Entropy generation / Bejan
# -----------------------------
def entropy_generation(
    params: ParameterSet,
    grid: Grid,
    state: State,
    theta_floor: float = cfg.THETA_FLOOR,
    eps: float = cfg.BEJAN_EPS,
) -> EntropyField:
    """
    Ns_heat     = A3 (th')^2 / th_s^2
    Ns_fluid    = A1 Ec Pr (W')^2 / th_s
    Ns_magnetic = A2 Ec Pr Ha^2 W^2 / th_s
    Be          = Ns_heat / (Ns + eps),   th_s = max(th, theta_floor)
    """
    p = params
    dW = grid.derivative(state.W)
    dT = grid.derivative(state.theta)
    th_s = np.maximum(state.theta, theta_floor)

    ns_heat = p.A3 * dT ** 2 / th_s ** 2
    ns_fluid = p.A1 * p.Ec * p.Pr * dW ** 2 / th_s
    ns_magnetic = p.A2 * p.Ec * p.Pr * p.Ha * p.Ha * state.W ** 2 / th_s
    ns = ns_heat + ns_fluid + ns_magnetic
    be = ns_heat / (ns + eps)

    return EntropyField(
        ns_heat=ns_heat,
        ns_fluid=ns_fluid,
        ns_magnetic=ns_magnetic,
        ns=ns,
        be=be,
        avg_ns=float(np.mean(ns)),
        avg_be=float(np.mean(be)),
    )


# -----------------------------
# Energy integrals per sample
# -----------------------------
def energy_series(traj: Trajectory) -> EnergySeries:
    """
    KE = int 1/2 W^2, TE = int th (unweighted), VD = int A1 Pr Ec (W')^2 with W' the
    forward difference per interval, JH = int A2 Pr Ec Ha^2 W^2. Trapezoid on the grid.
    """
    p = traj.params
    grid = Grid(p.N)
    n = len(traj)

    kinetic = np.zeros(n, dtype=np.float64)
    thermal = np.zeros(n, dtype=np.float64)
    viscous = np.zeros(n, dtype=np.float64)
    joule = np.zeros(n, dtype=np.float64)

    visc_c = p.A1 * p.Pr * p.Ec
    joule_c = p.A2 * p.Pr * p.Ec * p.Ha * p.Ha

    for k in range(n):
        W = traj.W[k]
        kinetic[k] = grid.trapezoid(0.5 * W ** 2)
        thermal[k] = grid.trapezoid(traj.theta[k])
        viscous[k] = float(np.sum(visc_c * grid.forward_difference(W) ** 2) * grid.h)
        joule[k] = grid.trapezoid(joule_c * W ** 2)

    return EnergySeries(kinetic=kinetic, thermal=thermal, viscous_dissipation=viscous, joule_heating=joule)


# -----------------------------
# Transient response of Cf_lower
# -----------------------------
def classify_damping(
    overshoot: float,
    underdamped_above: float = cfg.UNDERDAMPED_OVERSHOOT,
    critical_above: float = cfg.CRITICAL_OVERSHOOT,
) -> DampingType:
    if overshoot > underdamped_above:
        return DampingType.UNDERDAMPED
    if overshoot > critical_above:
        return DampingType.CRITICALLY_DAMPED
    return DampingType.OVERDAMPED


def first_crossing(tau: np.ndarray, signal: np.ndarray, level: float, default: float) -> float:
    """First tau with |signal| >= level, else default."""
    hits = np.flatnonzero(np.abs(signal) >= level)
    return float(tau[hits[0]]) if hits.size else float(default)


def settling_time(tau: np.ndarray, cf: np.ndarray, tau_final: float, band: float = cfg.SETTLING_BAND) -> float:
    """
    Scan from the last sample backwards; at the first sample outside the band
    |Cf - Cf_final| / |Cf_final| > band, settle at the sample right after it.
    Only the last excursion is seen. tau_final when no sample leaves the band.
    """
    cf_final = cf[-1]
    with np.errstate(divide="ignore", invalid="ignore"):
        rel = np.abs(cf - cf_final) / np.abs(cf_final)
    last = len(cf) - 1
    for i in range(last, -1, -1):
        if rel[i] > band:
            return float(tau[min(i + 1, last)])
    return float(tau_final)


def response_metrics(traj: Trajectory) -> Tuple[float, float, float, float, float]:
    """(tau63, tau95, overshoot %, settling time, peak time) of the lower skin friction."""
    tau = traj.tau
    cf = np.asarray(traj.cf_lower, dtype=np.float64)
    cf_abs = np.abs(cf)
    final_abs = cf_abs[-1]

    tau63 = first_crossing(tau, cf, cfg.TAU63_LEVEL * final_abs, traj.tau_final)
    tau95 = first_crossing(tau, cf, cfg.TAU95_LEVEL * final_abs, traj.tau_final)

    cf_max = np.max(cf_abs)
    with np.errstate(divide="ignore", invalid="ignore"):
        overshoot = float(np.maximum(0.0, (cf_max - final_abs) / final_abs * 100.0))

    peaks = np.flatnonzero(cf_abs == cf_max)
    peak_time = float(tau[peaks[-1]]) if peaks.size else 0.0
    settle = settling_time(tau, cf, traj.tau_final)

    return tau63, tau95, overshoot, settle, peak_time


# -----------------------------
# Full metrics record
# -----------------------------
def compute_metrics(traj: Trajectory, entropy: EntropyField | None = None) -> MetricsRecord:
    p = traj.params
    if entropy is None:
        entropy = entropy_generation(p, Grid(p.N), traj.final_state)

    tau63, tau95, overshoot, settle, peak = response_metrics(traj)
    W_final = traj.W[-1]
    th_final = traj.theta[-1]

    return MetricsRecord(
        cf_final=float(traj.cf_lower[-1]),
        nu_final=float(traj.nu_lower[-1]),
        tau63=tau63,
        tau95=tau95,
        overshoot=overshoot,
        settling_time=settle,
        peak_time=peak,
        max_W=float(np.max(W_final)),
        min_W=float(np.min(W_final)),
        max_theta=float(np.max(th_final)),
        min_theta=float(np.min(th_final)),
        damping=classify_damping(overshoot),
        avg_ns=entropy.avg_ns,
        avg_be=entropy.avg_be,
        max_residual=traj.max_residual,
    )
