import numpy as np
import pytest

import mhd_couette.config as cfg
from mhd_couette.diagnostics import classify_damping
from mhd_couette.exceptions import InvalidSolveInput
from mhd_couette.grid import Grid
from mhd_couette.presets import BASELINE
from mhd_couette.simulation import solve, solve_quick
from mhd_couette.steady_solver import solve_steady
from mhd_couette.transient_solver import initial_state, picard_step, solve_transient, wall_fluxes


def test_initial_state():
    p = BASELINE
    g = Grid(p.N)
    s = initial_state(p, g)
    np.testing.assert_allclose(s.W, g.eta * p.Re / (1.0 + p.lam))
    np.testing.assert_allclose(s.theta, 1.0 - g.eta * p.Bi / (1.0 + p.Bi))


def test_dirichlet_nodes_hold_at_every_sample():
    traj = solve_transient(BASELINE, tau_final=1.0, dtau=0.02, save_freq=1)
    assert np.all(traj.W[:, 0] == 0.0)
    assert np.all(traj.theta[:, 0] == 1.0)


def test_no_slip_upper_plate_moves_with_re():
    p = BASELINE.with_updates(lam=0.0, Re=1.7)
    traj = solve_transient(p, tau_final=0.5, dtau=0.02, save_freq=1)
    assert np.all(traj.W[:, -1] == 1.7)


def test_robin_row_at_upper_plate():
    p = BASELINE
    traj = solve_transient(p, tau_final=0.2, dtau=0.02, save_freq=1)
    h = 1.0 / p.N
    np.testing.assert_allclose(traj.theta[1:, -1] * (1.0 + h * p.Bi), traj.theta[1:, -2], rtol=1e-12)


def test_sampling_layout():
    traj = solve_transient(BASELINE.with_updates(N=10), tau_final=1.0, dtau=0.25, save_freq=3)
    np.testing.assert_allclose(traj.tau, [0.0, 0.75, 1.0])
    assert traj.W.shape == (3, 11)
    assert traj.step_residuals.shape == (4,)
    assert np.all((traj.step_iterations >= 1) & (traj.step_iterations <= 15))
    assert len(traj.cf_lower) == len(traj.nu_upper) == 3


def test_couette_limit_without_field_or_pressure_gradient():
    p = BASELINE.with_updates(Ha=0.0, G=0.0)
    traj = solve_transient(p, tau_final=5.0, dtau=0.02, save_freq=50)
    couette = traj.eta * p.Re / (1.0 + p.lam)
    err = np.max(np.abs(traj.W[-1] - couette))
    assert err <= 0.01 * np.max(couette)


def test_more_picard_sweeps_never_increase_residual():
    p = BASELINE
    g = Grid(p.N)
    s0 = initial_state(p, g)
    res = [picard_step(p, g, s0, 0.02, max_iters=k).residual for k in range(1, 16)]
    for a, b in zip(res, res[1:]):
        assert b <= a + 1e-15


def test_unconverged_step_is_accepted_and_reported():
    p = BASELINE
    g = Grid(p.N)
    step = picard_step(p, g, initial_state(p, g), 0.02, max_iters=2)
    assert step.iterations == 2
    assert step.residual > 0.0
    assert step.state.W[0] == 0.0 and step.state.theta[0] == 1.0

    traj = solve_transient(p, tau_final=0.2, dtau=0.02, save_freq=5)
    assert traj.max_residual == pytest.approx(float(np.max(traj.step_residuals)))
    assert 0 <= traj.unconverged_steps <= len(traj.step_residuals)



def test_unconverged_count_uses_the_run_tolerance():
    traj = solve_transient(BASELINE, tau_final=0.2, dtau=0.02, save_freq=5, tol=1.0)
    assert traj.tol == 1.0
    assert np.all(traj.step_iterations == 1)
    assert traj.unconverged_steps == 0
    assert np.sum(traj.step_residuals >= cfg.PICARD_TOL) > 0


@pytest.mark.parametrize("kwargs", [
    dict(tau_final=1.0, dtau=0.0, save_freq=1),
    dict(tau_final=1.0, dtau=-0.1, save_freq=1),
    dict(tau_final=0.0, dtau=0.02, save_freq=1),
    dict(tau_final=1.0, dtau=0.02, save_freq=0),
])
def test_bad_time_settings_fail_fast(kwargs):
    with pytest.raises(InvalidSolveInput):
        solve_transient(BASELINE, **kwargs)


@pytest.mark.parametrize("changes", [dict(N=0), dict(Pr=0.0), dict(Pr=-1.0)])
def test_bad_parameters_fail_fast(changes):
    with pytest.raises(ValueError):
        solve(BASELINE.with_updates(**changes))


def test_magnetic_field_lowers_skin_friction():
    # the tau=0 sample (linear profile) has a larger Cf than the Hartmann-layer final value,
    # so the baseline overshoot is large and no fixed damping label is asserted
    mhd = solve(BASELINE, tau_final=2.0, dtau=0.02).metrics
    hydro = solve(BASELINE.with_updates(Ha=0.0), tau_final=2.0, dtau=0.02).metrics
    assert 0.0 < abs(mhd.cf_final) < abs(hydro.cf_final)
    assert mhd.damping == classify_damping(mhd.overshoot)


def test_steady_couette_is_linear():
    p = BASELINE.with_updates(Ha=0.0, G=0.0)
    s = solve_steady(p)
    g = Grid(p.N)
    np.testing.assert_allclose(s.W, g.eta * p.Re / (1.0 + p.lam), atol=1e-12)


def test_steady_skin_friction_matches_closed_form():
    p = BASELINE
    m = np.sqrt(p.A2 * p.Ha ** 2 / p.A1)
    wp = p.G / (p.A2 * p.Ha ** 2)
    # W = c sinh(m eta) + wp (1 - cosh(m eta)) with the discrete slip row W(1) + lam W'(1) = Re
    c = (p.Re + wp * (np.cosh(m) - 1) + p.lam * wp * m * np.sinh(m)) / (np.sinh(m) + p.lam * m * np.cosh(m))
    cf_exact = p.A1 * c * m

    s = solve_steady(p)
    cf, _, _, _ = wall_fluxes(p, Grid(p.N), s)
    assert cf == pytest.approx(cf_exact, rel=3e-2)
    assert s.W[0] == 0.0 and s.theta[0] == 1.0
    h = 1.0 / p.N
    assert s.W[-1] + p.lam * (s.W[-1] - s.W[-2]) / h == pytest.approx(p.Re, rel=1e-9)


def test_transient_velocity_reaches_steady_state():
    p = BASELINE
    traj = solve_transient(p, tau_final=5.0, dtau=0.02, save_freq=50)
    steady = solve_steady(p)
    assert np.max(np.abs(traj.W[-1] - steady.W)) < 1e-3


def test_quick_solve_matches_full_solve_settings():
    p = BASELINE.with_updates(N=20)
    quick = solve_quick(p)
    full = solve(p, tau_final=2.0, dtau=0.04, save_freq=10).metrics
    assert quick == full
