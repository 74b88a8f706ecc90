import logging

import numpy as np

import mhd_couette.config as cfg
from mhd_couette.export import export_trajectory_csv
from mhd_couette.grid import Grid
from mhd_couette.nanofluid import apply_nanofluid
from mhd_couette.objectives import optimize_parameters
from mhd_couette.parametric import run_parametric_study
from mhd_couette.presets import get_preset
from mhd_couette.sensitivity import analyze_sensitivity
from mhd_couette.simulation import solve
from mhd_couette.steady_solver import solve_steady
from mhd_couette.surrogate import AnalyticSurrogate
from mhd_couette.transient_solver import wall_fluxes
from mhd_couette.validation import validate_parameters


def main():
    logging.basicConfig(level=logging.INFO, format="%(levelname)s | %(name)s | %(message)s")

    params = apply_nanofluid(get_preset("baseline"), "Cu", 0.03)

    report = validate_parameters(params)
    for w in report.warnings:
        print("warning:", w)
    for e in report.errors:
        print("error:", e)

    # Full transient
    res = solve(params, tau_final=cfg.DEFAULT_TAU_FINAL, dtau=cfg.DEFAULT_DTAU, save_freq=cfg.DEFAULT_SAVE_FREQ)
    m = res.metrics
    print("Cf:", m.cf_final, "Nu:", m.nu_final, "tau95:", m.tau95, "overshoot:", m.overshoot, m.damping.value)
    print("Ns:", m.avg_ns, "Be:", m.avg_be, "max residual:", m.max_residual)

    # Steady reference
    steady = solve_steady(params)
    cf_s, _, nu_s, _ = wall_fluxes(params, Grid(params.N), steady)
    print("steady Cf:", cf_s, "steady Nu:", nu_s)

    pred = AnalyticSurrogate(rng=np.random.default_rng(cfg.RNG_SEED)).predict(params)
    print("surrogate tau95:", pred.tau95, "Cf:", pred.cf_final, "confidence:", pred.confidence)

    print(run_parametric_study(params, "Ha"))

    sens = analyze_sensitivity(params)
    print(sens.as_frame())

    opt, best = optimize_parameters(params, goal="balanced", population_size=10, generations=5)
    print("GA best:", opt.best_individual, "fitness:", opt.best_fitness)
    print("best set validates:", validate_parameters(best).is_valid)

    export_trajectory_csv(res.trajectory, "unsteady_mhd_data.csv", res.energy)


if __name__ == "__main__":
    main()
