from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Dict, Sequence

import pandas as pd

import mhd_couette.config as cfg
from mhd_couette.physics import ParameterSet
from mhd_couette.simulation import solve_quick
from mhd_couette.types import MetricsRecord

logger = logging.getLogger(__name__)

Evaluator = Callable[[ParameterSet], MetricsRecord]


@dataclass(frozen=True, slots=True)
class Elasticity:
    """(d out / out) / (d param / param) for one perturbed parameter."""
    tau95: float
    cf: float
    nu: float


@dataclass(frozen=True, slots=True)
class SensitivityReport:
    base: MetricsRecord
    perturbation: float
    elasticities: Dict[str, Elasticity]

    def as_frame(self) -> pd.DataFrame:
        rows = [
            {"param": name, "tau95": e.tau95, "Cf": e.cf, "Nu": e.nu}
            for name, e in self.elasticities.items()
        ]
        return pd.DataFrame(rows, columns=["param", "tau95", "Cf", "Nu"]).set_index("param")


def _relative(new: float, base: float, eps: float) -> float:
    return (new - base) / (base if base != 0.0 else eps)


def analyze_sensitivity(
    base_params: ParameterSet,
    params: Sequence[str] = cfg.SENS_PARAMS,
    perturbation: float = cfg.SENS_PERTURBATION,
    evaluator: Evaluator = solve_quick,
    eps: float = cfg.SENS_EPS,
) -> SensitivityReport:
    """
    One baseline evaluation, then one per parameter with that parameter scaled by (1 + perturbation).
    A zero baseline output is replaced by eps in the denominator.
    """
    if perturbation == 0.0:
        raise ValueError("perturbation must be non-zero")
    names = {"A1", "A2", "A3", "A4", "A5", "Re", "Ha", "Pr", "Ec", "Bi", "lam", "G"}
    bad = [p for p in params if p not in names]
    if bad:
        raise ValueError(f"Cannot perturb {bad}; choose from {sorted(names)}")

    base = evaluator(base_params)
    out: Dict[str, Elasticity] = {}

    for name in params:
        value = getattr(base_params, name)
        test = evaluator(base_params.with_updates(**{name: value * (1.0 + perturbation)}))
        e = Elasticity(
            tau95=_relative(test.tau95, base.tau95, eps) / perturbation,
            cf=_relative(test.cf_final, base.cf_final, eps) / perturbation,
            nu=_relative(test.nu_final, base.nu_final, eps) / perturbation,
        )
        logger.debug("elasticity %s: tau95=%.4g Cf=%.4g Nu=%.4g", name, e.tau95, e.cf, e.nu)
        out[name] = e

    return SensitivityReport(base=base, perturbation=perturbation, elasticities=out)
