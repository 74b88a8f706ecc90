from __future__ import annotations

import logging
from typing import Callable, Dict, Optional, Sequence

import pandas as pd

from mhd_couette.physics import ParameterSet
from mhd_couette.simulation import solve_quick
from mhd_couette.types import MetricsRecord

logger = logging.getLogger(__name__)

DEFAULT_RANGES: Dict[str, Sequence[float]] = {
    "Ha": (0, 1, 2, 3, 4, 5, 6, 7, 8),
    "Re": (0.5, 1, 1.5, 2, 2.5, 3, 3.5, 4),
    "Pr": (1, 3, 5, 7, 10, 13, 16, 20),
    "Ec": (0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.7, 1.0),
    "Bi": (0.1, 0.5, 1, 2, 3, 5, 7, 10),
    "lam": (0, 0.1, 0.2, 0.3, 0.4, 0.5, 0.7, 1.0),
}


def run_parametric_study(
    base: ParameterSet,
    name: str,
    values: Optional[Sequence[float]] = None,
    evaluator: Callable[[ParameterSet], MetricsRecord] = solve_quick,
) -> pd.DataFrame:
    """
    One quick solve per value of `name`, all other inputs from base.
    Columns: name, tau95, Cf, Nu, overshoot, maxW, Ns.
    """
    if values is None:
        if name not in DEFAULT_RANGES:
            raise ValueError(f"No default range for {name!r}; pass values explicitly")
        values = DEFAULT_RANGES[name]

    rows = []
    for v in values:
        m = evaluator(base.with_updates(**{name: float(v)}))
        logger.debug("%s=%g: tau95=%.4g Cf=%.4g Nu=%.4g", name, v, m.tau95, m.cf_final, m.nu_final)
        rows.append({
            name: float(v),
            "tau95": m.tau95,
            "Cf": m.cf_final,
            "Nu": m.nu_final,
            "overshoot": m.overshoot,
            "maxW": m.max_W,
            "Ns": m.avg_ns,
        })

    return pd.DataFrame(rows, columns=[name, "tau95", "Cf", "Nu", "overshoot", "maxW", "Ns"])
