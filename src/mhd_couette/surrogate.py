from __future__ import annotations

from typing import Optional

import numpy as np

from mhd_couette.physics import ParameterSet
from mhd_couette.types import DampingType, SurrogatePrediction


class AnalyticSurrogate:
    """
    O(1) what-if estimate of the quick-solve scalars. Does not call the solver.

      md       = 1 / (1 + 0.3 Ha^2)            magnetic damping factor
      tau95    = 0.5 A4/A1 md (1 + 0.1 lam)
      overshoot= max(0, 15 md - 2 Ha)
      Cf       = A1 Re / (1 + lam) md
      Nu       = A3 Bi / (1 + Bi) (1 + 0.1 Pr Ec)
      settling = 1.5 tau95
    Damping label from Ha alone: <1 under, <3 critical, else over.
    """
    def __init__(self, rng: Optional[np.random.Generator] = None,
                 base_confidence: float = 0.78, confidence_spread: float = 0.15):
        self.rng = rng if rng is not None else np.random.default_rng()
        self.base_confidence = base_confidence
        self.confidence_spread = confidence_spread

    def predict(self, params: ParameterSet) -> SurrogatePrediction:
        p = params
        md = 1.0 / (1.0 + 0.3 * p.Ha * p.Ha)
        tau95 = 0.5 * p.A4 / p.A1 * md * (1.0 + 0.1 * p.lam)
        overshoot = max(0.0, 15.0 * md - 2.0 * p.Ha)
        cf = p.A1 * p.Re / (1.0 + p.lam) * md
        nu = p.A3 * p.Bi / (1.0 + p.Bi) * (1.0 + 0.1 * p.Pr * p.Ec)

        if p.Ha < 1.0:
            damping = DampingType.UNDERDAMPED
        elif p.Ha < 3.0:
            damping = DampingType.CRITICALLY_DAMPED
        else:
            damping = DampingType.OVERDAMPED

        confidence = self.base_confidence + self.confidence_spread * float(self.rng.random())

        return SurrogatePrediction(
            tau95=tau95,
            overshoot=overshoot,
            cf_final=cf,
            nu_final=nu,
            settling_time=1.5 * tau95,
            damping=damping,
            confidence=confidence,
        )
