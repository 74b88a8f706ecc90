from __future__ import annotations

from dataclasses import asdict, dataclass, fields, replace
from typing import Dict

import mhd_couette.config as cfg


@dataclass(frozen=True, slots=True)
class ParameterSet:
    """
    Dimensionless inputs of the coupled momentum / energy system

      A4 dW/dtau     = A1 W'' - A2 Ha^2 W + G
      A5 Pr dth/dtau = A3 th'' + A1 Pr Ec (W')^2 + A2 Pr Ec Ha^2 W^2

    with W(0)=0, W(1) + lam W'(1) = Re, th(0)=1, th'(1) + Bi th(1) = 0.
    Never mutated; use with_updates() to derive a changed set.
    """
    # nanofluid property ratios (nf / base fluid)
    A1: float = 1.2   # viscosity
    A2: float = 1.5   # electrical conductivity
    A3: float = 1.3   # thermal conductivity
    A4: float = 1.1   # density
    A5: float = 1.15  # heat capacity

    Re: float = 1.0   # upper plate speed
    Ha: float = 2.0   # Hartmann
    Pr: float = 6.2   # Prandtl
    Ec: float = 0.1   # Eckert
    Bi: float = 0.5   # Biot, upper plate
    lam: float = 0.1  # Navier slip, upper plate
    G: float = 0.5    # pressure gradient

    N: int = cfg.DEFAULT_N  # grid intervals

    def with_updates(self, **changes: float) -> "ParameterSet":
        unknown = set(changes) - {f.name for f in fields(self)}
        if unknown:
            raise ValueError(f"Unknown parameter(s): {sorted(unknown)}")
        return replace(self, **changes)

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)
