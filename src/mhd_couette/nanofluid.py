from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Union

import mhd_couette.config as cfg
from mhd_couette.physics import ParameterSet


@dataclass(frozen=True, slots=True)
class Nanoparticle:
    name: str
    rho: float    # density [kg/m^3]
    k: float      # thermal conductivity [W/(m*K)]
    cp: float     # specific heat [J/(kg*K)]
    sigma: float  # electrical conductivity [S/m]


@dataclass(frozen=True, slots=True)
class NanofluidRatios:
    A1: float  # viscosity
    A2: float  # electrical conductivity
    A3: float  # thermal conductivity
    A4: float  # density
    A5: float  # heat capacity


NANOPARTICLES: Dict[str, Nanoparticle] = {
    "Cu": Nanoparticle("Copper (Cu)", rho=8933.0, k=401.0, cp=385.0, sigma=5.96e7),
    "Al2O3": Nanoparticle("Alumina (Al2O3)", rho=3970.0, k=40.0, cp=765.0, sigma=1e-10),
    "TiO2": Nanoparticle("Titanium Dioxide (TiO2)", rho=4250.0, k=8.95, cp=686.0, sigma=1e-12),
    "Ag": Nanoparticle("Silver (Ag)", rho=10500.0, k=429.0, cp=235.0, sigma=6.3e7),
    "Fe3O4": Nanoparticle("Magnetite (Fe3O4)", rho=5180.0, k=9.7, cp=670.0, sigma=2.5e4),
    "SiO2": Nanoparticle("Silicon Dioxide (SiO2)", rho=2200.0, k=1.4, cp=745.0, sigma=1e-14),
    "CuO": Nanoparticle("Copper Oxide (CuO)", rho=6320.0, k=76.5, cp=532.0, sigma=1e-10),
    "ZnO": Nanoparticle("Zinc Oxide (ZnO)", rho=5606.0, k=29.0, cp=523.0, sigma=1e-8),
}


def get_nanoparticle(particle: Union[str, Nanoparticle]) -> Nanoparticle:
    if isinstance(particle, Nanoparticle):
        return particle
    try:
        return NANOPARTICLES[particle]
    except KeyError:
        raise ValueError(f"Unknown nanoparticle {particle!r}; known: {sorted(NANOPARTICLES)}") from None


def compute_nanofluid_properties(
    particle: Union[str, Nanoparticle],
    phi: float,
    rho_f: float = cfg.RHO_F,
    k_f: float = cfg.K_F,
    cp_f: float = cfg.CP_F,
    sigma_f: float = cfg.SIGMA_F,
) -> NanofluidRatios:
    """
    Mixture ratios for volume fraction phi in [0, 1):
      A1 = 1 / (1 - phi)^2.5                                       (Brinkman)
      A2 = 1 + 3 phi (s - 1) / (s + 2 - phi (s - 1)),  s = sp/sf     (Maxwell-type)
      A3 = (kp + 2kf + 2phi(kp - kf)) / (kp + 2kf - phi(kp - kf))     (Maxwell)
      A4 = ((1 - phi) rho_f + phi rho_p) / rho_f
      A5 = ((1 - phi) (rho cp)_f + phi (rho cp)_p) / (rho cp)_f
    All five are exactly 1 at phi = 0.
    """
    if not 0.0 <= phi < 1.0:
        raise ValueError(f"Volume fraction must be in [0, 1), got {phi}")
    part = get_nanoparticle(particle)

    A4 = ((1.0 - phi) * rho_f + phi * part.rho) / rho_f
    A1 = 1.0 / (1.0 - phi) ** 2.5
    dk = part.k - k_f
    A3 = (part.k + 2.0 * k_f + 2.0 * phi * dk) / (part.k + 2.0 * k_f - phi * dk)
    A5 = ((1.0 - phi) * rho_f * cp_f + phi * part.rho * part.cp) / (rho_f * cp_f)
    sr = part.sigma / sigma_f
    A2 = 1.0 + 3.0 * phi * (sr - 1.0) / (sr + 2.0 - phi * (sr - 1.0))

    return NanofluidRatios(A1=A1, A2=A2, A3=A3, A4=A4, A5=A5)


def apply_nanofluid(params: ParameterSet, particle: Union[str, Nanoparticle], phi: float) -> ParameterSet:
    r = compute_nanofluid_properties(particle, phi)
    return params.with_updates(A1=r.A1, A2=r.A2, A3=r.A3, A4=r.A4, A5=r.A5)
