from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

from mhd_couette.nanofluid import apply_nanofluid
from mhd_couette.physics import ParameterSet


@dataclass(frozen=True, slots=True)
class Preset:
    name: str
    description: str
    params: ParameterSet


BASELINE = ParameterSet(
    A1=1.2, A2=1.5, A3=1.3, A4=1.1, A5=1.15,
    Re=1.0, Ha=2.0, Pr=6.2, Ec=0.1, Bi=0.5, lam=0.1, G=0.5,
)


def _make_presets() -> Dict[str, Preset]:
    b = BASELINE
    return {
        "baseline": Preset("Baseline", "Standard parameters, moderate damping", b),
        "underdamped": Preset("Underdamped", "Ha=0, no magnetic braking", b.with_updates(Ha=0.0)),
        "critical": Preset("Critical Damping", "Ha=2", b.with_updates(Ha=2.0)),
        "overdamped": Preset("Overdamped", "Ha=6, strong magnetic braking", b.with_updates(Ha=6.0)),
        "fast-flow": Preset("Fast Flow", "Re=3, high shear rate", b.with_updates(Re=3.0)),
        "high-ec": Preset("High Dissipation", "Ec=0.5, strong viscous heating", b.with_updates(Ec=0.5)),
        "high-bi": Preset("Strong Cooling", "Bi=5, enhanced convective cooling", b.with_updates(Bi=5.0)),
        "high-slip": Preset("High Slip", "lam=0.5, significant wall slip", b.with_updates(lam=0.5)),
        "cu-water": Preset("Cu-Water (3%)", "Copper nanofluid", apply_nanofluid(b, "Cu", 0.03)),
        "al2o3-water": Preset("Al2O3-Water (3%)", "Alumina nanofluid", apply_nanofluid(b, "Al2O3", 0.03)),
    }


PRESETS: Dict[str, Preset] = _make_presets()


def get_preset(key: str) -> ParameterSet:
    try:
        return PRESETS[key].params
    except KeyError:
        raise ValueError(f"Unknown preset {key!r}; known: {sorted(PRESETS)}") from None
