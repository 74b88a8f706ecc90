from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Callable, Dict, Tuple

from mhd_couette.physics import ParameterSet
from mhd_couette.types import ValidationReport

Check = Tuple[Callable[[float], bool], str]


@dataclass(frozen=True)
class ParameterRange:
    name: str
    min: float
    max: float
    typical: Tuple[float, float]
    checks: Tuple[Check, ...] = ()


PARAMETER_RANGES: Dict[str, ParameterRange] = {
    "Ha": ParameterRange("Hartmann Number", 0.0, 10.0, (1.0, 4.0), (
        (lambda v: v < 0.5, "Very low magnetic field - flow may oscillate"),
        (lambda v: v > 8, "Very high magnetic damping - flow may be suppressed"),
    )),
    "Re": ParameterRange("Reynolds Number", 0.1, 5.0, (0.5, 3.0), (
        (lambda v: v < 0.2, "Very low velocity - flow development may be slow"),
        (lambda v: v > 4, "High inertia - ensure numerical stability"),
    )),
    "Pr": ParameterRange("Prandtl Number", 0.7, 20.0, (6.2, 7.0), (
        (lambda v: v < 1, "Low Pr - thermal boundary layer thicker than momentum layer"),
        (lambda v: v > 15, "High Pr - very thin thermal boundary layer"),
    )),
    "Ec": ParameterRange("Eckert Number", 0.0, 1.0, (0.05, 0.2), (
        (lambda v: v > 0.5, "High viscous dissipation - temperature may exceed bounds"),
    )),
    "Bi": ParameterRange("Biot Number", 0.1, 10.0, (0.5, 2.0), (
        (lambda v: v < 0.2, "Weak cooling - temperature may rise significantly"),
        (lambda v: v > 8, "Very strong cooling - approaches isothermal condition"),
    )),
    "lam": ParameterRange("Slip Parameter", 0.0, 1.0, (0.0, 0.3), (
        (lambda v: v > 0.5, "High slip - may affect stability"),
    )),
    "G": ParameterRange("Pressure Gradient", 0.0, 2.0, (0.0, 1.0), (
        (lambda v: v > 1.5, "Strong pressure gradient - may dominate flow"),
    )),
}


def validate_parameters(params: ParameterSet) -> ValidationReport:
    """
    Advisory range check. Never raises and never blocks a solve.
    Errors: value outside [min, max]. Warnings: per-parameter regimes, then pairwise interactions.
    """
    warnings = []
    errors = []

    for f in fields(params):
        limits = PARAMETER_RANGES.get(f.name)
        if limits is None:
            continue
        value = getattr(params, f.name)
        if value < limits.min:
            errors.append(f"{limits.name} ({f.name}={value}) is below minimum {limits.min}")
        if value > limits.max:
            errors.append(f"{limits.name} ({f.name}={value}) is above maximum {limits.max}")
        for cond, message in limits.checks:
            if cond(value):
                warnings.append(f"{limits.name}: {message}")

    if params.Ec > 0.3 and params.Bi < 0.5:
        warnings.append("High Eckert number (Ec) with low Biot number (Bi) may cause excessive heating")
    if params.Ha < 1 and params.Re > 3:
        warnings.append("Low magnetic damping (Ha) with high Reynolds number (Re) may cause oscillations")
    if params.lam > 0.3 and params.Ha > 5:
        warnings.append("High slip with strong magnetic field may lead to unexpected flow patterns")

    return ValidationReport(warnings=warnings, errors=errors)
