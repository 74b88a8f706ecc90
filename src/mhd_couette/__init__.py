"""Transient MHD Couette flow of a nanofluid between parallel plates."""

from mhd_couette.physics import ParameterSet
from mhd_couette.simulation import solve, solve_quick
from mhd_couette.types import DampingType, MetricsRecord, SolveResult, State, Trajectory
from mhd_couette.validation import validate_parameters

__all__ = [
    "DampingType",
    "MetricsRecord",
    "ParameterSet",
    "SolveResult",
    "State",
    "Trajectory",
    "solve",
    "solve_quick",
    "validate_parameters",
]
