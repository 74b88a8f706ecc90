from __future__ import annotations

from pathlib import Path
from typing import Optional, Union

import pandas as pd

from mhd_couette.diagnostics import energy_series
from mhd_couette.types import EnergySeries, Trajectory

EXPORT_COLUMNS = ["tau", "Cf_lower", "Nu_lower", "KE", "TE"]


def trajectory_frame(traj: Trajectory, energy: Optional[EnergySeries] = None) -> pd.DataFrame:
    """One row per saved sample: tau, Cf_lower, Nu_lower, KE, TE."""
    if energy is None:
        energy = energy_series(traj)
    return pd.DataFrame({
        "tau": traj.tau,
        "Cf_lower": traj.cf_lower,
        "Nu_lower": traj.nu_lower,
        "KE": energy.kinetic,
        "TE": energy.thermal,
    }, columns=EXPORT_COLUMNS)


def export_trajectory_csv(
    traj: Trajectory,
    path: Optional[Union[str, Path]] = None,
    energy: Optional[EnergySeries] = None,
) -> str:
    """Comma-separated table with header tau,Cf_lower,Nu_lower,KE,TE. Written to path if given."""
    text = trajectory_frame(traj, energy).to_csv(index=False, lineterminator="\n")
    if path is not None:
        Path(path).write_text(text, encoding="utf-8")
    return text


def read_trajectory_csv(source) -> pd.DataFrame:
    """Parse an exported table back; floats are read with round-trip precision."""
    df = pd.read_csv(source, float_precision="round_trip")
    missing = [c for c in EXPORT_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"Not a trajectory export, missing columns {missing}")
    return df[EXPORT_COLUMNS]
