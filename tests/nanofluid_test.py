import pytest

from mhd_couette.nanofluid import NANOPARTICLES, apply_nanofluid, compute_nanofluid_properties
from mhd_couette.physics import ParameterSet
from mhd_couette.presets import BASELINE, PRESETS, get_preset


@pytest.mark.parametrize("name", sorted(NANOPARTICLES))
def test_pure_base_fluid_gives_unit_ratios(name):
    r = compute_nanofluid_properties(name, 0.0)
    for v in (r.A1, r.A2, r.A3, r.A4, r.A5):
        assert v == pytest.approx(1.0, abs=1e-15)


def test_copper_water_three_percent():
    r = compute_nanofluid_properties("Cu", 0.03)
    assert r.A1 == pytest.approx(1.0 / 0.97 ** 2.5)
    assert r.A4 == pytest.approx(1.238797, rel=1e-5)
    assert r.A2 > 1.0  # conducting particles
    assert r.A3 > 1.0
    assert r.A5 == pytest.approx(0.9947635, rel=1e-6)  # (rho cp) of Cu is below water's


def test_insulating_particles_lower_electrical_conductivity():
    r = compute_nanofluid_properties("Al2O3", 0.03)
    assert r.A2 < 1.0
    assert r.A2 == pytest.approx(1.0 - 3 * 0.03 / 2.03, rel=1e-6)


def test_invalid_inputs():
    with pytest.raises(ValueError):
        compute_nanofluid_properties("Cu", 1.0)
    with pytest.raises(ValueError):
        compute_nanofluid_properties("Cu", -0.01)
    with pytest.raises(ValueError):
        compute_nanofluid_properties("Unobtainium", 0.01)


def test_apply_nanofluid_returns_new_set():
    base = ParameterSet(Ha=3.0, Re=2.0)
    nf = apply_nanofluid(base, "Ag", 0.02)
    assert base.A1 == 1.2
    assert nf.A1 == pytest.approx(1.0 / 0.98 ** 2.5)
    assert (nf.Ha, nf.Re, nf.N) == (3.0, 2.0, base.N)


def test_presets():
    assert get_preset("baseline") == BASELINE
    assert PRESETS["overdamped"].params.Ha == 6.0
    assert PRESETS["cu-water"].params.A1 == pytest.approx(1.0 / 0.97 ** 2.5)
    with pytest.raises(ValueError):
        get_preset("nope")
