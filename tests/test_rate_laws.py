import math

import numpy as np
import pytest

from rho_myosin.rate_laws import flux, mass_action, membrane_drag, saturating
from rho_myosin.state_vector import N_SPECIES, Species


def _state(**values):
    x = np.zeros(N_SPECIES)
    for name, value in values.items():
        x[Species[name]] = value
    return x


def test_mass_action_orders():
    term = mass_action(7.75, Ca=3)
    assert term.rate(_state(Ca=2.0)) == pytest.approx(62.0)

    term = mass_action(5.0, Ng=1, CaM=1)
    assert term.rate(_state(Ng=20.0, CaM=10.0)) == pytest.approx(1000.0)


def test_saturating_michaelis_menten_and_hill():
    mm = saturating(0.034, 4.97, on="I1", by=("CaNact",))
    x = _state(I1=1.8, CaNact=0.5)
    assert mm.rate(x) == pytest.approx(0.034 * 0.5 * 1.8 / (4.97 + 1.8))

    hill = saturating(120.0, 4.0, on="CaCaM", n=4, by=("CaMKII",))
    x = _state(CaCaM=2.0, CaMKII=3.0)
    assert hill.rate(x) == pytest.approx(120.0 * 3.0 * 16.0 / (256.0 + 16.0))


def test_membrane_velocity_limits():
    drag = membrane_drag(0.1, 10.0, 50.0, driver="Bp", carrier="B")

    x = _state(Bp=1.0, B=30.0)
    expected = 30.0 * 0.1 / (1.0 + 10.0 * math.exp(50.0))
    assert drag.rate(x) == pytest.approx(expected)

    # exp(50 / Bp) would overflow: no membrane velocity
    assert drag.velocity(_state(Bp=1e-3)) == 0.0
    assert drag.velocity(_state(Bp=0.0)) == 0.0
    # large Bp approaches vmax
    assert drag.velocity(_state(Bp=1e6)) == pytest.approx(0.1, rel=1e-3)


def test_scaled_terms():
    assert mass_action(0.2, Factin=1).scaled(106.0).k == pytest.approx(21.2)
    assert saturating(15.3, 2.0, on="Arp23act").scaled(2.0).vmax == pytest.approx(30.6)


def test_flux_net_rate_and_stoichiometry():
    fx = flux(
        "ng_cam_binding",
        mass_action(5.0, Ng=1, CaM=1),
        reverse=(mass_action(1.0, NgCaM=1),),
        stoichiometry={"CaM": -1, "Ng": -1, "NgCaM": +1, "Ca": 0},
    )
    x = _state(Ng=2.0, CaM=3.0, NgCaM=4.0)
    assert fx.rate(x) == pytest.approx(30.0 - 4.0)
    assert fx.species() == (Species.CaM, Species.Ng, Species.NgCaM)


def test_flux_requires_stoichiometry():
    with pytest.raises(ValueError):
        flux("empty", mass_action(1.0, Ca=1), stoichiometry={})


def test_flux_rejects_unknown_species():
    with pytest.raises(KeyError):
        flux("bad", mass_action(1.0, Ca=1), stoichiometry={"Calcium": 1})
