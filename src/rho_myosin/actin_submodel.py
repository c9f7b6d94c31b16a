# actin_submodel.py
"""
Actin polymerization / membrane submodel.
-----------------------------------------

Couples the actin pools introduced by the CaMKII module (F-actin, G-actin)
and the Arp2/3 module (active Arp2/3) to barbed-end dynamics:

- severing  fsev = k_sev * Cofilinact^n_sev * Factin
- nucleation fnuc = k_nuc * Arp23act * Factin * Gactin / (km_nuc + Arp23act)
- membrane velocity vmb = vmax * Bp / (Bp + km * exp(barrier / Bp))

Contributions to Factin, Gactin and Arp23act are summed with those of the
upstream layers by the network.
"""

from __future__ import annotations

from .network import SubModel
from .parameters import ModelParameters
from .rate_laws import flux, mass_action, membrane_drag, saturating


def build_actin_submodel(params: ModelParameters) -> SubModel:
    p = params.actin

    severing = mass_action(p.k_sev, Cofilinact=p.n_sev, Factin=1)
    nucleation = saturating(p.k_nuc, p.km_nuc, on="Arp23act", by=("Factin", "Gactin"))

    fluxes = (
        flux(
            "filament_maturation",
            mass_action(p.k_mature, Fnewactin=1),
            stoichiometry={"Fnewactin": -1, "Factin": +1},
        ),
        flux(
            "depolymerization",
            severing,
            mass_action(p.k_depoly, Factin=1),
            mass_action(p.k_turnover, Factin=1),
            stoichiometry={"Factin": -1, "Gactin": +1},
        ),
        flux(
            "nucleation",
            nucleation,
            stoichiometry={"Gactin": -1, "Arp23act": -1},
        ),
        flux(
            "barbed_end_creation",
            severing.scaled(p.barbed_yield),
            nucleation.scaled(p.barbed_yield),
            reverse=(mass_action(p.k_barbed_cap, B=1),),
            stoichiometry={"B": +1},
        ),
        flux(
            "membrane_pushing",
            mass_action(p.k_bp_gain, B=1),
            reverse=(
                membrane_drag(p.vmax_membrane, p.km_membrane, p.membrane_barrier, driver="Bp", carrier="B"),
                mass_action(p.k_bp_loss, Bp=1),
            ),
            stoichiometry={"Bp": +1},
        ),
    )
    return SubModel(name="actin", fluxes=fluxes)
