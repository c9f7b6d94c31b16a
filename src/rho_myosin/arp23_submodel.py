# arp23_submodel.py
"""
Cdc42 / Arp2/3 submodel: CaMKIIp and PP1 toggle the Cdc42 GEF and GAP,
Cdc42GTP activates WASP, and active WASP activates the Arp2/3 complex.
"""

from __future__ import annotations

from .network import SubModel
from .parameters import ModelParameters
from .rate_laws import flux, mass_action, saturating


def build_arp23_submodel(params: ModelParameters) -> SubModel:
    p = params.arp23

    fluxes = (
        flux(
            "cdc42gef_activation",
            saturating(p.vmax_cdc42gef_act, p.km_cdc42gef_act, on="Cdc42GEF", by=("CaMKIIp",)),
            stoichiometry={"Cdc42GEF": -1, "Cdc42GEFact": +1},
        ),
        flux(
            "cdc42gef_inactivation",
            saturating(p.vmax_cdc42gef_inact, p.km_cdc42gef_inact, on="Cdc42GEFact", by=("PP1act",)),
            stoichiometry={"Cdc42GEF": +1, "Cdc42GEFact": -1},
        ),
        flux(
            "cdc42_gtp_loading",
            saturating(p.vmax_cdc42_gtp_load, p.km_cdc42_gtp_load, on="Cdc42GDP", by=("Cdc42GEFact",)),
            stoichiometry={"Cdc42GDP": -1, "Cdc42GTP": +1},
        ),
        flux(
            "cdc42_gtp_hydrolysis",
            saturating(p.vmax_cdc42_gtp_hydro, p.km_cdc42_gtp_hydro, on="Cdc42GTP", by=("GAPact",)),
            stoichiometry={"Cdc42GDP": +1, "Cdc42GTP": -1},
        ),
        flux(
            "gap_activation",
            saturating(p.vmax_gap_act, p.km_gap_act, on="GAP", by=("CaMKIIp",)),
            stoichiometry={"GAP": -1, "GAPact": +1},
        ),
        flux(
            "gap_inactivation",
            saturating(p.vmax_gap_inact, p.km_gap_inact, on="GAPact", by=("PP1act",)),
            stoichiometry={"GAP": +1, "GAPact": -1},
        ),
        flux(
            "wasp_activation",
            mass_action(p.k_wasp_on, Cdc42GTP=1, WASP=1),
            reverse=(mass_action(p.k_wasp_off, WASPact=1),),
            stoichiometry={"Cdc42GTP": -1, "WASP": -1, "WASPact": +1},
        ),
        flux(
            "arp23_activation",
            mass_action(p.k_arp23_on, Arp23=1, WASPact=1),
            reverse=(mass_action(p.k_arp23_off, Arp23act=1),),
            stoichiometry={"WASPact": -1, "Arp23": -1, "Arp23act": +1},
        ),
    )
    return SubModel(name="arp23", fluxes=fluxes)
