# rho_myosin_submodel.py
"""
Rho / myosin contractility submodel.
------------------------------------

CaMKIIp activates RhoGEF, which loads RhoGTP; RhoGTP activates ROCK.
ROCK inactivates myosin phosphatase and phosphorylates the myosin light
chain (MLC); active myosin phosphatase dephosphorylates it again.

RhoGEF activation: the calibrated rate law has the denominator
``1 + RhoGEF`` with the species *index* (36) in place of its concentration,
so the flux is effectively mass action, 0.01 * CaMKIIp * RhoGEF / 37.
This is the default (``RhoMyosinParameters.literal_rhogef_denominator``);
set it to False for the saturating form 1 + [RhoGEF].
"""

from __future__ import annotations

from .network import SubModel
from .parameters import ModelParameters
from .rate_laws import flux, mass_action, saturating
from .state_vector import Species


def build_rho_myosin_submodel(params: ModelParameters) -> SubModel:
    p = params.rho_myosin

    if p.literal_rhogef_denominator:
        rhogef_activation = mass_action(
            p.vmax_rhogef_act / (p.km_rhogef_act + int(Species.RhoGEF)), CaMKIIp=1, RhoGEF=1
        )
    else:
        rhogef_activation = saturating(p.vmax_rhogef_act, p.km_rhogef_act, on="RhoGEF", by=("CaMKIIp",))

    fluxes = (
        flux(
            "rhogef_activation",
            rhogef_activation,
            stoichiometry={"RhoGEF": -1, "RhoGEFact": +1},
        ),
        flux(
            "rhogef_inactivation",
            saturating(p.vmax_rhogef_inact, p.km_rhogef_inact, on="RhoGEFact", by=("PP1act",)),
            stoichiometry={"RhoGEF": +1, "RhoGEFact": -1},
        ),
        flux(
            "rho_gtp_loading",
            saturating(p.vmax_rho_gtp_load, p.km_rho_gtp_load, on="RhoGDP", by=("RhoGEFact",)),
            stoichiometry={"RhoGDP": -1, "RhoGTP": +1},
        ),
        flux(
            "rho_gtp_hydrolysis",
            saturating(p.vmax_rho_gtp_hydro, p.km_rho_gtp_hydro, on="RhoGTP", by=("GAPact",)),
            stoichiometry={"RhoGDP": +1, "RhoGTP": -1},
        ),
        flux(
            "rock_activation",
            mass_action(p.k_rock_on, RhoGTP=1, ROCK=1),
            reverse=(mass_action(p.k_rock_off, ROCKact=1),),
            stoichiometry={"RhoGTP": -1, "ROCK": -1, "ROCKact": +1},
        ),
        flux(
            "myoppase_activation",
            mass_action(p.k_myoppase_basal, MyoPpase=1),
            saturating(p.vmax_myoppase_auto, p.km_myoppase_auto, on="MyoPpase", by=("MyoPpaseact",)),
            stoichiometry={"MyoPpase": -1, "MyoPpaseact": +1},
        ),
        flux(
            "myoppase_inactivation",
            saturating(p.vmax_myoppase_inact, p.km_myoppase_inact, on="MyoPpaseact", by=("ROCKact",)),
            stoichiometry={"MyoPpase": +1, "MyoPpaseact": -1},
        ),
        flux(
            "mlc_phosphorylation",
            mass_action(p.k_mlc_basal, MLC=1),
            saturating(p.vmax_mlc_act, p.km_mlc_act, on="MLC", by=("ROCKact",)),
            stoichiometry={"MLC": -1, "MLCact": +1},
        ),
        flux(
            "mlc_dephosphorylation",
            saturating(p.vmax_mlc_inact, p.km_mlc_inact, on="MLCact", by=("MyoPpaseact",)),
            stoichiometry={"MLC": +1, "MLCact": -1},
        ),
    )
    return SubModel(name="rho_myosin", fluxes=fluxes)
