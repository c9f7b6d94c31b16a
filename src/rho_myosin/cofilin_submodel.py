# cofilin_submodel.py

from __future__ import annotations

from .network import SubModel
from .parameters import ModelParameters
from .rate_laws import flux, saturating


def build_cofilin_submodel(params: ModelParameters) -> SubModel:
    """
    Cofilin regulation: calcineurin activates the SSH1 phosphatase, ROCK
    activates LIMK; SSH1 and LIMK set the active (dephosphorylated)
    cofilin fraction.
    """
    p = params.cofilin

    fluxes = (
        flux(
            "ssh1_activation",
            saturating(p.vmax_ssh1_act, p.km_ssh1_act, on="SSH1", by=("CaNact",)),
            stoichiometry={"SSH1": -1, "SSH1act": +1},
        ),
        flux(
            "ssh1_inactivation",
            saturating(p.vmax_ssh1_inact, p.km_ssh1_inact, on="SSH1act", by=("CaMKIIp",)),
            stoichiometry={"SSH1": +1, "SSH1act": -1},
        ),
        flux(
            "limk_activation",
            saturating(p.vmax_limk_act, p.km_limk_act, on="LIMK", by=("ROCKact",)),
            stoichiometry={"LIMK": -1, "LIMKact": +1},
        ),
        flux(
            "limk_inactivation",
            saturating(p.vmax_limk_inact, p.km_limk_inact, on="LIMKact", by=("SSH1act",)),
            stoichiometry={"LIMK": +1, "LIMKact": -1},
        ),
        flux(
            "cofilin_activation",
            saturating(p.vmax_cofilin_act, p.km_cofilin_act, on="Cofilin", by=("SSH1act",)),
            stoichiometry={"Cofilin": -1, "Cofilinact": +1},
        ),
        flux(
            "cofilin_inactivation",
            saturating(p.vmax_cofilin_inact, p.km_cofilin_inact, on="Cofilinact", by=("LIMKact",)),
            stoichiometry={"Cofilin": +1, "Cofilinact": -1},
        ),
    )
    return SubModel(name="cofilin", fluxes=fluxes)
