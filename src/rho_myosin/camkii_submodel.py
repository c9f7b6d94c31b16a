# camkii_submodel.py
"""
CaMKII submodel.
----------------

Calcium binding to calmodulin, calmodulin sequestration by neurogranin,
CaMKII binding to F- and G-actin, CaMKII phosphorylation and the
calcineurin / inhibitor-1 / PP1 phosphatase cascade:

    Ca^3 + CaM  <-> CaCaM
    Ng + CaM    <-> NgCaM
    CaMKII + F-actin <-> CaMKII:F-actin
    CaMKII + G-actin <-> CaMKII:G-actin
    CaMKII  -> CaMKIIp   (CaCaM Hill switch + autophosphorylation)
    CaMKIIp -> CaMKII    (PP1)
    CaN <-> CaNact,  I1 <-> I1act,  PP1 <-> PP1act
"""

from __future__ import annotations

from .network import SubModel
from .parameters import ModelParameters
from .rate_laws import flux, mass_action, saturating


def build_camkii_submodel(params: ModelParameters) -> SubModel:
    p = params.camkii

    fluxes = (
        flux(
            "ca_cam_binding",
            mass_action(p.k_ca_cam_on, Ca=3),
            reverse=(mass_action(p.k_ca_cam_off, CaCaM=1),),
            stoichiometry={"Ca": -3, "CaM": -1, "CaCaM": +1},
        ),
        flux(
            "ng_cam_binding",
            mass_action(p.k_ng_cam_on, Ng=1, CaM=1),
            reverse=(mass_action(p.k_ng_cam_off, NgCaM=1),),
            stoichiometry={"CaM": -1, "Ng": -1, "NgCaM": +1},
        ),
        flux(
            "camkii_factin_binding",
            mass_action(p.k_factin_on, CaMKII=1, Factin=1),
            reverse=(mass_action(p.k_factin_off, CaMKIIFactin=1),),
            stoichiometry={"CaMKII": -1, "Factin": -1, "CaMKIIFactin": +1},
        ),
        flux(
            "camkii_gactin_binding",
            mass_action(p.k_gactin_on, CaMKII=1, Gactin=1),
            reverse=(mass_action(p.k_gactin_off, CaMKIIGactin=1),),
            stoichiometry={"CaMKII": -1, "Gactin": -1, "CaMKIIGactin": +1},
        ),
        flux(
            "camkii_phosphorylation",
            saturating(p.vmax_camkii_cacam, p.km_camkii_cacam, on="CaCaM", n=p.n_cacam, by=("CaMKII",)),
            saturating(p.vmax_camkii_auto, p.km_camkii_auto, on="CaMKII", by=("CaMKIIp",)),
            stoichiometry={"CaMKII": -1, "CaMKIIp": +1},
        ),
        flux(
            "camkii_dephosphorylation",
            saturating(p.vmax_camkii_dephos, p.km_camkii_dephos, on="CaMKIIp", by=("PP1act",)),
            stoichiometry={"CaMKII": +1, "CaMKIIp": -1},
        ),
        flux(
            "can_activation",
            saturating(p.vmax_can_act, p.km_can_act, on="CaCaM", n=p.n_cacam, by=("CaN",)),
            stoichiometry={"CaN": -1, "CaNact": +1},
        ),
        flux(
            "can_inactivation",
            saturating(p.vmax_can_inact, p.km_can_inact, on="CaN", by=("CaMKIIp",)),
            stoichiometry={"CaN": +1, "CaNact": -1},
        ),
        flux(
            "i1_activation",
            saturating(p.vmax_i1_act, p.km_i1_act, on="I1", by=("CaNact",)),
            stoichiometry={"I1": -1, "I1act": +1},
        ),
        flux(
            "i1_inactivation",
            saturating(p.vmax_i1_inact, p.km_i1_inact, on="I1act", by=("CaMKIIp",)),
            stoichiometry={"I1": +1, "I1act": -1},
        ),
        flux(
            "pp1_activation",
            saturating(p.vmax_pp1_i1, p.km_pp1_act, on="PP1", by=("I1act",)),
            saturating(p.vmax_pp1_auto, p.km_pp1_act, on="PP1", by=("PP1act",)),
            stoichiometry={"PP1": -1, "PP1act": +1},
        ),
        flux(
            "pp1_inactivation",
            saturating(p.vmax_pp1_inact, p.km_pp1_inact, on="PP1act", by=("CaMKIIp",)),
            stoichiometry={"PP1": +1, "PP1act": -1},
        ),
    )
    return SubModel(name="camkii", fluxes=fluxes)
