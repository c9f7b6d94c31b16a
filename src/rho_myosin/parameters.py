# parameters.py
from dataclasses import dataclass, field, fields, replace
from typing import Dict, Optional


@dataclass
class CaMKIIParameters:
    k_ca_cam_on: float = 7.75 # Ca^3 + CaM -> CaCaM association
    k_ca_cam_off: float = 1.0 # CaCaM dissociation
    k_ng_cam_on: float = 5.0 # Ng + CaM -> NgCaM association
    k_ng_cam_off: float = 1.0 # NgCaM dissociation
    k_factin_on: float = 1.0 # CaMKII binding to F-actin
    k_factin_off: float = 4.0 # CaMKII release from F-actin
    k_gactin_on: float = 1.0 # CaMKII binding to G-actin
    k_gactin_off: float = 4.0 # CaMKII release from G-actin
    vmax_camkii_cacam: float = 120.0 # CaCaM-driven CaMKII phosphorylation
    km_camkii_cacam: float = 4.0
    n_cacam: float = 4.0 # Hill coefficient of the CaCaM switches
    vmax_camkii_auto: float = 1.0 # CaMKII autophosphorylation
    km_camkii_auto: float = 10.0
    vmax_camkii_dephos: float = 15.0 # PP1 dephosphorylation of CaMKIIp
    km_camkii_dephos: float = 3.0
    vmax_can_act: float = 127.0 # CaCaM activation of calcineurin
    km_can_act: float = 0.34
    vmax_can_inact: float = 0.34 # CaMKIIp inactivation of calcineurin
    km_can_inact: float = 127.0
    vmax_i1_act: float = 0.034 # CaN activation of inhibitor-1
    km_i1_act: float = 4.97
    vmax_i1_inact: float = 0.0688 # CaMKIIp inactivation of inhibitor-1
    km_i1_inact: float = 127.0
    vmax_pp1_i1: float = 50.0 # I1-driven PP1 activation
    vmax_pp1_auto: float = 2.0 # PP1 autoactivation
    km_pp1_act: float = 80.0
    vmax_pp1_inact: float = 0.07166 # CaMKIIp inactivation of PP1
    km_pp1_inact: float = 4.97


@dataclass
class Arp23Parameters:
    vmax_cdc42gef_act: float = 0.01 # CaMKIIp activation of Cdc42GEF
    km_cdc42gef_act: float = 1.0
    vmax_cdc42gef_inact: float = 0.01 # PP1 inactivation of Cdc42GEF
    km_cdc42gef_inact: float = 1.0
    vmax_cdc42_gtp_load: float = 0.75 # GEF-driven Cdc42 GDP -> GTP exchange
    km_cdc42_gtp_load: float = 1.0
    vmax_cdc42_gtp_hydro: float = 0.1 # GAP-driven Cdc42 GTP hydrolysis
    km_cdc42_gtp_hydro: float = 1.0
    vmax_gap_act: float = 0.01 # CaMKIIp activation of GAP
    km_gap_act: float = 1.0
    vmax_gap_inact: float = 0.01 # PP1 inactivation of GAP
    km_gap_inact: float = 1.0
    k_wasp_on: float = 0.02 # Cdc42GTP activation of WASP
    k_wasp_off: float = 0.001
    k_arp23_on: float = 0.1 # WASP activation of Arp2/3
    k_arp23_off: float = 0.0


@dataclass
class CofilinParameters:
    vmax_ssh1_act: float = 0.34 # CaN activation of SSH1
    km_ssh1_act: float = 4.97
    vmax_ssh1_inact: float = 127.0 # CaMKIIp inactivation of SSH1
    km_ssh1_inact: float = 0.34
    vmax_limk_act: float = 0.9 # ROCK activation of LIMK
    km_limk_act: float = 0.3
    vmax_limk_inact: float = 0.34 # SSH1 inactivation of LIMK
    km_limk_inact: float = 4.0
    vmax_cofilin_act: float = 0.34 # SSH1 dephosphorylation (activation) of cofilin
    km_cofilin_act: float = 4.0
    vmax_cofilin_inact: float = 0.34 # LIMK phosphorylation (inactivation) of cofilin
    km_cofilin_inact: float = 4.0


@dataclass
class ActinParameters:
    k_sev: float = 0.1 * 0.0002 / 0.0001 # Cofilin severing rate
    n_sev: float = 4.0 # Cooperativity of cofilin severing
    k_nuc: float = 15.3 # Arp2/3 nucleation rate
    km_nuc: float = 2.0
    k_mature: float = 0.001 # New filament -> F-actin
    k_depoly: float = 0.1 # F-actin depolymerisation
    k_turnover: float = 0.01 # Basal F-actin turnover
    barbed_yield: float = 106.0 # Barbed ends created per severing/nucleation event
    k_barbed_cap: float = 0.04 # Barbed end capping
    k_bp_gain: float = 0.1 # Barbed ends reaching the membrane
    vmax_membrane: float = 0.1 # Membrane velocity ceiling
    km_membrane: float = 10.0
    membrane_barrier: float = 50.0 # Load exponent of the membrane velocity
    k_bp_loss: float = 0.04 # Loss of membrane-pushing barbed ends


@dataclass
class RhoMyosinParameters:
    vmax_rhogef_act: float = 0.01 # CaMKIIp activation of RhoGEF
    km_rhogef_act: float = 1.0
    # Calibrated rate law divides by (1 + <index of RhoGEF>), not
    # (1 + [RhoGEF]). False selects the saturating form.
    literal_rhogef_denominator: bool = True
    vmax_rhogef_inact: float = 0.1 # PP1 inactivation of RhoGEF
    km_rhogef_inact: float = 1.0
    vmax_rho_gtp_load: float = 0.75 # GEF-driven Rho GDP -> GTP exchange
    km_rho_gtp_load: float = 1.0
    vmax_rho_gtp_hydro: float = 0.1 # GAP-driven Rho GTP hydrolysis
    km_rho_gtp_hydro: float = 1.0
    k_rock_on: float = 0.02 # RhoGTP activation of ROCK
    k_rock_off: float = 0.001
    k_myoppase_basal: float = 0.01 # Basal myosin phosphatase activation
    vmax_myoppase_auto: float = 3.0 # Myosin phosphatase autoactivation
    km_myoppase_auto: float = 16.0
    vmax_myoppase_inact: float = 2.357 # ROCK inactivation of myosin phosphatase
    km_myoppase_inact: float = 0.1
    k_mlc_basal: float = 0.01 # Basal MLC phosphorylation
    vmax_mlc_act: float = 1.8 # ROCK phosphorylation of MLC
    km_mlc_act: float = 2.47
    vmax_mlc_inact: float = 1.0 # Myosin phosphatase dephosphorylation of MLC
    km_mlc_inact: float = 16.0


@dataclass
class ModelParameters:
    camkii: CaMKIIParameters = field(default_factory=CaMKIIParameters)
    arp23: Arp23Parameters = field(default_factory=Arp23Parameters)
    cofilin: CofilinParameters = field(default_factory=CofilinParameters)
    actin: ActinParameters = field(default_factory=ActinParameters)
    rho_myosin: RhoMyosinParameters = field(default_factory=RhoMyosinParameters)


def get_default_parameters() -> ModelParameters:
    """
    Return a ModelParameters object with all reference values.
    """
    return ModelParameters()


# Reference initial concentrations (uM); species not listed start at zero.
DEFAULT_INITIAL_CONDITIONS: Dict[str, float] = {
    "Ca": 1.0,
    "CaMKIIFactin": 10.0,
    "CaMKIIGactin": 10.0,
    "CaN": 1.0,
    "CaM": 10.0,
    "Ng": 20.0,
    "I1": 1.8,
    "PP1": 0.27,
    "WASP": 1.0,
    "Arp23": 1.0,
    "Cdc42GDP": 1.0,
    "Cdc42GEF": 0.1,
    "LIMK": 2.0,
    "SSH1": 2.0,
    "Cofilin": 2.0,
    "Bp": 1.0,
    "B": 30.0,
    "MyoPpaseact": 0.1,
    "RhoGEF": 0.1,
    "RhoGDP": 1.0,
    "ROCK": 1.0,
    "MyoPpase": 1.1,
    "MLC": 5.0,
    "GAP": 0.1,
}


# Marks an override that was not given; None is a value (uncapped max_step).
UNSET = object()


@dataclass(frozen=True)
class IntegratorSettings:
    """
    Tuning of the adaptive integration, shared by the stepper and the driver.

    Attributes:
        t_end: Simulation horizon.
        initial_step: First step size tried.
        sample_interval: Time between recorded samples.
        tolerance: Acceptable absolute local error per step.
        shrink_max: A rejection never shrinks the step by more than this factor.
        grow_max: An accepted step never grows the step by more than this factor.
        safety: Safety factor applied to the optimal step size.
        min_step: Shrinking below this step size aborts the integration.
        max_step: Optional cap on the proposed step size (None = uncapped).
        catch_up_samples: Skip sampling slots overshot by a long step instead
            of emitting one late sample per iteration until caught up.
    """

    t_end: float = 300.0
    initial_step: float = 0.01
    sample_interval: float = 0.1
    tolerance: float = 1.0e-6
    shrink_max: float = 0.1
    grow_max: float = 1.2
    safety: float = 0.9
    min_step: float = 1.0e-6
    max_step: Optional[float] = None
    catch_up_samples: bool = False

    def __post_init__(self):
        for name in ("t_end", "initial_step", "sample_interval", "tolerance", "min_step"):
            value = getattr(self, name)
            if value is None or not value > 0.0:
                raise ValueError(f"{name} must be positive, got {value}")
        if not 0.0 < self.shrink_max < 1.0:
            raise ValueError(f"shrink_max must lie in (0, 1), got {self.shrink_max}")
        if not self.grow_max > 1.0:
            raise ValueError(f"grow_max must exceed 1, got {self.grow_max}")
        if not 0.0 < self.safety <= 1.0:
            raise ValueError(f"safety must lie in (0, 1], got {self.safety}")
        if self.max_step is not None and self.max_step < self.min_step:
            raise ValueError(
                f"max_step ({self.max_step}) must not be below min_step ({self.min_step})"
            )

    def with_overrides(self, **overrides) -> "IntegratorSettings":
        """
        Copy with the given fields replaced. Fields passed as UNSET keep
        their value; max_step=None removes the step cap.
        """
        known = {f.name for f in fields(self)}
        unknown = set(overrides) - known
        if unknown:
            raise ValueError(f"Unknown integrator settings: {sorted(unknown)}")
        changes = {k: v for k, v in overrides.items() if v is not UNSET}
        return replace(self, **changes)
