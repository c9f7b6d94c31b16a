import pytest

from rho_myosin.config import RunConfig, load_config, parse_config
from rho_myosin.parameters import DEFAULT_INITIAL_CONDITIONS, UNSET, IntegratorSettings


def test_defaults():
    cfg = RunConfig()
    assert cfg.settings == IntegratorSettings()
    assert cfg.initial_conditions == DEFAULT_INITIAL_CONDITIONS
    assert cfg.initial_conditions is not DEFAULT_INITIAL_CONDITIONS
    assert cfg.literal_rhogef_denominator


def test_parse_merges_onto_reference_conditions():
    cfg = parse_config({
        "integrator": {"t_end": 50.0, "tolerance": 1e-7},
        "initial_conditions": {"Ca": 2.5, "CaMKIIp": 0.3},
    })
    assert cfg.settings.t_end == 50.0
    assert cfg.settings.tolerance == 1e-7
    assert cfg.settings.grow_max == 1.2
    assert cfg.initial_conditions["Ca"] == 2.5
    assert cfg.initial_conditions["CaMKIIp"] == 0.3
    assert cfg.initial_conditions["MLC"] == 5.0


def test_replace_initial_conditions():
    cfg = parse_config({
        "initial_conditions": {"Ca": 2.5},
        "model": {"replace_initial_conditions": True, "literal_rhogef_denominator": False},
    })
    assert cfg.initial_conditions == {"Ca": 2.5}
    assert not cfg.literal_rhogef_denominator


@pytest.mark.parametrize(
    "raw, error",
    [
        ({"solver": {}}, ValueError),
        ({"integrator": {"rtol": 1e-3}}, ValueError),
        ({"integrator": {"tolerance": -1.0}}, ValueError),
        ({"model": {"replace": True}}, ValueError),
        ({"initial_conditions": {"Calcium": 1.0}}, KeyError),
    ],
)
def test_invalid_config(raw, error):
    with pytest.raises(error):
        parse_config(raw)


def test_load_config(tmp_path):
    path = tmp_path / "run.toml"
    path.write_text(
        "[integrator]\n"
        "t_end = 20.0\n"
        "catch_up_samples = true\n"
        "\n"
        "[initial_conditions]\n"
        "Ng = 0.0\n"
    )
    cfg = load_config(path)
    assert cfg.settings.t_end == 20.0
    assert cfg.settings.catch_up_samples is True
    assert cfg.initial_conditions["Ng"] == 0.0


def test_overrides_keep_unset_fields_and_clear_step_cap():
    capped = IntegratorSettings(max_step=0.2, tolerance=1e-7)

    same = capped.with_overrides(max_step=UNSET, tolerance=UNSET)
    assert same == capped

    uncapped = capped.with_overrides(max_step=None)
    assert uncapped.max_step is None
    assert uncapped.tolerance == 1e-7

    with pytest.raises(ValueError):
        capped.with_overrides(tolerance=None)
    with pytest.raises(ValueError):
        capped.with_overrides(rtol=1e-3)
