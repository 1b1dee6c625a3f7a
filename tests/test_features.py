import pytest

from rediskube import features
from rediskube.features import FeatureGate, FeatureSpec, PreRelease


def make_gate():
    gate = FeatureGate()
    gate.add(
        {
            "Alpha": FeatureSpec(default=False, pre_release=PreRelease.ALPHA),
            "Stable": FeatureSpec(default=True),
            "Locked": FeatureSpec(default=True, lock_to_default=True),
        }
    )
    return gate


def test_defaults_apply_until_set():
    gate = make_gate()
    assert gate.enabled("Alpha") is False
    assert gate.enabled("Stable") is True


def test_set_overrides_defaults():
    gate = make_gate()
    gate.set("Alpha=true, Stable=false")
    assert gate.enabled("Alpha") is True
    assert gate.enabled("Stable") is False


@pytest.mark.parametrize("word", ["1", "t", "T", "TRUE", "true", "True"])
def test_set_accepts_true_spellings(word):
    gate = make_gate()
    gate.set(f"Alpha={word}")
    assert gate.enabled("Alpha") is True


def test_set_skips_empty_items():
    gate = make_gate()
    gate.set(",, Alpha = true ,")
    assert gate.enabled("Alpha") is True


def test_set_unknown_feature_raises():
    gate = make_gate()
    with pytest.raises(ValueError, match="unrecognized feature gate"):
        gate.set("Missing=true")


def test_set_missing_value_raises():
    gate = make_gate()
    with pytest.raises(ValueError, match="missing bool value"):
        gate.set("Alpha")


def test_set_bad_bool_raises_and_changes_nothing():
    gate = make_gate()
    with pytest.raises(ValueError):
        gate.set("Alpha=true,Stable=maybe")
    assert gate.enabled("Alpha") is False


def test_set_is_atomic_on_unknown_feature():
    gate = make_gate()
    with pytest.raises(ValueError):
        gate.set("Alpha=true,Missing=false")
    assert gate.enabled("Alpha") is False


def test_locked_feature_cannot_change():
    gate = make_gate()
    with pytest.raises(ValueError, match="locked"):
        gate.set("Locked=false")
    gate.set("Locked=true")
    assert gate.enabled("Locked") is True


def test_enabled_unknown_feature_raises():
    with pytest.raises(KeyError):
        make_gate().enabled("Missing")


def test_add_same_spec_twice_is_allowed():
    gate = make_gate()
    gate.add({"Stable": FeatureSpec(default=True)})
    assert gate.enabled("Stable") is True


def test_add_conflicting_spec_raises():
    gate = make_gate()
    with pytest.raises(ValueError, match="different spec"):
        gate.add({"Stable": FeatureSpec(default=False)})


def test_operator_gate_defaults():
    assert features.enabled(features.GENERATE_CONFIG_IN_INIT_CONTAINER) is False
    spec = features.DEFAULT_REDIS_OPERATOR_FEATURE_GATES["GenerateConfigInInitContainer"]
    assert spec.pre_release is PreRelease.ALPHA


def test_operator_gate_can_be_toggled():
    gate = features.MUTABLE_FEATURE_GATE
    try:
        gate.set("GenerateConfigInInitContainer=true")
        assert features.enabled("GenerateConfigInInitContainer") is True
    finally:
        gate.set("GenerateConfigInInitContainer=false")
    assert features.enabled("GenerateConfigInInitContainer") is False