"""Feature gates for alpha and experimental operator features."""

import threading
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

_TRUE_WORDS = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE_WORDS = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class PreRelease(str, Enum):
    """Maturity stage of a feature."""

    ALPHA = "ALPHA"
    BETA = "BETA"
    GA = ""
    DEPRECATED = "DEPRECATED"


@dataclass(frozen=True)
class FeatureSpec:
    """How a feature behaves when it is not set explicitly."""

    default: bool
    pre_release: PreRelease = PreRelease.GA
    lock_to_default: bool = False


def _parse_bool(key: str, raw: str) -> bool:
    if raw in _TRUE_WORDS:
        return True
    if raw in _FALSE_WORDS:
        return False
    raise ValueError(f"invalid value of {key}={raw}, err: invalid syntax")


class FeatureGate:
    """A set of known features, each enabled or disabled."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._known: dict[str, FeatureSpec] = {}
        self._enabled: dict[str, bool] = {}

    def add(self, specs: Mapping[str, FeatureSpec]) -> None:
        """Register features; redefining one with a different spec is an error."""
        with self._lock:
            known = dict(self._known)
            for name, spec in specs.items():
                existing = known.get(name)
                if existing is not None:
                    if existing == spec:
                        continue
                    raise ValueError(
                        f"feature gate {name!r} with different spec already exists: {existing}"
                    )
                known[name] = spec
            self._known = known

    def set(self, value: str) -> None:
        """Apply a string such as ``"A=true,B=false"``; nothing changes on error."""
        overrides: dict[str, bool] = {}
        for item in value.split(","):
            item = item.strip()
            if not item:
                continue
            key, sep, raw = item.partition("=")
            key = key.strip()
            if not sep:
                raise ValueError(f"missing bool value for {key}")
            overrides[key] = _parse_bool(key, raw.strip())
        self._apply(overrides)

    def _apply(self, overrides: Mapping[str, bool]) -> None:
        with self._lock:
            enabled = dict(self._enabled)
            for key, value in overrides.items():
                spec = self._known.get(key)
                if spec is None:
                    raise ValueError(f"unrecognized feature gate: {key}")
                if spec.lock_to_default and spec.default != value:
                    raise ValueError(
                        f"cannot set feature gate {key} to {value}, "
                        f"feature is locked to {spec.default}"
                    )
                enabled[key] = value
            self._enabled = enabled

    def enabled(self, feature: str) -> bool:
        """Return whether ``feature`` is on; unknown features raise KeyError."""
        if feature in self._enabled:
            return self._enabled[feature]
        spec = self._known.get(feature)
        if spec is None:
            raise KeyError(f"feature {feature!r} is not registered in FeatureGate")
        return spec.default


GENERATE_CONFIG_IN_INIT_CONTAINER = "GenerateConfigInInitContainer"
"""Generate the Redis configuration in an init container instead of a regular one."""

DEFAULT_REDIS_OPERATOR_FEATURE_GATES: dict[str, FeatureSpec] = {
    GENERATE_CONFIG_IN_INIT_CONTAINER: FeatureSpec(default=False, pre_release=PreRelease.ALPHA),
}

MUTABLE_FEATURE_GATE = FeatureGate()
MUTABLE_FEATURE_GATE.add(DEFAULT_REDIS_OPERATOR_FEATURE_GATES)


def enabled(feature: str) -> bool:
    """Return whether ``feature`` is on in the operator's feature gate."""
    return MUTABLE_FEATURE_GATE.enabled(feature)