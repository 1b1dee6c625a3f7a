"""Operator settings read from environment variables."""

import os
import re

WATCH_NAMESPACE_ENV = "WATCH_NAMESPACE"
"""Namespaces the operator watches for resources, comma separated."""

MAX_CONCURRENT_RECONCILES_ENV = "MAX_CONCURRENT_RECONCILES"
"""Maximum number of reconciles that may run at the same time."""

ENABLE_WEBHOOKS_ENV = "ENABLE_WEBHOOKS"
"""Whether admission webhooks are enabled."""

FEATURE_GATES_ENV = "FEATURE_GATES"
"""Feature gates for alpha or experimental features."""

OPERATOR_IMAGE_ENV = "OPERATOR_IMAGE"
"""Container image of the operator itself."""

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def get_operator_image() -> str:
    """Return the operator image from the environment, or an empty string."""
    return os.environ.get(OPERATOR_IMAGE_ENV, "")


def get_watch_namespaces() -> list[str] | None:
    """Return the namespaces to watch, or None when all namespaces are watched."""
    value = os.environ.get(WATCH_NAMESPACE_ENV, "").strip()
    if not value:
        return None
    namespaces = [ns.strip() for ns in value.split(",") if ns.strip()]
    return namespaces or None


def get_max_concurrent_reconciles(default_value: int) -> int:
    """Return the configured reconcile concurrency, falling back to ``default_value``."""
    raw = os.environ.get(MAX_CONCURRENT_RECONCILES_ENV, "")
    if raw and _INTEGER.fullmatch(raw):
        value = int(raw)
        if _INT64_MIN <= value <= _INT64_MAX:
            return value
    return default_value


def is_webhook_enabled() -> bool:
    """Webhooks are on unless the variable is exactly ``false``."""
    return os.environ.get(ENABLE_WEBHOOKS_ENV, "") != "false"


def get_feature_gates() -> str:
    """Return the raw feature gate string."""
    return os.environ.get(FEATURE_GATES_ENV, "")