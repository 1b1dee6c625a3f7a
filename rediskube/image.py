"""The container image the operator runs from."""

DEFAULT_OPERATOR_IMAGE = "quay.io/opstree/redis-operator:latest"


def get_operator_image(override: str | None = None) -> str:
    """Return ``override`` when it is set, else the default operator image."""
    return override or DEFAULT_OPERATOR_IMAGE