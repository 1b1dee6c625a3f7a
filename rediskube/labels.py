"""Labels, annotations and owner references stamped on generated objects."""

from collections.abc import Callable, Iterable, Mapping
from enum import Enum

from rediskube.meta import (
    LabelSelector,
    ObjectMeta,
    OwnerReference,
    Resource,
    TypeMeta,
    metadata_of,
)

DEFAULT_EXPORTER_PORT = 9121

_ALWAYS_FILTERED = (
    "kubectl.kubernetes.io/last-applied-configuration",
    "banzaicloud.com/last-applied",
)

ExporterPortProvider = Callable[[], "int | None"]


class SetupType(str, Enum):
    """How a Redis deployment is laid out."""

    STANDALONE = "standalone"
    REPLICATION = "replication"
    CLUSTER = "cluster"
    SENTINEL = "sentinel"


def generate_meta_information(resource_kind: str, api_version: str) -> TypeMeta:
    """Return the type information for an object."""
    return TypeMeta(kind=resource_kind, api_version=api_version)


def generate_object_meta_information(
    name: str,
    namespace: str,
    labels: Mapping[str, str] | None,
    annotations: Mapping[str, str] | None,
) -> ObjectMeta:
    """Return object metadata with the given name, namespace, labels and annotations."""
    return ObjectMeta(
        name=name,
        namespace=namespace,
        labels=dict(labels or {}),
        annotations=dict(annotations or {}),
    )


def add_owner_ref_to_object(obj: Resource | ObjectMeta, owner_ref: OwnerReference) -> None:
    """Append ``owner_ref`` to the object's owner references."""
    metadata_of(obj).owner_references.append(owner_ref)


def as_owner(resource: Resource) -> OwnerReference:
    """Return a controlling owner reference pointing at ``resource``."""
    return OwnerReference(
        api_version=resource.api_version,
        kind=resource.kind,
        name=resource.name,
        uid=resource.uid,
        controller=True,
    )


def filter_annotations(annotations: Mapping[str, str], *args: str) -> dict[str, str]:
    """Drop generated annotations and any keys named in ``args``."""
    dropped = set(_ALWAYS_FILTERED).union(args)
    return {key: value for key, value in annotations.items() if key not in dropped}


def generate_statefulset_annotations(
    sts_meta: ObjectMeta, ignore_annotations: Iterable[str] | None = None
) -> dict[str, str]:
    """Return the annotations for a statefulset built from ``sts_meta``."""
    annotations = {
        "redis.opstreelabs.in": "true",
        "redis.opstreelabs.instance": sts_meta.name,
    }
    annotations.update(sts_meta.annotations or {})
    return filter_annotations(annotations, *(ignore_annotations or ()))


def generate_service_annotations(
    sts_meta: ObjectMeta,
    additional: Mapping[str, str] | None = None,
    exporter_port_provider: ExporterPortProvider | None = None,
) -> dict[str, str]:
    """Return the annotations for a service, including Prometheus scrape hints."""
    annotations = {
        "redis.opstreelabs.in": "true",
        "redis.opstreelabs.instance": sts_meta.name,
        "prometheus.io/scrape": "true",
        "prometheus.io/port": str(DEFAULT_EXPORTER_PORT),
    }
    if exporter_port_provider is not None:
        port = exporter_port_provider()
        if port is not None:
            annotations["prometheus.io/port"] = str(port)
    annotations.update(sts_meta.annotations or {})
    annotations.update(additional or {})
    return filter_annotations(annotations)


def label_selectors(labels: Mapping[str, str]) -> LabelSelector:
    """Return a selector matching all of ``labels``."""
    return LabelSelector(match_labels=dict(labels))


def get_redis_stable_labels(name: str, setup_type: SetupType | str, role: str) -> dict[str, str]:
    """Return the labels that never change for a Redis workload."""
    return {
        "app": name,
        "redis_setup_type": SetupType(setup_type).value if setup_type else "",
        "role": role,
    }


def get_redis_labels(
    name: str,
    setup_type: SetupType | str,
    role: str,
    labels: Mapping[str, str] | None,
) -> dict[str, str]:
    """Return the stable labels merged with the user's labels, the latter winning."""
    result = get_redis_stable_labels(name, setup_type, role)
    result.update(labels or {})
    return result


def extract_statefulset_selector_labels(all_labels: Mapping[str, str]) -> dict[str, str]:
    """Keep only the stable labels, which are safe to use in a statefulset selector."""
    stable_keys = get_redis_stable_labels("", "", "")
    return {key: all_labels[key] for key in stable_keys if key in all_labels}