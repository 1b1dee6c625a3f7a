"""Object metadata shared by the resources the operator manages."""

from dataclasses import dataclass, field
from datetime import datetime

ANNOTATION_KEY_RECREATE_STATEFULSET = "redis.opstreelabs.in/recreate-statefulset"
ANNOTATION_KEY_RECREATE_STATEFULSET_STRATEGY = "redis.opstreelabs.in/recreate-statefulset-strategy"

ENV_OPERATOR_STS_PVC_TEMPLATE_NAME = "OPERATOR_STS_PVC_TEMPLATE_NAME"

REDIS_ROLE_LABEL_KEY = "redis-role"
REDIS_ROLE_LABEL_MASTER = "master"
REDIS_ROLE_LABEL_SLAVE = "slave"

VOLUME_NAME_CONFIG = "config"


class NotFoundError(LookupError):
    """Raised when a requested object does not exist."""


@dataclass(frozen=True)
class NamespacedName:
    """Identifies an object by namespace and name."""

    namespace: str
    name: str

    def __str__(self) -> str:
        return f"{self.namespace}/{self.name}"


@dataclass
class TypeMeta:
    """Kind and API version of an object."""

    kind: str = ""
    api_version: str = ""


@dataclass
class OwnerReference:
    """Points from a dependent object to the object that owns it."""

    api_version: str
    kind: str
    name: str
    uid: str
    controller: bool | None = None


@dataclass
class LabelSelector:
    """Selects objects whose labels contain all of ``match_labels``."""

    match_labels: dict[str, str] = field(default_factory=dict)


@dataclass
class ObjectMeta:
    """Standard metadata carried by every object."""

    name: str = ""
    namespace: str = ""
    labels: dict[str, str] = field(default_factory=dict)
    annotations: dict[str, str] = field(default_factory=dict)
    uid: str = ""
    resource_version: str = ""
    creation_timestamp: datetime | None = None
    deletion_timestamp: datetime | None = None
    owner_references: list[OwnerReference] = field(default_factory=list)
    finalizers: list[str] = field(default_factory=list)
    managed_fields: list[dict] = field(default_factory=list)

    def has_finalizer(self, finalizer: str) -> bool:
        return finalizer in self.finalizers

    def add_finalizer(self, finalizer: str) -> bool:
        """Add ``finalizer`` if absent; return whether it was added."""
        if finalizer in self.finalizers:
            return False
        self.finalizers.append(finalizer)
        return True

    def remove_finalizer(self, finalizer: str) -> bool:
        """Remove every occurrence of ``finalizer``; return whether any was removed."""
        kept = [f for f in self.finalizers if f != finalizer]
        removed = len(kept) != len(self.finalizers)
        self.finalizers = kept
        return removed


@dataclass
class Resource:
    """A named, typed object with metadata."""

    kind: str = ""
    api_version: str = ""
    metadata: ObjectMeta = field(default_factory=ObjectMeta)

    @property
    def name(self) -> str:
        return self.metadata.name

    @property
    def namespace(self) -> str:
        return self.metadata.namespace

    @property
    def uid(self) -> str:
        return self.metadata.uid

    @property
    def labels(self) -> dict[str, str]:
        return self.metadata.labels

    @property
    def annotations(self) -> dict[str, str]:
        return self.metadata.annotations

    def namespaced_name(self) -> NamespacedName:
        return NamespacedName(self.metadata.namespace, self.metadata.name)


def metadata_of(obj: Resource | ObjectMeta) -> ObjectMeta:
    """Return the metadata of a resource, or the metadata itself."""
    return obj.metadata if isinstance(obj, Resource) else obj


def is_deleted(obj: Resource | ObjectMeta) -> bool:
    """Return whether the object has been marked for deletion."""
    return metadata_of(obj).deletion_timestamp is not None