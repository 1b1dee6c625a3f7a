"""Pod disruption budgets for the Redis workloads."""

import copy
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Protocol

from rediskube.labels import (
    SetupType,
    add_owner_ref_to_object,
    as_owner,
    generate_object_meta_information,
    generate_statefulset_annotations,
    get_redis_labels,
    label_selectors,
)
from rediskube.meta import LabelSelector, NotFoundError, ObjectMeta, Resource

logger = logging.getLogger(__name__)

PDB_KIND = "PodDisruptionBudget"
PDB_API_VERSION = "policy/v1"
LAST_APPLIED_ANNOTATION = "banzaicloud.com/last-applied"


@dataclass
class PodDisruptionBudgetParams:
    """User settings for a disruption budget."""

    enabled: bool = False
    min_available: int | None = None
    max_unavailable: int | None = None


@dataclass
class PodDisruptionBudget(Resource):
    """A disruption budget limiting how many selected pods may be down at once."""

    kind: str = PDB_KIND
    api_version: str = PDB_API_VERSION
    selector: LabelSelector = field(default_factory=LabelSelector)
    min_available: int | None = None
    max_unavailable: int | None = None


class Client(Protocol):
    """The cluster operations on disruption budgets."""

    def get_pdb(self, namespace: str, name: str) -> PodDisruptionBudget:
        """Return the stored budget; raise NotFoundError when there is none."""
        ...

    def create_pdb(self, namespace: str, pdb: PodDisruptionBudget) -> None: ...

    def update_pdb(self, namespace: str, pdb: PodDisruptionBudget) -> None: ...

    def delete_pdb(self, namespace: str, name: str) -> None: ...


def generate_pdb_def(
    owner: Resource,
    selector_app: str,
    role: str,
    meta: ObjectMeta,
    params: PodDisruptionBudgetParams,
    size: int,
) -> PodDisruptionBudget:
    """Build a budget; with neither limit given, keep a quorum of ``size // 2 + 1``."""
    pdb = PodDisruptionBudget(
        metadata=meta,
        selector=label_selectors({"app": selector_app, "role": role}),
        min_available=params.min_available,
        max_unavailable=params.max_unavailable,
    )
    if pdb.min_available is None and pdb.max_unavailable is None:
        pdb.min_available = size // 2 + 1
    add_owner_ref_to_object(pdb, as_owner(owner))
    return pdb


def _reconcile(
    cr: Resource,
    pdb_name: str,
    enabled: bool,
    build,
    client: Client,
) -> None:
    if enabled:
        create_or_update_pdb(build(), client)
        return
    try:
        client.get_pdb(cr.namespace, pdb_name)
    except NotFoundError:
        logger.debug("Reconciliation Successful, no PodDisruptionBudget Found.")
        return
    _delete_pdb(cr.namespace, pdb_name, client)


def _meta(cr: Resource, pdb_name: str, setup_type: SetupType, role: str, ignore) -> ObjectMeta:
    labels = get_redis_labels(cr.name, setup_type, role, cr.labels)
    annotations = generate_statefulset_annotations(cr.metadata, ignore)
    return generate_object_meta_information(pdb_name, cr.namespace, labels, annotations)


def reconcile_cluster_pdb(
    cr: Resource,
    role: str,
    params: PodDisruptionBudgetParams | None,
    leader_params: PodDisruptionBudgetParams | None,
    size: int,
    ignore_annotations: list[str] | None,
    client: Client,
) -> None:
    """Create, update or remove the budget of one cluster role.

    Whether a budget exists follows ``params``; its limits follow the leader's
    settings, falling back to ``params`` when the leader has none.
    """
    pdb_name = f"{cr.name}-{role}"

    def build() -> PodDisruptionBudget:
        meta = _meta(cr, pdb_name, SetupType.CLUSTER, role, ignore_annotations)
        source = leader_params if leader_params is not None else params
        return generate_pdb_def(cr, f"{cr.name}-{role}", role, meta, source, size)

    _reconcile(cr, pdb_name, params is not None and params.enabled, build, client)


def reconcile_sentinel_pdb(
    cr: Resource,
    params: PodDisruptionBudgetParams | None,
    size: int,
    ignore_annotations: list[str] | None,
    client: Client,
) -> None:
    """Create, update or remove the sentinel budget."""
    pdb_name = f"{cr.name}-sentinel"

    def build() -> PodDisruptionBudget:
        meta = _meta(cr, pdb_name, SetupType.SENTINEL, "sentinel", ignore_annotations)
        return generate_pdb_def(cr, f"{cr.name}-sentinel", "sentinel", meta, params, size)

    _reconcile(cr, pdb_name, params is not None and params.enabled, build, client)


def reconcile_replication_pdb(
    cr: Resource,
    params: PodDisruptionBudgetParams | None,
    size: int,
    ignore_annotations: list[str] | None,
    client: Client,
) -> None:
    """Create, update or remove the replication budget."""
    pdb_name = f"{cr.name}-replication"

    def build() -> PodDisruptionBudget:
        meta = _meta(cr, pdb_name, SetupType.REPLICATION, "replication", ignore_annotations)
        return generate_pdb_def(cr, cr.name, "replication", meta, params, size)

    _reconcile(cr, pdb_name, params is not None and params.enabled, build, client)


def _compact(values: dict[str, Any]) -> dict[str, Any]:
    return {k: v for k, v in values.items() if v not in (None, {}, [], "")}


def _to_dict(pdb: PodDisruptionBudget) -> dict[str, Any]:
    meta = pdb.metadata
    annotations = {k: v for k, v in meta.annotations.items() if k != LAST_APPLIED_ANNOTATION}
    owners = [
        _compact(
            {
                "apiVersion": ref.api_version,
                "kind": ref.kind,
                "name": ref.name,
                "uid": ref.uid,
                "controller": ref.controller,
            }
        )
        for ref in meta.owner_references
    ]
    metadata = _compact(
        {
            "name": meta.name,
            "namespace": meta.namespace,
            "labels": dict(meta.labels),
            "annotations": annotations,
            "ownerReferences": owners,
        }
    )
    selector = _compact({"matchLabels": dict(pdb.selector.match_labels)})
    spec = _compact(
        {
            "minAvailable": pdb.min_available,
            "maxUnavailable": pdb.max_unavailable,
            "selector": selector,
        }
    )
    return _compact(
        {"apiVersion": pdb.api_version, "kind": pdb.kind, "metadata": metadata, "spec": spec}
    )


def _set_last_applied(pdb: PodDisruptionBudget) -> None:
    pdb.metadata.annotations[LAST_APPLIED_ANNOTATION] = json.dumps(
        _to_dict(pdb), sort_keys=True, separators=(",", ":")
    )


def _without_selector(obj: dict[str, Any]) -> dict[str, Any]:
    obj = copy.deepcopy(obj)
    spec = obj.get("spec")
    if isinstance(spec, dict):
        spec.pop("selector", None)
        if not spec:
            obj.pop("spec")
    return obj


def _changes(current: dict[str, Any], modified: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in modified.items():
        present = current.get(key)
        if isinstance(value, dict) and isinstance(present, dict):
            sub = _changes(present, value)
            if sub:
                out[key] = sub
        elif key not in current or present != value:
            out[key] = value
    return out


def _deletions(original: dict[str, Any], modified: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in original.items():
        if key not in modified:
            out[key] = None
        elif isinstance(value, dict) and isinstance(modified[key], dict):
            sub = _deletions(value, modified[key])
            if sub:
                out[key] = sub
    return out


def _merge(left: dict[str, Any], right: dict[str, Any]) -> dict[str, Any]:
    out = dict(left)
    for key, value in right.items():
        if isinstance(value, dict) and isinstance(out.get(key), dict):
            out[key] = _merge(out[key], value)
        else:
            out[key] = value
    return out


def _patch(stored: PodDisruptionBudget, new: PodDisruptionBudget) -> dict[str, Any]:
    current = _without_selector(_to_dict(stored))
    modified = _without_selector(_to_dict(new))
    raw = stored.metadata.annotations.get(LAST_APPLIED_ANNOTATION)
    original = _without_selector(json.loads(raw)) if raw else {}
    return _merge(_changes(current, modified), _deletions(original, modified))


def create_or_update_pdb(pdb: PodDisruptionBudget, client: Client) -> None:
    """Create the budget if it does not exist, otherwise update it when it changed."""
    try:
        stored = client.get_pdb(pdb.namespace, pdb.name)
    except NotFoundError:
        _set_last_applied(pdb)
        _create_pdb(pdb.namespace, pdb, client)
        return
    except Exception:
        _set_last_applied(pdb)
        raise
    _patch_pdb(stored, pdb, client)


def _patch_pdb(stored: PodDisruptionBudget, new: PodDisruptionBudget, client: Client) -> None:
    new.metadata.resource_version = stored.metadata.resource_version
    new.metadata.creation_timestamp = stored.metadata.creation_timestamp
    new.metadata.managed_fields = stored.metadata.managed_fields
    stored.kind = PDB_KIND
    stored.api_version = PDB_API_VERSION

    patch = _patch(stored, new)
    if not patch:
        return
    logger.debug("Changes in PodDisruptionBudget Detected, Updating... patch=%s", patch)
    for key, value in stored.metadata.annotations.items():
        new.metadata.annotations.setdefault(key, value)
    _set_last_applied(new)
    _update_pdb(new.namespace, new, client)


def _create_pdb(namespace: str, pdb: PodDisruptionBudget, client: Client) -> None:
    try:
        client.create_pdb(namespace, pdb)
    except Exception:
        logger.exception("Redis PodDisruptionBudget creation failed")
        raise
    logger.debug("Redis PodDisruptionBudget creation was successful")


def _update_pdb(namespace: str, pdb: PodDisruptionBudget, client: Client) -> None:
    try:
        client.update_pdb(namespace, pdb)
    except Exception:
        logger.exception("Redis PodDisruptionBudget update failed")
        raise
    logger.debug("Redis PodDisruptionBudget update was successful")


def _delete_pdb(namespace: str, name: str, client: Client) -> None:
    try:
        client.delete_pdb(namespace, name)
    except Exception:
        logger.exception("Redis PodDisruption deletion failed")
        raise
    logger.debug("Redis PodDisruption delete was successful")