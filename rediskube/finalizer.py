"""Finalizers that clean up persistent volume claims when a resource is deleted."""

import logging
import os
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Protocol

from rediskube.meta import ENV_OPERATOR_STS_PVC_TEMPLATE_NAME, NotFoundError, Resource, is_deleted

logger = logging.getLogger(__name__)

REDIS_FINALIZER = "redisFinalizer"
REDIS_CLUSTER_FINALIZER = "redisClusterFinalizer"
REDIS_REPLICATION_FINALIZER = "redisReplicationFinalizer"
REDIS_SENTINEL_FINALIZER = "redisSentinelFinalizer"


@dataclass
class Storage:
    """Storage settings that decide what is cleaned up on deletion."""

    keep_after_delete: bool = False
    node_conf_volume: bool = False


class Client(Protocol):
    """The cluster operations the finalizers need."""

    def update(self, obj: Resource) -> None: ...

    def delete_pvc(self, namespace: str, name: str) -> None:
        """Delete a claim; raise NotFoundError when it does not exist."""
        ...


def _pvc_template_name(default: str) -> str:
    return os.environ.get(ENV_OPERATOR_STS_PVC_TEMPLATE_NAME, default)


def _delete_pvcs(client: Client, namespace: str, names: Iterator[str]) -> None:
    for name in names:
        try:
            client.delete_pvc(namespace, name)
        except NotFoundError:
            continue
        except Exception:
            logger.exception("Could not delete Persistent Volume Claim %s", name)
            raise


def _finish(client: Client, cr: Resource, finalizer: str) -> None:
    cr.metadata.remove_finalizer(finalizer)
    try:
        client.update(cr)
    except Exception:
        logger.exception("Could not remove finalizer %s", finalizer)
        raise


def _should_clean(storage: Storage | None) -> bool:
    return storage is not None and not storage.keep_after_delete


def handle_redis_finalizer(client: Client, cr: Resource, storage: Storage | None) -> None:
    """Finalize a standalone Redis that is marked for deletion."""
    if not is_deleted(cr) or not cr.metadata.has_finalizer(REDIS_FINALIZER):
        return
    if _should_clean(storage):
        template = _pvc_template_name(cr.name)
        _delete_pvcs(client, cr.namespace, iter([f"{template}-{cr.name}-0"]))
    _finish(client, cr, REDIS_FINALIZER)


def _cluster_pvc_names(
    cr: Resource, storage: Storage, leader_replicas: int, follower_replicas: int
) -> Iterator[str]:
    for role, count in (("leader", leader_replicas), ("follower", follower_replicas)):
        template = _pvc_template_name(f"{cr.name}-{role}")
        for i in range(count):
            yield f"{template}-{cr.name}-{role}-{i}"
        if storage.node_conf_volume:
            for i in range(count):
                yield f"node-conf-{cr.name}-{role}-{i}"


def handle_redis_cluster_finalizer(
    client: Client,
    cr: Resource,
    storage: Storage | None,
    leader_replicas: int,
    follower_replicas: int,
) -> None:
    """Finalize a Redis cluster that is marked for deletion."""
    if not is_deleted(cr) or not cr.metadata.has_finalizer(REDIS_CLUSTER_FINALIZER):
        return
    if _should_clean(storage):
        _delete_pvcs(
            client,
            cr.namespace,
            _cluster_pvc_names(cr, storage, leader_replicas, follower_replicas),
        )
    _finish(client, cr, REDIS_CLUSTER_FINALIZER)


def handle_redis_replication_finalizer(
    client: Client, cr: Resource, storage: Storage | None, replicas: int
) -> None:
    """Finalize a Redis replication that is marked for deletion."""
    if not is_deleted(cr) or not cr.metadata.has_finalizer(REDIS_REPLICATION_FINALIZER):
        return
    if _should_clean(storage):
        template = _pvc_template_name(cr.name)
        names = (f"{template}-{cr.name}-{i}" for i in range(replicas))
        _delete_pvcs(client, cr.namespace, names)
    _finish(client, cr, REDIS_REPLICATION_FINALIZER)


def handle_redis_sentinel_finalizer(client: Client, cr: Resource) -> None:
    """Finalize a Redis sentinel that is marked for deletion."""
    if is_deleted(cr) and cr.metadata.has_finalizer(REDIS_SENTINEL_FINALIZER):
        _finish(client, cr, REDIS_SENTINEL_FINALIZER)


def add_finalizer(cr: Resource, finalizer: str, client: Client) -> None:
    """Add ``finalizer`` and save the object, unless it is already present."""
    if cr.metadata.add_finalizer(finalizer):
        client.update(cr)