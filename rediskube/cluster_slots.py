"""Queries against a Redis cluster node about roles, slots and replicas."""

import logging
from collections.abc import Iterable, Sequence
from typing import Protocol

logger = logging.getLogger(__name__)


class _ClusterNode(Protocol):
    id: str


class _ClusterSlot(Protocol):
    start: int
    end: int
    nodes: Sequence[_ClusterNode]


class _RedisClient(Protocol):
    def info(self, section: str) -> str: ...

    def cluster_slots(self) -> Iterable[_ClusterSlot]: ...

    def cluster_slaves(self, node_id: str) -> Iterable[str] | None: ...


def verify_leader_pod_info(redis_client: _RedisClient, pod_name: str) -> bool:
    """Return whether the node behind ``redis_client`` reports the master role."""
    try:
        info = redis_client.info("replication")
    except Exception:
        logger.exception("Failed to Get the role Info of the redis pod %s", pod_name)
        return False
    for line in info.split("\r\n"):
        if line.startswith("role:"):
            return line[len("role:"):] == "master"
    return False


def get_redis_cluster_slots(redis_client: _RedisClient, node_id: str) -> str:
    """Return how many slots ``node_id`` serves, as a string; empty on failure."""
    try:
        slots = redis_client.cluster_slots()
    except Exception:
        logger.exception("Failed to Get Cluster Slots")
        return ""
    total = sum(
        slot.end - slot.start + 1
        for slot in slots
        if any(node.id == node_id for node in slot.nodes)
    )
    logger.debug("Total cluster slots to be transferred from node %s is %d", node_id, total)
    return str(total)


def get_attached_follower_node_ids(
    redis_client: _RedisClient, master_node_id: str
) -> list[str] | None:
    """Return the node ids of the replicas attached to ``master_node_id``.

    Returns None when the cluster could not be queried.
    """
    try:
        replicas = redis_client.cluster_slaves(master_node_id)
    except Exception:
        logger.exception(
            "Failed to get attached follower node IDs masterNodeID=%s", master_node_id
        )
        return None
    ids = [line.split(" ")[0] for line in replicas or ()]
    logger.debug("Slaves Nodes attached to node %s are %s", master_node_id, ids)
    return ids