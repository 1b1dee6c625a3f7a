"""Detect the annotation that tells the operator to leave a resource alone."""

import logging

from rediskube.meta import ObjectMeta, Resource, metadata_of

logger = logging.getLogger(__name__)

REDIS_CLUSTER_SKIP_RECONCILE_ANNOTATION = "rediscluster.opstreelabs.in/skip-reconcile"
REDIS_SKIP_RECONCILE_ANNOTATION = "redis.opstreelabs.in/skip-reconcile"
REDIS_REPLICATION_SKIP_RECONCILE_ANNOTATION = "redisreplication.opstreelabs.in/skip-reconcile"
REDIS_SENTINEL_SKIP_RECONCILE_ANNOTATION = "redissentinel.opstreelabs.in/skip-reconcile"

_ANNOTATION_BY_KIND = {
    "RedisCluster": REDIS_CLUSTER_SKIP_RECONCILE_ANNOTATION,
    "Redis": REDIS_SKIP_RECONCILE_ANNOTATION,
    "RedisReplication": REDIS_REPLICATION_SKIP_RECONCILE_ANNOTATION,
    "RedisSentinel": REDIS_SENTINEL_SKIP_RECONCILE_ANNOTATION,
}


def is_skip_reconcile(obj: Resource | ObjectMeta) -> bool:
    """Return whether the skip annotation for the object's kind is set to ``true``."""
    meta = metadata_of(obj)
    if not meta.annotations or not isinstance(obj, Resource):
        return False
    key = _ANNOTATION_BY_KIND.get(obj.kind)
    skip = key is not None and meta.annotations.get(key) == "true"
    if skip:
        logger.info(
            "found skip reconcile annotation namespace=%s name=%s", meta.namespace, meta.name
        )
    return skip