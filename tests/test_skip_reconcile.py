import pytest

from rediskube.meta import ObjectMeta, Resource
from rediskube.skip_reconcile import (
    REDIS_CLUSTER_SKIP_RECONCILE_ANNOTATION,
    REDIS_REPLICATION_SKIP_RECONCILE_ANNOTATION,
    REDIS_SENTINEL_SKIP_RECONCILE_ANNOTATION,
    REDIS_SKIP_RECONCILE_ANNOTATION,
    is_skip_reconcile,
)

KINDS = [
    ("RedisCluster", REDIS_CLUSTER_SKIP_RECONCILE_ANNOTATION),
    ("Redis", REDIS_SKIP_RECONCILE_ANNOTATION),
    ("RedisReplication", REDIS_REPLICATION_SKIP_RECONCILE_ANNOTATION),
    ("RedisSentinel", REDIS_SENTINEL_SKIP_RECONCILE_ANNOTATION),
]


def _resource(kind, annotations):
    return Resource(
        kind=kind,
        metadata=ObjectMeta(name="skip-test", namespace="default", annotations=annotations),
    )


@pytest.mark.parametrize("kind,key", KINDS)
def test_true_annotation_skips(kind, key):
    assert is_skip_reconcile(_resource(kind, {key: "true"})) is True


@pytest.mark.parametrize("kind,key", KINDS)
def test_false_annotation_does_not_skip(kind, key):
    assert is_skip_reconcile(_resource(kind, {key: "false"})) is False


@pytest.mark.parametrize("kind,_key", KINDS)
def test_no_annotations(kind, _key):
    assert is_skip_reconcile(_resource(kind, {})) is False


def test_annotation_of_other_kind_is_ignored():
    obj = _resource("Redis", {REDIS_CLUSTER_SKIP_RECONCILE_ANNOTATION: "true"})
    assert is_skip_reconcile(obj) is False


def test_unknown_kind_never_skips():
    obj = _resource("Deployment", {REDIS_SKIP_RECONCILE_ANNOTATION: "true"})
    assert is_skip_reconcile(obj) is False


def test_bare_metadata_never_skips():
    meta = ObjectMeta(name="x", annotations={REDIS_SKIP_RECONCILE_ANNOTATION: "true"})
    assert is_skip_reconcile(meta) is False


@pytest.mark.parametrize(
    "kind,literal_key",
    [
        ("Redis", "redis.opstreelabs.in/skip-reconcile"),
        ("RedisCluster", "rediscluster.opstreelabs.in/skip-reconcile"),
        ("RedisReplication", "redisreplication.opstreelabs.in/skip-reconcile"),
        ("RedisSentinel", "redissentinel.opstreelabs.in/skip-reconcile"),
    ],
)
def test_literal_annotation_keys_are_honoured(kind, literal_key):
    assert is_skip_reconcile(_resource(kind, {literal_key: "true"})) is True