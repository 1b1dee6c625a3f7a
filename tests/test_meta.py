from datetime import datetime, timezone

from rediskube.meta import (
    NamespacedName,
    ObjectMeta,
    Resource,
    is_deleted,
)


def make_resource(**meta):
    return Resource(kind="Redis", api_version="v1beta2", metadata=ObjectMeta(**meta))


def test_namespaced_name_from_resource():
    res = make_resource(name="cache", namespace="prod")
    assert res.namespaced_name() == NamespacedName("prod", "cache")
    assert str(res.namespaced_name()) == "prod/cache"


def test_namespaced_name_is_hashable_and_equal():
    assert {NamespacedName("a", "b"): 1}[NamespacedName("a", "b")] == 1


def test_resource_properties_follow_metadata():
    res = make_resource(name="cache", namespace="prod", uid="uid-1", labels={"k": "v"})
    assert (res.name, res.namespace, res.uid, res.labels) == ("cache", "prod", "uid-1", {"k": "v"})


def test_add_finalizer_only_once():
    meta = ObjectMeta()
    assert meta.add_finalizer("redisFinalizer") is True
    assert meta.add_finalizer("redisFinalizer") is False
    assert meta.finalizers == ["redisFinalizer"]
    assert meta.has_finalizer("redisFinalizer") is True


def test_remove_finalizer():
    meta = ObjectMeta(finalizers=["a", "redisFinalizer", "b"])
    assert meta.remove_finalizer("redisFinalizer") is True
    assert meta.finalizers == ["a", "b"]
    assert meta.has_finalizer("redisFinalizer") is False
    assert meta.remove_finalizer("redisFinalizer") is False


def test_is_deleted():
    assert is_deleted(make_resource()) is False
    stamp = datetime(2024, 1, 1, tzinfo=timezone.utc)
    assert is_deleted(make_resource(deletion_timestamp=stamp)) is True
    assert is_deleted(ObjectMeta(deletion_timestamp=stamp)) is True


def test_metadata_defaults_are_independent():
    first, second = ObjectMeta(), ObjectMeta()
    first.labels["x"] = "y"
    first.add_finalizer("f")
    assert second.labels == {}
    assert second.finalizers == []