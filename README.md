# rediskube

Building blocks for a controller that runs Redis on Kubernetes. It covers
standalone, replication, sentinel and cluster setups. The package holds the
parts of reconciliation that can run without a live API server or Redis
connection. Cluster and Redis access is passed in as plain objects that you
supply.

## Modules

- `rediskube.env` reads the operator's settings from the environment.
  - `get_watch_namespaces()` splits `WATCH_NAMESPACE` on commas and trims
    each entry. It returns `None` when the variable is empty.
  - `get_max_concurrent_reconciles(default_value)` reads
    `MAX_CONCURRENT_RECONCILES`. It falls back to the default when the value
    is missing or not an integer.
  - `is_webhook_enabled()` is true unless `ENABLE_WEBHOOKS` is exactly
    `false`.
  - `get_feature_gates()` and `get_operator_image()` return the raw values
    of `FEATURE_GATES` and `OPERATOR_IMAGE`.
- `rediskube.features` holds the feature gates.
  - `FeatureGate` has `add(specs)`, `set("A=true,B=false")` and
    `enabled(feature)`. `set` raises `ValueError` for unknown or locked
    features and for bad values. `enabled` raises `KeyError` for an
    unregistered feature.
  - `FeatureSpec` and `PreRelease` describe each feature.
  - `MUTABLE_FEATURE_GATE` comes with `GenerateConfigInInitContainer`
    registered (alpha, off by default). The module-level `enabled(feature)`
    queries it.
- `rediskube.image`: `get_operator_image(override)` returns the override,
  or `quay.io/opstree/redis-operator:latest` when none is given.
- `rediskube.meta` holds the object model and the shared constants.
  - The types are `ObjectMeta`, `Resource`, `NamespacedName`, `TypeMeta`,
    `OwnerReference`, `LabelSelector` and `NotFoundError`.
  - `ObjectMeta` has the finalizer helpers `has_finalizer`, `add_finalizer`
    and `remove_finalizer`.
  - `is_deleted(obj)` reports whether the object has a deletion timestamp.
- `rediskube.reconcile` builds reconcile results.
  - `reconciled()` and `requeue_after(duration, msg)` return a `Result`.
  - `requeue_error(err, msg)` logs the error and raises it.
  - `requeue_error_check(err, msg)` treats `NotFoundError` as done and
    raises any other error.
  - `ResourceWatcher` maps watched objects to their dependents. Its
    `create`, `update`, `delete` and `generic` methods call `queue.put(...)`
    with every dependent of the changed object.
- `rediskube.labels` builds labels, annotations, selectors and owner
  references.
  - Labels: `get_redis_labels`, `get_redis_stable_labels` and
    `extract_statefulset_selector_labels`.
  - Annotations: `generate_statefulset_annotations`,
    `generate_service_annotations` and `filter_annotations`.
  - Selectors and owners: `label_selectors`, `as_owner` and
    `add_owner_ref_to_object`.
  - `SetupType` names the four setup types.
- `rediskube.finalizer` runs the deletion finalizers.
  - The handlers are `handle_redis_finalizer`,
    `handle_redis_cluster_finalizer`, `handle_redis_replication_finalizer`
    and `handle_redis_sentinel_finalizer`. `add_finalizer` adds a finalizer
    and saves the object.
  - Unless `Storage.keep_after_delete` is set, the handlers delete the
    persistent volume claims of the setup. Claims that are already gone are
    skipped. The claim prefix can be overridden with
    `OPERATOR_STS_PVC_TEMPLATE_NAME`.
  - The client needs `update(obj)` and `delete_pvc(namespace, name)`.
- `rediskube.skip_reconcile`: `is_skip_reconcile(obj)` is true when the
  skip annotation for the resource's kind is set to `"true"`. The kinds are
  `Redis`, `RedisCluster`, `RedisReplication` and `RedisSentinel`.
- `rediskube.events`: `Recorder` collects `Event`s in order.
- `rediskube.pdb` handles PodDisruptionBudgets.
  - `generate_pdb_def` builds a budget. When neither limit is given, it
    keeps a quorum of `size // 2 + 1`.
  - `reconcile_cluster_pdb`, `reconcile_sentinel_pdb` and
    `reconcile_replication_pdb` create or update the budget when it is
    enabled, and delete it otherwise.
  - `create_or_update_pdb` updates a stored budget only when it changed. It
    ignores the selector and tracks the last applied state in an
    annotation.
  - The client needs `get_pdb`, `create_pdb`, `update_pdb` and
    `delete_pdb`.
- `rediskube.cluster_slots` queries a cluster node.
  - `verify_leader_pod_info` reports whether the node is a master.
  - `get_redis_cluster_slots` returns the number of slots a node serves, as
    a string. It returns `""` when the query fails.
  - `get_attached_follower_node_ids` returns the replica node ids. It
    returns `None` when the query fails.
  - The client needs `info`, `cluster_slots` and `cluster_slaves`.

## Example

```python
from rediskube.labels import SetupType, get_redis_labels
from rediskube.meta import NamespacedName
from rediskube.reconcile import ResourceWatcher, requeue_after

labels = get_redis_labels("cache", SetupType.REPLICATION, "replication", {"team": "web"})
# {'app': 'cache', 'redis_setup_type': 'replication', 'role': 'replication', 'team': 'web'}

watcher = ResourceWatcher()
watcher.watch(NamespacedName("default", "cache"), NamespacedName("default", "cache-sentinel"))
watcher.dependents(NamespacedName("default", "cache"))
# [NamespacedName(namespace='default', name='cache-sentinel')]

result = requeue_after(10.0, "waiting for replication")
# Result(requeue=True, requeue_after=datetime.timedelta(seconds=10))
```

## What it does not do

This package is not a running operator. It has no command to start, no
controller loop and no Kubernetes API client. It does not connect to Redis
and builds no statefulsets, services or sentinel configuration. Every
function that touches a cluster or a Redis node works through a client
object that you pass in.

## Installing and testing

```
pip install .
pip install .[test]
pytest
```