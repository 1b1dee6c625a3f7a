"""Reconcile results and the watcher that fans changes out to dependents."""

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, NoReturn, Protocol

from rediskube.meta import NamespacedName, NotFoundError, ObjectMeta, Resource, metadata_of

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Result:
    """Outcome of one reconcile pass."""

    requeue: bool = False
    requeue_after: timedelta = timedelta(0)


def _describe(msg: str, fields: dict[str, Any]) -> str:
    pairs = " ".join(f"{key}={value}" for key, value in fields.items())
    return f"{msg} {pairs}" if pairs else msg


def reconciled() -> Result:
    """The object is in the desired state; do not requeue."""
    return Result()


def requeue_after(duration: timedelta | float, msg: str = "", **kwargs: Any) -> Result:
    """Ask for another pass after ``duration`` (a timedelta or seconds)."""
    if not isinstance(duration, timedelta):
        duration = timedelta(seconds=duration)
    kwargs["duration"] = f"{duration.total_seconds():g}s"
    logger.debug(_describe(msg or "requeue-after", kwargs))
    return Result(requeue=True, requeue_after=duration)


def requeue_error(err: BaseException, msg: str = "", **kwargs: Any) -> NoReturn:
    """Log ``err`` and raise it so the pass is retried."""
    logger.error(_describe(msg or "requeue with error", kwargs), exc_info=err)
    raise err


def requeue_error_check(err: BaseException, msg: str = "", **kwargs: Any) -> Result:
    """Treat a missing object as done; raise any other error."""
    if isinstance(err, NotFoundError):
        return reconciled()
    requeue_error(err, msg, **kwargs)


class _Queue(Protocol):
    def put(self, item: NamespacedName) -> None: ...


class ResourceWatcher:
    """Maps watched objects of one type to the objects that depend on them."""

    def __init__(self) -> None:
        self._watched: dict[NamespacedName, list[NamespacedName]] = {}

    def watch(self, watched: NamespacedName, dependent: NamespacedName) -> None:
        """Reconcile ``dependent`` whenever ``watched`` changes."""
        dependents = self._watched.setdefault(watched, [])
        if dependent not in dependents:
            dependents.append(dependent)

    def dependents(self, watched: NamespacedName) -> list[NamespacedName]:
        return list(self._watched.get(watched, ()))

    def create(self, obj: Resource | ObjectMeta, queue: _Queue) -> None:
        self._handle(obj, queue)

    def update(self, old: Resource | ObjectMeta, new: Resource | ObjectMeta, queue: _Queue) -> None:
        self._handle(old, queue)

    def delete(self, obj: Resource | ObjectMeta, queue: _Queue) -> None:
        self._handle(obj, queue)

    def generic(self, obj: Resource | ObjectMeta, queue: _Queue) -> None:
        self._handle(obj, queue)

    def _handle(self, obj: Resource | ObjectMeta, queue: _Queue) -> None:
        meta = metadata_of(obj)
        changed = NamespacedName(meta.namespace, meta.name)
        for dependent in self._watched.get(changed, ()):
            queue.put(dependent)