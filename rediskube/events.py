"""A simple in-memory recorder of events emitted during reconciliation."""

from dataclasses import dataclass, field

EVENT_REASON_REDIS_CLUSTER_DOWNSCALE = "RedisClusterDownscale"


@dataclass(frozen=True)
class Event:
    """One recorded event."""

    event_type: str
    reason: str
    message: str


@dataclass
class Recorder:
    """Collects events in the order they were added."""

    _events: list[Event] = field(default_factory=list)

    def add_event(self, event_type: str, reason: str, message: str) -> None:
        self._events.append(Event(event_type, reason, message))

    @property
    def events(self) -> list[Event]:
        return list(self._events)