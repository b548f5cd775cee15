# fieldmatch/core/logging_layer.py
# Event log for registry construction.
#
# Scope: in-memory event records with deterministic IDs and hashes.
# No file IO. No global mutable state. All timestamps are caller-supplied.
# Matchers and printers never log; only MatcherRegistry writes events.
#
# Canonical import:
#   from fieldmatch.core.logging_layer import EventLogger, Event, EventFilter

# ===========================================================================
# SECTION 1 -- STDLIB IMPORTS
# ===========================================================================

import hashlib
import math
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterator, List, Optional

# ===========================================================================
# SECTION 2 -- CONSTANTS
# ===========================================================================

# Logged in place of non-finite floats; the event itself is always kept.
_NAN_SENTINEL: str = "NaN_DETECTED"
_INF_SENTINEL: str = "Inf_DETECTED"

_HASH_SEP: str = "|"

# ===========================================================================
# SECTION 3 -- DATACLASSES: Event, EventFilter
# ===========================================================================

@dataclass(frozen=True)
class Event:
    """
    One recorded event.

    Fields
    ------
    id        : "EVT-" + zero-padded per-logger counter.
    type      : Category string (RECORD_DECLARED, ARTIFACT_BUILT, ...).
    timestamp : Caller-supplied datetime.
    data      : Sanitized payload; NaN/Inf replaced with sentinel strings.
    hash      : SHA-256 hex digest over (id, type, timestamp, data).
    """
    id: str
    type: str
    timestamp: datetime
    data: Dict[str, Any]
    hash: str


@dataclass(frozen=True)
class EventFilter:
    """
    Filter for EventLogger.query_events(). Omitted fields apply no constraint.
    start_time and end_time are inclusive; limit keeps the oldest events.
    """
    event_type: Optional[str] = None
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    limit: Optional[int] = None


# ===========================================================================
# SECTION 4 -- INTERNAL HELPERS
# ===========================================================================

def _sanitize_value(value: Any) -> Any:
    if isinstance(value, float):
        if math.isnan(value):
            return _NAN_SENTINEL
        if math.isinf(value):
            return _INF_SENTINEL
    return value


def _compute_hash(
    event_id: str,
    event_type: str,
    timestamp: datetime,
    data: Dict[str, Any],
) -> str:
    """
    SHA-256 over id, type, ISO timestamp and repr(sorted(data.items())),
    joined by _HASH_SEP. Independent of dict insertion order.
    """
    preimage = _HASH_SEP.join(
        (event_id, event_type, timestamp.isoformat(), repr(sorted(data.items())))
    )
    return hashlib.sha256(preimage.encode("utf-8", errors="replace")).hexdigest()


# ===========================================================================
# SECTION 5 -- EventLogger
# ===========================================================================

class EventLogger:
    """
    Append-only in-memory event log.

    log_event() raises LoggingError instead of dropping an event. Each
    instance is independent; there is no module-level logger.
    """

    def __init__(self) -> None:
        self._store: List[Event] = []
        self._counter: int = 0

    def log_event(self, event_type: str, data: Dict[str, Any], timestamp: datetime) -> str:
        """
        Record one event and return its ID.

        Raises
        ------
        LoggingError : event_type empty, timestamp missing or not a datetime,
                       or data not a dict.
        """
        if not event_type:
            raise LoggingError("event_type must be a non-empty string")
        if timestamp is None:
            raise LoggingError("timestamp must be caller-supplied; None is not permitted")
        if not isinstance(timestamp, datetime):
            raise LoggingError(
                "timestamp must be a datetime instance; got: {}".format(type(timestamp))
            )
        if not isinstance(data, dict):
            raise LoggingError("data must be a dict; got: {}".format(type(data)))

        self._counter += 1
        event_id = "EVT-{:016d}".format(self._counter)
        sanitized = {k: _sanitize_value(v) for k, v in data.items()}
        self._store.append(Event(
            id=event_id,
            type=event_type,
            timestamp=timestamp,
            data=sanitized,
            hash=_compute_hash(event_id, event_type, timestamp, sanitized),
        ))
        return event_id

    def query_events(self, filter: EventFilter) -> List[Event]:
        """Events matching filter, oldest first. Pure read."""
        if filter is None:
            raise LoggingError("filter must not be None")

        results: List[Event] = []
        for event in self._store:
            if filter.event_type is not None and event.type != filter.event_type:
                continue
            if filter.start_time is not None and event.timestamp < filter.start_time:
                continue
            if filter.end_time is not None and event.timestamp > filter.end_time:
                continue
            results.append(event)

        if filter.limit is not None:
            results = results[: filter.limit]
        return results

    def get_event_stream(self, start_time: datetime) -> Iterator[Event]:
        if not isinstance(start_time, datetime):
            raise LoggingError(
                "start_time must be a datetime instance; got: {}".format(type(start_time))
            )
        for event in self._store:
            if event.timestamp >= start_time:
                yield event

    def event_types(self) -> List[str]:
        return [event.type for event in self._store]

    def event_count(self) -> int:
        return len(self._store)


# ===========================================================================
# SECTION 6 -- EXCEPTIONS
# ===========================================================================

class LoggingError(Exception):
    """Raised by EventLogger when an invariant is violated. Never swallowed."""
