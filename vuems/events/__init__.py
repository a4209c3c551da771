"""Discovery and preparation lifecycle events.

Listeners receive the event object itself and subscribe either to every
event or to selected ones, by class or by class name:

    unlisten = listen(report, ModulePreparationFailed)
    unlisten = listen(audit)                       # every event

A failing listener never aborts the build: the error is logged and counted
(handler_exceptions_total{event}).
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import RLock
from time import time
from typing import Callable, Dict, List

from vuems import metrics

logger = logging.getLogger(__name__)

_ANY = "*"


@dataclass(frozen=True)
class PreparationEvent:
    ts: float = field(default_factory=time, kw_only=True)

    @property
    def name(self) -> str:
        return type(self).__name__


@dataclass(frozen=True)
class ModulesDiscovered(PreparationEvent):
    root: str
    modules: List[str]
    unknown: List[str] | None = None


@dataclass(frozen=True)
class ModulesPrepared(PreparationEvent):
    modules: int
    messages: List[str]
    latency_ms: int


@dataclass(frozen=True)
class ModulePreparationFailed(PreparationEvent):
    error_type: str
    message: str
    latency_ms: int | None = None


Listener = Callable[[PreparationEvent], None]
EventKey = type | str

_LISTENERS: Dict[str, List[Listener]] = {}
_LOCK = RLock()


def _key(event_type: EventKey) -> str:
    return event_type if isinstance(event_type, str) else event_type.__name__


def listen(listener: Listener, *event_types: EventKey) -> Callable[[], None]:
    """Register `listener`; no event types → every event.

    Returns a callable removing the registration again.
    """
    keys = [_key(t) for t in event_types] or [_ANY]
    with _LOCK:
        for key in keys:
            _LISTENERS.setdefault(key, []).append(listener)

    def _unlisten() -> None:
        with _LOCK:
            for key in keys:
                registered = _LISTENERS.get(key, [])
                if listener in registered:
                    registered.remove(listener)
    return _unlisten


def emit(event: PreparationEvent) -> None:
    name = event.name
    with _LOCK:
        listeners = [*_LISTENERS.get(name, ()), *_LISTENERS.get(_ANY, ())]
    metrics.inc("events_emitted_total", {"event": name})
    for listener in listeners:
        try:
            listener(event)
        except Exception:  # noqa: BLE001
            metrics.inc("handler_exceptions_total", {"event": name})
            logger.warning("[event-handler-error] %s listener failed", name,
                           exc_info=True)


def clear_listeners() -> None:  # pragma: no cover
    with _LOCK:
        _LISTENERS.clear()


__all__ = [
    "emit",
    "listen",
    "clear_listeners",
    "EventKey",
    "Listener",
    "PreparationEvent",
    "ModulesDiscovered",
    "ModulesPrepared",
    "ModulePreparationFailed",
]
