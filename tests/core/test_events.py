import logging

from vuems import metrics
from vuems.events import (
    ModulePreparationFailed,
    ModulesDiscovered,
    ModulesPrepared,
    emit,
    listen,
)


def _prepared():
    return ModulesPrepared(modules=1, messages=["ok"], latency_ms=0)


def test_listen_by_class_and_by_name():
    by_class, by_name = [], []
    listen(by_class.append, ModulesPrepared)
    listen(by_name.append, "ModulePreparationFailed")
    emit(_prepared())
    emit(ModulePreparationFailed(error_type="internal", message="boom"))
    assert [e.name for e in by_class] == ["ModulesPrepared"]
    assert [e.error_type for e in by_name] == ["internal"]
    assert by_class[0].ts > 0


def test_listen_without_types_gets_everything():
    seen = []
    listen(seen.append)
    emit(_prepared())
    emit(ModulesDiscovered(root="/app", modules=["a"]))
    assert [e.name for e in seen] == ["ModulesPrepared", "ModulesDiscovered"]
    counters = metrics.snapshot()["counters"]
    assert counters["events_emitted_total{event=ModulesPrepared}"] == 1


def test_unlisten_stops_delivery():
    seen = []
    unlisten = listen(seen.append, ModulesPrepared, ModulePreparationFailed)
    emit(_prepared())
    unlisten()
    emit(_prepared())
    emit(ModulePreparationFailed(error_type="internal", message="x"))
    assert len(seen) == 1


def test_failing_listener_isolated(caplog):
    calls = []

    def bad(_):
        calls.append("bad")
        raise RuntimeError("boom")

    listen(bad, ModulesPrepared)
    listen(lambda e: calls.append("good"), ModulesPrepared)
    with caplog.at_level(logging.WARNING):
        emit(_prepared())
    assert calls == ["bad", "good"]
    counters = metrics.snapshot()["counters"]
    assert counters["handler_exceptions_total{event=ModulesPrepared}"] == 1
    assert "event-handler-error" in caplog.text
