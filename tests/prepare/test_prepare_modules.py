import asyncio
import logging

import pytest

from vuems import metrics
from vuems.build import InMemoryBuildContext
from vuems.errors import RelationError, UnknownModuleError
from vuems.events import ModulePreparationFailed, listen
from vuems.prepare import (
    ALIASES_OK,
    CSS_OK,
    HEADER,
    PLUGINS_OK,
    RELATIONS_OK,
    HostOptions,
    prepare_modules,
    prepare_modules_sync,
)
from vuems.prepare import orchestrator
from vuems.registry import ModuleConfiguration, ResolvedModule


def _setup(verbose=False):
    configs = [
        ModuleConfiguration.model_validate(
            {
                "name": "@shop/core",
                "order": 10,
                "aliases": {"@Core": "src/", "@Shared": "shared"},
                "css": ["styles/main.css"],
                "plugins": [{"src": "plugins/axios", "ssr": True}],
            }
        ),
        ModuleConfiguration.model_validate(
            {
                "name": "@shop/theme",
                "order": 1,
                "relations": ["@shop/core"],
                "replacements": {"@Shared": "overrides/shared"},
                "css": ["theme.css"],
                "plugins": [{"src": "plugins/theme"}],
            }
        ),
    ]
    options = HostOptions(
        all_modules=[
            ResolvedModule("@shop/core", "/app/modules/core"),
            ResolvedModule("@shop/theme", "/app/modules/theme"),
        ],
        verbose=verbose,
    )
    return configs, options


def test_prepare_applies_every_step():
    configs, options = _setup()
    ctx = InMemoryBuildContext()
    logs = prepare_modules_sync(configs, options, ctx)
    assert logs == [RELATIONS_OK, ALIASES_OK, PLUGINS_OK, CSS_OK]
    assert ctx.aliases == {
        "@Core": "/app/modules/core/src",
        "@Shared": "/app/modules/theme/overrides/shared",
    }
    assert ctx.css == [
        "/app/modules/core/styles/main.css",
        "/app/modules/theme/theme.css",
    ]
    assert sorted((p.file_name, p.mode) for p in ctx.plugins) == [
        ("modules/shopcore/plugins/axios.ts", "server"),
        ("modules/shoptheme/plugins/theme.ts", "client"),
    ]
    assert "prepare_latency_ms" in metrics.snapshot()["histograms"]


def test_prepare_async_entrypoint():
    configs, options = _setup()
    logs = asyncio.run(prepare_modules(configs, options, InMemoryBuildContext()))
    assert len(logs) == 4


def test_verbose_false_never_logs(monkeypatch):
    calls = []
    monkeypatch.setattr(orchestrator, "log", lambda **kw: calls.append(kw))
    configs, options = _setup(verbose=False)
    prepare_modules_sync(configs, options, InMemoryBuildContext())
    assert calls == []


def test_verbose_logs_once_with_all_messages(monkeypatch):
    calls = []
    monkeypatch.setattr(orchestrator, "log", lambda **kw: calls.append(kw))
    configs, options = _setup(verbose=True)
    prepare_modules_sync(configs, options, InMemoryBuildContext())
    assert calls == [
        {
            "header": HEADER,
            "logs": [RELATIONS_OK, ALIASES_OK, PLUGINS_OK, CSS_OK],
        }
    ]


def test_verbose_output_reaches_logger(caplog):
    configs, options = _setup(verbose=True)
    with caplog.at_level(logging.INFO, logger="vuems"):
        prepare_modules_sync(configs, options, InMemoryBuildContext())
    text = caplog.text
    assert "-- Prepare modules --" in text
    assert "All global css set" in text


def test_relation_failure_aborts_and_is_reported():
    configs, options = _setup()
    configs.append(ModuleConfiguration(name="orphan", relations=["@shop/gone"]))
    options.all_modules.append(ResolvedModule("orphan", "/app/modules/orphan"))
    failed = []
    unlisten = listen(failed.append, ModulePreparationFailed)
    try:
        with pytest.raises(RelationError, match=r"\[orphan\]"):
            prepare_modules_sync(configs, options, InMemoryBuildContext())
    finally:
        unlisten()
    assert len(failed) == 1
    assert failed[0].error_type == "relation-missing"
    counters = metrics.snapshot()["counters"]
    assert counters["prepare_failures_total{error_type=relation-missing}"] == 1


def test_unknown_module_aborts():
    configs, options = _setup()
    options.all_modules = options.all_modules[:1]
    with pytest.raises(UnknownModuleError, match="@shop/theme"):
        prepare_modules_sync(configs, options, InMemoryBuildContext())


def test_success_event_emitted():
    configs, options = _setup()
    prepared = []
    unlisten = listen(prepared.append, "ModulesPrepared")
    try:
        prepare_modules_sync(configs, options, InMemoryBuildContext())
    finally:
        unlisten()
    assert len(prepared) == 1
    assert prepared[0].modules == 2
    assert prepared[0].messages[0] == RELATIONS_OK
