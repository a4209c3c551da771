import logging

import pytest

from vuems.build import InMemoryBuildContext, PluginRegistration
from vuems.errors import RegistrationError
from vuems.helpers import join_module_path, log
import asyncio


@pytest.mark.parametrize(
    "root, fragment, expected",
    [
        ("/mods/a/", "styles/", "/mods/a/styles"),
        ("/mods/a", "styles", "/mods/a/styles"),
        ("/mods/a", "./src/../lib/", "/mods/a/lib"),
        ("/mods/a", "/abs", "/mods/a/abs"),
        ("/mods/a", "", "/mods/a"),
        ("/", "x", "/x"),
        ("/", "", "/"),
        ("//mods", "a/", "/mods/a"),
        ("modules/cart", "/plugins/p.ts", "modules/cart/plugins/p.ts"),
    ],
)
def test_join_module_path(root, fragment, expected):
    assert join_module_path(root, fragment) == expected


def test_log_header_and_lines(caplog):
    with caplog.at_level(logging.INFO, logger="vuems"):
        log(header="Prepare modules", logs=["one", "two"])
    messages = [r.getMessage() for r in caplog.records]
    assert messages == [
        "------------------------",
        "-- Prepare modules --",
        "------------------------",
        "one",
        "two",
    ]


def test_log_single_string(caplog):
    with caplog.at_level(logging.INFO, logger="vuems"):
        log(header="H", logs="only")
    assert [r.getMessage() for r in caplog.records][-1] == "only"


def test_in_memory_context_rejects_duplicate_file_names():
    ctx = InMemoryBuildContext()
    reg = PluginRegistration(src="/a.ts", file_name="modules/a/a.ts", mode="client")
    asyncio.run(ctx.register_plugin(reg))
    with pytest.raises(RegistrationError):
        asyncio.run(ctx.register_plugin(reg))
    assert ctx.plugins == [reg]
