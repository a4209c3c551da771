"""Module preparation: the four steps merging modules into the host build.

    check_relations  every declared relation names an existing module
    set_aliases      resolve.alias entries, lowest order written last
    set_plugins      one plugin registration per declared plugin
    set_css          global css, in discovery order

The steps share no data, so they run concurrently and are awaited jointly.
The first failure aborts preparation; writes that already landed on the
build context are not rolled back.
"""
from __future__ import annotations

import asyncio
import time
from typing import List, Sequence

from vuems import metrics
from vuems.build import BuildContext
from vuems.errors import error_type_of
from vuems.events import ModulePreparationFailed, ModulesPrepared, emit
from vuems.helpers.log import log
from vuems.registry import ModuleConfiguration

from .aliases import set_aliases
from .css import set_css
from .options import HostOptions
from .plugins import set_plugins
from .relations import check_relations

HEADER = "Prepare modules"


async def prepare_modules(
    configurations: Sequence[ModuleConfiguration],
    options: HostOptions,
    context: BuildContext,
) -> List[str]:
    t0 = time.perf_counter()
    try:
        results = await asyncio.gather(
            check_relations(configurations),
            set_aliases(configurations, options, context),
            set_plugins(configurations, options, context),
            set_css(configurations, options, context),
        )
    except Exception as e:
        latency_ms = int((time.perf_counter() - t0) * 1000)
        code = error_type_of(e)
        metrics.inc_prepare_failure(code)
        emit(
            ModulePreparationFailed(
                error_type=code, message=str(e), latency_ms=latency_ms
            )
        )
        raise
    latency_ms = int((time.perf_counter() - t0) * 1000)
    metrics.observe("prepare_latency_ms", latency_ms)

    logs = [msg for msg in results if msg]
    emit(
        ModulesPrepared(
            modules=len(configurations), messages=logs, latency_ms=latency_ms
        )
    )
    if options.verbose:
        log(header=HEADER, logs=logs)
    return logs


def prepare_modules_sync(
    configurations: Sequence[ModuleConfiguration],
    options: HostOptions,
    context: BuildContext,
) -> List[str]:
    """Run `prepare_modules` from synchronous code (no running loop)."""
    return asyncio.run(prepare_modules(configurations, options, context))
