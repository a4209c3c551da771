from __future__ import annotations

import asyncio
from typing import List, Sequence

from vuems import metrics
from vuems.build import BuildContext
from vuems.helpers.paths import join_module_path
from vuems.registry import ModuleConfiguration

from .options import HostOptions, find_module

CSS_OK = "All global css set"


def resolve_css(
    configurations: Sequence[ModuleConfiguration], options: HostOptions
) -> List[str]:
    # Discovery order; css is not subject to `order`.
    paths: List[str] = []
    for configuration in configurations:
        if not (configuration.name and configuration.css):
            continue
        root = find_module(options.all_modules, configuration.name).path
        paths.extend(join_module_path(root, p) for p in configuration.css)
    return paths


async def set_css(
    configurations: Sequence[ModuleConfiguration],
    options: HostOptions,
    context: BuildContext,
) -> str:
    paths = resolve_css(configurations, options)
    await asyncio.sleep(0)
    for path in paths:
        context.append_css(path)
    metrics.inc("css_appended_total", value=len(paths))
    return CSS_OK
