from __future__ import annotations

import asyncio
from typing import List, Sequence, Tuple

from vuems import metrics
from vuems.build import BuildConfig, BuildContext
from vuems.helpers.paths import join_module_path
from vuems.registry import ModuleConfiguration

from .options import HostOptions, find_module

ALIASES_OK = "All aliases set"


def sort_by_order(
    configurations: Sequence[ModuleConfiguration],
) -> List[ModuleConfiguration]:
    """Highest order first; equal orders keep their discovery order."""
    return sorted(configurations, key=lambda c: c.effective_order, reverse=True)


def resolve_aliases(
    configurations: Sequence[ModuleConfiguration], options: HostOptions
) -> List[Tuple[str, str]]:
    """Return (alias, absolute path) pairs in the order they must be written.

    A later pair overrides an earlier one with the same alias, so modules
    with a lower order take precedence.
    """
    pairs: List[Tuple[str, str]] = []
    for configuration in sort_by_order(configurations):
        if not (configuration.replacements or configuration.aliases):
            continue
        root = find_module(options.all_modules, configuration.name).path
        for mapping in (configuration.replacements, configuration.aliases):
            for key, fragment in mapping.items():
                pairs.append((key, join_module_path(root, fragment)))
    return pairs


async def set_aliases(
    configurations: Sequence[ModuleConfiguration],
    options: HostOptions,
    context: BuildContext,
) -> str:
    pairs = resolve_aliases(configurations, options)
    await asyncio.sleep(0)

    def _extend(config: BuildConfig) -> None:
        if config.resolve.alias is None:
            config.resolve.alias = {}
        alias = config.resolve.alias
        for key, path in pairs:
            alias[key] = path

    context.extend_config(_extend)
    metrics.inc("aliases_set_total", value=len(pairs))
    return ALIASES_OK
