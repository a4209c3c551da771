from __future__ import annotations

import asyncio
import re
from typing import List, Sequence

from vuems import metrics
from vuems.build import BuildContext, PluginRegistration
from vuems.helpers.paths import join_module_path
from vuems.registry import ModuleConfiguration

from .options import HostOptions, find_module

PLUGINS_OK = "All plugins set"

_NON_ALPHA = re.compile(r"[^a-zA-Z]")


def sanitize_module_name(name: str) -> str:
    """Keep ASCII letters only: "@shop/ui-kit2" → "shopuikit"."""
    return _NON_ALPHA.sub("", name)


def plugin_registrations(
    configurations: Sequence[ModuleConfiguration], options: HostOptions
) -> List[PluginRegistration]:
    registrations: List[PluginRegistration] = []
    ext = options.plugin_extension
    for configuration in configurations:
        if not configuration.plugins:
            continue
        root = find_module(options.all_modules, configuration.name).path
        module_id = sanitize_module_name(configuration.name)
        for plugin in configuration.plugins:
            plugin_path = join_module_path(root, plugin.src)
            registrations.append(
                PluginRegistration(
                    src=f"{plugin_path}{ext}",
                    file_name=join_module_path(
                        f"{options.plugin_dir}/{module_id}", f"{plugin.src}{ext}"
                    ),
                    mode="server" if plugin.ssr else "client",
                )
            )
    return registrations


async def _register(
    context: BuildContext, registration: PluginRegistration
) -> None:
    await context.register_plugin(registration)
    metrics.inc_plugin_registered(registration.mode)


async def set_plugins(
    configurations: Sequence[ModuleConfiguration],
    options: HostOptions,
    context: BuildContext,
) -> str:
    registrations = plugin_registrations(configurations, options)
    await asyncio.gather(*(_register(context, r) for r in registrations))
    return PLUGINS_OK
