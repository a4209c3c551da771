"""ModuleManager: discovery + activation + preparation of micro-modules.

Responsibilities:
 - Read module options from config (directories, enabled, required)
 - Discover modules through the registry
 - Keep enabled modules only (empty `enabled` → all discovered)
 - Unknown enabled names → warn & skip
 - Missing required modules → RequiredModuleError
 - Run the preparation pipeline against a caller supplied BuildContext
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, List

from vuems.build import BuildContext
from vuems.config import AggregatedConfig, get_config
from vuems.errors import RequiredModuleError
from vuems.events import EventKey, Listener, ModulesDiscovered, emit, listen
from vuems.helpers.log import configure_logging, log
from vuems.prepare import HostOptions, prepare_modules, prepare_modules_sync
from vuems.registry import ModuleConfiguration, ResolvedModule, load_modules

logger = logging.getLogger(__name__)


class ModuleManager:
    def __init__(
        self,
        project_root: str | Path = ".",
        config: AggregatedConfig | None = None,
    ):
        cfg = config or get_config()
        self._cfg = cfg
        configure_logging(cfg.logging.level)
        self.project_root = Path(project_root).resolve()
        index = load_modules(self.project_root, cfg.modules.directories)

        wanted = set(cfg.modules.enabled)
        self._unknown: list[str] = [
            name for name in cfg.modules.enabled if name not in index
        ]
        for name in self._unknown:
            logger.warning("[module-unknown] enabled but not found: %s", name)

        self._configurations: List[ModuleConfiguration] = []
        self._resolved: List[ResolvedModule] = []
        for configuration, resolved in zip(
            index.configurations, index.resolved
        ):
            if wanted and configuration.name not in wanted:
                continue
            self._configurations.append(configuration)
            self._resolved.append(resolved)

        missing = [
            name for name in cfg.modules.required if not self.is_enabled(name)
        ]
        if missing:
            raise RequiredModuleError(missing)

        emit(
            ModulesDiscovered(
                root=self.project_root.as_posix(),
                modules=self.list_enabled(),
                unknown=self.unknown or None,
            )
        )
        if cfg.modules.verbose:
            log(
                header="Loaded modules",
                logs=self.list_enabled() or "No modules found",
            )

    @property
    def unknown(self) -> list[str]:  # enabled in config but not discovered
        return list(self._unknown)

    @property
    def configurations(self) -> List[ModuleConfiguration]:
        return list(self._configurations)

    @property
    def all_modules(self) -> List[ResolvedModule]:
        return list(self._resolved)

    def is_enabled(self, name: str) -> bool:
        return any(c.name == name for c in self._configurations)

    def get(self, name: str) -> ModuleConfiguration:
        for configuration in self._configurations:
            if configuration.name == name:
                return configuration
        raise KeyError(f"Module '{name}' not enabled or not discovered")

    def list_enabled(self) -> list[str]:
        return [c.name for c in self._configurations]

    def options(self) -> HostOptions:
        mods = self._cfg.modules
        return HostOptions(
            all_modules=self.all_modules,
            verbose=mods.verbose,
            plugin_extension=mods.plugin_extension,
            plugin_dir=mods.plugin_dir,
        )

    def on(self, listener: Listener, *event_types: EventKey) -> Callable[[], None]:
        """Subscribe to preparation events (all of them when none given)."""
        return listen(listener, *event_types)

    async def prepare(self, context: BuildContext) -> List[str]:
        return await prepare_modules(
            self.configurations, self.options(), context
        )

    def prepare_sync(self, context: BuildContext) -> List[str]:
        return prepare_modules_sync(
            self.configurations, self.options(), context
        )
