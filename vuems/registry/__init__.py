"""Module registry.

Responsibilities:
- Discover module directories containing a `vuems.yaml` manifest
- Validate each manifest (see `manifest.ModuleConfiguration`)
- Reject duplicate module names
- Provide the resolved filesystem root of every discovered module
"""
from .manifest import (  # noqa: F401
    DEFAULT_ORDER,
    MANIFEST_FILE,
    ModuleConfiguration,
    PluginDescriptor,
    ResolvedModule,
)
from .loader import (  # noqa: F401
    ModuleIndex,
    clear_module_cache,
    load_manifest,
    load_modules,
)

__all__ = [
    "DEFAULT_ORDER",
    "MANIFEST_FILE",
    "ModuleConfiguration",
    "PluginDescriptor",
    "ResolvedModule",
    "ModuleIndex",
    "clear_module_cache",
    "load_manifest",
    "load_modules",
]
