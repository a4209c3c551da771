from .context import (  # noqa: F401
    BuildConfig,
    BuildContext,
    ConfigExtender,
    InMemoryBuildContext,
    PluginMode,
    PluginRegistration,
    ResolveConfig,
)

__all__ = [
    "BuildConfig",
    "BuildContext",
    "ConfigExtender",
    "InMemoryBuildContext",
    "PluginMode",
    "PluginRegistration",
    "ResolveConfig",
]
