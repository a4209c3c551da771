"""Module preparation pipeline (relations, aliases, plugins, css)."""
from .aliases import ALIASES_OK, resolve_aliases, set_aliases, sort_by_order  # noqa: F401
from .css import CSS_OK, resolve_css, set_css  # noqa: F401
from .options import HostOptions, find_module  # noqa: F401
from .orchestrator import HEADER, prepare_modules, prepare_modules_sync  # noqa: F401
from .plugins import (  # noqa: F401
    PLUGINS_OK,
    plugin_registrations,
    sanitize_module_name,
    set_plugins,
)
from .relations import RELATIONS_OK, check_relations  # noqa: F401

__all__ = [
    "ALIASES_OK",
    "CSS_OK",
    "HEADER",
    "PLUGINS_OK",
    "RELATIONS_OK",
    "HostOptions",
    "check_relations",
    "find_module",
    "plugin_registrations",
    "prepare_modules",
    "prepare_modules_sync",
    "resolve_aliases",
    "resolve_css",
    "sanitize_module_name",
    "set_aliases",
    "set_css",
    "set_plugins",
    "sort_by_order",
]
