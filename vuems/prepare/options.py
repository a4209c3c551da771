from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from vuems.errors import UnknownModuleError
from vuems.registry import ResolvedModule


@dataclass
class HostOptions:
    all_modules: List[ResolvedModule] = field(default_factory=list)
    verbose: bool = True
    plugin_extension: str = ".ts"
    plugin_dir: str = "modules"


def find_module(all_modules: List[ResolvedModule], name: str) -> ResolvedModule:
    """Return the active module called `name`.

    Raises:
        UnknownModuleError: no active module has that name.
    """
    for module in all_modules:
        if module.name == name:
            return module
    raise UnknownModuleError(name)
