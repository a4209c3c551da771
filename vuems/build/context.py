"""Build context: the capability object the preparer mutates.

The preparer never reaches for an ambient host; everything it changes goes
through a `BuildContext` passed in by the caller.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Literal, Protocol

from vuems.errors import RegistrationError

PluginMode = Literal["server", "client"]


@dataclass
class ResolveConfig:
    alias: Dict[str, str] | None = field(default_factory=dict)


@dataclass
class BuildConfig:
    """Bundler configuration subset the preparer writes to."""

    resolve: ResolveConfig = field(default_factory=ResolveConfig)


@dataclass(frozen=True)
class PluginRegistration:
    src: str
    file_name: str
    mode: PluginMode

    def to_dict(self) -> dict:
        return {
            "src": self.src,
            "fileName": self.file_name,
            "options": {"mode": self.mode},
        }


ConfigExtender = Callable[[BuildConfig], None]


class BuildContext(Protocol):  # pragma: no cover
    def extend_config(self, extender: ConfigExtender) -> None:
        ...

    async def register_plugin(self, registration: PluginRegistration) -> None:
        ...

    def append_css(self, path: str) -> None:
        ...


class InMemoryBuildContext:
    """Reference `BuildContext` keeping all state in memory.

    Extenders run immediately against `config` and are also kept so a host
    can replay them against its real bundler configuration.
    """

    def __init__(self, config: BuildConfig | None = None) -> None:
        self.config = config or BuildConfig()
        self.extenders: List[ConfigExtender] = []
        self.plugins: List[PluginRegistration] = []
        self.css: List[str] = []

    def extend_config(self, extender: ConfigExtender) -> None:
        self.extenders.append(extender)
        extender(self.config)

    async def register_plugin(self, registration: PluginRegistration) -> None:
        if any(p.file_name == registration.file_name for p in self.plugins):
            raise RegistrationError(
                f"Plugin file name already registered: {registration.file_name}"
            )
        self.plugins.append(registration)

    def append_css(self, path: str) -> None:
        self.css.append(path)

    @property
    def aliases(self) -> Dict[str, str]:
        return dict(self.config.resolve.alias or {})
