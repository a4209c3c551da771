"""Module manifest schema (`vuems.yaml`) and resolved module locations."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_ORDER = 1000
MANIFEST_FILE = "vuems.yaml"


class PluginDescriptor(BaseModel):
    src: str
    ssr: bool = False

    model_config = ConfigDict(extra="forbid")

    @field_validator("src")
    @classmethod
    def _src_not_empty(cls, v: str) -> str:  # noqa: D401
        if not v.strip():
            raise ValueError("plugin src cannot be empty")
        return v


class ModuleConfiguration(BaseModel):
    """Per-module configuration as declared by the module itself.

    Mappings keep declaration order (YAML mappings load in order), which
    is the order aliases are written in. Keys this layer does not consume
    (routes, stores, translations...) are ignored.
    """

    name: str
    order: Optional[int] = None
    relations: Optional[List[Optional[str]]] = None
    replacements: Dict[str, str] = Field(default_factory=dict)
    aliases: Dict[str, str] = Field(default_factory=dict)
    plugins: List[PluginDescriptor] = Field(default_factory=list)
    css: List[str] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("name")
    @classmethod
    def _name_not_empty(cls, v: str) -> str:  # noqa: D401
        if not v.strip():
            raise ValueError("name cannot be empty")
        return v

    @property
    def effective_order(self) -> int:
        # 0 counts as "not set", same as an absent key
        return self.order or DEFAULT_ORDER


@dataclass(frozen=True)
class ResolvedModule:
    name: str
    path: str
