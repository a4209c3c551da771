"""Module discovery/preparation options."""
from __future__ import annotations

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class ModulesConfig(BaseModel):
    # Searched relative to the project root, in order.
    directories: List[str] = Field(default_factory=lambda: ["modules"])
    # Empty list → every discovered module is active.
    enabled: List[str] = Field(default_factory=list)
    required: List[str] = Field(default_factory=list)
    verbose: bool = True
    plugin_extension: str = ".ts"
    plugin_dir: str = "modules"

    model_config = ConfigDict(extra="forbid")
