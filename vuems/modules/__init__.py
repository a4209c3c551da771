"""Modules package.

Runtime entry point tying config, discovery and preparation together.
"""
from __future__ import annotations

from .module_manager import ModuleManager  # noqa: F401

__all__ = ["ModuleManager"]
