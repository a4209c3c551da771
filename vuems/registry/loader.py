"""Registry loader: discovers module directories holding a `vuems.yaml`."""
from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

import yaml
from pydantic import ValidationError
from yaml import YAMLError

from vuems import metrics
from vuems.errors import DuplicateModuleError, ManifestError
from .manifest import MANIFEST_FILE, ModuleConfiguration, ResolvedModule

logger = logging.getLogger(__name__)

_registry_lock = threading.Lock()
_module_cache: Dict[Tuple[Path, Tuple[str, ...]], "ModuleIndex"] = {}


@dataclass
class ModuleIndex:
    """Discovered modules in discovery order."""

    configurations: List[ModuleConfiguration] = field(default_factory=list)
    resolved: List[ResolvedModule] = field(default_factory=list)

    def names(self) -> List[str]:
        return [c.name for c in self.configurations]

    def __contains__(self, name: object) -> bool:
        return any(c.name == name for c in self.configurations)

    def __len__(self) -> int:
        return len(self.configurations)


def _iter_manifest_files(modules_dir: Path) -> Iterator[Path]:
    for path in sorted(modules_dir.glob(f"*/{MANIFEST_FILE}")):
        if path.is_file():
            yield path


def _parse_yaml(path: Path) -> dict:
    """Parse a manifest, retrying once with tabs replaced by spaces.

    Tab-indented YAML is a frequent accidental edit; a single bad manifest
    should not abort discovery when the intent is unambiguous.
    """
    raw_text = path.read_text(encoding="utf-8")
    try:
        data = yaml.safe_load(raw_text) or {}
    except YAMLError as e:
        if "\t" not in raw_text:
            raise ManifestError(f"Invalid manifest {path}: {e}") from e
        logger.warning("[manifest-tabs] re-parsing tabs->spaces: %s", path)
        try:
            data = yaml.safe_load(raw_text.replace("\t", "  ")) or {}
        except YAMLError as e2:
            raise ManifestError(f"Invalid manifest {path}: {e2}") from e2
    if not isinstance(data, dict):
        raise ManifestError(f"Invalid manifest {path}: expected a mapping")
    return data


def load_manifest(path: Path) -> ModuleConfiguration:
    data = _parse_yaml(path)
    try:
        return ModuleConfiguration.model_validate(data)
    except ValidationError as e:
        raise ManifestError(f"Invalid manifest {path}: {e}") from e


def _discover(root: Path, directories: Sequence[str]) -> ModuleIndex:
    index = ModuleIndex()
    seen: Dict[str, Path] = {}
    for directory in directories:
        modules_dir = root / directory
        if not modules_dir.is_dir():
            logger.warning("[modules-dir-missing] %s", modules_dir)
            continue
        for mf in _iter_manifest_files(modules_dir):
            configuration = load_manifest(mf)
            module_root = mf.parent.resolve()
            if configuration.name in seen:
                raise DuplicateModuleError(
                    "Duplicate module name [{name}]: {a} and {b}".format(
                        name=configuration.name,
                        a=seen[configuration.name],
                        b=module_root,
                    )
                )
            seen[configuration.name] = module_root
            index.configurations.append(configuration)
            index.resolved.append(
                ResolvedModule(
                    name=configuration.name, path=module_root.as_posix()
                )
            )
    metrics.inc("modules_discovered_total", value=len(index))
    return index


def load_modules(
    project_root: str | Path,
    directories: Iterable[str] = ("modules",),
) -> ModuleIndex:
    """Discover every module under the given directories (cached per root)."""
    root = Path(project_root).resolve()
    key = (root, tuple(directories))
    with _registry_lock:
        if key not in _module_cache:
            _module_cache[key] = _discover(root, key[1])
        return _module_cache[key]


def clear_module_cache(project_root: str | Path | None = None) -> None:
    """Clear cached module indexes.

    If project_root provided, clear only its entries; else clear all.
    """
    with _registry_lock:
        if project_root is None:
            _module_cache.clear()
            return
        root = Path(project_root).resolve()
        for key in [k for k in _module_cache if k[0] == root]:
            del _module_cache[key]
