"""Configuration loading & validation.

Precedence (last wins): base.yaml → overrides.local.yaml → ENV (VUEMS__*).

Missing `schema_version` → assume 1 (warn). Unknown keys are rejected.
"""
from __future__ import annotations

import logging
import os
import pathlib
import threading
from functools import lru_cache
from typing import Any, Dict

import yaml
from pydantic import BaseModel, ConfigDict, Field

from vuems import metrics
from vuems.errors import validate_error_type

from .schemas.modules import ModulesConfig
from .schemas.observability import LoggingConfig

logger = logging.getLogger(__name__)


class AggregatedConfig(BaseModel):
    schema_version: int = 1
    modules: ModulesConfig = Field(default_factory=ModulesConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid")


DEFAULT_CONFIG_DIR = "configs"
ENV_PREFIX = "VUEMS__"
LIST_PATHS = {
    "modules.directories",
    "modules.enabled",
    "modules.required",
}


class ConfigError(Exception):
    error_type = "config-invalid"


def _load_yaml_if_exists(path: pathlib.Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in {path.name}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path.name} must contain a mapping")
    return data


def _merge_dict(
    base: Dict[str, Any], override: Dict[str, Any]
) -> Dict[str, Any]:
    for k, v in override.items():
        if isinstance(v, dict) and isinstance(base.get(k), dict):
            base[k] = _merge_dict(base[k], v)
        else:
            base[k] = v
    return base


def _cast_env_value(value: str) -> Any:
    if value.lower() in {"true", "false"}:
        return value.lower() == "true"
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return value


def _apply_env(cfg: Dict[str, Any]) -> None:
    prefix_len = len(ENV_PREFIX)
    for env_key, value in os.environ.items():
        if not env_key.startswith(ENV_PREFIX):
            continue
        path_parts = env_key[prefix_len:].lower().split("__")
        target = cfg
        for part in path_parts[:-1]:
            if part not in target or not isinstance(target[part], dict):
                target[part] = {}
            target = target[part]
        leaf = path_parts[-1]
        dotted_path = ".".join(path_parts)
        # Lists are given comma separated: VUEMS__MODULES__REQUIRED=a,b
        if dotted_path in LIST_PATHS:
            target[leaf] = [v.strip() for v in value.split(",") if v.strip()]
        else:
            target[leaf] = _cast_env_value(value)
        metrics.inc("env_override_total", {"path": dotted_path})
        logger.info(
            "[config-env-override] path=%s value=*** source=env", dotted_path
        )


_lock = threading.Lock()


def _resolve_config_dir() -> pathlib.Path:
    """Resolve config directory each call honoring env var changes."""
    return pathlib.Path(os.getenv("VUEMS_CONFIG_DIR", DEFAULT_CONFIG_DIR))


def _migrate_legacy(data: Dict[str, Any]) -> Dict[str, Any]:
    """Apply in-place migrations for configs without schema_version.

    Rules:
    - If `schema_version` absent → set to 1 and emit warning.
    - Top-level `verbose` / `required` (flat legacy layout) move under
      `modules` unless already set there.
    """
    if "schema_version" not in data:
        logger.warning("[config-migration] schema_version missing → assuming 1")
        data["schema_version"] = 1
    modules = data.setdefault("modules", {})
    if not isinstance(modules, dict):
        raise ConfigError("'modules' must be a mapping")
    for key in ("verbose", "required"):
        if key in data:
            modules.setdefault(key, data.pop(key))
    return data


def _normalize_and_validate(raw: Dict[str, Any]) -> None:
    """Apply normalizations and bounds validation.

    Normalizations:
      - modules.plugin_extension: "ts" → ".ts"
    Validations (error → raise):
      - modules.directories non-empty
      - modules.plugin_extension empty or starting with "."
    """
    errors: list[tuple[str, str, str]] = []  # (path, code, msg)
    modules = raw.get("modules", {})

    ext = modules.get("plugin_extension")
    if isinstance(ext, str) and ext and not ext.startswith("."):
        if ext.isalnum():
            modules["plugin_extension"] = "." + ext
        else:
            errors.append(
                (
                    "modules.plugin_extension",
                    "config-out-of-range",
                    "must start with '.'",
                )
            )

    dirs = modules.get("directories")
    if dirs is not None and not dirs:
        errors.append(
            (
                "modules.directories",
                "config-out-of-range",
                "at least one directory required",
            )
        )

    if errors:
        for path, code, _ in errors:
            validate_error_type(code)
            metrics.inc(
                "config_validation_errors_total",
                {"path": path, "code": code},
            )
        details = ", ".join(f"{p}:{c}:{m}" for p, c, m in errors)
        err = ConfigError(f"config validation failed: {details}")
        err.error_type = "config-out-of-range"
        raise err


@lru_cache(maxsize=1)
def get_config() -> AggregatedConfig:  # noqa: D401
    with _lock:
        cfg_dir = _resolve_config_dir()
        base_cfg = _load_yaml_if_exists(cfg_dir / "base.yaml")
        overrides_cfg = _load_yaml_if_exists(cfg_dir / "overrides.local.yaml")
        merged = _merge_dict(base_cfg, overrides_cfg)
        migrated = _migrate_legacy(merged)
        _apply_env(migrated)
        _normalize_and_validate(migrated)
        try:
            return AggregatedConfig.model_validate(migrated)
        except Exception as e:  # noqa: BLE001
            raise ConfigError(str(e)) from e


def clear_config_cache() -> None:
    """Clear cached config (primarily for tests)."""
    get_config.cache_clear()


def as_dict() -> Dict[str, Any]:
    return get_config().model_dump()
