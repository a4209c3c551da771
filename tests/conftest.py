"""Pytest configuration ensuring project root is importable.

Adds repository root to sys.path explicitly to avoid interpreter/path quirks.
"""
from __future__ import annotations

import sys
import textwrap
from pathlib import Path
import os
import pytest

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))


@pytest.fixture(autouse=True)
def _isolate_config_env(tmp_path_factory, monkeypatch):  # noqa: D401
    """Ensure global config/env side effects do not leak between tests.

    - Point VUEMS_CONFIG_DIR at an empty directory (defaults only)
    - Drop any VUEMS__* overrides from the outer environment
    - Clear config / module caches, event listeners and metrics between tests
    """
    from vuems import metrics
    from vuems.config import clear_config_cache
    from vuems.events import clear_listeners
    from vuems.registry import clear_module_cache

    for key in list(os.environ):
        if key.startswith("VUEMS__"):
            monkeypatch.delenv(key)
    monkeypatch.setenv(
        "VUEMS_CONFIG_DIR", str(tmp_path_factory.mktemp("configs"))
    )
    clear_config_cache()
    clear_module_cache()
    clear_listeners()
    metrics.reset_for_tests()
    try:
        yield
    finally:
        clear_config_cache()
        clear_module_cache()
        clear_listeners()


@pytest.fixture
def write_module():
    """Create `<root>/<directory>/<dirname>/vuems.yaml` from YAML text."""

    def _write(
        root: Path, dirname: str, manifest: str, directory: str = "modules"
    ) -> Path:
        module_dir = root / directory / dirname
        module_dir.mkdir(parents=True, exist_ok=True)
        (module_dir / "vuems.yaml").write_text(
            textwrap.dedent(manifest), encoding="utf-8"
        )
        return module_dir

    return _write
