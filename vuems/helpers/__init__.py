from .log import configure_logging, log  # noqa: F401
from .paths import join_module_path  # noqa: F401

__all__ = ["configure_logging", "log", "join_module_path"]
