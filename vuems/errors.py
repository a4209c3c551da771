"""Central error taxonomy and exception hierarchy.

Every failure raised while discovering or preparing modules carries one of
the ``error_type`` codes below so hosts can report them uniformly.
"""
from __future__ import annotations

_ALLOWED_ERROR_TYPES = {
    # discovery
    "manifest-invalid",
    "duplicate-module",
    "required-missing",
    # preparation
    "relation-missing",
    "module-not-found",
    "registration-failed",
    # config
    "config-invalid",
    "config-out-of-range",
    # infra
    "event-handler-error",
    "internal",
}


def validate_error_type(code: str) -> str:
    assert (
        code in _ALLOWED_ERROR_TYPES
    ), f"Unknown error_type '{code}' (not in taxonomy)"
    return code


def error_type_of(e: BaseException) -> str:
    """Map any exception raised during preparation to a taxonomy code."""
    code = getattr(e, "error_type", None)
    if isinstance(code, str) and code in _ALLOWED_ERROR_TYPES:
        return code
    return "internal"


class VuemsError(Exception):
    """Base error for module discovery and preparation."""

    error_type = "internal"


class RelationError(VuemsError):
    """A module declares a relation with a module that does not exist."""

    error_type = "relation-missing"

    def __init__(self, module: str, relation: str):
        self.module = module
        self.relation = relation
        super().__init__(
            f"Module [{module}] has relation with [{relation}].\n"
            f" Module [{relation}] does not exist."
        )


class UnknownModuleError(VuemsError, LookupError):
    """A module name is absent from the resolved (active) module list."""

    error_type = "module-not-found"

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Module [{name}] is not among the active modules")


class RegistrationError(VuemsError):
    """The host refused a plugin registration."""

    error_type = "registration-failed"


class ManifestError(VuemsError):
    """A module manifest cannot be read or validated."""

    error_type = "manifest-invalid"


class DuplicateModuleError(ManifestError):
    error_type = "duplicate-module"


class RequiredModuleError(VuemsError):
    """One or more required modules were not discovered."""

    error_type = "required-missing"

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__(
            "Required modules [{names}] are missing".format(
                names=", ".join(self.missing)
            )
        )


__all__ = [
    "validate_error_type",
    "error_type_of",
    "VuemsError",
    "RelationError",
    "UnknownModuleError",
    "RegistrationError",
    "ManifestError",
    "DuplicateModuleError",
    "RequiredModuleError",
]
