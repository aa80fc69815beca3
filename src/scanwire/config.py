"""Registry configuration."""

import os
from typing import Mapping, Optional

from scanwire.exceptions import ConfigurationError

BASE_PACKAGE_ENV = "SCANWIRE_BASE_PACKAGE"
PREFER_ANNOTATIONS_ENV = "SCANWIRE_PREFER_ANNOTATIONS"

_TRUTHY = frozenset({"1", "true", "yes", "on"})


class RegistryConfig:
    """Settings a registry is built from.

    Args:
        base_package: Root package to scan. May be left unset when the
            registry is only fed through explicit registration.
        prefer_annotations: Selects the candidate rule variant.

    Raises:
        ConfigurationError: If an option has the wrong type.
    """

    def __init__(self, base_package: Optional[str] = None, prefer_annotations: bool = False):
        if base_package is not None and not isinstance(base_package, str):
            raise ConfigurationError(
                f"base_package must be a string, got {type(base_package).__name__}"
            )
        if not isinstance(prefer_annotations, bool):
            raise ConfigurationError(
                f"prefer_annotations must be a bool, got {type(prefer_annotations).__name__}"
            )
        self.base_package = base_package
        self.prefer_annotations = prefer_annotations

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "RegistryConfig":
        """Build a config from ``SCANWIRE_*`` environment variables."""
        if environ is None:
            environ = os.environ
        return cls(
            base_package=environ.get(BASE_PACKAGE_ENV),
            prefer_annotations=environ.get(PREFER_ANNOTATIONS_ENV, "false").strip().lower() in _TRUTHY,
        )

    def require_base_package(self) -> str:
        """Return the stripped base package, or fail if it is unset or blank."""
        if self.base_package is None or not self.base_package.strip():
            raise ConfigurationError("Base package must be set before scan()")
        return self.base_package.strip()

    def __repr__(self) -> str:
        return (
            f"RegistryConfig(base_package={self.base_package!r}, "
            f"prefer_annotations={self.prefer_annotations!r})"
        )
