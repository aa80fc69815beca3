"""scanwire: a package-scanning singleton component registry for Python."""

from scanwire.context import ApplicationContext
from scanwire.config import RegistryConfig
from scanwire.decorators import constructor
from scanwire.discovery import discover_modules
from scanwire.exceptions import (
    CircularDependencyError,
    ConfigurationError,
    ConstructionError,
    DiscoveryError,
    NotFoundError,
    RegistrationError,
    ResolutionError,
    ScanwireError,
)
from scanwire.markers import Component
from scanwire.registry import Registry

__all__ = [
    "ApplicationContext",
    "CircularDependencyError",
    "Component",
    "ConfigurationError",
    "ConstructionError",
    "DiscoveryError",
    "NotFoundError",
    "RegistrationError",
    "Registry",
    "RegistryConfig",
    "ResolutionError",
    "ScanwireError",
    "constructor",
    "discover_modules",
]
