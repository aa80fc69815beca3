"""Custom exceptions for the scanwire component registry."""

from typing import Iterable, Optional


class ScanwireError(Exception):
    """Base class for every error raised by scanwire."""


class ConfigurationError(ScanwireError):
    """Raised when the registry is misconfigured.

    Examples:
        >>> raise ConfigurationError("Base package must be set before scan()")
        Traceback (most recent call last):
            ...
        scanwire.exceptions.ConfigurationError: Base package must be set before scan()
    """


class DiscoveryError(ScanwireError):
    """Raised when a package cannot be resolved to a walkable directory.

    Args:
        message: Description of the discovery failure.
        package: The package name that was being discovered.
    """

    def __init__(self, message: str, package: Optional[str] = None) -> None:
        super().__init__(message)
        self.package = package


class RegistrationError(ScanwireError):
    """Raised when an explicit registration is rejected.

    Examples:
        >>> raise RegistrationError("Cannot register 42: not a class")
        Traceback (most recent call last):
            ...
        scanwire.exceptions.RegistrationError: Cannot register 42: not a class
    """


class ResolutionError(ScanwireError):
    """Raised when a component cannot be resolved.

    Includes the resolution chain to help diagnose missing dependencies.

    Args:
        message: Description of the resolution failure.
        chain: The resolution chain that led to the failure.

    Examples:
        >>> raise ResolutionError("No component registered for: Mailer")
        Traceback (most recent call last):
            ...
        scanwire.exceptions.ResolutionError: No component registered for: Mailer
    """

    def __init__(self, message: str, chain: "list[str] | None" = None) -> None:
        if chain:
            chain_str = " -> ".join(chain)
            message = f"{message} (resolution chain: {chain_str})"
        super().__init__(message)
        self.chain = chain or []


class NotFoundError(ResolutionError):
    """Raised when no component is bound for a requested type."""


class CircularDependencyError(ResolutionError):
    """Raised when a component transitively requires itself.

    The message renders the construction chain from the outermost
    in-progress component to the one requested again.

    Args:
        components: The classes on the chain, closing class repeated last.

    Examples:
        >>> class A: ...
        >>> raise CircularDependencyError([A, A])
        Traceback (most recent call last):
            ...
        scanwire.exceptions.CircularDependencyError: Circular dependency detected: A -> A
    """

    def __init__(self, components: Iterable[type]) -> None:
        self.components = tuple(components)
        labels = [getattr(c, "__name__", str(c)) for c in self.components]
        super().__init__(f"Circular dependency detected: {' -> '.join(labels)}")
        self.chain = labels


class ConstructionError(ResolutionError):
    """Raised when a component has no satisfiable constructor or its constructor fails.

    Args:
        message: Description of the construction failure.
        component: The implementation class that could not be built.
        chain: The resolution chain that led to the failure.
    """

    def __init__(
        self,
        message: str,
        component: Optional[type] = None,
        chain: "list[str] | None" = None,
    ) -> None:
        super().__init__(message, chain=chain)
        self.component = component
