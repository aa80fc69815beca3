"""Component registry: scanning, resolution and singleton construction."""

import importlib
import inspect
import threading
from contextlib import contextmanager
from types import ModuleType
from typing import Any, Dict, Iterable, Iterator, List, Optional, Type, TypeVar

import structlog

from scanwire.config import RegistryConfig
from scanwire.discovery import discover_modules
from scanwire.exceptions import (
    CircularDependencyError,
    ConstructionError,
    NotFoundError,
    RegistrationError,
    ResolutionError,
)
from scanwire.introspection import Constructor, capabilities_of, constructors_of
from scanwire.markers import candidate_rule, is_capability, is_component_candidate

logger = structlog.get_logger(__name__)

T = TypeVar("T")

_MISSING = object()


def _label(key: Any) -> str:
    return getattr(key, "__name__", str(key))


class _ResolutionContext:
    """The chain of classes under construction for one ``get_instance`` call."""

    def __init__(self) -> None:
        self.stack: List[type] = []

    def labels(self) -> List[str]:
        return [_label(c) for c in self.stack]

    @contextmanager
    def constructing(self, impl: type) -> Iterator[None]:
        if impl in self.stack:
            raise CircularDependencyError(self.stack + [impl])
        self.stack.append(impl)
        try:
            yield
        finally:
            self.stack.pop()


class Registry:
    """A singleton component registry populated by package scanning.

    Classes beneath the base package that subclass :class:`Component` are
    registered under themselves and under the interfaces they declare, then
    built eagerly with their constructor dependencies resolved from type
    annotations.

    Args:
        base_package: Root package for :meth:`scan`.
        prefer_annotations: Selects the candidate rule variant.

    Example::

        with Registry(base_package="myapp.services") as registry:
            registry.scan()
            mailer = registry.get_instance(Mailer)
    """

    def __init__(self, base_package: Optional[str] = None, prefer_annotations: bool = False) -> None:
        self._config = RegistryConfig(base_package, prefer_annotations)
        self._is_marked = candidate_rule(self._config.prefer_annotations)
        self._catalog: Dict[Any, type] = {}
        self._singletons: Dict[Any, Any] = {}
        self._lock = threading.Lock()

    @classmethod
    def from_config(cls, config: RegistryConfig) -> "Registry":
        return cls(config.base_package, config.prefer_annotations)

    @property
    def config(self) -> RegistryConfig:
        return self._config

    @property
    def bindings(self) -> Dict[Any, type]:
        """A snapshot of the catalog: requested type -> implementation class."""
        return dict(self._catalog)

    def scan(self) -> None:
        """Discover, register and eagerly build every component under the base package.

        Raises:
            ConfigurationError: If no base package is set.
            DiscoveryError: If the base package cannot be walked.
            ResolutionError: If any registered component cannot be built.
        """
        base_package = self._config.require_base_package()
        logger.info("Scanning for components", base_package=base_package)

        for module in self._load_modules(discover_modules(base_package)):
            for cls in _declared_classes(module):
                if self.is_candidate(cls):
                    self._register(cls)

        for key in list(self._catalog):
            self.get_instance(key)

        logger.info(
            "Scan complete",
            base_package=base_package,
            bindings=len(self._catalog),
            singletons=len(self._singletons),
        )

    def register(self, impl: type) -> None:
        """Register a concrete class under itself and its declared interfaces.

        Unlike scanning this does not require the :class:`Component` marker.
        Existing bindings are never replaced.

        Raises:
            RegistrationError: If *impl* is not a concrete class.
        """
        if not inspect.isclass(impl):
            raise RegistrationError(f"Cannot register {impl!r}: not a class")
        if is_capability(impl):
            raise RegistrationError(f"Cannot register {_label(impl)}: it is an interface")
        self._register(impl)

    def is_candidate(self, cls: object) -> bool:
        return is_component_candidate(cls, self._is_marked)

    def get_instance(self, key: Type[T]) -> T:
        """Return the singleton bound to *key*, building it on first request.

        Args:
            key: A registered class or one of the interfaces it declares.

        Returns:
            The same instance for every key bound to the same class.

        Raises:
            NotFoundError: If nothing is bound to *key*.
            CircularDependencyError: If construction of *key* requires itself.
            ConstructionError: If no constructor can be satisfied, or the
                chosen one raises.
            RegistrationError: If a class marks a plain method with
                ``@constructor``.
        """
        return self._get_instance(key, _ResolutionContext())

    def close(self) -> None:
        """Forget every binding and instance. Safe to call repeatedly."""
        with self._lock:
            self._singletons.clear()
            self._catalog.clear()
        logger.info("Registry closed")

    def __enter__(self) -> "Registry":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _register(self, impl: type) -> None:
        with self._lock:
            self._catalog.setdefault(impl, impl)
            for capability in capabilities_of(impl):
                self._catalog.setdefault(capability, impl)
        logger.debug("Registered component", component=_label(impl))

    def _resolve(self, requested: Any) -> Optional[type]:
        impl = self._catalog.get(requested)
        if impl is not None:
            return impl
        for key, value in list(self._catalog.items()):
            if key == requested or value == requested:
                return value
        if self.is_candidate(requested):
            return requested
        return None

    def _get_instance(self, key: Any, context: _ResolutionContext) -> Any:
        existing = self._singletons.get(key, _MISSING)
        if existing is not _MISSING:
            return existing

        impl = self._resolve(key)
        if impl is None:
            raise NotFoundError(
                f"No component registered for: {_label(key)}",
                chain=context.labels() + [_label(key)],
            )

        instance = self._singletons.get(impl, _MISSING)
        if instance is _MISSING:
            with context.constructing(impl):
                created = self._create_instance(impl, context)
            with self._lock:
                instance = self._singletons.setdefault(impl, created)

        if key is not impl:
            with self._lock:
                instance = self._singletons.setdefault(key, instance)
        return instance

    def _create_instance(self, impl: type, context: _ResolutionContext) -> Any:
        """Build *impl* with the richest constructor whose dependencies all resolve."""
        last_failure: Optional[ResolutionError] = None
        for ctor in constructors_of(impl):
            try:
                arguments = self._resolve_arguments(impl, ctor, context)
            except (NotFoundError, ConstructionError) as exc:
                logger.debug(
                    "Constructor unsatisfied",
                    component=_label(impl),
                    arity=ctor.arity,
                    reason=str(exc),
                )
                last_failure = exc
                continue
            return self._invoke(impl, ctor, arguments, context)

        raise ConstructionError(
            f"No suitable constructor found for {_label(impl)}",
            component=impl,
            chain=context.labels(),
        ) from last_failure

    def _resolve_arguments(
        self,
        impl: type,
        ctor: Constructor,
        context: _ResolutionContext,
    ) -> Dict[str, Any]:
        arguments: Dict[str, Any] = {}
        for dependency in ctor.dependencies:
            if not dependency.annotated:
                raise NotFoundError(
                    f"Parameter '{dependency.name}' of {_label(impl)} has no type annotation",
                    chain=context.labels(),
                )
            arguments[dependency.name] = self._get_instance(dependency.annotation, context)
        return arguments

    def _invoke(
        self,
        impl: type,
        ctor: Constructor,
        arguments: Dict[str, Any],
        context: _ResolutionContext,
    ) -> Any:
        logger.debug("Creating component", component=_label(impl), arity=ctor.arity)
        try:
            return ctor.invoke(arguments)
        except ResolutionError:
            raise
        except Exception as exc:
            raise ConstructionError(
                f"Failed to create component: {_label(impl)}",
                component=impl,
                chain=context.labels(),
            ) from exc

    def _load_modules(self, names: Iterable[str]) -> Iterator[ModuleType]:
        for name in names:
            try:
                module = importlib.import_module(name)
            except ImportError as exc:
                logger.warning("Skipping unimportable module", module=name, error=str(exc))
                continue
            yield module


def _declared_classes(module: ModuleType) -> List[type]:
    return [
        obj
        for _, obj in inspect.getmembers(module, inspect.isclass)
        if obj.__module__ == module.__name__
    ]
