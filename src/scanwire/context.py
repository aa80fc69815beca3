"""Application context facade over the component registry."""

from typing import Any, Mapping, Optional, Type, TypeVar

from scanwire.config import RegistryConfig
from scanwire.registry import Registry

T = TypeVar("T")


class ApplicationContext:
    """Owns a :class:`Registry` and exposes the application-facing lifecycle.

    Example::

        with ApplicationContext(base_package="scanwire.demo") as context:
            context.refresh()
            context.get_bean(GreetingService).say_hello()
    """

    def __init__(self, base_package: Optional[str] = None, prefer_annotations: bool = False) -> None:
        self._registry = Registry.from_config(RegistryConfig(base_package, prefer_annotations))

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ApplicationContext":
        config = RegistryConfig.from_env(environ)
        return cls(config.base_package, config.prefer_annotations)

    @property
    def registry(self) -> Registry:
        return self._registry

    def refresh(self) -> None:
        self._registry.scan()

    def get_bean(self, bean_type: Type[T]) -> T:
        return self._registry.get_instance(bean_type)

    def close(self) -> None:
        self._registry.close()

    def __enter__(self) -> "ApplicationContext":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()
