"""Capability and constructor introspection for component classes."""

import inspect
import typing
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Tuple

from scanwire.decorators import is_constructor, is_misplaced_constructor
from scanwire.exceptions import RegistrationError
from scanwire.markers import Component, is_capability

_INJECTABLE_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.KEYWORD_ONLY,
)


@dataclass(frozen=True)
class Dependency:
    """A constructor parameter the registry has to supply.

    Attributes:
        name: The parameter name.
        annotation: The resolved type hint, or ``inspect.Parameter.empty``.
        positional_only: Whether the argument must be passed positionally.
    """

    name: str
    annotation: Any
    positional_only: bool = False

    @property
    def annotated(self) -> bool:
        return self.annotation is not inspect.Parameter.empty


@dataclass(frozen=True)
class Constructor:
    """A way of building an instance of a component class."""

    factory: Callable[..., Any]
    dependencies: Tuple[Dependency, ...]

    @property
    def arity(self) -> int:
        return len(self.dependencies)

    def invoke(self, arguments: Dict[str, Any]) -> Any:
        args = [arguments[d.name] for d in self.dependencies if d.positional_only]
        kwargs = {d.name: arguments[d.name] for d in self.dependencies if not d.positional_only}
        return self.factory(*args, **kwargs)


def capabilities_of(impl: type) -> List[type]:
    """Return the interfaces *impl* directly declares, excluding the marker.

    Examples:
        >>> from abc import ABC, abstractmethod
        >>> class Store(ABC):
        ...     @abstractmethod
        ...     def get(self, key: str) -> str: ...
        >>> class MemoryStore(Store, Component):
        ...     def get(self, key: str) -> str:
        ...         return key
        >>> capabilities_of(MemoryStore) == [Store]
        True
    """
    return [
        base
        for base in impl.__bases__
        if base is not Component and base is not object and is_capability(base)
    ]


def constructors_of(impl: type) -> List[Constructor]:
    """Return the constructors of *impl*, most dependencies first.

    The class itself comes first among constructors of equal arity,
    followed by ``@constructor`` methods in declaration order.

    Raises:
        RegistrationError: If ``@constructor`` marks a plain instance method.
    """
    found = [_build(impl, getattr(impl, "__init__", None))]
    for name, attribute in vars(impl).items():
        if is_misplaced_constructor(attribute):
            raise RegistrationError(
                f"@constructor on {impl.__name__}.{name} requires a classmethod or staticmethod"
            )
        if is_constructor(attribute):
            method = getattr(impl, name)
            found.append(_build(method, method))
    return sorted(found, key=lambda c: c.arity, reverse=True)


def _build(factory: Callable[..., Any], hinted: Any) -> Constructor:
    try:
        signature = inspect.signature(factory)
    except (ValueError, TypeError):
        return Constructor(factory, ())

    required = [
        p
        for p in signature.parameters.values()
        if p.kind in _INJECTABLE_KINDS and p.default is inspect.Parameter.empty
    ]
    if not required:
        return Constructor(factory, ())

    hints = _type_hints(hinted, required)
    dependencies = tuple(
        Dependency(
            name=p.name,
            annotation=hints.get(p.name, p.annotation),
            positional_only=p.kind is inspect.Parameter.POSITIONAL_ONLY,
        )
        for p in required
    )
    return Constructor(factory, dependencies)


def _type_hints(target: Any, required: List[inspect.Parameter]) -> Dict[str, Any]:
    if target is None:
        return {}
    try:
        return typing.get_type_hints(target)
    except (NameError, TypeError):
        pass

    # an unresolvable hint elsewhere in the signature only costs that one parameter
    globalns = getattr(inspect.unwrap(target), "__globals__", {})
    hints: Dict[str, Any] = {}
    for p in required:
        if p.annotation is inspect.Parameter.empty:
            continue
        holder = type("_Hint", (), {"__annotations__": {p.name: p.annotation}})
        try:
            hints.update(typing.get_type_hints(holder, globalns=globalns))
        except (NameError, TypeError):
            continue
    return hints
