"""Component marker and candidate selection rules."""

import inspect
from abc import ABC
from typing import Callable

CandidateRule = Callable[[type], bool]


class Component:
    """Marker base class for classes the registry should manage.

    Subclass it alongside the interfaces a class implements; the marker
    itself is never registered as a capability.

    Examples:
        >>> class Clock(Component):
        ...     pass
        >>> implements_marker(Clock)
        True
        >>> implements_marker(Component)
        False
    """

    __slots__ = ()


def implements_marker(cls: type) -> bool:
    """Return True if *cls* subclasses :class:`Component` (and is not it)."""
    return cls is not Component and issubclass(cls, Component)


def candidate_rule(prefer_annotations: bool = False) -> CandidateRule:
    """Select the marker predicate used to pick component candidates.

    Both settings currently select the marker-subclass check.
    """
    if prefer_annotations:
        # no annotation-based rule exists yet
        return implements_marker
    return implements_marker


def is_protocol(cls: type) -> bool:
    return bool(getattr(cls, "_is_protocol", False))


def is_capability(cls: type) -> bool:
    """Return True if *cls* declares an interface rather than an implementation.

    Abstract classes, ``Protocol`` declarations and classes deriving directly
    from ``abc.ABC`` (even without abstract methods) are interfaces, unless
    they are themselves components.
    """
    if not inspect.isclass(cls):
        return False
    if inspect.isabstract(cls) or is_protocol(cls):
        return True
    return ABC in cls.__bases__ and not issubclass(cls, Component)


def is_component_candidate(cls: object, rule: CandidateRule = implements_marker) -> bool:
    """Return True if *cls* is a concrete, public class accepted by *rule*.

    Examples:
        >>> class Worker(Component):
        ...     pass
        >>> is_component_candidate(Worker)
        True
        >>> class _Hidden(Component):
        ...     pass
        >>> is_component_candidate(_Hidden)
        False
    """
    if not inspect.isclass(cls):
        return False
    if is_capability(cls):
        return False
    if cls.__name__.startswith("_"):
        return False
    return rule(cls)
