"""Decorator helpers for scanwire.

These decorators mark the alternate constructors the registry may use.
"""

import inspect
from typing import Any, Callable, TypeVar, Union

F = TypeVar("F", bound=Callable[..., Any])

CONSTRUCTOR_ATTRIBUTE = "__scanwire_constructor__"


def constructor(target: Union[F, classmethod, staticmethod]) -> Any:
    """Mark a ``classmethod`` or ``staticmethod`` as an alternate constructor.

    The registry considers the class itself plus every marked method when
    building a component, trying the one with the most dependencies first.
    Works above or below ``@classmethod``. Marking a plain instance method is
    rejected with :class:`~scanwire.exceptions.RegistrationError` when the
    class is built.

    Args:
        target: The method, or the ``classmethod``/``staticmethod`` wrapping it.

    Returns:
        The target, unmodified apart from the marker attribute.

    Examples:
        >>> from scanwire import Component
        >>> class Settings:
        ...     pass
        >>> class Mailer(Component):
        ...     def __init__(self, host: str, settings: Settings) -> None:
        ...         self.host = host
        ...     @constructor
        ...     @classmethod
        ...     def from_settings(cls, settings: Settings) -> "Mailer":
        ...         return cls("localhost", settings)
        >>> is_constructor(Mailer.__dict__["from_settings"])
        True
    """
    func = target.__func__ if isinstance(target, (classmethod, staticmethod)) else target
    setattr(func, CONSTRUCTOR_ATTRIBUTE, True)
    return target


def is_constructor(attribute: Any) -> bool:
    """Return True if a class attribute is a marked ``classmethod``/``staticmethod``."""
    if not isinstance(attribute, (classmethod, staticmethod)):
        return False
    return bool(getattr(attribute.__func__, CONSTRUCTOR_ATTRIBUTE, False))


def is_misplaced_constructor(attribute: Any) -> bool:
    """Return True if a plain method was marked with :func:`constructor`."""
    return inspect.isfunction(attribute) and bool(getattr(attribute, CONSTRUCTOR_ATTRIBUTE, False))
