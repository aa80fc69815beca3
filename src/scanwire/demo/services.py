"""Demo interfaces and their components."""

from abc import ABC, abstractmethod

from scanwire import Component


class MessageSource(ABC):
    @abstractmethod
    def message(self) -> str: ...


class GreetingService(ABC):
    @abstractmethod
    def say_hello(self) -> str: ...


class StaticMessageSource(MessageSource, Component):
    def message(self) -> str:
        return "Hello from scanwire!"


class ConsoleGreetingService(GreetingService, Component):
    """Greets with whatever the registered :class:`MessageSource` provides."""

    def __init__(self, source: MessageSource) -> None:
        self.source = source

    def say_hello(self) -> str:
        return self.source.message()
