"""Tests for the Component marker and candidate rules."""

import unittest
from abc import ABC, abstractmethod
from typing import Protocol

from scanwire.markers import (
    Component,
    candidate_rule,
    implements_marker,
    is_capability,
    is_component_candidate,
)


class Speaker(ABC):
    @abstractmethod
    def speak(self) -> str: ...


class Named(Protocol):
    def name(self) -> str: ...


class Parrot(Speaker, Component):
    def speak(self) -> str:
        return "squawk"


class Rock:
    pass


class _PrivateParrot(Speaker, Component):
    def speak(self) -> str:
        return "..."


class HalfBuilt(Speaker, Component):
    pass


class Tagged(ABC):
    pass


class TaggedComponent(ABC, Component):
    pass


class TestImplementsMarker(unittest.TestCase):
    def test_subclass_is_marked(self) -> None:
        self.assertTrue(implements_marker(Parrot))

    def test_marker_itself_is_not_marked(self) -> None:
        self.assertFalse(implements_marker(Component))

    def test_unrelated_class_is_not_marked(self) -> None:
        self.assertFalse(implements_marker(Rock))


class TestCandidateRule(unittest.TestCase):
    def test_both_settings_select_the_marker_check(self) -> None:
        for prefer_annotations in (False, True):
            rule = candidate_rule(prefer_annotations)
            self.assertTrue(rule(Parrot))
            self.assertFalse(rule(Rock))


class TestIsCapability(unittest.TestCase):
    def test_abstract_class(self) -> None:
        self.assertTrue(is_capability(Speaker))

    def test_protocol(self) -> None:
        self.assertTrue(is_capability(Named))

    def test_concrete_class(self) -> None:
        self.assertFalse(is_capability(Parrot))

    def test_abc_without_abstract_methods(self) -> None:
        self.assertTrue(is_capability(Tagged))

    def test_abc_component_is_not_an_interface(self) -> None:
        self.assertFalse(is_capability(TaggedComponent))
        self.assertTrue(is_component_candidate(TaggedComponent))


class TestIsComponentCandidate(unittest.TestCase):
    def test_concrete_public_marked_class(self) -> None:
        self.assertTrue(is_component_candidate(Parrot))

    def test_unmarked_class(self) -> None:
        self.assertFalse(is_component_candidate(Rock))

    def test_private_class(self) -> None:
        self.assertFalse(is_component_candidate(_PrivateParrot))

    def test_abstract_class(self) -> None:
        self.assertFalse(is_component_candidate(HalfBuilt))

    def test_interface(self) -> None:
        self.assertFalse(is_component_candidate(Speaker))

    def test_non_class(self) -> None:
        self.assertFalse(is_component_candidate(Parrot()))
        self.assertFalse(is_component_candidate("Parrot"))

    def test_custom_rule(self) -> None:
        self.assertTrue(is_component_candidate(Rock, rule=lambda cls: True))


if __name__ == "__main__":
    unittest.main()
