"""Module discovery beneath a package on the local filesystem."""

import importlib.util
import os
from importlib.machinery import SOURCE_SUFFIXES
from typing import Iterator, List, Set

import structlog

from scanwire.exceptions import DiscoveryError

logger = structlog.get_logger(__name__)

_SKIPPED_DIRECTORIES = frozenset({"__pycache__"})


def discover_modules(package: str) -> Iterator[str]:
    """Yield the dotted names of every module found beneath *package*.

    The package is located with :func:`importlib.util.find_spec` and each of
    its search locations is walked recursively: sub-directories become
    sub-packages and each Python source file becomes one module name. An
    ``__init__.py`` yields the name of the package it belongs to.

    Resolution is checked before anything is yielded, so a failing call
    produces no names at all.

    Args:
        package: Dotted name of the package (or single module) to walk.

    Returns:
        An iterator over module names, in sorted walk order, each at most once.

    Raises:
        DiscoveryError: If the package cannot be resolved, or is not backed by
            a directory on the local filesystem.
    """
    if not package or not package.strip():
        raise DiscoveryError("Package name must not be blank", package=package)
    package = package.strip()

    try:
        spec = importlib.util.find_spec(package)
    except (ImportError, ValueError) as exc:
        raise DiscoveryError(f"Could not resolve package: {package}", package=package) from exc
    if spec is None:
        raise DiscoveryError(f"Could not resolve package: {package}", package=package)

    if spec.submodule_search_locations is None:
        origin = spec.origin
        if not spec.has_location or origin is None or not os.path.isfile(origin):
            raise DiscoveryError(
                f"Only file-system scanning is supported (origin={origin!r})",
                package=package,
            )
        return iter([package])

    locations: List[str] = list(spec.submodule_search_locations)
    for location in locations:
        if not os.path.isdir(location):
            raise DiscoveryError(
                f"Only file-system scanning is supported (location={location!r})",
                package=package,
            )

    logger.debug("Discovering modules", package=package, locations=locations)
    return _walk_all(package, locations)


def _walk_all(package: str, locations: List[str]) -> Iterator[str]:
    seen: Set[str] = set()
    for location in locations:
        for name in _walk(location, package):
            if name not in seen:
                seen.add(name)
                yield name


def _walk(directory: str, package: str) -> Iterator[str]:
    with os.scandir(directory) as it:
        entries = sorted(it, key=lambda e: e.name)
    for entry in entries:
        if entry.is_dir():
            if entry.name in _SKIPPED_DIRECTORIES or not entry.name.isidentifier():
                continue
            yield from _walk(entry.path, f"{package}.{entry.name}")
            continue
        stem, suffix = os.path.splitext(entry.name)
        if suffix not in SOURCE_SUFFIXES or not entry.is_file():
            continue
        if stem == "__init__":
            yield package
        elif stem.isidentifier():
            yield f"{package}.{stem}"
