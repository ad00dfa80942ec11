"""
Generator registry — name-based lookup of available generators.

The CLI and the generate use case never import generator modules
directly; they resolve names through a registry.
"""

from __future__ import annotations

import logging

from gentx.core.models.generator import Generator

logger = logging.getLogger(__name__)


class GeneratorRegistry:
    """Registry of generators keyed by name."""

    def __init__(self) -> None:
        self._generators: dict[str, Generator] = {}

    def register(self, generator: Generator) -> None:
        """Register a generator, replacing one with the same name."""
        name = generator.name
        if name in self._generators:
            logger.warning("Overwriting existing generator: %s", name)
        self._generators[name] = generator
        logger.debug("Registered generator: %s", name)

    def unregister(self, name: str) -> None:
        """Remove a generator from the registry."""
        self._generators.pop(name, None)

    def get(self, name: str) -> Generator | None:
        """Look up a generator by name."""
        return self._generators.get(name)

    def list_generators(self) -> list[str]:
        """All registered generator names, sorted."""
        return sorted(self._generators)

    def __contains__(self, name: object) -> bool:
        return name in self._generators

    def __len__(self) -> int:
        return len(self._generators)


def default_registry() -> GeneratorRegistry:
    """A registry holding the built-in generators."""
    from gentx.core.services.generators import BUILTIN_GENERATORS

    registry = GeneratorRegistry()
    for generator in BUILTIN_GENERATORS:
        registry.register(generator)
    return registry
