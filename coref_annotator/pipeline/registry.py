"""Coref system registration and lookup."""

from __future__ import annotations

from typing import Any

# Global registry: algorithm name -> coref system class
_SYSTEM_REGISTRY: dict[str, type] = {}


def coref_system(name: str) -> Any:
    """
    Decorator for coref system registration.

    Usage:
        @coref_system("exact_match")
        class ExactMatchCorefSystem:
            def __init__(self, config): ...
            def annotate(self, document): ...
    """

    def decorator(cls: type) -> type:
        cls._algorithm = name
        _SYSTEM_REGISTRY[name] = cls
        return cls

    return decorator


def get_system_for_algorithm(name: str) -> type | None:
    """Get the coref system class registered for an algorithm."""
    return _SYSTEM_REGISTRY.get(name)


def unregister_system(name: str) -> None:
    """Remove a registration. Useful for testing."""
    _SYSTEM_REGISTRY.pop(name, None)


def list_registered_algorithms() -> list[str]:
    """List all algorithms with a registered coref system."""
    return list(_SYSTEM_REGISTRY.keys())
