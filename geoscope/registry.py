"""Strategy registration and lookup."""

from __future__ import annotations

from typing import Any

# Global registry: strategy kind -> name -> class
_STRATEGY_REGISTRY: dict[str, dict[str, type]] = {}

DISAMBIGUATION = "disambiguation"
SCOPE = "scope"


def strategy(kind: str, name: str) -> Any:
    """
    Decorator for strategy registration.

    Usage:
        @strategy(SCOPE, "midpoint")
        class MidpointScopeDetector(ScopeDetector):
            def scope(self, locations): ...
    """

    def decorator(cls: type) -> type:
        cls._strategy_name = name
        _STRATEGY_REGISTRY.setdefault(kind, {})[name] = cls
        return cls

    return decorator


def disambiguation(name: str) -> Any:
    return strategy(DISAMBIGUATION, name)


def scope_detector(name: str) -> Any:
    return strategy(SCOPE, name)


def get_strategy(kind: str, name: str) -> type:
    """Look up a registered strategy class, raising KeyError with the known names."""
    strategies = _STRATEGY_REGISTRY.get(kind, {})
    if name not in strategies:
        known = ", ".join(sorted(strategies)) or "none"
        raise KeyError(f"Unknown {kind} strategy '{name}' (known: {known})")
    return strategies[name]


def list_strategies(kind: str) -> list[str]:
    """List registered strategy names for a kind."""
    return sorted(_STRATEGY_REGISTRY.get(kind, {}))
