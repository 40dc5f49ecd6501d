"""
Strategy Registry Module - Name lookup for search strategies.

Strategies add themselves at import time with @register_strategy and are
picked by the same name on the command line and in config.json.
"""

from typing import Dict, List, Optional, Type

from .base import SolverStrategy


# Used when no name is given (CLI, settings, solve())
DEFAULT_STRATEGY = "astar"

_REGISTRY: Dict[str, Type[SolverStrategy]] = {}


def register_strategy(cls: Type[SolverStrategy]) -> Type[SolverStrategy]:
    """
    Class decorator adding a strategy under its `name` attribute.

    Raises:
        ValueError: If a different class already registered that name
    """
    existing = _REGISTRY.get(cls.name)
    if existing is not None and existing is not cls:
        raise ValueError(
            f"Strategy name {cls.name!r} already registered by {existing.__name__}"
        )
    _REGISTRY[cls.name] = cls
    return cls


def create_strategy(name: Optional[str] = None) -> SolverStrategy:
    """
    Instantiate a registered strategy.

    Args:
        name: Strategy name, or None for DEFAULT_STRATEGY

    Returns:
        Fresh strategy instance

    Raises:
        ValueError: If no strategy has that name
    """
    key = name or DEFAULT_STRATEGY
    try:
        strategy_cls = _REGISTRY[key]
    except KeyError:
        raise ValueError(
            f"Unknown strategy {key!r}, choose from: {', '.join(get_strategy_names())}"
        ) from None
    return strategy_cls()


def get_strategy_names() -> List[str]:
    """Registered strategy names in alphabetical order."""
    return sorted(_REGISTRY)


def get_strategy_info() -> List[Dict[str, str]]:
    """
    Name and one-line description of every strategy, for help texts.

    Returns:
        List of {"name": ..., "description": ...} in name order
    """
    return [
        {"name": name, "description": _REGISTRY[name].description}
        for name in get_strategy_names()
    ]
