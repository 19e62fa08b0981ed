"""
Passer controllers - ``Controller@action`` parsing and class lookup.
"""

from .convention import (
    NAMESPACE_SEPARATOR,
    DEFAULT_ROOT_NAMESPACE,
    ControllerAction,
    ControllerTarget,
    ConventionParser,
    join_namespace,
)
from .locator import ControllerLocator, ControllerRegistry, snake_case

__all__ = [
    "NAMESPACE_SEPARATOR",
    "DEFAULT_ROOT_NAMESPACE",
    "ControllerAction",
    "ControllerTarget",
    "ConventionParser",
    "join_namespace",
    "ControllerLocator",
    "ControllerRegistry",
    "snake_case",
]
