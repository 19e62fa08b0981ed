"""
Passer DI - per-dispatch dependency resolution.

Resolves exactly one object graph per call: no instance caching, no
scopes, no lifecycle hooks. Signature metadata is cached; instances are not.
"""

from .metadata import (
    ParameterSpec,
    injectable_type,
    constructor_parameters,
    method_parameters,
)
from .resolver import Resolver, ResolveCtx

__all__ = [
    "ParameterSpec",
    "injectable_type",
    "constructor_parameters",
    "method_parameters",
    "Resolver",
    "ResolveCtx",
]
