"""
Dependency resolver.

Builds one object graph per call by reading constructor and method
signatures. Nothing is cached between calls except signature metadata:
every ``by_class`` call returns fresh instances all the way down.
"""

from __future__ import annotations

import inspect
import logging
from typing import Any, Dict, List, Mapping, Optional, Type, TypeVar

from ..faults import DependencyCycleFault, DIResolutionFault
from .metadata import constructor_parameters, method_parameters


T = TypeVar("T")


def _token(cls: type) -> str:
    return f"{cls.__module__}.{cls.__qualname__}"


class ResolveCtx:
    """
    Resolution stack for a single ``by_class`` call.

    Tracks the classes currently under construction so a class that
    (transitively) requires itself is reported instead of recursing forever.
    """
    __slots__ = ("stack",)

    def __init__(self):
        self.stack: List[str] = []

    def push(self, token: str) -> None:
        self.stack.append(token)

    def pop(self) -> None:
        self.stack.pop()

    def in_cycle(self, token: str) -> bool:
        return token in self.stack

    def get_trace(self) -> List[str]:
        return self.stack.copy()


class Resolver:
    """
    Constructs classes by auto-supplying their class-typed parameters.

    Example:
        class Mailer:
            pass

        class UserService:
            def __init__(self, mailer: Mailer, retries: int = 3):
                ...

        resolver = Resolver()
        service = resolver.by_class(UserService)   # Mailer built and injected
        resolver.method(UsersController, "show")   # {"service": UserService(...)}

    Parameters typed with primitives (or untyped) are skipped; if such a
    parameter has no default the constructor call fails and the error
    propagates unchanged.
    """

    def __init__(self, bindings: Optional[Mapping[type, type]] = None):
        self._bindings: Dict[type, type] = dict(bindings or {})
        self.logger = logging.getLogger("passer.di")

    def bind(self, interface: type, implementation: type) -> "Resolver":
        """
        Bind an abstract type to the concrete class built in its place.

        Example:
            resolver.bind(UserRepository, SqlUserRepository)
        """
        if not inspect.isclass(implementation):
            raise TypeError(f"Binding target for {interface!r} must be a class")
        self._bindings[interface] = implementation
        return self

    def by_class(self, cls: Type[T], *, ctx: Optional[ResolveCtx] = None) -> T:
        """
        Instantiate ``cls``, recursively resolving class-typed constructor params.

        Raises:
            DependencyCycleFault: if the graph loops back onto a class under construction
            DIResolutionFault: if a type is abstract with no binding, or its hints are invalid
        """
        ctx = ctx or ResolveCtx()
        target = self._concrete(cls)
        token = _token(target)

        if ctx.in_cycle(token):
            raise DependencyCycleFault(ctx.get_trace() + [token])

        ctx.push(token)
        try:
            kwargs: Dict[str, Any] = {}
            for spec in constructor_parameters(target):
                if spec.injectable is None:
                    continue
                kwargs[spec.name] = self.by_class(spec.injectable, ctx=ctx)

            self.logger.debug(
                "Constructing %s (depth=%d, injected=%s)",
                token, len(ctx.stack), sorted(kwargs),
            )
            return target(**kwargs)
        finally:
            ctx.pop()

    def method(self, cls: type, name: str) -> Dict[str, Any]:
        """
        Resolve every class-typed parameter of ``cls.<name>``.

        Works from the class alone; no controller instance is needed.
        Untyped and primitive parameters are left out of the result.

        Returns:
            Mapping of parameter name to a freshly built instance
        """
        resolved: Dict[str, Any] = {}
        for spec in method_parameters(cls, name):
            if spec.injectable is None:
                continue
            resolved[spec.name] = self.by_class(spec.injectable)

        self.logger.debug(
            "Resolved %s.%s dependencies: %s",
            cls.__qualname__, name, sorted(resolved),
        )
        return resolved

    def _concrete(self, cls: type) -> type:
        target = self._bindings.get(cls, cls)
        if inspect.isabstract(target) or getattr(target, "_is_protocol", False):
            raise DIResolutionFault(
                _token(target),
                "abstract type has no bound implementation",
            )
        return target
