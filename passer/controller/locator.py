"""
Controller lookup under the root namespace.

A fully-qualified controller name is looked up first in an explicit
registration table, then by import: the root namespace maps to a Python
package, each namespace segment to a snake_case sub-package, and the class
is an attribute of the last module::

    App\\Controllers\\Admin\\UserController
        -> app.controllers.admin.UserController
"""

from __future__ import annotations

import importlib
import inspect
import logging
import re
from typing import Callable, Dict, Iterator, Optional, Tuple

from ..faults import ControllerNotFoundFault
from .convention import DEFAULT_ROOT_NAMESPACE, NAMESPACE_SEPARATOR, join_namespace

logger = logging.getLogger("passer.controller")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def snake_case(segment: str) -> str:
    """``UserAdmin`` -> ``user_admin``."""
    return _CAMEL_BOUNDARY.sub("_", segment).lower()


class ControllerRegistry:
    """
    Static registration table: fully-qualified name -> controller class.

    Example:
        registry = ControllerRegistry()

        @registry.controller(namespace="App\\\\Controllers\\\\Admin")
        class UserController:
            def show(self, id): ...

        registry.get("App\\\\Controllers\\\\Admin\\\\UserController")
    """

    def __init__(self):
        self._classes: Dict[str, type] = {}

    def register(self, cls: type, namespace: str = DEFAULT_ROOT_NAMESPACE) -> type:
        """Register ``cls`` as ``<namespace>\\<cls.__name__>``."""
        if not inspect.isclass(cls):
            raise TypeError(f"Only classes can be registered as controllers, got {cls!r}")

        fqn = join_namespace(namespace, cls.__name__)
        existing = self._classes.get(fqn)
        if existing is not None and existing is not cls:
            raise ValueError(f"Controller {fqn} already registered: {existing.__qualname__}")

        self._classes[fqn] = cls
        return cls

    def controller(self, namespace: str = DEFAULT_ROOT_NAMESPACE) -> Callable[[type], type]:
        """Decorator form of ``register``."""
        def decorator(cls: type) -> type:
            return self.register(cls, namespace=namespace)
        return decorator

    def get(self, fqn: str) -> Optional[type]:
        return self._classes.get(fqn)

    def names(self) -> list[str]:
        return sorted(self._classes)

    def __contains__(self, fqn: str) -> bool:
        return fqn in self._classes

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._classes)


class ControllerLocator:
    """
    Finds the class behind a fully-qualified controller name.

    Args:
        root_namespace: Prefix every parsed controller name carries
        package: Python package the root namespace maps to (None disables imports)
        registry: Optional registration table consulted before importing
    """

    def __init__(
        self,
        root_namespace: str = DEFAULT_ROOT_NAMESPACE,
        package: Optional[str] = "app.controllers",
        registry: Optional[ControllerRegistry] = None,
    ):
        self.root_namespace = join_namespace(root_namespace)
        self.package = package
        self.registry = registry

    def module_path(self, fqn: str) -> Tuple[str, str]:
        """
        Split ``fqn`` into ``(module, class_name)``.

        Raises:
            ControllerNotFoundFault: ``fqn`` lies outside the root namespace
        """
        if self.package is None:
            raise ControllerNotFoundFault(fqn, reason="not registered and no controller package configured")

        prefix = self.root_namespace + NAMESPACE_SEPARATOR
        if not fqn.startswith(prefix):
            raise ControllerNotFoundFault(fqn, reason="outside the controller root")

        segments = fqn[len(prefix):].split(NAMESPACE_SEPARATOR)
        module = ".".join([self.package, *(snake_case(s) for s in segments[:-1])])
        return module, segments[-1]

    def locate(self, fqn: str) -> type:
        """
        Return the controller class for ``fqn``.

        Raises:
            ControllerNotFoundFault: no module or class exists under that name
        """
        if self.registry is not None:
            cls = self.registry.get(fqn)
            if cls is not None:
                return cls

        module_name, class_name = self.module_path(fqn)
        try:
            module = importlib.import_module(module_name)
        except ModuleNotFoundError as exc:
            # Only a missing target module means "no such namespace";
            # broken imports inside an existing module propagate.
            if exc.name and (module_name == exc.name or module_name.startswith(exc.name + ".")):
                raise ControllerNotFoundFault(fqn, reason=f"module '{module_name}' not found") from exc
            raise

        cls = getattr(module, class_name, None)
        if not inspect.isclass(cls):
            raise ControllerNotFoundFault(fqn, reason=f"'{module_name}' has no class '{class_name}'")

        logger.debug("Located %s at %s.%s", fqn, module_name, class_name)
        return cls
