"""
Parameter metadata queries.

Answers "given a class or callable, which formal parameters does it declare,
with what type and name" without instantiating anything. The resolver and
the CLI both read signatures through here.
"""

from __future__ import annotations

import inspect
import types
from dataclasses import dataclass
from typing import Annotated, Any, Callable, Dict, Optional, Tuple, Union, get_args, get_origin, get_type_hints

from ..faults import DIResolutionFault


# Built-in types that can never be auto-constructed
_PRIMITIVES = frozenset((
    int, str, float, bool, bytes, bytearray, complex,
    list, dict, tuple, set, frozenset,
    object, type, type(None),
))

_EMPTY = inspect.Parameter.empty

# callable -> ordered parameter specs
_param_cache: Dict[Any, Tuple["ParameterSpec", ...]] = {}


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """One formal parameter: its name, declared type and the class to inject (if any)."""
    name: str
    annotation: Any
    kind: inspect._ParameterKind
    default: Any = _EMPTY
    injectable: Optional[type] = None

    @property
    def has_default(self) -> bool:
        return self.default is not _EMPTY

    @property
    def is_injectable(self) -> bool:
        return self.injectable is not None

    @property
    def type_name(self) -> str:
        if self.annotation is _EMPTY:
            return "-"
        if inspect.isclass(self.annotation):
            return self.annotation.__qualname__
        return str(self.annotation).replace("typing.", "")


def injectable_type(annotation: Any) -> Optional[type]:
    """
    Return the class to auto-construct for an annotation, or None.

    ``Optional[X]`` and ``Annotated[X, ...]`` unwrap to ``X``. Built-in
    primitives, generic aliases and untyped parameters are not injectable.
    """
    # Any is a class on 3.11+ but means "untyped"
    if annotation is _EMPTY or annotation is None or annotation is Any:
        return None

    origin = get_origin(annotation)
    if origin is Annotated:
        return injectable_type(get_args(annotation)[0])
    if origin is Union or origin is types.UnionType:
        members = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(members) == 1:
            return injectable_type(members[0])
        return None
    if origin is not None:
        return None

    if not inspect.isclass(annotation) or annotation in _PRIMITIVES:
        return None
    return annotation


def constructor_parameters(cls: type) -> Tuple[ParameterSpec, ...]:
    """Ordered parameters of ``cls.__init__``, excluding ``self``."""
    if cls.__init__ is object.__init__:
        return ()
    return _parameters(cls.__init__, owner=cls.__qualname__)


def method_parameters(cls: type, name: str) -> Tuple[ParameterSpec, ...]:
    """
    Ordered parameters of ``cls.<name>``, read from the class alone.

    Raises:
        DIResolutionFault: if the class has no such callable attribute
    """
    func = getattr(cls, name, None)
    if func is None or not callable(func):
        raise DIResolutionFault(
            f"{cls.__qualname__}.{name}",
            "method does not exist",
        )
    return _parameters(func, owner=f"{cls.__qualname__}.{name}")


def _parameters(func: Callable, owner: str) -> Tuple[ParameterSpec, ...]:
    cached = _param_cache.get(func)
    if cached is not None:
        return cached

    try:
        sig = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without signature metadata declare nothing we can inject
        return ()

    try:
        hints = get_type_hints(func, include_extras=True)
    except Exception as exc:
        raise DIResolutionFault(owner, f"cannot evaluate type hints ({exc})") from exc

    specs = []
    for param_name, param in sig.parameters.items():
        if param_name in ("self", "cls"):
            continue
        if param.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
            continue

        annotation = hints.get(param_name, param.annotation)
        specs.append(ParameterSpec(
            name=param_name,
            annotation=annotation,
            kind=param.kind,
            default=param.default,
            injectable=injectable_type(annotation),
        ))

    result = tuple(specs)
    _param_cache[func] = result
    return result
