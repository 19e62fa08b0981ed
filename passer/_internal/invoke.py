"""Invoke helpers - call a handler with arguments taken from a name->value map.

Route params and resolved dependencies arrive as one mapping. The handler's
formal parameters decide what gets passed: each parameter is looked up by
name, positional-only ones are passed positionally, and leftover keys only
reach handlers that declare ``**kwargs``.

Usage::

    from passer._internal.invoke import invoke

    result = invoke(handler, {"request": request, "id": "42"})
"""

import inspect
import logging
from typing import Any, Dict, List, Mapping, Tuple

from ..faults import ParameterBindingFault

logger = logging.getLogger("passer.invoke")

_EMPTY = inspect.Parameter.empty


def _handler_name(handler: Any) -> str:
    return getattr(handler, "__qualname__", None) or type(handler).__qualname__


def bind_arguments(handler: Any, params: Mapping[str, Any]) -> Tuple[List[Any], Dict[str, Any]]:
    """Build ``(args, kwargs)`` for ``handler`` from ``params``.

    Raises:
        ParameterBindingFault: a required parameter has no entry in ``params``
    """
    try:
        sig = inspect.signature(handler)
    except (TypeError, ValueError):
        # No introspectable signature: hand everything over by keyword
        return [], dict(params)

    args: List[Any] = []
    kwargs: Dict[str, Any] = {}
    used = set()
    accepts_var_kw = False

    for name, param in sig.parameters.items():
        if param.kind is inspect.Parameter.VAR_POSITIONAL:
            continue
        if param.kind is inspect.Parameter.VAR_KEYWORD:
            accepts_var_kw = True
            continue

        if name in params:
            value = params[name]
            used.add(name)
        elif param.default is not _EMPTY:
            if param.kind is inspect.Parameter.POSITIONAL_ONLY:
                args.append(param.default)
            continue
        else:
            raise ParameterBindingFault(_handler_name(handler), name)

        if param.kind is inspect.Parameter.POSITIONAL_ONLY:
            args.append(value)
        else:
            kwargs[name] = value

    leftover = [key for key in params if key not in used]
    if accepts_var_kw:
        for key in leftover:
            kwargs[key] = params[key]
    elif leftover:
        logger.debug("Dropping params not declared by %s: %s", _handler_name(handler), leftover)

    return args, kwargs


def invoke(handler: Any, params: Mapping[str, Any]) -> Any:
    """Call ``handler`` with arguments bound by name from ``params``."""
    args, kwargs = bind_arguments(handler, params)
    return handler(*args, **kwargs)
