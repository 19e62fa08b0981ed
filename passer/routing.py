"""
Route resolver boundary.

Matching an inbound request to a target is not done here. A route resolver
hands the dispatcher one ``RouteResult`` per request, or None when nothing
matched.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Mapping, Optional, Protocol, Union, runtime_checkable


@dataclass(frozen=True)
class RouteResult:
    """
    A matched route: what to call and the raw request params.

    ``callback`` is either a ``XxxController@action`` string or any callable.
    ``params`` is frozen on construction.
    """
    callback: Union[str, Callable[..., Any], Any]
    params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "params", MappingProxyType(dict(self.params or {})))

    @classmethod
    def coerce(cls, value: Any) -> Optional["RouteResult"]:
        """Accept a RouteResult, a ``{"callback", "params"}`` mapping, or a falsy value."""
        if not value:
            return None
        if isinstance(value, RouteResult):
            return value
        if isinstance(value, Mapping):
            return cls(callback=value.get("callback"), params=value.get("params") or {})
        raise TypeError(f"Route resolver returned unsupported value: {value!r}")


@runtime_checkable
class RouteResolver(Protocol):
    """Anything with a ``run()`` returning a route result or None."""

    def run(self) -> Optional[Union[RouteResult, Mapping[str, Any]]]:
        ...


class StaticRouteResolver:
    """
    Route resolver that always yields the same result.

    Handy for tests and for driving a single dispatch from the CLI.
    """

    def __init__(self, callback: Any = None, params: Optional[Mapping[str, Any]] = None):
        self._result = None if callback is None else RouteResult(callback, params or {})

    def run(self) -> Optional[RouteResult]:
        return self._result
