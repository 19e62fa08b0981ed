"""
App - the dispatch orchestrator.

Per request::

    route resolver -> {callback, params}
        callback is "XxxController@action"
            -> parse + locate class -> build controller -> resolve action deps
            -> merge (resolved deps win) -> call action
        callback is callable
            -> call it with the raw params
    -> renderer.set_cors(policy)? -> renderer.set_data(result) -> renderer.run()

Aborts early with RouteNotFoundFault, InvalidConventionFault or
ControllerNotFoundFault. Everything else raised along the way
(resolution failures, errors from the action itself) propagates as is.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Mapping, Optional

from ._internal.invoke import invoke
from .config import ConfigLoader, DispatchConfig
from .controller import ControllerLocator, ControllerRegistry, ConventionParser
from .cors import CORSPolicy
from .di import Resolver
from .faults import InvalidCallbackFault, RouteNotFoundFault
from .renderers import Renderer
from .routing import RouteResolver, RouteResult


class App:
    """
    Dispatches one resolved route per call and renders the result.

    Controllers are built fresh on every dispatch; nothing is shared
    between requests except the (read-only) configuration.

    Example:
        app = App(router, JSONRenderer(), cors=CORSPolicy(allow_origins=("https://example.com",)))
        app.dispatch()

    Args:
        router: Route resolver exposing ``run()``
        renderer: Output strategy receiving the result
        config: Dispatch settings (root namespace, controller package, ...)
        cors: CORS policy forwarded to the renderer; overrides ``config.cors``
        resolver: Dependency resolver (e.g. one with interface bindings)
        registry: Explicit controller registrations checked before importing
    """

    def __init__(
        self,
        router: Optional[RouteResolver] = None,
        renderer: Optional[Renderer] = None,
        *,
        config: Optional[DispatchConfig] = None,
        cors: Optional[CORSPolicy] = None,
        resolver: Optional[Resolver] = None,
        registry: Optional[ControllerRegistry] = None,
    ):
        self.config = config or DispatchConfig()
        self.router = router
        self.renderer = renderer
        self.cors = cors if cors is not None else self.config.cors
        self.resolver = resolver or Resolver()
        self.locator = ControllerLocator(
            root_namespace=self.config.root_namespace,
            package=self.config.controllers_package,
            registry=registry,
        )
        self.parser = ConventionParser(
            root_namespace=self.config.root_namespace,
            locator=self.locator,
        )
        self.logger = logging.getLogger("passer.app")

    @classmethod
    def from_config(
        cls,
        loader: ConfigLoader,
        router: Optional[RouteResolver] = None,
        renderer: Optional[Renderer] = None,
        **kwargs: Any,
    ) -> "App":
        """Build an app from a loaded ``ConfigLoader``."""
        return cls(router, renderer, config=loader.dispatch_config(), **kwargs)

    def set_router(self, router: RouteResolver) -> "App":
        self.router = router
        return self

    def set_renderer(self, renderer: Renderer) -> "App":
        """Defines the renderer strategy."""
        self.renderer = renderer
        return self

    def dispatch(self) -> "App":
        """
        Obtain the current route and run it.

        Raises:
            RouteNotFoundFault: the resolver matched nothing; the renderer is not called
        """
        if self.router is None:
            raise RuntimeError("App.dispatch() called without a route resolver")

        route = RouteResult.coerce(self.router.run())
        if route is None:
            self.logger.info("Dispatch aborted: route not found")
            raise RouteNotFoundFault()

        self.run(route.callback, route.params)
        return self

    def run(self, callback: Any, params: Mapping[str, Any]) -> Any:
        """Invoke ``callback`` with ``params`` and render what it returns."""
        data = self.invoke(callback, params)
        self.render(data)
        return data

    def invoke(self, callback: Any, params: Mapping[str, Any]) -> Any:
        """
        Call the route target and return its result.

        String callbacks go through the convention parser and receive
        auto-resolved dependencies merged over ``params``. Callables
        receive ``params`` untouched.
        """
        params = dict(params or {})

        if isinstance(callback, str):
            target = self.parser.resolve(callback)
            controller = self.resolver.by_class(target.controller_class)
            dependencies = self.resolver.method(target.controller_class, target.action)

            # Resolved dependencies win over same-named request params
            arguments: Dict[str, Any] = {**params, **dependencies}

            self.logger.debug(
                "Invoking %s@%s (injected=%s, params=%s)",
                target.fqn, target.action, sorted(dependencies), sorted(params),
            )
            return invoke(getattr(controller, target.action), arguments)

        if callable(callback):
            self.logger.debug("Invoking callable %r", callback)
            return invoke(callback, params)

        if self.config.strict_callbacks:
            raise InvalidCallbackFault(callback)

        self.logger.warning(
            "Route callback of type %s is not invocable; rendering None",
            type(callback).__name__,
        )
        return None

    def render(self, data: Any) -> None:
        """Hand ``data`` to the renderer, CORS policy first."""
        if self.renderer is None:
            raise RuntimeError("App.render() called without a renderer")

        if self.cors is not None:
            self.renderer.set_cors(self.cors)

        self.renderer.set_data(data)
        self.renderer.run()
