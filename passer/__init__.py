"""
Passer - request-dispatch core for a minimal web framework.

Given a resolved route, Passer:
- parses ``Controller@action`` strings into a controller class and method
- builds the controller, auto-resolving class-typed constructor parameters
- resolves class-typed action parameters and merges them over request params
- invokes the target and hands the result to a pluggable renderer
"""

__version__ = "0.1.0"

from .app import App
from .config import ConfigError, ConfigLoader, DispatchConfig
from .controller import (
    ControllerAction,
    ControllerLocator,
    ControllerRegistry,
    ControllerTarget,
    ConventionParser,
)
from .cors import CORSPolicy
from .di import Resolver
from .faults import (
    Fault,
    FaultDomain,
    Severity,
    RouteNotFoundFault,
    InvalidConventionFault,
    ControllerNotFoundFault,
    DIResolutionFault,
    DependencyCycleFault,
    InvalidCallbackFault,
    ParameterBindingFault,
)
from .renderers import BaseRenderer, JSONRenderer, PlainTextRenderer, Renderer
from .routing import RouteResolver, RouteResult, StaticRouteResolver

__all__ = [
    "__version__",
    "App",
    "ConfigError",
    "ConfigLoader",
    "DispatchConfig",
    "ControllerAction",
    "ControllerLocator",
    "ControllerRegistry",
    "ControllerTarget",
    "ConventionParser",
    "CORSPolicy",
    "Resolver",
    "Fault",
    "FaultDomain",
    "Severity",
    "RouteNotFoundFault",
    "InvalidConventionFault",
    "ControllerNotFoundFault",
    "DIResolutionFault",
    "DependencyCycleFault",
    "InvalidCallbackFault",
    "ParameterBindingFault",
    "BaseRenderer",
    "JSONRenderer",
    "PlainTextRenderer",
    "Renderer",
    "RouteResolver",
    "RouteResult",
    "StaticRouteResolver",
]
