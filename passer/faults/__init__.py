"""
Passer faults - typed fault signals raised by the dispatch core.

Every failure the core can produce is a ``Fault`` subclass carrying a
stable code, a domain and metadata. Nothing is retried or swallowed;
faults propagate to the hosting environment.
"""

from .core import (
    Fault,
    FaultDomain,
    Severity,
    DOMAIN_DEFAULTS,
)

from .domains import (
    CONVENTION_PATTERN,
    ConfigFault,
    ConfigInvalidFault,
    RoutingFault,
    RouteNotFoundFault,
    InvalidConventionFault,
    ControllerNotFoundFault,
    DIFault,
    DIResolutionFault,
    DependencyCycleFault,
    FlowFault,
    InvalidCallbackFault,
    ParameterBindingFault,
)

__all__ = [
    "Fault",
    "FaultDomain",
    "Severity",
    "DOMAIN_DEFAULTS",
    "CONVENTION_PATTERN",
    "ConfigFault",
    "ConfigInvalidFault",
    "RoutingFault",
    "RouteNotFoundFault",
    "InvalidConventionFault",
    "ControllerNotFoundFault",
    "DIFault",
    "DIResolutionFault",
    "DependencyCycleFault",
    "FlowFault",
    "InvalidCallbackFault",
    "ParameterBindingFault",
]
