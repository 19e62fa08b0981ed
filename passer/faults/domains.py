"""
Passer faults - domain-specific fault types.

Provides concrete fault classes for each stage of a dispatch:
- CONFIG faults
- ROUTING faults (route lookup, convention strings, controller lookup)
- DI faults
- FLOW faults (callback shape, argument binding)
"""

from typing import Any, Optional

from .core import Fault, FaultDomain, Severity


CONVENTION_PATTERN = "XxxController@action"


# ============================================================================
# CONFIG Faults
# ============================================================================

class ConfigFault(Fault):
    """Base class for configuration faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.CONFIG,
            severity=Severity.FATAL,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class ConfigInvalidFault(ConfigFault):
    """Configuration value is invalid."""

    def __init__(self, key: str, reason: str):
        super().__init__(
            code="CONFIG_INVALID",
            message=f"Configuration key '{key}' is invalid: {reason}",
            metadata={"key": key, "reason": reason},
        )


# ============================================================================
# ROUTING Faults
# ============================================================================

class RoutingFault(Fault):
    """Base class for routing faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        severity: Severity = Severity.ERROR,
        public: bool = True,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.ROUTING,
            severity=severity,
            retryable=False,
            public=public,
            metadata=metadata,
        )


class RouteNotFoundFault(RoutingFault):
    """No route matched the inbound request. Terminal for the dispatch."""

    def __init__(self, **metadata: Any):
        super().__init__(
            code="ROUTE_NOT_FOUND",
            message="route not found",
            metadata=metadata,
        )


class InvalidConventionFault(RoutingFault):
    """Callback string does not follow the ``XxxController@action`` grammar."""

    def __init__(self, subject: str, controller: str = "", action: str = ""):
        super().__init__(
            code="INVALID_CONVENTION",
            message=(
                f"Invalid controller/action '{subject}'; "
                f"expected a string of the form {CONVENTION_PATTERN} "
                f"(e.g. HomeController@index)"
            ),
            public=False,
            metadata={
                "subject": subject,
                "controller": controller,
                "action": action,
                "pattern": CONVENTION_PATTERN,
            },
        )


class ControllerNotFoundFault(RoutingFault):
    """Parsed controller does not exist under the root namespace."""

    def __init__(self, fqn: str, reason: Optional[str] = None):
        super().__init__(
            code="CONTROLLER_NOT_FOUND",
            message=f"Namespace or class does not exist: {fqn}",
            public=False,
            metadata={"fqn": fqn, "reason": reason},
        )


# ============================================================================
# DI Faults
# ============================================================================

class DIFault(Fault):
    """Base class for dependency injection faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.DI,
            severity=Severity.ERROR,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class DIResolutionFault(DIFault):
    """A dependency could not be found or instantiated."""

    def __init__(self, target: str, reason: str):
        super().__init__(
            code="DI_RESOLUTION_FAILED",
            message=f"Failed to resolve '{target}': {reason}",
            metadata={"target": target, "reason": reason},
        )


class DependencyCycleFault(DIFault):
    """A class depends on itself, directly or through other classes."""

    def __init__(self, cycle: list[str]):
        self.cycle = cycle
        super().__init__(
            code="DEPENDENCY_CYCLE",
            message=f"Circular dependency detected: {' -> '.join(cycle)}",
            metadata={"cycle": cycle},
        )


# ============================================================================
# FLOW Faults
# ============================================================================

class FlowFault(Fault):
    """Base class for invocation faults."""

    def __init__(
        self,
        code: str,
        message: str,
        *,
        metadata: Optional[dict[str, Any]] = None,
    ):
        super().__init__(
            code=code,
            message=message,
            domain=FaultDomain.FLOW,
            severity=Severity.ERROR,
            retryable=False,
            public=False,
            metadata=metadata,
        )


class InvalidCallbackFault(FlowFault):
    """Route callback is neither a convention string nor callable."""

    def __init__(self, callback: Any):
        kind = type(callback).__name__
        super().__init__(
            code="INVALID_CALLBACK",
            message=f"Route callback of type '{kind}' is neither a convention string nor callable",
            metadata={"callback_type": kind},
        )


class ParameterBindingFault(FlowFault):
    """A required handler parameter has no value in the merged params."""

    def __init__(self, handler_name: str, parameter: str):
        super().__init__(
            code="PARAMETER_BINDING",
            message=f"Handler '{handler_name}' requires parameter '{parameter}' which was not supplied",
            metadata={"handler": handler_name, "parameter": parameter},
        )
