"""
Controller@action convention parser.

Turns a route target such as ``Admin\\UserController@index`` into the
fully-qualified controller name under the application's controller root
and the action (method) name.

Grammar::

    (Namespace\\)* Name Controller @ action

    Namespace, Name   one or more [A-Z][a-z]+ word groups
    action            [a-z][a-zA-Z0-9_-]*
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple, TYPE_CHECKING

from ..faults import InvalidConventionFault

if TYPE_CHECKING:
    from .locator import ControllerLocator


NAMESPACE_SEPARATOR = "\\"
DEFAULT_ROOT_NAMESPACE = "App\\Controllers"

# Greedy namespace prefix: "Admin\\UserAdmin\\" in "Admin\\UserAdmin\\ListController@index"
_NAMESPACE_PREFIX = re.compile(r"(?:(?:[A-Z][a-z]+)+\\)+")

logger = logging.getLogger("passer.controller")


@lru_cache(maxsize=128)
def _convention_pattern(namespace: str) -> "re.Pattern[str]":
    return re.compile(
        rf"({re.escape(namespace)}(?:[A-Z][a-z]+)+Controller)@([a-z][a-zA-Z0-9_-]*)"
    )


def join_namespace(*parts: str) -> str:
    """Join namespace fragments with the separator, ignoring empty ones."""
    return NAMESPACE_SEPARATOR.join(
        part.strip(NAMESPACE_SEPARATOR) for part in parts if part and part.strip(NAMESPACE_SEPARATOR)
    )


@dataclass(frozen=True, slots=True)
class ControllerAction:
    """
    Result of a successful parse.

    Attributes:
        controller: Controller as written in the route (``Admin\\UserController``)
        action: Method name (``index``)
        fqn: Controller prefixed with the root namespace
    """
    controller: str
    action: str
    fqn: str

    @property
    def namespace(self) -> Tuple[str, ...]:
        """Namespace segments between the root and the class name."""
        return tuple(self.controller.split(NAMESPACE_SEPARATOR)[:-1])

    @property
    def class_name(self) -> str:
        return self.controller.rsplit(NAMESPACE_SEPARATOR, 1)[-1]


@dataclass(frozen=True, slots=True)
class ControllerTarget:
    """A parsed convention string bound to an existing controller class."""
    fqn: str
    action: str
    controller_class: type


class ConventionParser:
    """
    Parses and resolves ``XxxController@action`` strings.

    ``parse`` is a pure grammar check returning None on failure.
    ``resolve`` raises on failure and also confirms the controller class
    exists, before anything is instantiated.

    Example:
        parser = ConventionParser()
        parser.parse("Admin\\\\UserController@show")
        # ControllerAction(controller="Admin\\\\UserController", action="show",
        #                  fqn="App\\\\Controllers\\\\Admin\\\\UserController")
    """

    def __init__(
        self,
        root_namespace: str = DEFAULT_ROOT_NAMESPACE,
        locator: Optional["ControllerLocator"] = None,
    ):
        self.root_namespace = join_namespace(root_namespace)
        self.locator = locator

    def parse(self, subject: str) -> Optional[ControllerAction]:
        """Decompose ``subject``; None when it does not follow the grammar."""
        if not isinstance(subject, str):
            return None

        prefix = _NAMESPACE_PREFIX.match(subject)
        namespace = prefix.group(0) if prefix else ""

        match = _convention_pattern(namespace).fullmatch(subject)
        if match is None:
            return None

        controller, action = match.group(1), match.group(2)
        return ControllerAction(
            controller=controller,
            action=action,
            fqn=join_namespace(self.root_namespace, controller),
        )

    def resolve(self, subject: str) -> ControllerTarget:
        """
        Parse ``subject`` and locate its controller class.

        Raises:
            InvalidConventionFault: ``subject`` does not follow the grammar
            ControllerNotFoundFault: no class exists under the parsed name
        """
        parsed = self.parse(subject)
        if parsed is None:
            controller, _, action = str(subject).partition("@")
            raise InvalidConventionFault(str(subject), controller=controller, action=action)

        if self.locator is None:
            raise RuntimeError("ConventionParser.resolve() needs a ControllerLocator")

        controller_class = self.locator.locate(parsed.fqn)
        logger.debug("Resolved %r to %s.%s", subject, parsed.fqn, parsed.action)
        return ControllerTarget(
            fqn=parsed.fqn,
            action=parsed.action,
            controller_class=controller_class,
        )
