"""
Passer renderers.

A renderer receives the value a route returned and writes the response
body. The dispatcher only talks to the ``Renderer`` protocol::

    renderer.set_cors(policy)   # only when a policy is configured
    renderer.set_data(result)
    renderer.run()

Built-in renderers:

- **JSONRenderer** - ``application/json``
- **PlainTextRenderer** - ``text/plain``
"""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Optional, Protocol, TextIO, runtime_checkable

from .cors import CORSPolicy

__all__ = [
    "Renderer",
    "BaseRenderer",
    "JSONRenderer",
    "PlainTextRenderer",
]


@runtime_checkable
class Renderer(Protocol):
    """Output strategy the dispatcher hands results to."""

    def set_cors(self, policy: CORSPolicy) -> None:
        ...

    def set_data(self, data: Any) -> None:
        ...

    def run(self) -> None:
        ...


class BaseRenderer:
    """
    Abstract renderer.

    Subclass and set ``media_type``, then implement ``render()``. ``run()``
    collects headers (content type plus CORS) and writes the rendered body
    to ``stream`` (stdout by default).
    """

    media_type: str = "application/octet-stream"
    charset: Optional[str] = "utf-8"

    def __init__(self, stream: Optional[TextIO] = None, *, origin: Optional[str] = None):
        self.stream = stream
        self.origin = origin
        self.data: Any = None
        self.cors: Optional[CORSPolicy] = None
        self.headers: Dict[str, str] = {}
        self.body: Optional[str] = None

    def set_cors(self, policy: CORSPolicy) -> None:
        self.cors = policy

    def set_data(self, data: Any) -> None:
        self.data = data

    def render(self, data: Any) -> str:
        raise NotImplementedError

    def build_headers(self) -> Dict[str, str]:
        content_type = self.media_type
        if self.charset:
            content_type += f"; charset={self.charset}"
        headers = {"content-type": content_type}
        if self.cors is not None:
            headers.update(self.cors.headers(self.origin))
        return headers

    def run(self) -> None:
        self.headers = self.build_headers()
        self.body = self.render(self.data)
        stream = self.stream or sys.stdout
        stream.write(self.body)
        stream.flush()


class JSONRenderer(BaseRenderer):
    """Render data as JSON."""

    media_type = "application/json"

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        *,
        origin: Optional[str] = None,
        indent: Optional[int] = None,
        ensure_ascii: bool = False,
    ):
        super().__init__(stream, origin=origin)
        self.indent = indent
        self.ensure_ascii = ensure_ascii

    def render(self, data: Any) -> str:
        def _default(o):
            if isinstance(o, (set, frozenset, tuple)):
                return list(o)
            if hasattr(o, "isoformat"):
                return o.isoformat()
            if hasattr(o, "to_dict"):
                return o.to_dict()
            if hasattr(o, "__dict__"):
                return {k: v for k, v in o.__dict__.items() if not k.startswith("_")}
            return str(o)

        return json.dumps(
            data,
            default=_default,
            indent=self.indent,
            ensure_ascii=self.ensure_ascii,
        )


class PlainTextRenderer(BaseRenderer):
    """Render data as plain text; None renders as an empty body."""

    media_type = "text/plain"

    def render(self, data: Any) -> str:
        if data is None:
            return ""
        if isinstance(data, bytes):
            return data.decode(self.charset or "utf-8")
        return str(data)
