"""
CORS policy value object.

The dispatcher only forwards the policy to the renderer; turning it into
response headers is the renderer's job.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Tuple


@dataclass(frozen=True)
class CORSPolicy:
    """Cross-origin policy applied to rendered responses."""

    allow_origins: Tuple[str, ...] = ("*",)
    allow_methods: Tuple[str, ...] = ("GET", "POST", "PUT", "DELETE", "OPTIONS")
    allow_headers: Tuple[str, ...] = ("*",)
    allow_credentials: bool = False
    max_age: int = 3600

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CORSPolicy":
        """Build a policy from config data; list values become tuples."""
        kwargs: Dict[str, Any] = {}
        for key in ("allow_origins", "allow_methods", "allow_headers"):
            if key in data:
                value = data[key]
                kwargs[key] = (value,) if isinstance(value, str) else tuple(value)
        if "allow_credentials" in data:
            kwargs["allow_credentials"] = bool(data["allow_credentials"])
        if "max_age" in data:
            kwargs["max_age"] = int(data["max_age"])
        return cls(**kwargs)

    def is_allowed_origin(self, origin: str) -> bool:
        return "*" in self.allow_origins or origin in self.allow_origins

    def headers(self, origin: Optional[str] = None) -> Dict[str, str]:
        """Response headers for a request from ``origin``."""
        headers = {
            "access-control-allow-methods": ", ".join(self.allow_methods),
            "access-control-allow-headers": ", ".join(self.allow_headers),
            "access-control-max-age": str(self.max_age),
        }

        if origin and self.is_allowed_origin(origin):
            headers["access-control-allow-origin"] = origin
        elif "*" in self.allow_origins:
            headers["access-control-allow-origin"] = "*"

        if self.allow_credentials:
            headers["access-control-allow-credentials"] = "true"

        return headers
