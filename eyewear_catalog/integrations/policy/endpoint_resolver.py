"""
Endpoint resolution for the products backend.

Decides from the host the catalog is served on (and an optional explicit
override) whether a remote products API exists, and where. The result is a
plain value handed to CatalogService; nothing here is cached, so callers can
re-resolve whenever the host context changes.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

DEFAULT_API_PORT = 5004
DEFAULT_API_PATH = "/api"

LOOPBACK_HOSTS = {"localhost", "127.0.0.1", "::1"}

_IPV4_LITERAL = re.compile(r"^\d+\.\d+\.\d+\.\d+$")


class EndpointMode(str, Enum):
    REMOTE = "remote"
    LOCAL_ONLY = "local-only"


@dataclass(frozen=True)
class Endpoint:
    mode: EndpointMode
    base_url: Optional[str] = None

    @classmethod
    def remote(cls, base_url: str) -> "Endpoint":
        return cls(mode=EndpointMode.REMOTE, base_url=base_url.rstrip("/"))

    @classmethod
    def local_only(cls) -> "Endpoint":
        return cls(mode=EndpointMode.LOCAL_ONLY)

    @property
    def is_remote(self) -> bool:
        return self.mode is EndpointMode.REMOTE


def _normalize_host(hostname: Optional[str]) -> str:
    host = (hostname or "").strip().lower()
    if host.startswith("[") and host.endswith("]"):
        host = host[1:-1]
    return host or "localhost"


def is_deployed_host(hostname: Optional[str]) -> bool:
    """A host is "deployed" unless it looks like a dev machine or a bare IPv4 literal."""
    host = _normalize_host(hostname)
    if "localhost" in host or "127.0.0.1" in host or host == "::1":
        return False
    return not _IPV4_LITERAL.match(host)


def resolve_endpoint(
    hostname: Optional[str],
    override: Optional[str] = None,
    *,
    default_port: int = DEFAULT_API_PORT,
    api_path: str = DEFAULT_API_PATH,
) -> Endpoint:
    """
    Resolve the products backend for a host.

    Order (first match wins):
      1. explicit override address -> remote at that address
      2. deployed host, no override -> local-only
      3. non-loopback literal (LAN IP) -> remote on that host, default port/path
      4. loopback -> remote on localhost, default port/path
    """
    if override and override.strip():
        return Endpoint.remote(override.strip())

    if is_deployed_host(hostname):
        return Endpoint.local_only()

    host = _normalize_host(hostname)
    if host not in LOOPBACK_HOSTS:
        return Endpoint.remote(f"http://{host}:{default_port}{api_path}")

    return Endpoint.remote(f"http://localhost:{default_port}{api_path}")
