"""DNS resolvers shared by the lookup categories of the application."""

from __future__ import annotations

import logging
import threading

import dns.resolver

logger = logging.getLogger(__name__)

PUBLIC = "public"
OPENNIC = "opennic"

DEFAULT_NAMESERVERS: dict[str, tuple[str, ...]] = {
    PUBLIC: ("8.8.8.8", "8.8.4.4", "9.9.9.9"),
    OPENNIC: ("193.183.98.66", "172.104.136.243", "89.18.27.167"),
}


def new_resolver(nameservers: list[str]) -> dns.resolver.Resolver:
    """Build a resolver that ignores the system resolv.conf."""
    resolver = dns.resolver.Resolver(configure=False)
    resolver.nameservers = list(nameservers)
    return resolver


class ResolverRegistry:
    """Named DNS resolvers, each replaced wholesale on reload."""

    def __init__(self, defaults: dict[str, tuple[str, ...]] | None = None):
        self._lock = threading.Lock()
        self._nameservers = {
            name: list(servers) for name, servers in (defaults or DEFAULT_NAMESERVERS).items()
        }
        self._resolvers = {
            name: new_resolver(servers)
            for name, servers in self._nameservers.items()
        }

    def get(self, name: str) -> dns.resolver.Resolver:
        with self._lock:
            return self._resolvers[name]

    def nameservers(self, name: str) -> list[str]:
        with self._lock:
            return list(self._nameservers[name])

    def replace(self, name: str, nameservers: list[str]) -> bool:
        """Swap the resolver for ``name``; invalid addresses keep the old one."""
        try:
            resolver = new_resolver(nameservers)
        except ValueError as e:
            logger.warning("Ignoring %s DNS list %s: %s", name, nameservers, e)
            return False
        with self._lock:
            self._resolvers[name] = resolver
            self._nameservers[name] = list(nameservers)
        logger.debug("Using %s DNS servers: %s", name, ", ".join(nameservers))
        return True


default_registry = ResolverRegistry()
