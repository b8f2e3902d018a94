"""Values computed from the typed settings of one reload."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
import logging

from .config_model import (
    Configuration,
    DEFAULT_CONNECTIONS_LIMIT,
    DEFAULT_MEMORY_SIZE,
    DEFAULT_TRAKT_SYNC_FREQUENCY,
    KEEP_ALWAYS,
    MAX_MEMORY_SIZE,
    MIB,
    PROXY_SCHEMES,
    STORAGE_MEMORY,
)
from .resolvers import OPENNIC, PUBLIC, ResolverRegistry

logger = logging.getLogger(__name__)


def adaptive_memory_size(strategy: int, total_memory: int, current: int) -> int:
    """Pick the memory storage size for an auto-size ``strategy``.

    Strategy 0 is a fixed budget; strategy N uses 5 * N percent of system
    memory. The result never exceeds ``MAX_MEMORY_SIZE``.
    """
    if strategy == 0:
        return DEFAULT_MEMORY_SIZE

    pct = 5 + 5 * (strategy - 1)
    # Divide first: the result rounds down to a multiple of pct bytes
    size = current
    mem = total_memory // 100 * pct
    if mem > 0:
        size = mem
    logger.debug("Total system memory: %.1f MiB", total_memory / MIB)
    logger.debug("Automatically selected memory size: %.1f MiB", size / MIB)
    if size > MAX_MEMORY_SIZE:
        logger.debug(
            "Selected memory size (%.1f MiB) is bigger than maximum for auto-select, "
            "decreasing to %.1f MiB",
            size / MIB,
            MAX_MEMORY_SIZE / MIB,
        )
        size = MAX_MEMORY_SIZE
    return size


def build_proxy_url(proxy_type: int, host: str, port: int, login: str = "", password: str = "") -> str:
    if not 0 <= proxy_type < len(PROXY_SCHEMES):
        logger.warning("Unknown proxy type %d, proxy disabled", proxy_type)
        return ""

    url = PROXY_SCHEMES[proxy_type] + "://"
    if login or password:
        url += f"{login}:{password}@"
    return f"{url}{host}:{port}"


def strip_whitespace(value: str) -> str:
    return "".join(value.split())


class DerivedValueComputer:
    """Applies the derived-value rules to a freshly built Configuration.

    Rules run in a fixed order since later ones read earlier overrides. The
    input is never modified; a new Configuration is returned.
    """

    def __init__(self, resolvers: ResolverRegistry, total_memory: Callable[[], int]):
        self._resolvers = resolvers
        self._total_memory = total_memory

    def derive(self, config: Configuration) -> Configuration:
        changes = {}

        # Memory storage has nothing to seed or move once playback stops
        if config.download_storage == STORAGE_MEMORY:
            changes.update(
                completed_move=False,
                keep_downloading=KEEP_ALWAYS,
                keep_files_finished=KEEP_ALWAYS,
                keep_files_playing=KEEP_ALWAYS,
            )
            if config.auto_memory_size:
                total = self._total_memory() if config.auto_memory_size_strategy else 0
                changes["memory_size"] = adaptive_memory_size(
                    config.auto_memory_size_strategy, total, config.memory_size
                )

        if config.trakt_token and config.trakt_sync_frequency == 0:
            changes["trakt_sync_frequency"] = DEFAULT_TRAKT_SYNC_FREQUENCY

        if config.osdb_auto_language or not config.osdb_language:
            changes["osdb_language"] = config.language

        if config.proxy_enabled and config.proxy_host:
            changes["proxy_url"] = build_proxy_url(
                config.proxy_type,
                config.proxy_host,
                config.proxy_port,
                config.proxy_login,
                config.proxy_password,
            )

        changes["public_dns_list"] = self._reload_resolver(PUBLIC, config.public_dns_list)
        changes["opennic_dns_list"] = self._reload_resolver(OPENNIC, config.opennic_dns_list)

        if config.connections_limit == 0:
            changes["connections_limit"] = DEFAULT_CONNECTIONS_LIMIT

        return replace(config, **changes)

    def _reload_resolver(self, name: str, servers: str) -> str:
        servers = strip_whitespace(servers)
        addresses = [server for server in servers.split(",") if server]
        if addresses:
            self._resolvers.replace(name, addresses)
        return servers
