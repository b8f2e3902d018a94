#!/usr/bin/env python3
"""kodiconf: load the addon settings, or send the user back to fix them"""

from __future__ import annotations

from collections.abc import Callable
from contextlib import suppress
import logging
import threading

from .config import config
from .core.coercion import SettingsCoercer
from .core.config_model import Configuration
from .core.derived import DerivedValueComputer
from .core.paths import PathResolver
from .core.ports import HostUI
from .core.reconciler import ConfigurationReconciler, ReloadResult
from .core.resolvers import ResolverRegistry, default_registry
from .core.store import ConfigStore, default_store

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: int | str = logging.INFO) -> None:
    root = logging.getLogger("kodiconf")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO
    if getattr(root, "_kodiconf_level", None) == level:
        return

    for handler in list(root.handlers):
        root.removeHandler(handler)
        with suppress(Exception):
            handler.close()
    root.setLevel(level)
    root.propagate = False

    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)
    root._kodiconf_level = level  # type: ignore[attr-defined]


def wait_for_settings_closed(ui: HostUI, interval: float, stop: threading.Event | None = None) -> None:
    """Block until the host reports the settings window closed."""
    stop = stop or threading.Event()
    while not stop.wait(interval):
        if not ui.is_settings_open():
            return


def reload_or_exit(
    reconciler: ConfigurationReconciler,
    ui: HostUI,
    title: str = config.DIALOG_TITLE,
    poll_interval: float = config.SETTINGS_POLL_INTERVAL,
    exit_code: int = config.EXIT_CODE_SETTINGS,
) -> Configuration:
    """Run one reload; rejected settings end the process with ``exit_code``.

    Must be called on the main thread: ``SystemExit`` raised elsewhere only
    ends the calling thread.
    """
    if threading.current_thread() is not threading.main_thread():
        raise RuntimeError("reload_or_exit must run on the main thread")
    result: ReloadResult = reconciler.reload()
    if result.ok:
        return result.config

    logger.warning("Addon settings not properly set, opening settings window: %s", result.message)
    ui.open_settings()
    ui.dialog(title, result.message)
    wait_for_settings_closed(ui, poll_interval)

    # Tells the wrapping Python side not to report this as a crash
    raise SystemExit(exit_code)


def build_reconciler(
    store: ConfigStore = default_store,
    resolvers: ResolverRegistry = default_registry,
    total_memory: Callable[[], int] | None = None,
) -> tuple[ConfigurationReconciler, HostUI]:
    """Wire the reconciler against the running Kodi instance."""
    from .adapters.addon_health import AddonHealthCheck
    from .adapters.kodi_host import KodiAddonManager, KodiHost, KodiUI
    from .adapters.memory import SystemMemoryAdapter

    host = KodiHost(config.ADDON_ID)
    ui = KodiUI(config.ADDON_ID)
    health_check = None
    if config.HEALTH_CHECK_ENABLED:
        health_check = AddonHealthCheck(
            KodiAddonManager(),
            ui,
            title=config.DIALOG_TITLE,
            provider_prefix=config.PROVIDER_PREFIX,
            burst_id=config.BURST_ADDON_ID,
            refresh_delay=config.HEALTH_REFRESH_DELAY,
            install_delay=config.HEALTH_INSTALL_DELAY,
        )
    reconciler = ConfigurationReconciler(
        host=host,
        store=store,
        paths=PathResolver(host, config.TEMP_DIR_NAME),
        coercer=SettingsCoercer(),
        deriver=DerivedValueComputer(resolvers, total_memory or SystemMemoryAdapter().total_memory),
        health_check=health_check,
    )
    return reconciler, ui


def main():
    setup_logging(logging.DEBUG if config.DEBUG else config.LOG_LEVEL)
    reconciler, ui = build_reconciler()
    reload_or_exit(reconciler, ui)


if __name__ == "__main__":
    main()
