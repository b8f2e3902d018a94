"""Background check that a provider addon is installed and enabled."""

from __future__ import annotations

from collections.abc import Callable
import logging
import time

from ..core.config_model import Addon, Configuration
from ..core.ports import AddonManager, HostUI

logger = logging.getLogger(__name__)

MESSAGE_INSTALL_BURST = "LOCALIZE[30271]"
MESSAGE_BURST_ENABLED = "LOCALIZE[30272]"
MESSAGE_BURST_FAILED = "LOCALIZE[30273]"


class AddonHealthCheck:
    """Offers to install the bundled provider when no provider is enabled."""

    def __init__(
        self,
        addons: AddonManager,
        ui: HostUI,
        title: str,
        provider_prefix: str,
        burst_id: str,
        refresh_delay: float = 10.0,
        install_delay: float = 4.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._addons = addons
        self._ui = ui
        self._title = title
        self._provider_prefix = provider_prefix
        self._burst_id = burst_id
        self._refresh_delay = refresh_delay
        self._install_delay = install_delay
        self._sleep = sleep

    def providers(self) -> list[Addon]:
        return [addon for addon in self._addons.list_addons() if addon.id.startswith(self._provider_prefix)]

    def __call__(self, config: Configuration) -> None:
        try:
            self.run(config.addon_icon())
        except Exception:
            logger.exception("Addon health check failed")

    def run(self, icon: str = "") -> bool:
        """Return True when a provider is (or became) enabled."""
        providers = self.providers()
        if any(addon.enabled for addon in providers):
            return True

        logger.info("Updating Kodi add-on repositories for Burst...")
        self._addons.update_local_addons()
        self._addons.update_addon_repos()
        self._sleep(self._refresh_delay)

        if not self._ui.confirm(self._title, MESSAGE_INSTALL_BURST):
            return False

        self._addons.play_url(f"plugin://{self._burst_id}/")
        self._sleep(self._install_delay)

        installed = any(
            addon.id == self._burst_id and addon.enabled for addon in self._addons.list_addons()
        )
        if not installed:
            self._ui.dialog(self._title, MESSAGE_BURST_FAILED)
            return False

        for addon in providers:
            if addon.id == self._burst_id:
                continue
            self._addons.set_addon_enabled(addon.id, False)
        self._ui.notify(self._title, MESSAGE_BURST_ENABLED, icon)
        return True
