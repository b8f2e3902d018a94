"""Core ports (interfaces) for kodiconf.

These protocols define the boundaries between the reload pipeline and the
plugin host. They are intentionally small and capability-oriented so the
core can run against Kodi or against test doubles.
"""

from __future__ import annotations

from typing import Protocol, TYPE_CHECKING, runtime_checkable

if TYPE_CHECKING:
    from .coercion import RawSetting
    from .config_model import Addon, AddonInfo, PlatformInfo


@runtime_checkable
class AddonHost(Protocol):
    """Settings and environment exposed by the plugin host."""

    def get_addon_info(self) -> "AddonInfo":
        """Return install/profile/home paths of the running addon."""

    def translate_path(self, path: str) -> str:
        """Translate a special:// path into a filesystem path."""

    def get_platform(self) -> "PlatformInfo":
        """Describe the operating system the host runs on."""

    def get_language_code(self) -> str:
        """Return the UI language as an ISO 639-1 code."""

    def get_setting_string(self, key: str) -> str:
        """Return one addon setting as text."""

    def get_all_settings(self) -> list["RawSetting"]:
        """Return every addon setting with its declared type."""


@runtime_checkable
class HostUI(Protocol):
    """User-visible dialogs and notifications."""

    def open_settings(self) -> None:
        """Open the addon settings window."""

    def dialog(self, title: str, message: str) -> None:
        """Show a modal message."""

    def is_settings_open(self) -> bool:
        """Report whether the addon settings window is still open."""

    def notify(self, title: str, message: str, icon: str = "") -> None:
        """Display a notification."""

    def confirm(self, title: str, message: str) -> bool:
        """Ask a yes/no question."""


@runtime_checkable
class AddonManager(Protocol):
    """Addon discovery and lifecycle."""

    def list_addons(self) -> list["Addon"]:
        """List installed script addons."""

    def set_addon_enabled(self, addon_id: str, enabled: bool) -> None:
        """Enable or disable an addon."""

    def update_local_addons(self) -> None:
        """Rescan locally installed addons."""

    def update_addon_repos(self) -> None:
        """Refresh addon repositories."""

    def play_url(self, url: str) -> None:
        """Launch a plugin URL."""
