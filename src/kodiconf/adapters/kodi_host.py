"""Kodi adapters for the host ports.

The ``xbmc*`` modules only exist inside a running Kodi, so they are
imported where they are used.
"""

from __future__ import annotations

import json
import logging
import os
import platform as py_platform
import re
import xml.etree.ElementTree as ET

from ..core.coercion import RawSetting
from ..core.config_model import Addon, AddonInfo, PlatformInfo

logger = logging.getLogger(__name__)

_LOCALIZE = re.compile(r"LOCALIZE\[(\d+)\]")

# Setting types of the version 1 settings.xml format
_SETTING_TYPE_ALIASES = {"integer": "number", "boolean": "bool"}

# Checked in order, Android also reports Linux
_PLATFORM_CONDITIONS = (
    ("android", "System.Platform.Android"),
    ("windows", "System.Platform.Windows"),
    ("ios", "System.Platform.IOS"),
    ("osx", "System.Platform.OSX"),
    ("linux", "System.Platform.Linux"),
)


def _addon(addon_id: str):
    import xbmcaddon

    return xbmcaddon.Addon(addon_id)


def _translate(path: str) -> str:
    try:
        import xbmcvfs

        return xbmcvfs.translatePath(path)
    except (ImportError, AttributeError):
        import xbmc

        return xbmc.translatePath(path)


def localize(addon_id: str, text: str) -> str:
    """Replace ``LOCALIZE[id]`` tokens with the addon's translated strings."""
    if "LOCALIZE[" not in text:
        return text
    addon = _addon(addon_id)
    return _LOCALIZE.sub(lambda m: addon.getLocalizedString(int(m.group(1))), text)


def parse_settings_definition(xml_text: str) -> list[tuple[str, str, str]]:
    """Return (id, type, option) for every setting of a settings.xml file."""
    root = ET.fromstring(xml_text)
    definitions = []
    for node in root.iter("setting"):
        key = node.get("id")
        if not key:
            continue
        kind = node.get("type", "text")
        definitions.append((key, _SETTING_TYPE_ALIASES.get(kind, kind), node.get("option", "")))
    return definitions


class KodiHost:
    def __init__(self, addon_id: str):
        self._addon_id = addon_id

    def get_addon_info(self) -> AddonInfo:
        addon = _addon(self._addon_id)
        return AddonInfo(
            id=addon.getAddonInfo("id"),
            name=addon.getAddonInfo("name"),
            version=addon.getAddonInfo("version"),
            path=addon.getAddonInfo("path"),
            profile=addon.getAddonInfo("profile"),
            home="special://home",
            xbmc="special://xbmc",
            icon=addon.getAddonInfo("icon"),
        )

    def translate_path(self, path: str) -> str:
        return _translate(path)

    def get_platform(self) -> PlatformInfo:
        import xbmc

        os_name = "unknown"
        for name, condition in _PLATFORM_CONDITIONS:
            if xbmc.getCondVisibility(condition):
                os_name = name
                break
        return PlatformInfo(
            os=os_name,
            arch=py_platform.machine(),
            version=xbmc.getInfoLabel("System.BuildVersion"),
        )

    def get_language_code(self) -> str:
        import xbmc

        return xbmc.getLanguage(xbmc.ISO_639_1)

    def get_setting_string(self, key: str) -> str:
        return _addon(self._addon_id).getSetting(key)

    def get_all_settings(self) -> list[RawSetting]:
        addon = _addon(self._addon_id)
        definition = os.path.join(
            _translate(addon.getAddonInfo("path")), "resources", "settings.xml"
        )
        try:
            with open(definition, encoding="utf-8") as f:
                definitions = parse_settings_definition(f.read())
        except (OSError, ET.ParseError) as e:
            logger.error("Could not read settings definition %s: %s", definition, e)
            return []
        return [
            RawSetting(key=key, type=kind, value=addon.getSetting(key), option=option)
            for key, kind, option in definitions
        ]


class KodiUI:
    def __init__(self, addon_id: str):
        self._addon_id = addon_id

    def open_settings(self) -> None:
        import xbmc

        xbmc.executebuiltin(f"Addon.OpenSettings({self._addon_id})")

    def dialog(self, title: str, message: str) -> None:
        import xbmcgui

        xbmcgui.Dialog().ok(title, localize(self._addon_id, message))

    def is_settings_open(self) -> bool:
        import xbmc

        return bool(xbmc.getCondVisibility("Window.IsActive(addonsettings)"))

    def notify(self, title: str, message: str, icon: str = "") -> None:
        import xbmcgui

        xbmcgui.Dialog().notification(title, localize(self._addon_id, message), icon)

    def confirm(self, title: str, message: str) -> bool:
        import xbmcgui

        return bool(xbmcgui.Dialog().yesno(title, localize(self._addon_id, message)))


def _json_rpc(method: str, **params) -> dict:
    import xbmc

    request = {"jsonrpc": "2.0", "id": 1, "method": method, "params": params}
    response = json.loads(xbmc.executeJSONRPC(json.dumps(request)))
    if "error" in response:
        logger.warning("JSON-RPC %s failed: %s", method, response["error"])
        return {}
    return response.get("result") or {}


class KodiAddonManager:
    def list_addons(self) -> list[Addon]:
        result = _json_rpc(
            "Addons.GetAddons",
            type="xbmc.python.script",
            content="executable",
            enabled="all",
            properties=["name", "version", "enabled"],
        )
        return [
            Addon(
                id=item.get("addonid", ""),
                name=item.get("name", ""),
                version=item.get("version", ""),
                enabled=bool(item.get("enabled")),
            )
            for item in result.get("addons", [])
        ]

    def set_addon_enabled(self, addon_id: str, enabled: bool) -> None:
        _json_rpc("Addons.SetAddonEnabled", addonid=addon_id, enabled=enabled)

    def update_local_addons(self) -> None:
        import xbmc

        xbmc.executebuiltin("UpdateLocalAddons")

    def update_addon_repos(self) -> None:
        import xbmc

        xbmc.executebuiltin("UpdateAddonRepos")

    def play_url(self, url: str) -> None:
        import xbmc

        xbmc.executebuiltin(f"PlayMedia({url})")
