"""Host path translation, platform path quirks and directory checks."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import replace
import logging
import os
import shutil
import stat

from .config_model import AddonInfo, PlatformInfo, UNSET_PATH
from .errors import FilesystemError, NotADirectory, PathNotSet, UnsupportedNetworkPath
from .ports import AddonHost

logger = logging.getLogger(__name__)

WINDOWS_STORE_MARKER = "XBMCFoundation"
WINDOWS_STORE_ROOTS = (
    ("LOCALAPPDATA", "Packages/XBMCFoundation.Kodi_4n2hpmxwrvr6p/LocalCache/Roaming/Kodi"),
    ("APPDATA", "kodi"),
)

ANDROID_STORAGE = "/storage/emulated/0"
ANDROID_LEGACY_STORAGE = "/storage/emulated/legacy"

NETWORK_PREFIXES = ("nfs", "smb")
WRITABLE_PROBE = ".writable"

Exists = Callable[[str], bool]
PathQuirk = Callable[[AddonInfo, Mapping[str, str], Exists], AddonInfo]


def _reroot(path: str, home: str, root: str) -> str:
    relative = path.replace(home, "", 1) if home else path
    return os.path.join(root, relative.lstrip("/\\"))


def find_existing_root(roots: list[str], child: str, exists: Exists = os.path.exists) -> str:
    """Return the first root that already contains ``child``."""
    for root in roots:
        if exists(os.path.join(root, child)):
            return root
    return ""


def windows_store_quirk(info: AddonInfo, env: Mapping[str, str], exists: Exists) -> AddonInfo:
    """Point a Microsoft Store install at its real, virtualized data directory."""
    if WINDOWS_STORE_MARKER not in info.xbmc:
        return info

    roots = [os.path.join(env.get(var, ""), suffix) for var, suffix in WINDOWS_STORE_ROOTS]
    root = find_existing_root(
        roots, os.path.join("userdata", "addon_data", info.id), exists=exists
    )
    if not root:
        return info

    logger.info("Using Windows Store data directory: %s", root)
    return replace(
        info,
        path=_reroot(info.path, info.home, root),
        profile=_reroot(info.profile, info.home, root),
        temp_path=_reroot(info.temp_path, info.home, root),
        icon=_reroot(info.icon, info.home, root),
        home=root,
    )


def android_legacy_quirk(info: AddonInfo, env: Mapping[str, str], exists: Exists) -> AddonInfo:
    """Prefer the legacy storage mount when the device still exposes it."""
    legacy_path = info.path.replace(ANDROID_STORAGE, ANDROID_LEGACY_STORAGE, 1)
    if not exists(legacy_path):
        return info

    logger.info("Using %s path.", ANDROID_LEGACY_STORAGE)
    return replace(
        info,
        path=legacy_path,
        profile=info.profile.replace(ANDROID_STORAGE, ANDROID_LEGACY_STORAGE, 1),
    )


PLATFORM_QUIRKS: dict[str, PathQuirk] = {
    "windows": windows_store_quirk,
    "android": android_legacy_quirk,
}


class PathResolver:
    """Turns host-reported virtual paths into real directories."""

    def __init__(
        self,
        host: AddonHost,
        temp_dir_name: str,
        env: Mapping[str, str] | None = None,
        exists: Exists = os.path.exists,
        quirks: Mapping[str, PathQuirk] | None = None,
    ):
        self._host = host
        self._temp_dir_name = temp_dir_name
        self._env = os.environ if env is None else env
        self._exists = exists
        self._quirks = PLATFORM_QUIRKS if quirks is None else quirks

    def translate(self, path: str) -> str:
        # Directory settings may translate to a file-like token, keep the parent
        return os.path.dirname(self._host.translate_path(path)) or UNSET_PATH

    def resolve_addon_info(self, info: AddonInfo, platform: PlatformInfo | None) -> AddonInfo:
        host = self._host
        info = replace(
            info,
            path=host.translate_path(info.path),
            profile=host.translate_path(info.profile),
            home=host.translate_path(info.home),
            xbmc=host.translate_path(info.xbmc),
            temp_path=os.path.join(host.translate_path("special://temp"), self._temp_dir_name),
        )
        if platform is None:
            return info

        quirk = self._quirks.get(platform.os.lower())
        if quirk is None:
            return info
        return quirk(info, self._env, self._exists)

    def recreate_temp(self, path: str) -> None:
        shutil.rmtree(path, ignore_errors=True)
        try:
            os.makedirs(path, exist_ok=True)
        except OSError as e:
            logger.info("Could not create temporary directory %s: %s", path, e)


def check_writable(path: str) -> None:
    """Ensure ``path`` is a local, existing and writable directory.

    Raises:
        PathNotSet: the setting was left empty.
        UnsupportedNetworkPath: the path points at an nfs/smb share.
        NotADirectory: the path exists but is not a directory.
        FilesystemError: stat or the probe file creation failed, or the path
            is malformed (an embedded NUL byte).
    """
    if path == UNSET_PATH:
        raise PathNotSet(path)
    if path.startswith(NETWORK_PREFIXES):
        raise UnsupportedNetworkPath(path)

    try:
        is_dir = stat.S_ISDIR(os.stat(path).st_mode)
    except (OSError, ValueError) as e:
        raise FilesystemError(path, e) from e
    if not is_dir:
        raise NotADirectory(path)

    probe = os.path.join(path, WRITABLE_PROBE)
    try:
        with open(probe, "w"):
            pass
    except (OSError, ValueError) as e:
        raise FilesystemError(path, e) from e
    try:
        os.remove(probe)
    except (OSError, ValueError) as e:
        raise FilesystemError(path, e) from e
