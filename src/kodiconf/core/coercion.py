"""Typing of raw host settings.

The host hands every setting over as text together with the type declared in
the addon's settings definition. ``SettingsCoercer`` turns them into native
values without ever failing the batch, and ``SETTINGS_SCHEMA`` declares which
kind each consumed key must end up as.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Union

from .config_model import MIB

logger = logging.getLogger(__name__)

SettingValue = Union[int, float, bool, str]
TypedSettingsMap = dict[str, SettingValue]

TRUE_TOKEN = "true"

KIB = 1024


@dataclass(frozen=True)
class RawSetting:
    key: str
    type: str
    value: str
    option: str = ""


def _parse_int(value: str) -> int:
    try:
        return int(value)
    except ValueError:
        return 0


def _parse_float(value: str) -> float:
    try:
        return float(value)
    except ValueError:
        return 0.0


def _truncate(value: float) -> int:
    try:
        return int(value)
    except (ValueError, OverflowError):
        return 0


class SettingsCoercer:
    """Best-effort conversion of raw settings into native values."""

    def coerce_one(self, setting: RawSetting) -> SettingValue:
        kind = setting.type
        if kind in ("enum", "number"):
            return _parse_int(setting.value)
        if kind == "slider":
            value_int = 0
            value_float = 0.0
            if setting.option in ("percent", "int"):
                value_int = _truncate(_parse_float(setting.value))
            elif setting.option == "float":
                value_float = _parse_float(setting.value)
            # Non-positive float sliders come back in their integer form
            if value_float > 0:
                return value_float
            return value_int
        if kind == "bool":
            return setting.value == TRUE_TOKEN
        return setting.value

    def coerce(self, raw_settings: list[RawSetting]) -> TypedSettingsMap:
        return {setting.key: self.coerce_one(setting) for setting in raw_settings}


@dataclass(frozen=True)
class SettingSpec:
    """Maps one host setting onto one ``Configuration`` field."""

    field: str
    key: str
    kind: type
    scale: int = 1


SETTINGS_SCHEMA: tuple[SettingSpec, ...] = (
    SettingSpec("download_storage", "download_storage", int),
    SettingSpec("auto_memory_size", "auto_memory_size", bool),
    SettingSpec("auto_memory_size_strategy", "auto_memory_size_strategy", int),
    SettingSpec("memory_size", "memory_size", int, MIB),
    SettingSpec("buffer_size", "buffer_size", int, MIB),
    SettingSpec("upload_rate_limit", "max_upload_rate", int, KIB),
    SettingSpec("download_rate_limit", "max_download_rate", int, KIB),
    SettingSpec("spoof_user_agent", "spoof_user_agent", int),
    SettingSpec("limit_after_buffering", "limit_after_buffering", bool),
    SettingSpec("keep_downloading", "keep_downloading", int),
    SettingSpec("keep_files_playing", "keep_files_playing", int),
    SettingSpec("keep_files_finished", "keep_files_finished", int),
    SettingSpec("disable_bg_progress", "disable_bg_progress", bool),
    SettingSpec("disable_bg_progress_playback", "disable_bg_progress_playback", bool),
    SettingSpec("force_use_trakt", "force_use_trakt", bool),
    SettingSpec("use_cache_selection", "use_cache_selection", bool),
    SettingSpec("use_cache_search", "use_cache_search", bool),
    SettingSpec("cache_search_duration", "cache_search_duration", int),
    SettingSpec("results_per_page", "results_per_page", int),
    SettingSpec("enable_overlay_status", "enable_overlay_status", bool),
    SettingSpec("silent_stream_start", "silent_stream_start", bool),
    SettingSpec("choose_stream_auto", "choose_stream_auto", bool),
    SettingSpec("force_link_type", "force_link_type", bool),
    SettingSpec("use_original_title", "use_original_title", bool),
    SettingSpec("add_specials", "add_specials", bool),
    SettingSpec("show_unaired_seasons", "unaired_seasons", bool),
    SettingSpec("show_unaired_episodes", "unaired_episodes", bool),
    SettingSpec("smart_episode_match", "smart_episode_match", bool),
    SettingSpec("seed_time_limit", "seed_time_limit", int),
    SettingSpec("disable_upload", "disable_upload", bool),
    SettingSpec("disable_dht", "disable_dht", bool),
    SettingSpec("disable_tcp", "disable_tcp", bool),
    SettingSpec("disable_utp", "disable_utp", bool),
    SettingSpec("disable_upnp", "disable_upnp", bool),
    SettingSpec("encryption_policy", "encryption_policy", int),
    SettingSpec("listen_port_min", "listen_port_min", int),
    SettingSpec("listen_port_max", "listen_port_max", int),
    SettingSpec("listen_interfaces", "listen_interfaces", str),
    SettingSpec("listen_autodetect_ip", "listen_autodetect_ip", bool),
    SettingSpec("listen_autodetect_port", "listen_autodetect_port", bool),
    SettingSpec("connections_limit", "connections_limit", int),
    SettingSpec("scrobble", "trakt_scrobble", bool),
    SettingSpec("trakt_username", "trakt_username", str),
    SettingSpec("trakt_token", "trakt_token", str),
    SettingSpec("trakt_refresh_token", "trakt_refresh_token", str),
    SettingSpec("trakt_token_expiry", "trakt_token_expiry", int),
    SettingSpec("trakt_sync_frequency", "trakt_sync", int),
    SettingSpec("trakt_sync_collections", "trakt_sync_collections", bool),
    SettingSpec("trakt_sync_watchlist", "trakt_sync_watchlist", bool),
    SettingSpec("trakt_sync_userlists", "trakt_sync_userlists", bool),
    SettingSpec("trakt_sync_watched", "trakt_sync_watched", bool),
    SettingSpec("trakt_sync_watched_back", "trakt_sync_watchedback", bool),
    SettingSpec("update_frequency", "library_update_frequency", int),
    SettingSpec("update_delay", "library_update_delay", int),
    SettingSpec("update_auto_scan", "library_auto_scan", bool),
    SettingSpec("play_resume", "play_resume", bool),
    SettingSpec("use_cloudhole", "use_cloudhole", bool),
    SettingSpec("cloudhole_key", "cloudhole_key", str),
    SettingSpec("tmdb_api_key", "tmdb_api_key", str),
    SettingSpec("osdb_user", "osdb_user", str),
    SettingSpec("osdb_pass", "osdb_pass", str),
    SettingSpec("osdb_language", "osdb_language", str),
    SettingSpec("osdb_auto_language", "osdb_auto_language", bool),
    SettingSpec("sorting_mode_movies", "sorting_mode_movies", int),
    SettingSpec("sorting_mode_shows", "sorting_mode_shows", int),
    SettingSpec("resolution_preference_movies", "resolution_preference_movies", int),
    SettingSpec("resolution_preference_shows", "resolution_preference_shows", int),
    SettingSpec("percentage_additional_seeders", "percentage_additional_seeders", int),
    SettingSpec("use_public_dns", "use_public_dns", bool),
    SettingSpec("public_dns_list", "public_dns_list", str),
    SettingSpec("opennic_dns_list", "opennic_dns_list", str),
    SettingSpec("custom_provider_timeout_enabled", "custom_provider_timeout_enabled", bool),
    SettingSpec("custom_provider_timeout", "custom_provider_timeout", int),
    SettingSpec("proxy_type", "proxy_type", int),
    SettingSpec("proxy_enabled", "proxy_enabled", bool),
    SettingSpec("proxy_host", "proxy_host", str),
    SettingSpec("proxy_port", "proxy_port", int),
    SettingSpec("proxy_login", "proxy_login", str),
    SettingSpec("proxy_password", "proxy_password", str),
    SettingSpec("completed_move", "completed_move", bool),
    SettingSpec("completed_movies_path", "completed_movies_path", str),
    SettingSpec("completed_shows_path", "completed_shows_path", str),
)

_ZERO: dict[type, SettingValue] = {int: 0, float: 0.0, bool: False, str: ""}


def declared_kind(setting: RawSetting) -> type:
    """Return the Python type ``SettingsCoercer`` produces for this setting."""
    if setting.type in ("enum", "number"):
        return int
    if setting.type == "slider":
        return float if setting.option == "float" else int
    if setting.type == "bool":
        return bool
    return str


def validate_schema(raw_settings: list[RawSetting]) -> list[str]:
    """List schema keys the host does not provide or declares with another type."""
    by_key = {setting.key: setting for setting in raw_settings}
    problems = []
    for entry in SETTINGS_SCHEMA:
        setting = by_key.get(entry.key)
        if setting is None:
            problems.append(f"{entry.key}: missing")
            continue
        kind = declared_kind(setting)
        if kind is not entry.kind:
            problems.append(
                f"{entry.key}: declared {setting.type!r} produces {kind.__name__}, "
                f"expected {entry.kind.__name__}"
            )
    return problems


def typed_value(typed: TypedSettingsMap, key: str, kind: type) -> SettingValue:
    """Read ``key`` as ``kind``, falling back to the kind's zero value."""
    value = typed.get(key)
    if value is None:
        return _ZERO[kind]
    if kind is float and isinstance(value, int) and not isinstance(value, bool):
        return float(value)
    if kind is int and isinstance(value, bool):
        return _ZERO[kind]
    if not isinstance(value, kind):
        logger.debug("Setting %s has type %s, expected %s", key, type(value).__name__, kind.__name__)
        return _ZERO[kind]
    return value


def settings_fields(typed: TypedSettingsMap) -> dict[str, SettingValue]:
    """Map typed settings onto ``Configuration`` keyword arguments."""
    fields = {}
    for entry in SETTINGS_SCHEMA:
        value = typed_value(typed, entry.key, entry.kind)
        if entry.scale != 1:
            value = value * entry.scale
        fields[entry.field] = value
    return fields
