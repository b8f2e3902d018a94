"""Core configuration model (structured view)."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

MIB = 1024 * 1024

# Upper bound for automatically selected memory storage size
MAX_MEMORY_SIZE = 200 * MIB
DEFAULT_MEMORY_SIZE = 40 * MIB

LISTEN_PORT = 65220
DEFAULT_CONNECTIONS_LIMIT = 50
DEFAULT_TRAKT_SYNC_FREQUENCY = 6

STORAGE_FILE = 0
STORAGE_MEMORY = 1

# "keep_*" enum value meaning "always"
KEEP_ALWAYS = 2

PROXY_SCHEMES = ("socks4", "socks5", "http", "https")

# Value reported by the host for a path setting nobody filled in
UNSET_PATH = "."


@dataclass(frozen=True)
class AddonInfo:
    id: str = ""
    name: str = ""
    version: str = ""
    path: str = ""
    profile: str = ""
    home: str = ""
    xbmc: str = ""
    temp_path: str = ""
    icon: str = ""


@dataclass(frozen=True)
class PlatformInfo:
    os: str = ""
    arch: str = ""
    version: str = ""


@dataclass(frozen=True)
class Addon:
    """Installed addon as reported by the host addon manager."""

    id: str
    name: str = ""
    version: str = ""
    enabled: bool = False


@dataclass(frozen=True)
class Configuration:
    """One published settings snapshot.

    Instances are never modified after publication; every reload builds a
    new one.
    """

    download_path: str = ""
    torrents_path: str = ""
    library_path: str = ""
    info: AddonInfo = field(default_factory=AddonInfo)
    platform: PlatformInfo = field(default_factory=PlatformInfo)
    language: str = ""
    temporary_path: str = ""
    profile_path: str = ""
    home_path: str = ""
    xbmc_path: str = ""

    spoof_user_agent: int = 0
    keep_downloading: int = 0
    keep_files_playing: int = 0
    keep_files_finished: int = 0
    disable_bg_progress: bool = False
    disable_bg_progress_playback: bool = False
    force_use_trakt: bool = False
    use_cache_selection: bool = False
    use_cache_search: bool = False
    cache_search_duration: int = 0
    results_per_page: int = 0
    enable_overlay_status: bool = False
    silent_stream_start: bool = False
    choose_stream_auto: bool = False
    force_link_type: bool = False
    use_original_title: bool = False
    add_specials: bool = False
    show_unaired_seasons: bool = False
    show_unaired_episodes: bool = False
    smart_episode_match: bool = False

    download_storage: int = STORAGE_FILE
    auto_memory_size: bool = False
    auto_memory_size_strategy: int = 0
    memory_size: int = 0
    buffer_size: int = 0
    upload_rate_limit: int = 0
    download_rate_limit: int = 0
    limit_after_buffering: bool = False
    connections_limit: int = 0
    seed_time_limit: int = 0
    disable_upload: bool = False
    disable_dht: bool = False
    disable_tcp: bool = False
    disable_utp: bool = False
    disable_upnp: bool = False
    encryption_policy: int = 0
    listen_port_min: int = 0
    listen_port_max: int = 0
    listen_interfaces: str = ""
    listen_autodetect_ip: bool = False
    listen_autodetect_port: bool = False
    scrobble: bool = False

    trakt_username: str = ""
    trakt_token: str = ""
    trakt_refresh_token: str = ""
    trakt_token_expiry: int = 0
    trakt_sync_frequency: int = 0
    trakt_sync_collections: bool = False
    trakt_sync_watchlist: bool = False
    trakt_sync_userlists: bool = False
    trakt_sync_watched: bool = False
    trakt_sync_watched_back: bool = False

    update_frequency: int = 0
    update_delay: int = 0
    update_auto_scan: bool = False
    play_resume: bool = False
    use_cloudhole: bool = False
    cloudhole_key: str = ""
    tmdb_api_key: str = ""

    osdb_user: str = ""
    osdb_pass: str = ""
    osdb_language: str = ""
    osdb_auto_language: bool = False

    sorting_mode_movies: int = 0
    sorting_mode_shows: int = 0
    resolution_preference_movies: int = 0
    resolution_preference_shows: int = 0
    percentage_additional_seeders: int = 0

    use_public_dns: bool = False
    public_dns_list: str = ""
    opennic_dns_list: str = ""
    custom_provider_timeout_enabled: bool = False
    custom_provider_timeout: int = 0

    proxy_url: str = ""
    proxy_type: int = 0
    proxy_enabled: bool = False
    proxy_host: str = ""
    proxy_port: int = 0
    proxy_login: str = ""
    proxy_password: str = ""

    completed_move: bool = False
    completed_movies_path: str = ""
    completed_shows_path: str = ""

    def addon_icon(self) -> str:
        return os.path.join(self.info.path, "icon.png")

    def addon_resource(self, *parts: str) -> str:
        return os.path.join(self.info.path, "resources", *parts)


# Fields never written to diagnostics output
SECRET_FIELDS = frozenset(
    {
        "trakt_token",
        "trakt_refresh_token",
        "cloudhole_key",
        "tmdb_api_key",
        "osdb_pass",
        "proxy_password",
    }
)
