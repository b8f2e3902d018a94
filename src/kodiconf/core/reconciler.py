"""Core reload pipeline for kodiconf.

Keeps the resolve -> validate -> fetch -> coerce -> derive -> publish
sequence in one place, decoupled from the Kodi API via ports. Process
lifecycle (dialogs, exit) is left to the caller of ``reload``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import asdict, dataclass
import logging
import os
from pprint import pformat
import threading

from .coercion import SettingsCoercer, settings_fields, validate_schema
from .config_model import SECRET_FIELDS, Configuration, UNSET_PATH
from .derived import DerivedValueComputer
from .errors import PathNotSet, PathValidationError
from .paths import PathResolver, check_writable
from .ports import AddonHost
from .state_machine import ReloadEvent, ReloadState, ReloadStateMachine
from .store import ConfigStore

logger = logging.getLogger(__name__)

# Localized "download path is not set" message
MESSAGE_PATH_NOT_SET = "LOCALIZE[30113]"


@dataclass(frozen=True)
class ReloadResult:
    """Outcome of one reload: a published snapshot or the path error that stopped it."""

    config: Configuration | None = None
    error: PathValidationError | None = None
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.error is None


def redacted(config: Configuration) -> dict:
    values = asdict(config)
    for name in SECRET_FIELDS:
        if values.get(name):
            values[name] = "***"
    return values


class ConfigurationReconciler:
    """Builds and publishes a Configuration from the host settings."""

    def __init__(
        self,
        host: AddonHost,
        store: ConfigStore,
        paths: PathResolver,
        coercer: SettingsCoercer,
        deriver: DerivedValueComputer,
        health_check: Callable[[Configuration], None] | None = None,
        check_writable: Callable[[str], None] = check_writable,
    ):
        self._host = host
        self._store = store
        self._paths = paths
        self._coercer = coercer
        self._deriver = deriver
        self._health_check = health_check
        self._check_writable = check_writable
        self._state = ReloadStateMachine()
        self._schema_checked = False

    @property
    def state(self) -> ReloadState:
        return self._state.state

    def reload(self) -> ReloadResult:
        logger.info("Reloading configuration...")
        if self._state.state == ReloadState.ABORTED:
            self._state.transition(ReloadEvent.RESET)
        self._state.transition(ReloadEvent.START)

        host = self._host
        platform = host.get_platform()
        info = self._paths.resolve_addon_info(host.get_addon_info(), platform)
        self._paths.recreate_temp(info.temp_path)
        self._state.transition(ReloadEvent.PATHS_RESOLVED)

        download_path = self._paths.translate(host.get_setting_string("download_path"))
        try:
            self._check_writable(download_path)
        except PathNotSet as e:
            return self._abort(e, MESSAGE_PATH_NOT_SET)
        except PathValidationError as e:
            logger.error("Cannot write to location '%s': %s", download_path, e)
            return self._abort(e, str(e))
        logger.info("Using download path: %s", download_path)

        library_path = self._paths.translate(host.get_setting_string("library_path"))
        if library_path == UNSET_PATH:
            library_path = download_path
        else:
            try:
                self._check_writable(library_path)
            except PathValidationError as e:
                logger.error("Cannot write to location '%s': %s", library_path, e)
                return self._abort(e, str(e))
        logger.info("Using library path: %s", library_path)
        self._state.transition(ReloadEvent.PATHS_VALID)

        raw_settings = host.get_all_settings()
        if not self._schema_checked:
            for problem in validate_schema(raw_settings):
                logger.warning("Settings schema mismatch: %s", problem)
            self._schema_checked = True
        self._state.transition(ReloadEvent.SETTINGS_FETCHED)

        typed = self._coercer.coerce(raw_settings)
        config = Configuration(
            download_path=download_path,
            library_path=library_path,
            torrents_path=os.path.join(download_path, "Torrents"),
            info=info,
            platform=platform,
            language=host.get_language_code(),
            temporary_path=info.temp_path,
            profile_path=info.profile,
            home_path=info.home,
            xbmc_path=info.xbmc,
            **settings_fields(typed),
        )
        self._state.transition(ReloadEvent.COERCED)

        config = self._deriver.derive(config)
        self._state.transition(ReloadEvent.DERIVED)

        self._store.replace(config)
        self._state.transition(ReloadEvent.PUBLISHED)

        if self._health_check is not None:
            threading.Thread(
                target=self._health_check, args=(config,), name="addon-health", daemon=True
            ).start()

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug("Using configuration: %s", pformat(redacted(config)))
        return ReloadResult(config=config)

    def _abort(self, error: PathValidationError, message: str) -> ReloadResult:
        logger.warning("Addon settings not properly set: %s", error)
        self._state.transition(ReloadEvent.PATHS_INVALID)
        return ReloadResult(error=error, message=message)
