"""Runtime options for kodiconf"""
import os

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Process-level options, everything else comes from the addon settings"""

    # Addon identity
    ADDON_ID = os.getenv("KODICONF_ADDON_ID", "plugin.video.elementum")
    DIALOG_TITLE = os.getenv("KODICONF_DIALOG_TITLE", "Elementum")
    TEMP_DIR_NAME = os.getenv("KODICONF_TEMP_DIR_NAME", "elementum")

    # Rejected settings: poll the settings window, then exit with this code
    SETTINGS_POLL_INTERVAL = float(os.getenv("KODICONF_SETTINGS_POLL_INTERVAL", "3"))
    EXIT_CODE_SETTINGS = int(os.getenv("KODICONF_EXIT_CODE_SETTINGS", "5"))

    # Provider addon health check
    HEALTH_CHECK_ENABLED = os.getenv("KODICONF_HEALTH_CHECK", "true").lower() == "true"
    PROVIDER_PREFIX = os.getenv("KODICONF_PROVIDER_PREFIX", "script.elementum.")
    BURST_ADDON_ID = os.getenv("KODICONF_BURST_ADDON_ID", "script.elementum.burst")
    HEALTH_REFRESH_DELAY = float(os.getenv("KODICONF_HEALTH_REFRESH_DELAY", "10"))
    HEALTH_INSTALL_DELAY = float(os.getenv("KODICONF_HEALTH_INSTALL_DELAY", "4"))

    LOG_LEVEL = os.getenv("KODICONF_LOG_LEVEL", "INFO").upper()
    DEBUG = os.getenv("DEBUG", "false").lower() == "true"


config = Config()
