"""kodiconf - Typed, validated settings snapshots for Kodi plugin addons"""

__version__ = "1.0.0"
__description__ = "Typed, validated settings snapshots for Kodi plugin addons"

__all__ = ["Configuration", "ConfigStore", "__version__"]


def __getattr__(name: str):
    """Lazy import so that importing the package does not pull in the core.

    Entry points live in kodiconf.main, which also reads the .env file at
    import time.
    """
    if name == "Configuration":
        from .core.config_model import Configuration

        return Configuration
    if name == "ConfigStore":
        from .core.store import ConfigStore

        return ConfigStore
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
