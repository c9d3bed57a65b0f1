"""Settings module providing configuration management for sqlbridge.

Settings are built on Pydantic Settings and are read-only once loaded.

Configuration Sources (precedence order):
    1. Explicit keyword arguments (tests, embedding applications)
    2. Environment Variables (CDATA_ prefix)
    3. Settings file (flat key=value text)
    4. Default Values in code (lowest priority)

Defaults:
    - Prefix: "salesforce"
    - DriverPath: "bundled"
    - DriverClass: the built-in ODBC connector, only when DriverPath is "bundled"

JdbcUrl and Tables have no default.

Quick Start:
    >>> from sqlbridge.settings import load_settings
    >>>
    >>> settings = load_settings("bridge.properties")
    >>> settings.prefix
    'salesforce'
"""

from .main import BridgeSettings, get_settings, load_settings, _reload_settings
from .sources import SettingsFileSource

__all__ = [
    "BridgeSettings",
    "SettingsFileSource",
    "get_settings",
    "load_settings",
]
