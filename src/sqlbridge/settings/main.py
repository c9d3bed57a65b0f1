from pathlib import Path
from typing import ClassVar, Dict, Optional, Tuple, Union

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from sqlbridge.common.exceptions import configuration_error
from sqlbridge.constants import (
    BUNDLED_SOURCE,
    DEFAULT_BUNDLED_CONNECTOR,
    DEFAULT_PREFIX,
    DRIVER_CLASS_OPTION,
    DRIVER_PATH_OPTION,
    ENV_PREFIX,
    JDBC_URL_OPTION,
    LOG_FILE_OPTION,
    PREFIX_OPTION,
    RESOURCE_SCHEME,
    TABLES_OPTION,
    ConnectorSource,
)
from sqlbridge.logging import get_logger
from .sources import SettingsFileSource

logger = get_logger(__name__)


class BridgeSettings(BaseSettings):
    """Merged, read-only data source settings.

    Values come from an optional settings file and the environment, the
    environment taking precedence. The model is frozen once built; derived
    facts (dialect capabilities, scope defaults) live in separate values
    produced by ``sqlbridge.datasource.DataSource``.

    Environment variables:
        CDATA_PREFIX, CDATA_DRIVER_PATH, CDATA_DRIVER_CLASS,
        CDATA_JDBC_URL, CDATA_TABLES, CDATA_LOG_FILE

    Only the aliased names are read from the environment. Field names are
    not accepted as input, so a bare ``PREFIX`` in the shell has no effect.
    """

    model_config = SettingsConfigDict(
        env_file=None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    file_keys: ClassVar[Dict[str, Tuple[str, ...]]] = {
        "prefix": (PREFIX_OPTION,),
        "connector_source": (DRIVER_PATH_OPTION,),
        "connector_class": (DRIVER_CLASS_OPTION,),
        "data_source_url": (JDBC_URL_OPTION,),
        "table_patterns": (TABLES_OPTION,),
        "log_file": (LOG_FILE_OPTION,),
    }

    prefix: str = Field(
        default=DEFAULT_PREFIX,
        validation_alias=f"{ENV_PREFIX}PREFIX",
        description="Server name and resource scheme prefix (e.g., salesforce, sap)"
    )
    connector_source: str = Field(
        default=BUNDLED_SOURCE,
        validation_alias=f"{ENV_PREFIX}DRIVER_PATH",
        description=(
            "Where the connector is loaded from: 'bundled' for an importable module, "
            "'resource:<path>' for a file shipped in sqlbridge.resources, or a filesystem path"
        )
    )
    connector_class: Optional[str] = Field(
        default=None,
        validation_alias=f"{ENV_PREFIX}DRIVER_CLASS",
        description="Dotted path of the connector class (package.module.Class or package.module:Class)"
    )
    data_source_url: Optional[str] = Field(
        default=None,
        validation_alias=f"{ENV_PREFIX}JDBC_URL",
        description="Connection string handed to the connector"
    )
    table_patterns: Optional[str] = Field(
        default=None,
        validation_alias=f"{ENV_PREFIX}TABLES",
        description="Comma-separated table patterns, optionally catalog/schema qualified"
    )
    log_file: Optional[str] = Field(
        default=None,
        validation_alias=f"{ENV_PREFIX}LOG_FILE",
        description="Optional file that log records are appended to"
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type,
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> Tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            SettingsFileSource.from_dotenv_source(settings_cls, dotenv_settings),
        )

    @property
    def effective_connector_class(self) -> Optional[str]:
        """Connector class to load.

        Falls back to the built-in ODBC connector only when the connector is
        bundled and neither the file nor the environment set a class. An
        explicitly empty class stays empty and is reported as missing.
        """
        if self.connector_class is not None:
            return self.connector_class or None
        if self.connector_source == BUNDLED_SOURCE:
            return DEFAULT_BUNDLED_CONNECTOR
        return None

    @property
    def connector_mode(self) -> Optional[ConnectorSource]:
        if not self.connector_source:
            return None
        return ConnectorSource.from_locator(self.connector_source)

    @property
    def connector_locator(self) -> str:
        """The connector source with any ``resource:`` scheme removed."""
        if self.connector_mode == ConnectorSource.RESOURCE:
            return self.connector_source[len(RESOURCE_SCHEME):]
        return self.connector_source

    @property
    def resource_scheme(self) -> str:
        return f"{self.prefix}://"


def load_settings(file_path: Optional[Union[str, Path]] = None) -> BridgeSettings:
    """Load settings from an optional file, then apply environment overrides.

    Args:
        file_path: Settings file to read. None or empty reads only the environment.

    Returns:
        BridgeSettings: A new read-only settings instance

    Raises:
        BridgeError: If ``file_path`` is given but does not exist
    """
    if file_path and not Path(file_path).is_file():
        raise configuration_error(
            f"The settings file '{file_path}' does not exist",
            config_key="settings_file"
        )

    settings = BridgeSettings(_env_file=file_path or None)
    logger.debug(
        "Loaded settings",
        extra={"settings_file": str(file_path) if file_path else None, "prefix": settings.prefix}
    )
    return settings


# Singleton instance
_settings: Optional[BridgeSettings] = None


def get_settings(
    file_path: Optional[Union[str, Path]] = None,
    force_reload: bool = False,
) -> BridgeSettings:
    """Get the singleton settings instance for the process.

    Settings are built once at startup and shared by reference afterwards.
    ``file_path`` is only read on the first call (or when ``force_reload`` is
    set).

    Args:
        file_path: Settings file used when the instance is created
        force_reload: If True, creates a new instance even if one exists

    Returns:
        BridgeSettings: The singleton settings instance
    """
    global _settings

    if _settings is None or force_reload:
        _settings = load_settings(file_path)

    return _settings


def _reload_settings(file_path: Optional[Union[str, Path]] = None) -> BridgeSettings:
    """Force reload of settings.

    This is primarily for testing purposes where you need to reset
    the singleton instance.
    """
    global _settings
    _settings = None
    return get_settings(file_path, force_reload=True)
