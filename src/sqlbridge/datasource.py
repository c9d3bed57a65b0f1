"""Data source facade.

``DataSource`` is what a protocol server holds on to: it validates the
settings, loads the connector, learns the engine's dialect and default scope,
and afterwards hands out connections and resolved tables.

Example:
    >>> import sys
    >>> from sqlbridge import DataSource
    >>>
    >>> source = DataSource.from_settings_file("bridge.properties")
    >>> if not source.validate(sys.stderr):
    ...     raise SystemExit(1)
    >>> for table in source.get_tables():
    ...     print(source.quote_identifier(table.name))
"""

import sys
from contextlib import closing
from pathlib import Path
from typing import Any, List, Mapping, Optional, TextIO, Tuple, Union

from sqlbridge.__version__ import __version__
from sqlbridge.common.exceptions import (
    BridgeError,
    configuration_error,
    connectivity_error,
    connector_load_error,
    missing_option_error,
)
from sqlbridge.connectors.boundary import call_foreign
from sqlbridge.connectors.loader import load_connector, load_failure_message
from sqlbridge.constants import (
    DRIVER_CLASS_OPTION,
    DRIVER_PATH_OPTION,
    JDBC_URL_OPTION,
    PREFIX_OPTION,
    RESOURCE_PACKAGE,
)
from sqlbridge.introspection import (
    discover_capabilities,
    resolve_scope_defaults,
    resolve_tables,
    verify_connectivity,
)
from sqlbridge.logging import get_logger, set_logging_context
from sqlbridge.patterns import parse_table_patterns
from sqlbridge.protocols import Connection, Connector
from sqlbridge.settings import BridgeSettings, load_settings
from sqlbridge.types import DialectCapabilities, ScopeDefaults, TableIdentifier

logger = get_logger(__name__)


class DataSource:
    """Validated access to one relational data source.

    The connector, dialect capabilities and scope defaults are set together,
    at most once, by a successful load. A failed load leaves all three unset.
    Connections, tables and dialect queries are only served while the latest
    ``validate()`` returned True.

    Attributes:
        settings: Read-only settings the source was built from
        properties: Connection properties passed to every ``connect`` call
    """

    def __init__(
        self,
        settings: BridgeSettings,
        properties: Optional[Mapping[str, Any]] = None,
        resource_anchor: str = RESOURCE_PACKAGE,
    ):
        self.settings = settings
        self.properties = dict(properties or {})
        self._resource_anchor = resource_anchor
        self._connector: Optional[Connector] = None
        self._capabilities: Optional[DialectCapabilities] = None
        self._scope: Optional[ScopeDefaults] = None
        self._valid = False

    @classmethod
    def from_settings_file(cls, file_path: Optional[Union[str, Path]] = None, **kwargs: Any) -> "DataSource":
        """Build a data source from a settings file plus environment overrides."""
        return cls(load_settings(file_path), **kwargs)

    @property
    def is_loaded(self) -> bool:
        return self._connector is not None

    def validate(self, errors: Optional[TextIO] = None) -> bool:
        """Check the settings and prove the data source is reachable.

        Checks run in a fixed order and every failure writes one line to
        ``errors``. The connectivity check only runs when every earlier check
        passed. This method does not raise for configuration or connector
        problems.

        Args:
            errors: Sink for diagnostic lines, ``sys.stderr`` by default

        Returns:
            True only if every attempted check passed
        """
        sink = errors if errors is not None else sys.stderr
        result = True

        def report(error: BridgeError) -> None:
            print(error.diagnostic, file=sink)

        if not self.settings.prefix:
            report(missing_option_error(PREFIX_OPTION))
            result = False

        class_name = self.settings.effective_connector_class
        if not class_name:
            report(missing_option_error(DRIVER_CLASS_OPTION))
            result = False

        if not self.settings.connector_source:
            report(missing_option_error(DRIVER_PATH_OPTION))
            result = False
        elif class_name:
            load_error = self._load(class_name)
            if load_error is not None:
                report(load_error)
                result = False

        if not self.settings.data_source_url:
            report(missing_option_error(JDBC_URL_OPTION))
            result = False
        elif result:
            outcome = verify_connectivity(self._connector, self.settings.data_source_url, self.properties)
            if not outcome.ok:
                report(outcome.error)
                result = False

        self._valid = result
        logger.info("Validated data source", extra={"valid": result, "prefix": self.settings.prefix})
        return result

    def _load(self, class_name: str) -> Optional[BridgeError]:
        """Load the connector and read dialect and scope facts.

        Returns:
            None on success, otherwise the error to report
        """
        if self._connector is not None:
            return None

        mode = self.settings.connector_mode
        outcome = load_connector(mode, self.settings.connector_locator, class_name, self._resource_anchor)
        if not outcome.ok:
            return outcome.error
        connector = outcome.value

        url = self.settings.data_source_url
        if not url:
            # Nothing to connect to; the missing URL is reported separately.
            return None

        def _on_error(exc: BaseException) -> BridgeError:
            return connector_load_error(load_failure_message(mode), exc, class_name=class_name)

        discovered = call_foreign(self._discover, connector, url, on_error=_on_error)
        if not discovered.ok:
            return discovered.error

        self._capabilities, self._scope = discovered.value
        self._connector = connector
        set_logging_context(data_source=self.settings.prefix, connector=class_name)
        logger.info(
            "Data source ready",
            extra={
                "default_catalog": self._scope.catalog,
                "default_schema": self._scope.schema,
            }
        )
        return None

    def _discover(self, connector: Connector, url: str) -> Tuple[DialectCapabilities, ScopeDefaults]:
        with closing(connector.connect(url, dict(self.properties))) as connection:
            capabilities = discover_capabilities(connection)
            scope = resolve_scope_defaults(connection, capabilities)
        return capabilities, scope

    def _require_loaded(self) -> None:
        if not self._valid or self._connector is None:
            raise configuration_error("The data source has not been validated")

    def new_connection(self) -> Connection:
        """Open a new connection; the caller owns and must close it.

        Raises:
            BridgeError: CONFIG_ERROR before a successful ``validate()``,
                CONNECTION_ERROR when the connector cannot connect
        """
        self._require_loaded()
        return call_foreign(
            self._connector.connect,
            self.settings.data_source_url,
            dict(self.properties),
            on_error=connectivity_error,
        ).unwrap()

    def get_tables(self) -> List[TableIdentifier]:
        """Resolve the configured table patterns into concrete tables.

        Returns:
            Resolved tables; an unset ``Tables`` setting yields ``[]``

        Raises:
            BridgeError: CONFIG_ERROR for unparsable patterns or before a
                successful ``validate()``, CONNECTION_ERROR when the connection
                cannot be opened, SCHEMA_INTROSPECTION_ERROR when metadata
                lookups fail
        """
        patterns = parse_table_patterns(self.settings.table_patterns)
        if not patterns:
            return []
        self._require_loaded()
        return resolve_tables(self.new_connection, patterns)

    @property
    def capabilities(self) -> DialectCapabilities:
        self._require_loaded()
        return self._capabilities

    @property
    def scope_defaults(self) -> ScopeDefaults:
        self._require_loaded()
        return self._scope

    def quote_identifier(self, name: str) -> str:
        return self.capabilities.quote_identifier(name)

    @property
    def identifier_quotes(self) -> str:
        return self.capabilities.identifier_quotes

    @property
    def supports_multiple_catalogs(self) -> bool:
        return self.capabilities.supports_multiple_catalogs

    @property
    def supports_multiple_schemas(self) -> bool:
        return self.capabilities.supports_multiple_schemas

    @property
    def default_catalog(self) -> Optional[str]:
        return self.scope_defaults.catalog

    @property
    def default_schema(self) -> Optional[str]:
        return self.scope_defaults.schema

    @property
    def server_name(self) -> str:
        return self.settings.prefix

    @property
    def server_version(self) -> str:
        return __version__

    @property
    def resource_scheme(self) -> str:
        return self.settings.resource_scheme

    @property
    def log_file(self) -> Optional[str]:
        return self.settings.log_file


__all__ = ["DataSource"]
