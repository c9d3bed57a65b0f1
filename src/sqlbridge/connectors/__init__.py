"""Connector loading and the built-in connectors.

Built-in connectors:
    - ``sqlbridge.connectors.odbc.OdbcConnector``: ODBC connection strings (pyodbc)
    - ``sqlbridge.connectors.alchemy.AlchemyConnector``: SQLAlchemy URLs

The ODBC connector is not imported here so the package stays importable on
hosts without an ODBC driver manager; it is imported when selected.
"""

from .alchemy import AlchemyConnector
from .boundary import FOREIGN_FAILURES, Outcome, call_foreign
from .isolation import IsolatedScope
from .loader import (
    BundledStrategy,
    ConnectorStrategy,
    ExternalFileStrategy,
    PackagedResourceStrategy,
    create_strategy,
    instantiate_connector,
    load_connector,
    load_failure_message,
    split_class_name,
)

__all__ = [
    "AlchemyConnector",
    "BundledStrategy",
    "ConnectorStrategy",
    "ExternalFileStrategy",
    "FOREIGN_FAILURES",
    "IsolatedScope",
    "Outcome",
    "PackagedResourceStrategy",
    "call_foreign",
    "create_strategy",
    "instantiate_connector",
    "load_connector",
    "load_failure_message",
    "split_class_name",
]
