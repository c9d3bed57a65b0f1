"""Tests for the pyodbc connector with the driver mocked out."""

from unittest.mock import MagicMock, patch

import pytest

pytest.importorskip("pyodbc")

from sqlbridge.connectors import odbc  # noqa: E402
from sqlbridge.protocols import Connection, Connector, MetadataProvider  # noqa: E402


@pytest.fixture
def raw_connection():
    connection = MagicMock(name="pyodbc.Connection")
    cursor = connection.cursor.return_value
    cursor.tables.return_value.fetchall.return_value = []
    return connection


class TestOdbcConnector:
    def test_connect_uses_autocommit_and_properties(self, raw_connection):
        with patch.object(odbc.pyodbc, "connect", return_value=raw_connection) as connect:
            connection = odbc.OdbcConnector().connect("DSN=crm", {"timeout": 5})

        connect.assert_called_once_with("DSN=crm", autocommit=True, timeout=5)
        assert isinstance(connection, Connection)
        assert connection.raw is raw_connection

    def test_connector_satisfies_protocol(self):
        assert isinstance(odbc.OdbcConnector(), Connector)

    def test_close_closes_driver_connection(self, raw_connection):
        odbc.OdbcConnection(raw_connection).close()

        raw_connection.close.assert_called_once_with()


class TestOdbcMetadata:
    def test_catalog_listing(self, raw_connection):
        cursor = raw_connection.cursor.return_value
        cursor.tables.return_value.fetchall.return_value = [("CRM", None, None, None, None)]

        metadata = odbc.OdbcConnection(raw_connection).metadata()

        assert isinstance(metadata, MetadataProvider)
        assert metadata.catalogs() == [("CRM",)]
        cursor.tables.assert_called_once_with(catalog="%", schema="", table="")
        cursor.close.assert_called_once_with()

    def test_schema_listing(self, raw_connection):
        cursor = raw_connection.cursor.return_value
        cursor.tables.return_value.fetchall.return_value = [("CRM", "dbo", None, None, None)]

        assert odbc.OdbcMetadata(raw_connection).schemas() == [("CRM", "dbo")]
        cursor.tables.assert_called_once_with(catalog="", schema="%", table="")

    def test_table_listing(self, raw_connection):
        cursor = raw_connection.cursor.return_value
        cursor.tables.return_value.fetchall.return_value = [("CRM", "dbo", "Account", "TABLE", None)]

        rows = odbc.OdbcMetadata(raw_connection).tables(None, "dbo", "Acc%", None)

        assert rows == [("CRM", "dbo", "Account", "TABLE")]
        cursor.tables.assert_called_once_with(table="Acc%", catalog=None, schema="dbo", tableType=None)

    def test_table_kinds_are_joined(self, raw_connection):
        cursor = raw_connection.cursor.return_value

        odbc.OdbcMetadata(raw_connection).tables("CRM", None, "%", ["TABLE", "VIEW"])

        cursor.tables.assert_called_once_with(table="%", catalog="CRM", schema=None, tableType="TABLE,VIEW")
