"""Tests for dialect discovery, scope defaults, table resolution and connectivity."""

import pytest

import fakes
from sqlbridge.common.exceptions import BridgeError, ErrorCode
from sqlbridge.constants import SQLINFO_QUERY
from sqlbridge.introspection import (
    discover_capabilities,
    resolve_scope_defaults,
    resolve_tables,
    verify_connectivity,
)
from sqlbridge.types import DialectCapabilities, TableIdentifier


@pytest.fixture
def connection(engine):
    return fakes.FakeConnector().connect("fake://", {})


def _capabilities(catalogs: str, schemas: str) -> DialectCapabilities:
    return DialectCapabilities.from_sqlinfo({
        "SUPPORTS_MULTIPLE_CATALOGS": catalogs,
        "SUPPORTS_MULTIPLE_SCHEMAS": schemas,
    })


class TestDialectDiscovery:
    """Reading sys_sqlinfo into DialectCapabilities."""

    def test_reads_quotes_and_flags(self, engine, connection):
        capabilities = discover_capabilities(connection)

        assert engine.statements == [SQLINFO_QUERY]
        assert capabilities.identifier_quotes == "[]"
        assert capabilities.quote_identifier("Account") == "[Account]"
        assert capabilities.supports_multiple_catalogs is False
        assert capabilities.supports_multiple_schemas is False

    def test_cursor_is_closed(self, engine, connection):
        discover_capabilities(connection)

        assert engine.cursors_closed == 1

    @pytest.mark.parametrize("value", ["YES", "yes", "Yes"])
    def test_flags_ignore_case(self, engine, connection, value):
        engine.sqlinfo = [("SUPPORTS_MULTIPLE_CATALOGS", value), ("SUPPORTS_MULTIPLE_SCHEMAS", value)]

        capabilities = discover_capabilities(connection)

        assert capabilities.supports_multiple_catalogs is True
        assert capabilities.supports_multiple_schemas is True

    def test_absent_flags_read_as_false(self, engine, connection):
        engine.sqlinfo = [("IDENTIFIER_QUOTE_OPEN_CHAR", '"')]

        capabilities = discover_capabilities(connection)

        assert capabilities.multiple_catalogs is None
        assert capabilities.supports_multiple_catalogs is False
        assert capabilities.supports_multiple_schemas is False

    def test_null_values_become_empty_strings(self, engine, connection):
        engine.sqlinfo = [("IDENTIFIER_QUOTE_OPEN_CHAR", None), ("IDENTIFIER_QUOTE_CLOSE_CHAR", None), ("VERSION", "9")]

        capabilities = discover_capabilities(connection)

        assert capabilities.info == {
            "IDENTIFIER_QUOTE_OPEN_CHAR": "",
            "IDENTIFIER_QUOTE_CLOSE_CHAR": "",
            "VERSION": "9",
        }
        assert capabilities.quote_identifier("Account") == "Account"

    def test_query_failure_propagates(self, engine, connection):
        engine.query_error = RuntimeError("Table sys_sqlinfo not found")

        with pytest.raises(RuntimeError, match="sys_sqlinfo"):
            discover_capabilities(connection)
        assert engine.cursors_closed == 1


class TestScopeDefaults:
    """Default catalog/schema resolution strategies."""

    def test_single_catalog_single_schema_uses_first_schema_row(self, connection):
        scope = resolve_scope_defaults(connection, _capabilities("NO", "NO"))

        assert (scope.catalog, scope.schema) == ("C1", "S1")

    def test_single_catalog_multiple_schemas_uses_first_catalog(self, connection):
        scope = resolve_scope_defaults(connection, _capabilities("NO", "YES"))

        assert (scope.catalog, scope.schema) == ("C1", None)

    def test_multiple_catalogs_leaves_scope_unset(self, engine, connection):
        scope = resolve_scope_defaults(connection, _capabilities("YES", "YES"))

        assert (scope.catalog, scope.schema) == (None, None)

    def test_first_row_follows_engine_order(self, engine, connection):
        engine.schemas = [("Zeta", "z"), ("Alpha", "a")]

        scope = resolve_scope_defaults(connection, _capabilities("no", "no"))

        assert (scope.catalog, scope.schema) == ("Zeta", "z")

    def test_empty_listing_leaves_scope_unset(self, engine, connection):
        engine.schemas = []

        scope = resolve_scope_defaults(connection, _capabilities("NO", "NO"))

        assert (scope.catalog, scope.schema) == (None, None)


class TestTableResolution:
    """Expanding patterns against live metadata."""

    def _open(self):
        return fakes.FakeConnector().connect("fake://", {})

    def test_wildcard_expands_in_engine_order(self, engine):
        tables = resolve_tables(self._open, fakes.patterns((None, None, "CUSTOMER%")))

        assert tables == [
            TableIdentifier(catalog="C1", schema="S1", name="CUSTOMER_A"),
            TableIdentifier(catalog="C1", schema="S1", name="CUSTOMER_B"),
        ]

    def test_unset_parts_are_passed_as_no_filter(self, engine):
        resolve_tables(self._open, fakes.patterns((None, "S2", "Opportunity"), ("C1", None, "Account")))

        assert engine.table_calls == [
            (None, "S2", "Opportunity", None),
            ("C1", None, "Account", None),
        ]

    def test_results_concatenate_without_deduplication(self, engine):
        tables = resolve_tables(
            self._open,
            fakes.patterns((None, None, "Account"), (None, None, "CUSTOMER_A"), (None, None, "Acc%")),
        )

        assert [t.name for t in tables] == ["Account", "CUSTOMER_A", "Account"]

    def test_unmatched_pattern_yields_nothing(self, engine):
        assert resolve_tables(self._open, fakes.patterns((None, None, "Lead"))) == []

    def test_empty_input_opens_no_connection(self, engine):
        assert resolve_tables(self._open, []) == []
        assert engine.opened == 0

    def test_one_connection_shared_and_closed(self, engine):
        resolve_tables(self._open, fakes.patterns((None, None, "Account"), (None, None, "CUSTOMER%")))

        assert engine.opened == 1
        assert engine.closed == 1

    def test_metadata_failure_is_an_introspection_error(self, engine):
        engine.tables_error = RuntimeError("metadata unavailable")

        with pytest.raises(BridgeError) as exc_info:
            resolve_tables(self._open, fakes.patterns((None, None, "Account")))

        assert exc_info.value.error_code == ErrorCode.SCHEMA_INTROSPECTION_ERROR
        assert "RuntimeError: metadata unavailable" in exc_info.value.diagnostic
        assert engine.open_connections == 0

    def test_connect_failure_is_an_introspection_error(self, engine):
        engine.connect_budget = 0

        with pytest.raises(BridgeError) as exc_info:
            resolve_tables(self._open, fakes.patterns((None, None, "Account")))

        assert exc_info.value.error_code == ErrorCode.SCHEMA_INTROSPECTION_ERROR


class TestConnectivity:
    def test_opens_and_closes_one_connection(self, engine):
        outcome = verify_connectivity(fakes.FakeConnector(), "fake://", {"timeout": "5"})

        assert outcome.ok
        assert (engine.opened, engine.closed) == (1, 1)
        assert engine.statements == []
        assert engine.received_properties == [{"timeout": "5"}]

    def test_failure_diagnostic(self, engine):
        engine.connect_budget = 0

        outcome = verify_connectivity(fakes.FakeConnector(), "fake://")

        assert not outcome.ok
        assert outcome.error.error_code == ErrorCode.CONNECTION_ERROR
        assert outcome.error.diagnostic == "Failed to open connection: connection refused"
