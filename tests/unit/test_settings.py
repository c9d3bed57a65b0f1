"""Tests for settings loading and precedence."""

import logging

import pytest
from pydantic import ValidationError

from sqlbridge.common.exceptions import BridgeError, ErrorCode
from sqlbridge.constants import DEFAULT_BUNDLED_CONNECTOR, ConnectorSource
from sqlbridge.settings import BridgeSettings, SettingsFileSource, get_settings, load_settings
from sqlbridge.settings.main import _reload_settings
from sqlbridge.settings.sources import normalize_key, unassigned_keys


@pytest.fixture
def settings_file(tmp_path):
    """Write a settings file and return its path."""
    def _write(text: str):
        path = tmp_path / "bridge.properties"
        path.write_text(text, encoding="utf-8")
        return path
    return _write


class TestDefaults:
    """Values applied when nothing is configured."""

    def test_defaults_without_file(self):
        settings = load_settings()

        assert settings.prefix == "salesforce"
        assert settings.connector_source == "bundled"
        assert settings.connector_class is None
        assert settings.data_source_url is None
        assert settings.table_patterns is None
        assert settings.log_file is None

    def test_bundled_source_falls_back_to_builtin_connector(self):
        settings = load_settings()

        assert settings.effective_connector_class == DEFAULT_BUNDLED_CONNECTOR
        assert settings.connector_mode == ConnectorSource.BUNDLED

    def test_non_bundled_source_has_no_default_class(self, settings_file):
        settings = load_settings(settings_file("DriverPath=/opt/connectors/acme.py\n"))

        assert settings.connector_class is None
        assert settings.effective_connector_class is None
        assert settings.connector_mode == ConnectorSource.FILE

    def test_resource_scheme_uses_prefix(self, settings_file):
        settings = load_settings(settings_file("Prefix=sap\n"))

        assert settings.resource_scheme == "sap://"


class TestSettingsFile:
    """Reading flat key/value settings files."""

    def test_reads_every_option(self, settings_file):
        path = settings_file(
            "Prefix=sap\n"
            "DriverPath=resource:acme.zip\n"
            "DriverClass=acme.driver.AcmeConnector\n"
            "JdbcUrl=DRIVER={Acme};SERVER=db1;UID=reader\n"
            "Tables=Account, sales.Orders\n"
            "LogFile=/var/log/bridge.log\n"
        )

        settings = load_settings(path)

        assert settings.prefix == "sap"
        assert settings.connector_source == "resource:acme.zip"
        assert settings.connector_mode == ConnectorSource.RESOURCE
        assert settings.connector_locator == "acme.zip"
        assert settings.connector_class == "acme.driver.AcmeConnector"
        assert settings.data_source_url == "DRIVER={Acme};SERVER=db1;UID=reader"
        assert settings.table_patterns == "Account, sales.Orders"
        assert settings.log_file == "/var/log/bridge.log"

    def test_keys_are_case_insensitive(self, settings_file):
        path = settings_file("PREFIX=hubspot\ndriver_class=acme.Connector\njdbcurl=acme://x\n")

        settings = load_settings(path)

        assert settings.prefix == "hubspot"
        assert settings.connector_class == "acme.Connector"
        assert settings.data_source_url == "acme://x"

    def test_unknown_keys_are_ignored(self, settings_file):
        settings = load_settings(settings_file("Color=blue\nPrefix=sap\n"))

        assert settings.prefix == "sap"

    def test_missing_file_is_a_configuration_error(self, tmp_path):
        with pytest.raises(BridgeError) as exc_info:
            load_settings(tmp_path / "absent.properties")

        assert exc_info.value.error_code == ErrorCode.CONFIG_ERROR

    def test_source_reads_several_files_in_order(self, tmp_path):
        first = tmp_path / "a.properties"
        second = tmp_path / "b.properties"
        first.write_text("Prefix=first\nTables=Account\n", encoding="utf-8")
        second.write_text("Prefix=second\n", encoding="utf-8")

        values = SettingsFileSource(BridgeSettings, [first, second])()

        assert values == {"CDATA_PREFIX": "second", "CDATA_TABLES": "Account"}

    def test_normalize_key(self):
        assert normalize_key("Driver-Class") == normalize_key("DRIVER_CLASS") == "driverclass"

    def test_values_are_not_interpolated(self, settings_file, monkeypatch):
        monkeypatch.setenv("HOME", "/root")
        path = settings_file("JdbcUrl=DSN=crm;Password=ab${HOME}cd\n")

        settings = load_settings(path)

        assert settings.data_source_url == "DSN=crm;Password=ab${HOME}cd"

    def test_colon_separated_line_is_skipped_with_warning(self, settings_file, caplog):
        path = settings_file("Prefix: crm\nJdbcUrl=DSN=crm\n")

        with caplog.at_level(logging.WARNING, logger="sqlbridge.settings.sources"):
            settings = load_settings(path)

        assert settings.prefix == "salesforce"
        assert settings.data_source_url == "DSN=crm"
        assert [r.key for r in caplog.records if r.name == "sqlbridge.settings.sources"] == ["Prefix"]

    def test_unassigned_keys(self, settings_file):
        path = settings_file("# comment\nPrefix: crm\nTables Account\nLogFile\nJdbcUrl=a:b\n")

        assert unassigned_keys(path) == ["Prefix", "Tables"]

    def test_explicit_empty_class_has_no_fallback(self, settings_file):
        settings = load_settings(settings_file("DriverClass=\n"))

        assert settings.connector_class == ""
        assert settings.effective_connector_class is None


class TestEnvironmentOverrides:
    """Environment variables take precedence over the file."""

    def test_environment_overrides_file(self, settings_file, monkeypatch):
        path = settings_file("Prefix=from-file\nJdbcUrl=file://db\n")
        monkeypatch.setenv("CDATA_PREFIX", "from-env")

        settings = load_settings(path)

        assert settings.prefix == "from-env"
        assert settings.data_source_url == "file://db"

    @pytest.mark.parametrize(
        "variable, attribute",
        [
            ("CDATA_DRIVER_PATH", "connector_source"),
            ("CDATA_DRIVER_CLASS", "connector_class"),
            ("CDATA_JDBC_URL", "data_source_url"),
            ("CDATA_TABLES", "table_patterns"),
            ("CDATA_LOG_FILE", "log_file"),
        ],
    )
    def test_each_variable_is_read(self, monkeypatch, variable, attribute):
        monkeypatch.setenv(variable, "value-from-env")

        settings = load_settings()

        assert getattr(settings, attribute) == "value-from-env"

    def test_explicit_empty_class_from_environment(self, monkeypatch):
        monkeypatch.setenv("CDATA_DRIVER_CLASS", "")

        settings = load_settings()

        assert settings.connector_class == ""
        assert settings.effective_connector_class is None

    def test_unprefixed_variables_are_ignored(self, settings_file, monkeypatch):
        monkeypatch.setenv("PREFIX", "/opt/conda")
        monkeypatch.setenv("LOG_FILE", "/tmp/other.log")
        monkeypatch.setenv("DATA_SOURCE_URL", "DSN=other")
        monkeypatch.setenv("CONNECTOR_CLASS", "other.Connector")
        monkeypatch.setenv("TABLE_PATTERNS", "Other")

        settings = load_settings(settings_file("JdbcUrl=DSN=crm\n"))

        assert settings.prefix == "salesforce"
        assert settings.log_file is None
        assert settings.data_source_url == "DSN=crm"
        assert settings.connector_class is None
        assert settings.table_patterns is None

    def test_field_names_are_not_accepted_as_input(self):
        settings = BridgeSettings(prefix="sap", CDATA_TABLES="Account")

        assert settings.prefix == "salesforce"
        assert settings.table_patterns == "Account"

    def test_settings_are_read_only(self):
        settings = load_settings()

        with pytest.raises(ValidationError):
            settings.prefix = "changed"


class TestSingleton:
    def test_get_settings_returns_same_instance(self, settings_file):
        first = _reload_settings(settings_file("Prefix=sap\n"))

        assert get_settings() is first
        assert get_settings().prefix == "sap"

    def test_force_reload_builds_new_instance(self):
        first = _reload_settings()

        assert get_settings(force_reload=True) is not first
