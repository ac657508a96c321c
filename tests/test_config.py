"""Tests for settings loading."""

from mssql_meta.config import Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("SQLSRV_SCHEMA", "SQLSRV_PORT", "SQLSRV_CONNECTION_NAME"):
            monkeypatch.delenv(name, raising=False)

        settings = Settings(_env_file=None)

        assert settings.sqlsrv_schema == "dbo"
        assert settings.sqlsrv_port == 1433
        assert settings.sqlsrv_connection_name == "sqlsrv"

    def test_environment_overrides(self, monkeypatch):
        monkeypatch.setenv("SQLSRV_SCHEMA", "sales")
        monkeypatch.setenv("SQLSRV_PORT", "1444")
        monkeypatch.setenv("SQLSRV_TRUSTED_CONNECTION", "true")

        settings = Settings(_env_file=None)

        assert settings.sqlsrv_schema == "sales"
        assert settings.sqlsrv_port == 1444
        assert settings.sqlsrv_trusted_connection is True
