"""Tests for the pyodbc-backed SQL Server connection."""

import sys

import pytest
from unittest.mock import patch, MagicMock

from mssql_meta.database.connection import SQLServerConnection


@pytest.fixture
def fake_pyodbc():
    """Install a MagicMock as the pyodbc module."""
    module = MagicMock()
    cursor = MagicMock()
    cursor.description = [("TABLE_NAME", str), ("TABLE_TYPE", str)]
    cursor.fetchall.return_value = [("users", "BASE TABLE"), ("orders", "BASE TABLE")]
    module.connect.return_value.cursor.return_value = cursor
    with patch.dict(sys.modules, {"pyodbc": module}):
        yield module


class TestConnectionString:

    def test_sql_login(self):
        conn = SQLServerConnection(
            host="db.local", port=1444, database="Sales", user="sa", password="secret",
            driver="ODBC Driver 18 for SQL Server", trusted_connection=False,
        )

        value = conn.connection_string()

        assert value.startswith("DRIVER={ODBC Driver 18 for SQL Server};SERVER=db.local,1444;")
        assert "DATABASE=Sales;" in value
        assert "UID=sa;PWD=secret;" in value
        assert "Trusted_Connection" not in value

    def test_trusted_connection(self):
        conn = SQLServerConnection(host="db.local", trusted_connection=True)

        value = conn.connection_string()

        assert "Trusted_Connection=yes" in value
        assert "UID=" not in value

    def test_defaults_from_settings(self):
        with patch("mssql_meta.database.connection.settings") as mock_settings:
            mock_settings.sqlsrv_connection_name = "reporting"
            mock_settings.sqlsrv_host = "sql.internal"
            mock_settings.sqlsrv_port = 1433
            mock_settings.sqlsrv_database = None
            mock_settings.sqlsrv_user = "reader"
            mock_settings.sqlsrv_password = None
            mock_settings.sqlsrv_driver = "FreeTDS"
            mock_settings.sqlsrv_trusted_connection = False
            mock_settings.sqlsrv_trust_server_certificate = False
            conn = SQLServerConnection()
            value = conn.connection_string()

        assert conn.name == "reporting"
        assert value == "DRIVER={FreeTDS};SERVER=sql.internal,1433;UID=reader;PWD=;"


class TestSelect:

    def test_rows_as_dicts(self, fake_pyodbc):
        conn = SQLServerConnection(host="db.local")

        rows = conn.select("SELECT TABLE_NAME, TABLE_TYPE FROM t WHERE TABLE_SCHEMA = ?", ("dbo",))

        assert rows == [
            {"TABLE_NAME": "users", "TABLE_TYPE": "BASE TABLE"},
            {"TABLE_NAME": "orders", "TABLE_TYPE": "BASE TABLE"},
        ]
        cursor = fake_pyodbc.connect.return_value.cursor.return_value
        cursor.execute.assert_called_once_with(
            "SELECT TABLE_NAME, TABLE_TYPE FROM t WHERE TABLE_SCHEMA = ?", "dbo"
        )
        cursor.close.assert_called_once()

    def test_connects_once(self, fake_pyodbc):
        conn = SQLServerConnection(host="db.local")

        conn.select("SELECT 1")
        conn.select("SELECT 2")

        fake_pyodbc.connect.assert_called_once()

    def test_cursor_closed_on_error(self, fake_pyodbc):
        cursor = fake_pyodbc.connect.return_value.cursor.return_value
        cursor.execute.side_effect = RuntimeError("bad query")
        conn = SQLServerConnection(host="db.local")

        with pytest.raises(RuntimeError):
            conn.select("SELECT broken")

        cursor.close.assert_called_once()

    def test_context_manager_closes(self, fake_pyodbc):
        with SQLServerConnection(host="db.local") as conn:
            conn.select("SELECT 1")

        fake_pyodbc.connect.return_value.close.assert_called_once()

    def test_missing_driver_package(self):
        with patch.dict(sys.modules, {"pyodbc": None}):
            with pytest.raises(ImportError) as exc_info:
                SQLServerConnection(host="db.local").connect()

        assert "pip install pyodbc" in str(exc_info.value)
