"""SQL Server connection used by the schema loader."""

import logging
from typing import Any, Dict, List, Optional, Sequence

from ..config import settings

logger = logging.getLogger(__name__)


class SQLServerConnection:
    """Thin pyodbc wrapper: execute catalog SQL and get dict rows back."""

    def __init__(
        self,
        name: Optional[str] = None,
        host: Optional[str] = None,
        port: Optional[int] = None,
        database: Optional[str] = None,
        user: Optional[str] = None,
        password: Optional[str] = None,
        driver: Optional[str] = None,
        trusted_connection: Optional[bool] = None,
    ):
        """Initialize connection parameters.

        Args:
            name: Connection name blueprints are tagged with
            host: Server host (or SQLSRV_HOST env)
            port: Server port (or SQLSRV_PORT env)
            database: Database to connect to (or SQLSRV_DATABASE env)
            user: Login name (or SQLSRV_USER env)
            password: Login password (or SQLSRV_PASSWORD env)
            driver: ODBC driver name (or SQLSRV_DRIVER env)
            trusted_connection: Use Windows authentication instead of user/password
        """
        self._name = name or settings.sqlsrv_connection_name
        self.host = host or settings.sqlsrv_host
        self.port = port or settings.sqlsrv_port
        self.database = database or settings.sqlsrv_database
        self.user = user or settings.sqlsrv_user
        self.password = password or settings.sqlsrv_password
        self.driver = driver or settings.sqlsrv_driver
        self.trusted_connection = (
            settings.sqlsrv_trusted_connection if trusted_connection is None else trusted_connection
        )
        self._connection = None

    @property
    def name(self) -> str:
        return self._name

    def connection_string(self) -> str:
        """Build the ODBC connection string."""
        parts = [
            f"DRIVER={{{self.driver}}}",
            f"SERVER={self.host},{self.port}",
        ]
        if self.database:
            parts.append(f"DATABASE={self.database}")
        if self.trusted_connection:
            parts.append("Trusted_Connection=yes")
        else:
            parts.append(f"UID={self.user or ''}")
            parts.append(f"PWD={self.password or ''}")
        if settings.sqlsrv_trust_server_certificate:
            parts.append("TrustServerCertificate=yes")
        return ";".join(parts) + ";"

    def connect(self):
        """Open the connection if it is not open yet."""
        if self._connection is not None:
            return self._connection

        try:
            import pyodbc
        except ImportError:
            raise ImportError(
                "pyodbc is required. "
                "Install it with: pip install pyodbc"
            )

        logger.debug("Connecting to SQL Server at %s:%s", self.host, self.port)
        self._connection = pyodbc.connect(self.connection_string())
        return self._connection

    def select(self, sql: str, params: Sequence[Any] = ()) -> List[Dict[str, Any]]:
        """Run a query and return its rows as dictionaries keyed by column name."""
        conn = self.connect()
        cursor = conn.cursor()
        try:
            cursor.execute(sql, *params)
            columns = [column[0] for column in cursor.description]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        finally:
            cursor.close()

    def close(self):
        """Close the connection."""
        if self._connection:
            self._connection.close()
            self._connection = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
