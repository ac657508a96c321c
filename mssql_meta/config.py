"""Configuration management for mssql-meta."""

import os
from pathlib import Path
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


def _find_env_file() -> Optional[str]:
    """Find .env file in multiple locations.

    Search order:
    1. Current working directory
    2. ~/.mssql-meta/.env
    3. Package directory (where this file is located)
    """
    # Current directory
    if os.path.exists(".env"):
        return ".env"

    # User config directory
    user_env = Path.home() / ".mssql-meta" / ".env"
    if user_env.exists():
        return str(user_env)

    # Package directory
    package_dir = Path(__file__).parent.parent
    package_env = package_dir / ".env"
    if package_env.exists():
        return str(package_env)

    return None


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # SQL Server connection
    sqlsrv_host: str = Field(
        default="localhost",
        description="SQL Server host"
    )
    sqlsrv_port: int = Field(
        default=1433,
        description="SQL Server port"
    )
    sqlsrv_database: Optional[str] = Field(
        default=None,
        description="Database to connect to (server default when unset)"
    )
    sqlsrv_user: Optional[str] = Field(
        default=None,
        description="SQL Server login"
    )
    sqlsrv_password: Optional[str] = Field(
        default=None,
        description="SQL Server password"
    )
    sqlsrv_driver: str = Field(
        default="ODBC Driver 18 for SQL Server",
        description="ODBC driver name"
    )
    sqlsrv_trusted_connection: bool = Field(
        default=False,
        description="Use Windows integrated authentication"
    )
    sqlsrv_trust_server_certificate: bool = Field(
        default=True,
        description="Accept the server certificate without validation"
    )
    sqlsrv_connection_name: str = Field(
        default="sqlsrv",
        description="Connection name recorded on every blueprint"
    )

    # Catalog
    sqlsrv_schema: str = Field(
        default="dbo",
        description="Catalog schema whose tables are introspected"
    )

    log_level: str = Field(
        default="WARNING",
        description="Logging level for the CLI"
    )

    class Config:
        env_file = _find_env_file()
        env_file_encoding = "utf-8"
        extra = "ignore"


# Global settings instance
settings = Settings()
