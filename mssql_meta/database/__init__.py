"""Database introspection module for mssql-meta.

This module reads SQL Server catalog metadata and normalizes it into
per-table blueprints for code generators.
"""

from .models import CatalogRow, NormalizedColumn, Key, Blueprint, Reference
from .base import SchemaLoader
from .type_mappers import TypeMapper, SQLServerTypeMapper
from .column import SQLServerColumn
from .connection import SQLServerConnection
from .sqlserver import SQLServerSchema

__all__ = [
    # Data models
    "CatalogRow",
    "NormalizedColumn",
    "Key",
    "Blueprint",
    "Reference",
    # Base classes
    "SchemaLoader",
    # Type mappers
    "TypeMapper",
    "SQLServerTypeMapper",
    # Normalizers and loaders
    "SQLServerColumn",
    "SQLServerConnection",
    "SQLServerSchema",
]
