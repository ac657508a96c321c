"""Database-specific type mapping strategies."""

from abc import ABC, abstractmethod
from typing import List, Tuple


class TypeMapper(ABC):
    """Abstract base class for database type mapping."""

    @abstractmethod
    def to_canonical_type(self, db_type: str) -> str:
        """Convert database type to a canonical blueprint type."""
        pass


class SQLServerTypeMapper(TypeMapper):
    """Type mapper for SQL Server column types.

    The mapping is an ordered list of (category, raw types) pairs and every
    category is checked, so a raw type listed twice resolves to the last
    category that contains it. ``bit`` is listed under both ``int`` and
    ``boolean`` and therefore maps to ``boolean``.
    """

    MAPPINGS: List[Tuple[str, List[str]]] = [
        ('string', ['varchar', 'nvarchar', 'char', 'nchar', 'text', 'ntext', 'xml', 'uniqueidentifier']),
        ('datetime', ['datetime', 'datetime2', 'datetimeoffset', 'smalldatetime', 'date', 'time']),
        ('int', ['int', 'bigint', 'smallint', 'tinyint', 'bit']),
        ('float', ['decimal', 'numeric', 'real', 'float', 'money', 'smallmoney']),
        ('boolean', ['bit']),
        ('binary', ['binary', 'varbinary', 'image', 'filestream']),
    ]

    def to_canonical_type(self, db_type: str) -> str:
        """Convert SQL Server type to canonical type, passing unknown types through."""
        canonical = db_type
        for category, raw_types in self.MAPPINGS:
            if db_type in raw_types:
                canonical = category
        return canonical
