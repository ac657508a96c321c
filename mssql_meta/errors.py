"""Error types for mssql-meta."""

from typing import Optional, Dict, Any


class MetaError(Exception):
    """Base exception for schema metadata errors."""

    def __init__(self, message: str, code: str = "META_ERROR", details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary for JSON output."""
        return {
            "code": self.code,
            "message": self.message,
            "details": self.details,
        }


class TableNotFoundError(MetaError):
    """Requested table is not part of the loaded schema."""

    def __init__(self, table: str, schema: str):
        super().__init__(
            f"Table [{table}] does not belong to schema [{schema}]",
            code="TABLE_NOT_FOUND",
            details={"table": table, "schema": schema},
        )
        self.table = table
        self.schema = schema


class ColumnNotFoundError(MetaError):
    """Requested column is not part of a table blueprint."""

    def __init__(self, column: str, table: str):
        super().__init__(
            f"Column [{column}] does not belong to table [{table}]",
            code="COLUMN_NOT_FOUND",
            details={"column": column, "table": table},
        )
        self.column = column
        self.table = table
