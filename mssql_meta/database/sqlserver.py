"""SQL Server schema loader."""

import logging
from collections import OrderedDict
from typing import Any, Dict, List, Optional

from ..config import settings
from .base import SchemaLoader
from .column import SQLServerColumn
from .models import Blueprint, Key, NormalizedColumn

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA_DATABASE = "dbo"

TABLES_SQL = """
    SELECT TABLE_NAME
    FROM INFORMATION_SCHEMA.TABLES
    WHERE TABLE_SCHEMA = ? AND TABLE_TYPE = 'BASE TABLE'
    ORDER BY TABLE_NAME
"""

COLUMNS_SQL = """
    SELECT
        c.TABLE_NAME,
        c.COLUMN_NAME,
        c.DATA_TYPE,
        c.CHARACTER_MAXIMUM_LENGTH,
        c.NUMERIC_PRECISION,
        c.NUMERIC_SCALE,
        c.COLUMN_DEFAULT,
        CASE WHEN c.IS_NULLABLE = 'YES' THEN 1 ELSE 0 END AS IS_NULLABLE,
        COLUMNPROPERTY(
            OBJECT_ID(QUOTENAME(c.TABLE_SCHEMA) + '.' + QUOTENAME(c.TABLE_NAME)),
            c.COLUMN_NAME,
            'IsIdentity'
        ) AS IS_IDENTITY
    FROM INFORMATION_SCHEMA.COLUMNS c
    WHERE c.TABLE_SCHEMA = ? AND c.TABLE_NAME = ?
    ORDER BY c.ORDINAL_POSITION
"""

# Key constraints ('p', 'u') and foreign keys ('f'), one row per column.
# referenced_table is a bare table name, so a foreign key into another catalog
# schema is recorded as if it pointed into the loaded one.
CONSTRAINTS_SQL = """
    SELECT column_name, referenced_table, referenced_column, constraint_name, constraint_type
    FROM (
        SELECT
            COL_NAME(ic.object_id, ic.column_id) AS column_name,
            CAST(NULL AS sysname) AS referenced_table,
            CAST(NULL AS sysname) AS referenced_column,
            kc.name AS constraint_name,
            CASE WHEN kc.type = 'PK' THEN 'p' ELSE 'u' END AS constraint_type,
            ic.key_ordinal AS ordinal
        FROM sys.key_constraints kc
        INNER JOIN sys.index_columns ic
            ON ic.object_id = kc.parent_object_id AND ic.index_id = kc.unique_index_id
        INNER JOIN sys.tables t ON t.object_id = kc.parent_object_id
        WHERE t.name = ? AND SCHEMA_NAME(t.schema_id) = ?
        UNION ALL
        SELECT
            COL_NAME(fkc.parent_object_id, fkc.parent_column_id),
            OBJECT_NAME(fkc.referenced_object_id),
            COL_NAME(fkc.referenced_object_id, fkc.referenced_column_id),
            fk.name,
            'f',
            fkc.constraint_column_id
        FROM sys.foreign_keys fk
        INNER JOIN sys.foreign_key_columns fkc ON fkc.constraint_object_id = fk.object_id
        INNER JOIN sys.tables t ON t.object_id = fk.parent_object_id
        WHERE t.name = ? AND SCHEMA_NAME(t.schema_id) = ?
    ) AS constraints
    ORDER BY constraint_name, ordinal
"""

INDEXES_SQL = """
    SELECT
        i.name AS index_name,
        COL_NAME(ic.object_id, ic.column_id) AS column_name,
        i.is_unique,
        i.is_primary_key
    FROM sys.indexes i
    INNER JOIN sys.index_columns ic ON i.object_id = ic.object_id AND i.index_id = ic.index_id
    INNER JOIN sys.tables t ON t.object_id = i.object_id
    WHERE t.name = ?
      AND SCHEMA_NAME(t.schema_id) = ?
      AND i.is_primary_key = 0
      AND ic.is_included_column = 0
    ORDER BY i.index_id, ic.key_ordinal
"""

DATABASES_SQL = "SELECT name FROM sys.databases"


class SQLServerSchema(SchemaLoader):
    """Loads the tables of one SQL Server database into blueprints.

    Tables are read from a single catalog schema (``dbo`` unless configured
    otherwise) of the database the connection points at.
    """

    EXCLUDED_SCHEMAS = {'master', 'tempdb', 'model', 'msdb'}

    def __init__(self, schema: str, connection: Any, schema_database: Optional[str] = None):
        """Load the schema.

        Args:
            schema: Schema (database) name recorded on every blueprint
            connection: Object with a ``name`` and ``select(sql, params)``
            schema_database: Catalog schema to read; defaults to SQLSRV_SCHEMA
        """
        self.schema_database = (
            schema_database or settings.sqlsrv_schema or DEFAULT_SCHEMA_DATABASE
        )
        super().__init__(schema, connection)

    def load(self):
        tables = self._fetch_tables()
        for table in tables:
            blueprint = Blueprint(self._connection.name, self._schema, table)
            self._fill_columns(blueprint)
            self._fill_constraints(blueprint)
            self._tables[table] = blueprint
            logger.debug(
                "Loaded %s: %d columns, %d indexes, %d relations",
                blueprint.qualified_table(),
                len(blueprint.columns()),
                len(blueprint.indexes()),
                len(blueprint.relations()),
            )
        logger.info(
            "Loaded %d tables from schema '%s' (%s)",
            len(self._tables), self._schema, self.schema_database,
        )

    def _fetch_tables(self) -> List[str]:
        rows = self._connection.select(TABLES_SQL, (self.schema_database,))
        return [row['TABLE_NAME'] for row in rows]

    def _fill_columns(self, blueprint: Blueprint):
        rows = self._connection.select(COLUMNS_SQL, (self.schema_database, blueprint.table))
        for row in rows:
            blueprint.with_column(self._parse_column(row))

    def _parse_column(self, metadata: Dict[str, Any]) -> NormalizedColumn:
        return SQLServerColumn(metadata).normalize()

    def _fill_constraints(self, blueprint: Blueprint):
        relations = self._fetch_table_relations(blueprint.table)
        self._fill_primary_key(relations, blueprint)
        self._fill_relations(relations, blueprint)
        self._fill_indexes(blueprint)

    def _fetch_table_relations(self, table: str) -> List[Dict[str, Any]]:
        return self._connection.select(
            CONSTRAINTS_SQL,
            (table, self.schema_database, table, self.schema_database),
        )

    def _fill_primary_key(self, relations: List[Dict[str, Any]], blueprint: Blueprint):
        columns = [row['column_name'] for row in relations if row['constraint_type'] == 'p']
        if columns:
            blueprint.with_primary_key(Key(name='primary', index='', columns=columns))

    def _fill_relations(self, relations: List[Dict[str, Any]], blueprint: Blueprint):
        foreign: "OrderedDict[str, Dict[str, Any]]" = OrderedDict()
        for row in relations:
            if row['constraint_type'] != 'f':
                continue
            group = foreign.setdefault(row['constraint_name'], {'columns': [], 'ref': [], 'table': None})
            group['columns'].append(row['column_name'])
            group['ref'].append(row['referenced_column'])
            group['table'] = row['referenced_table']

        # target schema is always the loaded one; see CONSTRAINTS_SQL
        for group in foreign.values():
            blueprint.with_relation(Key(
                name='foreign',
                index='',
                columns=group['columns'],
                references=group['ref'],
                on=(self._schema, group['table']),
            ))

    def _fill_indexes(self, blueprint: Blueprint):
        rows = self._connection.select(INDEXES_SQL, (blueprint.table, self.schema_database))

        indexes: "OrderedDict[str, Key]" = OrderedDict()
        for row in rows:
            name = row['index_name']
            if name not in indexes:
                indexes[name] = Key(
                    name='unique' if row['is_unique'] else 'index',
                    index=name,
                )
            indexes[name].columns.append(row['column_name'])

        for key in indexes.values():
            blueprint.with_index(key)

    @staticmethod
    def schemas(connection: Any) -> List[str]:
        """List user databases on the server, skipping system databases."""
        rows = connection.select(DATABASES_SQL)
        return [
            row['name'] for row in rows
            if row['name'] not in SQLServerSchema.EXCLUDED_SCHEMAS
        ]
