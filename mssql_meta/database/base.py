"""Abstract base class for schema loading."""

from abc import ABC, abstractmethod
from collections import OrderedDict
from typing import Any, List

from ..errors import TableNotFoundError
from .models import Blueprint, Reference


class SchemaLoader(ABC):
    """Loads every table of one schema into blueprints.

    Subclasses implement ``load`` and ``schemas`` for a specific database.
    The full load runs in the constructor; build a new instance to re-read
    the catalog.
    """

    # Override in subclasses to exclude system databases
    EXCLUDED_SCHEMAS: set = set()

    def __init__(self, schema: str, connection: Any):
        self._schema = schema
        self._connection = connection
        self._tables: "OrderedDict[str, Blueprint]" = OrderedDict()
        self.loaded = False

        self.load()
        self.loaded = True

    @abstractmethod
    def load(self):
        """Read the catalog and register one blueprint per table."""
        pass

    @staticmethod
    @abstractmethod
    def schemas(connection: Any) -> List[str]:
        """List the user schemas (databases) available on the server.

        Args:
            connection: Connection able to run catalog queries

        Returns:
            List of schema names (excluding system schemas)
        """
        pass

    def schema(self) -> str:
        return self._schema

    def connection(self) -> Any:
        return self._connection

    def has(self, table: str) -> bool:
        return table in self._tables

    def tables(self) -> List[Blueprint]:
        return list(self._tables.values())

    def table(self, table: str) -> Blueprint:
        """Get the blueprint of one table.

        Raises:
            TableNotFoundError: When the table is not part of this schema
        """
        if not self.has(table):
            raise TableNotFoundError(table, self._schema)
        return self._tables[table]

    def referencing(self, table: Blueprint) -> List[Reference]:
        """Find relations, across all loaded tables, that point at ``table``.

        Results follow table order, then each table's relation order.
        """
        references = []
        for blueprint in self._tables.values():
            for reference in blueprint.references(table):
                references.append(Reference(blueprint=blueprint, reference=reference))
        return references
