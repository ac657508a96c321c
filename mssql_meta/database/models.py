"""Blueprint data models for schema introspection."""

from collections import OrderedDict
from typing import Any, Dict, Iterator, List, Mapping, Optional, Tuple
from dataclasses import dataclass, field

from ..errors import ColumnNotFoundError


class CatalogRow(Mapping):
    """Read-only view over one catalog query result row.

    Lookups ignore key case, so ``row.get('data_type')`` finds ``DATA_TYPE``.
    """

    def __init__(self, data: Optional[Mapping[str, Any]] = None):
        self._data = dict(data or {})
        self._folded = {str(key).lower(): key for key in self._data}

    def __getitem__(self, key: str) -> Any:
        if key in self._data:
            return self._data[key]
        return self._data[self._folded[key.lower()]]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"CatalogRow({self._data!r})"


@dataclass
class NormalizedColumn:
    """Represents a column normalized to the canonical type vocabulary."""
    name: Optional[str]
    type: str
    size: Optional[int] = None
    scale: Optional[int] = None
    nullable: bool = False
    autoincrement: bool = False
    default: Optional[str] = None
    comment: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize, leaving out optional fields that are unset."""
        data: Dict[str, Any] = {
            "name": self.name,
            "type": self.type,
            "nullable": self.nullable,
            "autoincrement": self.autoincrement,
        }
        for attr in ("size", "scale", "default", "comment"):
            value = getattr(self, attr)
            if value is not None:
                data[attr] = value
        return data


@dataclass
class Key:
    """Represents a primary key, unique key, plain index or foreign key."""
    name: str  # 'primary', 'unique', 'index' or 'foreign'
    index: str = ""
    columns: List[str] = field(default_factory=list)
    references: List[str] = field(default_factory=list)
    on: Optional[Tuple[str, str]] = None  # (schema, table) for foreign keys

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "index": self.index,
            "columns": list(self.columns),
        }
        if self.name == "foreign":
            data["references"] = list(self.references)
            data["on"] = list(self.on) if self.on else None
        return data


class Blueprint:
    """Normalized description of one table.

    Holds columns in catalog order, at most one primary key, indexes
    (unique and plain) and foreign-key relations.
    """

    def __init__(self, connection: str, schema: str, table: str):
        self.connection = connection
        self.schema = schema
        self.table = table
        self._columns: "OrderedDict[str, NormalizedColumn]" = OrderedDict()
        self._primary_key: Optional[Key] = None
        self._indexes: List[Key] = []
        self._unique: List[Key] = []
        self._relations: List[Key] = []

    def __repr__(self) -> str:
        return f"Blueprint({self.qualified_table()!r}, columns={len(self._columns)})"

    def with_column(self, column: NormalizedColumn) -> "Blueprint":
        self._columns[column.name] = column
        return self

    def with_primary_key(self, key: Key) -> "Blueprint":
        self._primary_key = key
        return self

    def with_index(self, key: Key) -> "Blueprint":
        self._indexes.append(key)
        if key.name == "unique":
            self._unique.append(key)
        return self

    def with_relation(self, key: Key) -> "Blueprint":
        self._relations.append(key)
        return self

    def columns(self) -> List[NormalizedColumn]:
        return list(self._columns.values())

    def has_column(self, name: str) -> bool:
        return name in self._columns

    def column(self, name: str) -> NormalizedColumn:
        if not self.has_column(name):
            raise ColumnNotFoundError(name, self.qualified_table())
        return self._columns[name]

    def primary_key(self) -> Key:
        """Primary key, or an empty one when the table has none."""
        if self._primary_key is None:
            return Key(name="primary")
        return self._primary_key

    def has_composite_primary_key(self) -> bool:
        return len(self.primary_key().columns) > 1

    def indexes(self) -> List[Key]:
        return list(self._indexes)

    def unique_keys(self) -> List[Key]:
        return list(self._unique)

    def relations(self) -> List[Key]:
        return list(self._relations)

    def is_unique(self, columns: List[str]) -> bool:
        """Whether the given column list is the primary key or a unique key."""
        keys = [self.primary_key()] + self._unique
        return any(key.columns == list(columns) for key in keys if key.columns)

    def is_(self, schema: str, table: str) -> bool:
        return self.schema == schema and self.table == table

    def references(self, target: "Blueprint") -> List[Key]:
        """Relations of this table that point at ``target``."""
        return [
            relation for relation in self._relations
            if relation.on is not None and target.is_(*relation.on)
        ]

    def qualified_table(self) -> str:
        return f"{self.schema}.{self.table}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "connection": self.connection,
            "schema": self.schema,
            "table": self.table,
            "columns": [column.to_dict() for column in self._columns.values()],
            "primary_key": self._primary_key.to_dict() if self._primary_key else None,
            "indexes": [key.to_dict() for key in self._indexes],
            "relations": [key.to_dict() for key in self._relations],
        }


@dataclass
class Reference:
    """A table together with one of its relations pointing at another table."""
    blueprint: Blueprint
    reference: Key
