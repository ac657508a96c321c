"""SQL Server column metadata normalization."""

import re
from typing import Any, Callable, Dict, List, Mapping, Optional

from .models import CatalogRow, NormalizedColumn
from .type_mappers import SQLServerTypeMapper

# Unicode string literal quotes: N'...' or '...'
_QUOTES = re.compile(r"^N?'|'N?$")


def _is_flag_set(value: Any) -> bool:
    """Catalog flags count only when they are exactly integer 1."""
    return isinstance(value, int) and not isinstance(value, bool) and value == 1


class SQLServerColumn:
    """Normalizes one INFORMATION_SCHEMA.COLUMNS row into a NormalizedColumn."""

    type_mapper = SQLServerTypeMapper()

    def __init__(self, metadata: Optional[Mapping[str, Any]] = None):
        self.metadata = CatalogRow(metadata)

    def normalize(self) -> NormalizedColumn:
        attributes: Dict[str, Any] = {}
        steps: List[Callable[[Dict[str, Any]], None]] = [
            self._parse_type,
            self._parse_name,
            self._parse_autoincrement,
            self._parse_nullable,
            self._parse_default,
            self._parse_comment,
        ]
        for step in steps:
            step(attributes)
        return NormalizedColumn(**attributes)

    def _parse_type(self, attributes: Dict[str, Any]):
        data_type = self.get('data_type', 'varchar')
        attributes['type'] = self.type_mapper.to_canonical_type(data_type)
        self._parse_precision(data_type, attributes)

    def _parse_precision(self, data_type: str, attributes: Dict[str, Any]):
        # bit wins over whatever the mapping and precision say
        if data_type == 'bit':
            attributes['type'] = 'bool'
            attributes['size'] = 1
            return

        precision = self.get('numeric_precision')
        scale = self.get('numeric_scale')
        if precision is not None:
            attributes['size'] = int(precision)
        if scale is not None:
            attributes['scale'] = int(scale)

    def _parse_name(self, attributes: Dict[str, Any]):
        attributes['name'] = self.get('column_name')

    def _parse_autoincrement(self, attributes: Dict[str, Any]):
        attributes['autoincrement'] = _is_flag_set(self.get('is_identity'))

    def _parse_nullable(self, attributes: Dict[str, Any]):
        attributes['nullable'] = _is_flag_set(self.get('is_nullable'))

    def _parse_default(self, attributes: Dict[str, Any]):
        default = self.get('column_default')
        if not default:
            attributes['default'] = None
            return
        # SQL Server wraps defaults as ((0)) or (N'text')
        default = default.strip('()')
        attributes['default'] = _QUOTES.sub('', default)

    def _parse_comment(self, attributes: Dict[str, Any]):
        # Column comments live in extended properties, which are not read.
        attributes['comment'] = None

    def get(self, key: str, default: Any = None) -> Any:
        return self.metadata.get(key, default)
