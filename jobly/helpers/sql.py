"""
Helpers for building SQL fragments for partial updates.

A partial update changes only the fields present in the request. Each
resource declares the fields it allows to change as an `UpdatableField`
enum, and `PartialUpdate.build` validates a request against it before any
SQL is produced.
"""

import enum
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Tuple, Type

from jobly.core.errors import BadRequestError


def sql_for_partial_update(data: Mapping[str, Any], js_to_sql: Mapping[str, str]) -> Tuple[str, List[Any]]:
    """
    Build the SET clause of an UPDATE from a sparse mapping.

    Args:
        data: Field name -> new value, e.g. {"numEmployees": 5, "name": "Acme"}
        js_to_sql: Field name -> column name for fields whose names differ,
            e.g. {"numEmployees": "num_employees"}. Other fields are used as-is.

    Returns:
        ('"num_employees"=$1, "name"=$2', [5, "Acme"])

    Raises:
        BadRequestError: If data is empty
    """
    keys = list(data)
    if not keys:
        raise BadRequestError("No data")

    cols = [f'"{js_to_sql.get(name, name)}"=${idx}' for idx, name in enumerate(keys, start=1)]
    return ", ".join(cols), [data[name] for name in keys]


class UpdatableField(enum.Enum):
    """
    Base for per-resource enums of updatable fields.

    Members are declared as ``MEMBER = (json_name, column)``.
    """

    def __init__(self, json_name: str, column: str):
        self.json_name = json_name
        self.column = column

    @classmethod
    def from_json_name(cls, name: str) -> "UpdatableField":
        for field in cls:
            if field.json_name == name:
                return field
        raise KeyError(name)


@dataclass(frozen=True)
class PartialUpdate:
    """A validated, non-empty set of field assignments, in request order."""

    fields: Tuple[Tuple[UpdatableField, Any], ...]

    @classmethod
    def build(cls, field_enum: Type[UpdatableField], data: Mapping[str, Any]) -> "PartialUpdate":
        """
        Raises:
            BadRequestError: If data is empty or names a field outside field_enum
        """
        if not data:
            raise BadRequestError("No data")

        fields = []
        rejected = []
        for name, value in data.items():
            try:
                fields.append((field_enum.from_json_name(name), value))
            except KeyError:
                rejected.append(f"Field cannot be updated: {name}")

        if rejected:
            raise BadRequestError(rejected)

        return cls(tuple(fields))

    @property
    def assignments(self) -> Dict[str, Any]:
        """Column name -> value, suitable for ``update(table).values(...)``."""
        return {field.column: value for field, value in self.fields}

    def to_sql(self) -> Tuple[str, List[Any]]:
        """Render as a numbered-placeholder SET clause plus ordered values."""
        data = {field.json_name: value for field, value in self.fields}
        js_to_sql = {field.json_name: field.column for field, _ in self.fields}
        return sql_for_partial_update(data, js_to_sql)
