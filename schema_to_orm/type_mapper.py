"""
Type mapping from property type descriptors to Python type expressions and
persistence column descriptors.

Everything here is a pure function of its arguments.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from .errors import UnsupportedTypeError
from .model import ItemKind, Model, PropKind, PropType


class OwnerKind(Enum):
    """Kind of class a property belongs to."""

    ENTITY = "entity"
    OBJECT = "object"


class ColumnKind(Enum):
    """Abstract persistence column kinds, independent of any ORM syntax."""

    PRIMARY_KEY = "primary_key"
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    BOOLEAN = "boolean"
    TIMESTAMPTZ = "timestamptz"
    NUMERIC = "numeric"
    BINARY = "binary"
    VARCHAR = "varchar"  # fixed-width text, used for enums
    MANY_TO_ONE = "many_to_one"
    ONE_TO_MANY = "one_to_many"  # inverse side, not a column
    JSON = "json"


@dataclass(frozen=True)
class ColumnSpec:
    """Column binding descriptor for one entity property."""

    kind: ColumnKind
    nullable: bool = False
    length: int | None = None
    index: bool = False
    target: str | None = None  # related entity for relations
    inverse: str | None = None  # inverse field for one-to-many relations

    @property
    def is_relation(self) -> bool:
        return self.kind in (ColumnKind.MANY_TO_ONE, ColumnKind.ONE_TO_MANY)


SCALAR_PYTHON_TYPES = {
    "ID": "str",
    "String": "str",
    "Int": "int",
    "Float": "float",
    "Boolean": "bool",
    "DateTime": "datetime",
    "BigInt": "int",
    "Bytes": "bytes",
}

SCALAR_COLUMN_KINDS = {
    "ID": ColumnKind.PRIMARY_KEY,
    "String": ColumnKind.TEXT,
    "Int": ColumnKind.INTEGER,
    "Float": ColumnKind.FLOAT,
    "Boolean": ColumnKind.BOOLEAN,
    "DateTime": ColumnKind.TIMESTAMPTZ,
    "BigInt": ColumnKind.NUMERIC,
    "Bytes": ColumnKind.BINARY,
}

# Scalars whose Python type needs an import: name -> (module, symbol)
SCALAR_STDLIB_IMPORTS = {
    "DateTime": ("datetime", "datetime"),
}


def scalar_python_type(name: str) -> str:
    try:
        return SCALAR_PYTHON_TYPES[name]
    except KeyError:
        raise UnsupportedTypeError("scalar", name) from None


def optional(type_expr: str, nullable: bool) -> str:
    return f"{type_expr} | None" if nullable else type_expr


def map_type(owner: OwnerKind, prop_type: PropType, nullable: bool) -> str:
    """Map a property type to the Python type expression used in annotations."""
    match prop_type.kind:
        case PropKind.SCALAR:
            type_expr = scalar_python_type(prop_type.name)
        case PropKind.ENUM | PropKind.OBJECT | PropKind.UNION:
            type_expr = prop_type.name
        case PropKind.FK:
            type_expr = prop_type.foreign_entity if owner is OwnerKind.ENTITY else "str"
        case PropKind.LIST:
            type_expr = f"list[{map_type(OwnerKind.OBJECT, prop_type.item, prop_type.item_nullable)}]"
        case PropKind.LIST_RELATION:
            if owner is not OwnerKind.ENTITY:
                raise UnsupportedTypeError(prop_type.kind.value, f"{prop_type.entity} (outside an entity)")
            type_expr = f"list[{prop_type.entity}]"
        case _:
            raise UnsupportedTypeError(str(getattr(prop_type, "kind", prop_type)))
    return optional(type_expr, nullable)


def enum_max_length(model: Model, enum_name: str) -> int:
    """Width of the text column storing values of the given enum."""
    item = model[enum_name]
    if item.kind is not ItemKind.ENUM:
        raise UnsupportedTypeError("enum", enum_name)
    return max((len(value) for value in item.values), default=0)


def column_spec(model: Model, prop_type: PropType, nullable: bool) -> ColumnSpec:
    """Choose the persistence column descriptor for an entity property."""
    match prop_type.kind:
        case PropKind.SCALAR:
            try:
                kind = SCALAR_COLUMN_KINDS[prop_type.name]
            except KeyError:
                raise UnsupportedTypeError("scalar", prop_type.name) from None
            if kind is ColumnKind.PRIMARY_KEY:
                return ColumnSpec(kind)
            return ColumnSpec(kind, nullable=nullable)
        case PropKind.ENUM:
            return ColumnSpec(ColumnKind.VARCHAR, nullable=nullable, length=enum_max_length(model, prop_type.name))
        case PropKind.FK:
            return ColumnSpec(ColumnKind.MANY_TO_ONE, nullable=nullable, index=True, target=prop_type.foreign_entity)
        case PropKind.LIST_RELATION:
            return ColumnSpec(ColumnKind.ONE_TO_MANY, target=prop_type.entity, inverse=prop_type.field)
        case PropKind.OBJECT | PropKind.UNION | PropKind.LIST:
            return ColumnSpec(ColumnKind.JSON, nullable=nullable)
        case _:
            raise UnsupportedTypeError(str(getattr(prop_type, "kind", prop_type)))


def stdlib_imports(prop_type: PropType) -> set[tuple[str, str]]:
    """Standard library symbols the type expression of `prop_type` refers to."""
    match prop_type.kind:
        case PropKind.SCALAR if prop_type.name in SCALAR_STDLIB_IMPORTS:
            return {SCALAR_STDLIB_IMPORTS[prop_type.name]}
        case PropKind.LIST:
            return stdlib_imports(prop_type.item)
        case _:
            return set()
