"""
In-memory model definitions.

A model maps item names to kind-tagged item definitions. It is produced once
by the loader and only read afterwards.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar


class ItemKind(Enum):
    """Kind of a top-level model item."""

    ENTITY = "entity"
    OBJECT = "object"
    UNION = "union"
    ENUM = "enum"


class PropKind(Enum):
    """Kind of a property type."""

    SCALAR = "scalar"
    ENUM = "enum"
    OBJECT = "object"
    UNION = "union"
    FK = "fk"
    LIST_RELATION = "list-relation"
    LIST = "list"


# Property every entity is identified by; foreign keys reference it
PRIMARY_KEY = "id"

SCALAR_NAMES = ("ID", "String", "Int", "Float", "Boolean", "DateTime", "BigInt", "Bytes")


@dataclass(frozen=True)
class ScalarPropType:
    kind: ClassVar[PropKind] = PropKind.SCALAR
    name: str


@dataclass(frozen=True)
class EnumPropType:
    kind: ClassVar[PropKind] = PropKind.ENUM
    name: str


@dataclass(frozen=True)
class ObjectPropType:
    kind: ClassVar[PropKind] = PropKind.OBJECT
    name: str


@dataclass(frozen=True)
class UnionPropType:
    kind: ClassVar[PropKind] = PropKind.UNION
    name: str


@dataclass(frozen=True)
class FkPropType:
    kind: ClassVar[PropKind] = PropKind.FK
    foreign_entity: str


@dataclass(frozen=True)
class ListRelationPropType:
    """One-to-many relation; `field` is the inverse fk property on `entity`."""

    kind: ClassVar[PropKind] = PropKind.LIST_RELATION
    entity: str
    field: str


@dataclass(frozen=True)
class ListPropType:
    kind: ClassVar[PropKind] = PropKind.LIST
    item: PropType
    item_nullable: bool = False


PropType = (
    ScalarPropType | EnumPropType | ObjectPropType | UnionPropType | FkPropType | ListRelationPropType | ListPropType
)


@dataclass(frozen=True)
class Prop:
    type: PropType
    nullable: bool = False
    description: str | None = None


@dataclass(frozen=True)
class EntityItem:
    kind: ClassVar[ItemKind] = ItemKind.ENTITY
    properties: dict[str, Prop] = field(default_factory=dict)
    description: str | None = None


@dataclass(frozen=True)
class ObjectItem:
    kind: ClassVar[ItemKind] = ItemKind.OBJECT
    properties: dict[str, Prop] = field(default_factory=dict)
    description: str | None = None


@dataclass(frozen=True)
class UnionItem:
    kind: ClassVar[ItemKind] = ItemKind.UNION
    variants: tuple[str, ...] = ()
    description: str | None = None


@dataclass(frozen=True)
class EnumItem:
    kind: ClassVar[ItemKind] = ItemKind.ENUM
    values: tuple[str, ...] = ()
    description: str | None = None


Item = EntityItem | ObjectItem | UnionItem | EnumItem

Model = dict[str, Item]


def collect_variants(model: Model) -> frozenset[str]:
    """Names of every item that participates in some union."""
    variants = set()
    for item in model.values():
        if isinstance(item, UnionItem):
            variants.update(item.variants)
    return frozenset(variants)
