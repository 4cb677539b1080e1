"""
Loads a model from its JSON description.

The description is trusted: only the shape checks needed to build the typed
model are performed. References between items are not validated here.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from .errors import ModelError, UnsupportedTypeError
from .model import (
    PRIMARY_KEY,
    EntityItem,
    EnumItem,
    EnumPropType,
    FkPropType,
    Item,
    ListPropType,
    ListRelationPropType,
    Model,
    ObjectItem,
    ObjectPropType,
    Prop,
    PropType,
    ScalarPropType,
    UnionItem,
    UnionPropType,
)


def _require(d: dict[str, Any], key: str, where: str) -> Any:
    try:
        return d[key]
    except (KeyError, TypeError):
        raise ModelError(f"{where}: missing '{key}'") from None


def parse_prop_type(d: dict[str, Any], where: str) -> PropType:
    kind = _require(d, "kind", where)
    match kind:
        case "scalar":
            return ScalarPropType(_require(d, "name", where))
        case "enum":
            return EnumPropType(_require(d, "name", where))
        case "object":
            return ObjectPropType(_require(d, "name", where))
        case "union":
            return UnionPropType(_require(d, "name", where))
        case "fk":
            return FkPropType(_require(d, "foreignEntity", where))
        case "list-relation":
            return ListRelationPropType(_require(d, "entity", where), _require(d, "field", where))
        case "list":
            item = _require(d, "item", where)
            return ListPropType(
                parse_prop_type(_require(item, "type", where), f"{where}[]"),
                item_nullable=bool(item.get("nullable", False)),
            )
        case _:
            raise UnsupportedTypeError(str(kind))


def parse_prop(d: dict[str, Any], where: str) -> Prop:
    return Prop(
        type=parse_prop_type(_require(d, "type", where), where),
        nullable=bool(d.get("nullable", False)),
        description=d.get("description"),
    )


def _parse_properties(d: dict[str, Any], where: str) -> dict[str, Prop]:
    properties = _require(d, "properties", where)
    return {key: parse_prop(value, f"{where}.{key}") for key, value in properties.items()}


def parse_item(name: str, d: dict[str, Any]) -> Item:
    kind = _require(d, "kind", name)
    description = d.get("description")
    match kind:
        case "entity":
            properties = _parse_properties(d, name)
            if PRIMARY_KEY not in properties:
                raise ModelError(f"{name}: entity has no '{PRIMARY_KEY}' property")
            return EntityItem(properties=properties, description=description)
        case "object":
            return ObjectItem(properties=_parse_properties(d, name), description=description)
        case "union":
            return UnionItem(variants=tuple(_require(d, "variants", name)), description=description)
        case "enum":
            # Accepts a list of names or an object keyed by value name
            values = tuple(_require(d, "values", name))
            if not values:
                raise ModelError(f"{name}: enum has no values")
            return EnumItem(values=values, description=description)
        case _:
            raise ModelError(f"{name}: unknown item kind '{kind}'")


def parse_model(d: dict[str, Any]) -> Model:
    if not isinstance(d, dict):
        raise ModelError("model description must be a JSON object")
    return {name: parse_item(name, item) for name, item in d.items() if not name.startswith("_comment")}


def load_model(path: str | Path) -> Model:
    """Read and parse the JSON model description at `path`."""
    try:
        with open(path) as f:
            data = json.load(f)
    except OSError as e:
        raise ModelError(f"cannot read model description: {e}") from e
    except json.JSONDecodeError as e:
        raise ModelError(f"{path}: invalid JSON: {e}") from e
    return parse_model(data)
