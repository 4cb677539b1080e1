import json

import pytest

from schema_to_orm.errors import ModelError, UnsupportedTypeError
from schema_to_orm.loader import load_model, parse_model, parse_prop_type
from schema_to_orm.model import (
    EntityItem,
    EnumItem,
    FkPropType,
    ItemKind,
    ListPropType,
    ListRelationPropType,
    ScalarPropType,
    UnionItem,
    collect_variants,
)


class TestParseModel:
    def test_exchange_model(self, exchange_model):
        assert list(exchange_model) == [
            "Account",
            "Transfer",
            "TransferMetadata",
            "Card",
            "Cash",
            "Payment",
            "Status",
        ]
        account = exchange_model["Account"]
        assert isinstance(account, EntityItem)
        assert account.description == "Holder of a balance"
        assert account.properties["status"].nullable
        assert not account.properties["balance"].nullable
        assert account.properties["balance"].description == "Balance in the smallest unit"
        assert account.properties["transfersOut"].type == ListRelationPropType("Transfer", "from")

        transfer = exchange_model["Transfer"]
        assert transfer.properties["from"].type == FkPropType("Account")
        assert transfer.properties["tags"].type == ListPropType(ScalarPropType("String"))

        assert exchange_model["Payment"] == UnionItem(variants=("Card", "Cash"))
        assert exchange_model["Status"] == EnumItem(values=("ACTIVE", "INACTIVE_LONG"))

    def test_comment_keys_skipped(self, exchange_model):
        assert "_comment" not in exchange_model

    def test_item_order_preserved(self):
        model = parse_model({name: {"kind": "enum", "values": ["A"]} for name in ("Zeta", "Alpha", "Mid")})
        assert list(model) == ["Zeta", "Alpha", "Mid"]

    def test_enum_values_from_object(self):
        model = parse_model({"Status": {"kind": "enum", "values": {"ACTIVE": {}, "INACTIVE": {}}}})
        assert model["Status"].values == ("ACTIVE", "INACTIVE")

    def test_collect_variants(self, exchange_model):
        assert collect_variants(exchange_model) == {"Card", "Cash"}
        assert exchange_model["Card"].kind is ItemKind.OBJECT


class TestParseErrors:
    def test_unknown_item_kind(self):
        with pytest.raises(ModelError, match="unknown item kind 'interface'"):
            parse_model({"Thing": {"kind": "interface"}})

    def test_empty_enum(self):
        with pytest.raises(ModelError, match="no values"):
            parse_model({"Status": {"kind": "enum", "values": []}})

    def test_missing_key(self):
        with pytest.raises(ModelError, match="Account.id: missing 'type'"):
            parse_model({"Account": {"kind": "entity", "properties": {"id": {}}}})

    def test_entity_without_id(self):
        properties = {"name": {"type": {"kind": "scalar", "name": "String"}}}
        with pytest.raises(ModelError, match="Account: entity has no 'id' property"):
            parse_model({"Account": {"kind": "entity", "properties": properties}})

    def test_unknown_property_kind(self):
        with pytest.raises(UnsupportedTypeError, match="Unsupported type kind: map"):
            parse_prop_type({"kind": "map"}, "X.y")

    def test_not_an_object(self):
        with pytest.raises(ModelError):
            parse_model(["Account"])

    def test_nested_list_item(self):
        prop_type = parse_prop_type(
            {"kind": "list", "item": {"type": {"kind": "scalar", "name": "Int"}, "nullable": True}}, "X.y"
        )
        assert prop_type == ListPropType(ScalarPropType("Int"), item_nullable=True)


class TestLoadModel:
    def test_load_from_file(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text(json.dumps({"Status": {"kind": "enum", "values": ["A"]}}))
        assert load_model(path) == {"Status": EnumItem(values=("A",))}

    def test_missing_file(self, tmp_path):
        with pytest.raises(ModelError, match="cannot read model description"):
            load_model(tmp_path / "missing.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "schema.json"
        path.write_text("{not json")
        with pytest.raises(ModelError, match="invalid JSON"):
            load_model(path)


if __name__ == "__main__":
    pytest.main([__file__])
