import pytest

from schema_to_orm.errors import UnsupportedTypeError
from schema_to_orm.import_registry import ImportRegistry
from schema_to_orm.marshal_rules import MarshalRules, scalar_marshaler
from schema_to_orm.model import (
    EnumPropType,
    FkPropType,
    ListPropType,
    ListRelationPropType,
    ObjectPropType,
    ScalarPropType,
    UnionPropType,
)


@pytest.fixture
def imports():
    return ImportRegistry()


@pytest.fixture
def rules(imports):
    return MarshalRules(imports)


class TestFromJson:
    def test_scalar(self, rules, imports):
        assert rules.from_json(ScalarPropType("Int"), False, "x") == "marshal.INT.from_json(x)"
        assert rules.from_json(ScalarPropType("BigInt"), True, "x") == "None if x is None else marshal.BIGINT.from_json(x)"
        assert imports.marshal

    def test_enum(self, rules, imports):
        assert rules.from_json(EnumPropType("Status"), False, "x") == "Status(marshal.STRING.from_json(x))"
        assert imports.model == {"Status"}

    def test_fk(self, rules):
        assert rules.from_json(FkPropType("Account"), False, "x") == "marshal.STRING.from_json(x)"

    def test_object_and_union(self, rules, imports):
        assert rules.from_json(ObjectPropType("Meta"), False, "x") == "Meta(marshal.non_null(x))"
        assert rules.from_json(UnionPropType("Payment"), True, "x") == (
            "None if x is None else from_json_payment(marshal.non_null(x))"
        )
        assert imports.model == {"Meta", "Payment"}

    def test_list(self, rules):
        prop_type = ListPropType(ScalarPropType("DateTime"), item_nullable=True)
        assert rules.from_json(prop_type, False, "x") == (
            "marshal.from_list(x, lambda val: None if val is None else marshal.DATETIME.from_json(val))"
        )

    def test_list_relation_rejected(self, rules):
        with pytest.raises(UnsupportedTypeError, match="list-relation"):
            rules.from_json(ListRelationPropType("Transfer", "from"), False, "x")


class TestToJson:
    def test_pass_through(self, rules, imports):
        for name in ("ID", "String", "Int", "Float", "Boolean"):
            assert rules.to_json(ScalarPropType(name), True, "x") == "x"
        assert rules.to_json(EnumPropType("Status"), False, "x") == "x"
        assert rules.to_json(FkPropType("Account"), False, "x") == "x"
        assert not imports.marshal

    def test_converted_scalars(self, rules, imports):
        assert rules.to_json(ScalarPropType("BigInt"), False, "x") == "marshal.BIGINT.to_json(x)"
        assert rules.to_json(ScalarPropType("Bytes"), True, "x") == "None if x is None else marshal.BYTES.to_json(x)"
        assert imports.marshal

    def test_object_and_union(self, rules):
        assert rules.to_json(ObjectPropType("Meta"), True, "x") == "None if x is None else x.to_json()"
        assert rules.to_json(UnionPropType("Payment"), False, "x") == "x.to_json()"

    def test_list(self, rules):
        assert rules.to_json(ListPropType(ScalarPropType("String")), False, "x") == "list(x)"
        assert rules.to_json(ListPropType(ObjectPropType("Meta")), False, "x") == "[val.to_json() for val in x]"

    def test_unknown_scalar(self, rules):
        with pytest.raises(UnsupportedTypeError):
            rules.to_json(ScalarPropType("Decimal"), False, "x")


def test_scalar_marshaler():
    assert scalar_marshaler("DateTime") == "marshal.DATETIME"
    assert scalar_marshaler("ID") == "marshal.ID"
    with pytest.raises(UnsupportedTypeError):
        scalar_marshaler("Decimal")


if __name__ == "__main__":
    pytest.main([__file__])
