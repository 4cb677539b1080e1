"""
Entity generator.

Emits one SQLAlchemy declarative class per entity, rendering the column
descriptors chosen by the type mapper into ``mapped_column()`` and
``relationship()`` declarations.
"""

from __future__ import annotations

from ..import_registry import ImportRegistry, entity_module_name
from ..marshal_rules import MarshalRules
from ..model import PRIMARY_KEY, EntityItem, ItemKind, Prop, PropKind
from ..type_mapper import ColumnKind, ColumnSpec, OwnerKind, column_spec, map_type, optional, stdlib_imports
from ..utils import comment_lines, python_identifier, to_snake_case
from .base import GeneratedModule, ItemGenerator

# Column kind -> (column type symbol, column type expression)
COLUMN_TYPES = {
    ColumnKind.PRIMARY_KEY: ("String", "String"),
    ColumnKind.TEXT: ("Text", "Text"),
    ColumnKind.INTEGER: ("Integer", "Integer"),
    ColumnKind.FLOAT: ("Float", "Float"),
    ColumnKind.BOOLEAN: ("Boolean", "Boolean"),
    ColumnKind.TIMESTAMPTZ: ("DateTime", "DateTime(timezone=True)"),
    ColumnKind.NUMERIC: ("BigIntColumn", "BigIntColumn"),
    ColumnKind.BINARY: ("LargeBinary", "LargeBinary"),
    ColumnKind.VARCHAR: ("String", "String({length})"),
}

# Column types shipped in the generated ormconfig module
ORMCONFIG_TYPES = {"BigIntColumn"}

# Attribute names the declarative API reserves on mapped classes
RESERVED_ATTRIBUTES = {"metadata", "registry"}


def entity_attribute(key: str) -> str:
    attr = python_identifier(key)
    if attr in RESERVED_ATTRIBUTES:
        attr += "_"
    return attr


def fk_column_attribute(key: str) -> str:
    return python_identifier(f"{key}_id")


class EntityGenerator(ItemGenerator):
    """Generates the persistence-mapped class of an entity."""

    TEMPLATE = "entity.py.jinja2"

    def generate(self, name: str, item: EntityItem) -> GeneratedModule:
        imports = self.new_imports()
        imports.use_base()
        imports.use_orm("Mapped", "mapped_column")
        fields = [self._field(name, key, prop, imports) for key, prop in item.properties.items()]
        body = self.template.render(
            name=name,
            comment=comment_lines(item.description),
            fields=fields,
        )
        return self.write_module(name, entity_module_name(name), imports, body)

    def _field(self, entity: str, key: str, prop: Prop, imports: ImportRegistry) -> dict:
        attr = entity_attribute(key)
        spec = column_spec(self.model, prop.type, prop.nullable)
        type_expr = map_type(OwnerKind.ENTITY, prop.type, prop.nullable)
        for module, symbol in stdlib_imports(prop.type):
            imports.use(module, symbol)

        # Renamed attributes keep the column name derived from the property
        column_name = python_identifier(key) if attr != python_identifier(key) else None

        match spec.kind:
            case ColumnKind.MANY_TO_ONE:
                declaration = self._many_to_one(entity, key, attr, type_expr, spec, imports)
            case ColumnKind.ONE_TO_MANY:
                declaration = self._one_to_many(entity, attr, type_expr, spec, imports)
            case ColumnKind.JSON:
                declaration = self._json_column(attr, column_name, type_expr, prop, imports)
            case _:
                args = self._column_args(spec, column_name, imports)
                declaration = [f"{attr}: Mapped[{type_expr}] = mapped_column({args})"]
                if prop.type.kind is PropKind.ENUM:
                    imports.use_model(prop.type.name)

        return {
            "attr": attr,
            "comment": comment_lines(prop.description, "#:"),
            "declaration": declaration,
        }

    def _column_args(self, spec: ColumnSpec, column_name: str | None, imports: ImportRegistry) -> str:
        symbol, type_expr = COLUMN_TYPES[spec.kind]
        if symbol in ORMCONFIG_TYPES:
            imports.use_ormconfig(symbol)
        else:
            imports.use_sqlalchemy(symbol)
        args = [f'"{column_name}"'] if column_name else []
        args.append(type_expr.format(length=spec.length))
        if spec.kind is ColumnKind.PRIMARY_KEY:
            args.append("primary_key=True")
        else:
            args.append(f"nullable={spec.nullable}")
        return ", ".join(args)

    def _many_to_one(
        self, entity: str, key: str, attr: str, type_expr: str, spec: ColumnSpec, imports: ImportRegistry
    ) -> list[str]:
        imports.use_sqlalchemy("ForeignKey")
        imports.use_orm("relationship")
        self._use_related(entity, spec.target, imports)
        fk_attr = fk_column_attribute(key)
        relationship_args = [f"foreign_keys=[{fk_attr}]"]
        if spec.target == entity:
            # Self-reference: the referenced row is on the remote side
            relationship_args.append(f'remote_side="{entity}.{PRIMARY_KEY}"')
        inverse = self._inverse_list_relation(entity, key, spec.target)
        if inverse is not None:
            relationship_args.append(f'back_populates="{inverse}"')
        foreign_key = f'ForeignKey("{to_snake_case(spec.target)}.{PRIMARY_KEY}")'
        return [
            f"{fk_attr}: Mapped[{optional('str', spec.nullable)}] = mapped_column("
            f"{foreign_key}, index={spec.index}, nullable={spec.nullable})",
            f"{attr}: Mapped[{type_expr}] = relationship({', '.join(relationship_args)})",
        ]

    def _use_related(self, entity: str, target: str, imports: ImportRegistry) -> None:
        if target != entity:
            imports.use_model(target, type_only=True)

    def _inverse_list_relation(self, entity: str, key: str, target: str) -> str | None:
        """Attribute of the list-relation on `target` that mirrors this fk, if any."""
        target_item = self.model.get(target)
        if target_item is None or target_item.kind is not ItemKind.ENTITY:
            return None
        for other_key, other in target_item.properties.items():
            if other.type.kind is PropKind.LIST_RELATION and other.type.entity == entity and other.type.field == key:
                return entity_attribute(other_key)
        return None

    def _one_to_many(
        self, entity: str, attr: str, type_expr: str, spec: ColumnSpec, imports: ImportRegistry
    ) -> list[str]:
        imports.use_orm("relationship")
        self._use_related(entity, spec.target, imports)
        return [
            f"{attr}: Mapped[{type_expr}] = relationship("
            f'back_populates="{entity_attribute(spec.inverse)}", '
            f'foreign_keys="{spec.target}.{fk_column_attribute(spec.inverse)}")',
        ]

    def _json_column(
        self, attr: str, column_name: str | None, type_expr: str, prop: Prop, imports: ImportRegistry
    ) -> list[str]:
        rules = MarshalRules(imports)
        to_json = rules.to_json(prop.type, prop.nullable, "obj")
        from_json = rules.from_json(prop.type, prop.nullable, "json")
        imports.use_marshal()
        return [
            f"{attr}: Mapped[{type_expr}] = mapped_column(",
            *([f'    "{column_name}",'] if column_name else []),
            "    marshal.JsonColumn(",
            f"        to_json=lambda obj: {to_json},",
            f"        from_json=lambda json: {from_json},",
            "    ),",
            f"    nullable={prop.nullable},",
            ")",
        ]
