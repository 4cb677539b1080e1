"""
Value object generator.

Emits a plain class per JSON object with validated property accessors, a
constructor marshaling from raw JSON and a ``to_json()`` export.
"""

from __future__ import annotations

import json

from ..import_registry import ImportRegistry
from ..marshal_rules import MarshalRules
from ..model import ObjectItem, Prop
from ..type_mapper import OwnerKind, map_type, optional, stdlib_imports
from ..utils import comment_lines, python_identifier, to_snake_case
from .base import GeneratedModule, ItemGenerator


class ValueObjectGenerator(ItemGenerator):
    """Generates the JSON-marshaling class of a non-persisted object."""

    TEMPLATE = "object.py.jinja2"

    def generate(self, name: str, item: ObjectItem) -> GeneratedModule:
        imports = self.new_imports()
        imports.use("typing", "Any")
        rules = MarshalRules(imports)
        fields = [self._field(key, prop, rules, imports) for key, prop in item.properties.items()]
        body = self.template.render(
            name=name,
            comment=comment_lines(item.description),
            is_variant=name in self.context.variants,
            fields=fields,
        )
        return self.write_module(name, to_snake_case(name), imports, body)

    def _field(self, key: str, prop: Prop, rules: MarshalRules, imports: ImportRegistry) -> dict:
        attr = python_identifier(key)
        json_key = json.dumps(key)
        type_expr = map_type(OwnerKind.OBJECT, prop.type, prop.nullable)
        for module, symbol in stdlib_imports(prop.type):
            imports.use(module, symbol)
        if not prop.nullable:
            imports.use_assert()
        return {
            "attr": attr,
            "json_key": json_key,
            "type": type_expr,
            "slot_type": optional(type_expr, not prop.nullable),
            "nullable": prop.nullable,
            "comment": comment_lines(prop.description),
            "from_json": rules.from_json(prop.type, prop.nullable, f"json.get({json_key})"),
            # Nullable properties left unset are omitted from the record
            "to_json": rules.to_json(prop.type, False, f"self.{attr}"),
        }
