"""
Union generator.

Emits a type alias over the variant classes and a dispatch function that
picks the variant from the `isTypeOf` discriminator of a raw value.
"""

from __future__ import annotations

from ..import_registry import dispatch_function_name
from ..model import ItemKind, UnionItem
from ..utils import comment_lines, to_snake_case
from .base import GeneratedModule, ItemGenerator


class UnionGenerator(ItemGenerator):
    TEMPLATE = "union.py.jinja2"

    def generate(self, name: str, item: UnionItem) -> GeneratedModule:
        imports = self.new_imports()
        imports.use("typing", "Any")
        imports.use_discriminator_error()
        imports.use_model(*item.variants)
        body = self.template.render(
            name=name,
            dispatch=dispatch_function_name(name),
            comment=comment_lines(item.description),
            variants=[{"name": variant, "construct": self._construct(variant)} for variant in item.variants],
        )
        return self.write_module(name, to_snake_case(name), imports, body)

    def _construct(self, variant: str) -> str:
        # Entities take keyword arguments; value objects take the raw value
        if self.model[variant].kind is ItemKind.ENTITY:
            return f'{variant}(**{{k: v for k, v in json.items() if k != "isTypeOf"}})'
        return f"{variant}(json)"
