"""
Enum generator.
"""

from __future__ import annotations

import json

from ..model import EnumItem
from ..utils import comment_lines, escape_keyword, to_snake_case
from .base import GeneratedModule, ItemGenerator


class EnumGenerator(ItemGenerator):
    TEMPLATE = "enum.py.jinja2"

    def generate(self, name: str, item: EnumItem) -> GeneratedModule:
        imports = self.new_imports()
        imports.use("enum", "Enum")
        # Member names are escaped; stored values are kept as declared
        members = [{"name": escape_keyword(value), "value": json.dumps(value)} for value in item.values]
        body = self.template.render(name=name, comment=comment_lines(item.description), members=members)
        return self.write_module(name, to_snake_case(name), imports, body)
