"""
Per-file registry of the imports a generated module needs.

Generators register references while composing a module body; the import
block is rendered once the body is complete and prepended to it.
"""

from __future__ import annotations

import collections

from .model import ItemKind, Model
from .utils import to_snake_case

# Modules rendered in the standard library group
STDLIB_MODULES = {"collections", "datetime", "decimal", "enum", "typing"}

MARSHAL_MODULE = "marshal"
ORMCONFIG_MODULE = "ormconfig"


def entity_module_name(name: str) -> str:
    return f"{to_snake_case(name)}_model"


def item_module_name(model: Model, name: str) -> str:
    """Module (inside the model package) that defines the given item."""
    if model[name].kind is ItemKind.ENTITY:
        return entity_module_name(name)
    return to_snake_case(name)


def dispatch_function_name(union_name: str) -> str:
    return f"from_json_{to_snake_case(union_name)}"


class ImportRegistry:
    """Accumulates the cross-file references of one generated module.

    Every registration is idempotent.
    """

    def __init__(self):
        self.symbols: set[tuple[str, str]] = set()  # (module, name)
        self.model: set[str] = set()
        self.type_only: set[str] = set()
        self.ormconfig: set[str] = set()
        self.marshal = False
        self.assert_ = False
        self.discriminator_error = False

    def use(self, module: str, *names: str) -> None:
        for name in names:
            self.symbols.add((module, name))

    def use_sqlalchemy(self, *names: str) -> None:
        self.use("sqlalchemy", *names)

    def use_orm(self, *names: str) -> None:
        self.use("sqlalchemy.orm", *names)

    def use_model(self, *names: str, type_only: bool = False) -> None:
        """Register sibling model items referenced by the module.

        Type-only references are imported under ``TYPE_CHECKING`` so that
        entities referring to each other do not form an import cycle.
        """
        target = self.type_only if type_only else self.model
        target.update(names)

    def use_ormconfig(self, *names: str) -> None:
        self.ormconfig.update(names)

    def use_base(self) -> None:
        self.use_ormconfig("Base")

    def use_marshal(self) -> None:
        self.marshal = True

    def use_assert(self) -> None:
        self.assert_ = True

    def use_discriminator_error(self) -> None:
        self.discriminator_error = True

    @property
    def uses_helpers(self) -> bool:
        """Whether the module needs the copied marshal helper module."""
        return self.marshal or self.assert_ or self.discriminator_error

    @staticmethod
    def _assemble_symbol_imports(symbols: set[tuple[str, str]]) -> list[str]:
        """Group symbol imports by module: __future__, stdlib, third-party."""
        import_groups = collections.defaultdict(set)
        for module, name in symbols:
            import_groups[module].add(name)

        future = sorted(import_groups.pop("__future__", ()))
        stdlib = {m: names for m, names in import_groups.items() if m in STDLIB_MODULES}
        third_party = {m: names for m, names in import_groups.items() if m not in STDLIB_MODULES}

        sections = []
        if future:
            sections.append([f"from __future__ import {', '.join(future)}"])
        for groups in (stdlib, third_party):
            if groups:
                sections.append([f"from {module} import {', '.join(sorted(groups[module]))}" for module in sorted(groups)])
        return _join_sections(sections)

    def _assemble_local_imports(self, model: Model) -> list[str]:
        lines = []
        if self.marshal:
            lines.append(f"from .. import {MARSHAL_MODULE}")
        helpers = []
        if self.discriminator_error:
            helpers.append("UnknownDiscriminatorError")
        if self.assert_:
            helpers.append("UninitializedAccessError")
        if helpers:
            lines.append(f"from ..{MARSHAL_MODULE} import {', '.join(sorted(helpers))}")
        if self.ormconfig:
            lines.append(f"from ..{ORMCONFIG_MODULE} import {', '.join(sorted(self.ormconfig))}")
        for name in sorted(self.model):
            lines.append(self._model_import(model, name))
        return lines

    def _model_import(self, model: Model, name: str) -> str:
        names = [name]
        if model[name].kind is ItemKind.UNION:
            names.append(dispatch_function_name(name))
        return f"from .{item_module_name(model, name)} import {', '.join(names)}"

    def render(self, model: Model) -> list[str]:
        """Resolve the registered references into import statements.

        Blank strings separate the import groups.
        """
        symbols = set(self.symbols)
        type_only = sorted(self.type_only - self.model)
        if type_only:
            symbols.add(("typing", "TYPE_CHECKING"))
        sections = [self._assemble_symbol_imports(symbols), self._assemble_local_imports(model)]
        if type_only:
            block = ["if TYPE_CHECKING:"]
            block.extend("    " + self._model_import(model, name) for name in type_only)
            sections.append(block)
        return _join_sections(sections)


def _join_sections(sections: list[list[str]]) -> list[str]:
    lines: list[str] = []
    for section in sections:
        if not section:
            continue
        if lines:
            lines.append("")
        lines.extend(section)
    return lines
