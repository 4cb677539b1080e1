"""
Type-driven marshal rules.

Builds the Python expressions converting a property value between its typed
form and its JSON form. The rules recurse through list and nullable wrappers
and register every helper and sibling module they reference.
"""

from __future__ import annotations

from .errors import UnsupportedTypeError
from .import_registry import ImportRegistry, dispatch_function_name
from .model import SCALAR_NAMES, PropKind, PropType

# Scalars exported unchanged by to_json
PASS_THROUGH_SCALARS = {"ID", "String", "Int", "Float", "Boolean"}


def scalar_marshaler(name: str) -> str:
    if name not in SCALAR_NAMES:
        raise UnsupportedTypeError("scalar", name)
    return f"marshal.{name.upper()}"


class MarshalRules:
    """Expression builder bound to the import registry of one module."""

    def __init__(self, imports: ImportRegistry):
        self.imports = imports

    def from_json(self, prop_type: PropType, nullable: bool, exp: str) -> str:
        """Expression converting the JSON value `exp` into the typed value.

        `exp` must be side-effect free: it may be evaluated twice.
        """
        match prop_type.kind:
            case PropKind.SCALAR:
                self.imports.use_marshal()
                convert = f"{scalar_marshaler(prop_type.name)}.from_json({exp})"
            case PropKind.ENUM:
                self.imports.use_marshal()
                self.imports.use_model(prop_type.name)
                convert = f"{prop_type.name}(marshal.STRING.from_json({exp}))"
            case PropKind.FK:
                self.imports.use_marshal()
                convert = f"marshal.STRING.from_json({exp})"
            case PropKind.OBJECT:
                self.imports.use_marshal()
                self.imports.use_model(prop_type.name)
                convert = f"{prop_type.name}(marshal.non_null({exp}))"
            case PropKind.UNION:
                self.imports.use_marshal()
                self.imports.use_model(prop_type.name)
                convert = f"{dispatch_function_name(prop_type.name)}(marshal.non_null({exp}))"
            case PropKind.LIST:
                self.imports.use_marshal()
                item = self.from_json(prop_type.item, prop_type.item_nullable, "val")
                convert = f"marshal.from_list({exp}, lambda val: {item})"
            case _:
                raise UnsupportedTypeError(_kind_name(prop_type))
        if nullable:
            convert = f"None if {exp} is None else {convert}"
        return convert

    def to_json(self, prop_type: PropType, nullable: bool, exp: str) -> str:
        """Expression converting the typed value `exp` into its JSON form."""
        match prop_type.kind:
            case PropKind.SCALAR:
                marshaler = scalar_marshaler(prop_type.name)
                if prop_type.name in PASS_THROUGH_SCALARS:
                    return exp
                self.imports.use_marshal()
                convert = f"{marshaler}.to_json({exp})"
            case PropKind.ENUM | PropKind.FK:
                return exp
            case PropKind.OBJECT | PropKind.UNION:
                convert = f"{exp}.to_json()"
            case PropKind.LIST:
                item = self.to_json(prop_type.item, prop_type.item_nullable, "val")
                convert = f"list({exp})" if item == "val" else f"[{item} for val in {exp}]"
            case _:
                raise UnsupportedTypeError(_kind_name(prop_type))
        if nullable:
            convert = f"None if {exp} is None else {convert}"
        return convert


def _kind_name(prop_type: PropType) -> str:
    kind = getattr(prop_type, "kind", prop_type)
    return kind.value if isinstance(kind, PropKind) else str(kind)
