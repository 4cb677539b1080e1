"""
Errors raised while loading a model or generating code from it.
"""


class SchemaToOrmError(Exception):
    """Base class for every generation-time failure."""


class ModelError(SchemaToOrmError):
    """Raised when the model description is malformed."""


class UnsupportedTypeError(SchemaToOrmError):
    """Raised when a property type has no mapping rule.

    Fatal for the whole run: one bad property fails the entire schema.
    """

    def __init__(self, kind: str, name: str | None = None):
        self.kind = kind
        self.name = name
        if name is None:
            message = f"Unsupported type kind: {kind}"
        else:
            message = f"Unsupported {kind} type: {name}"
        super().__init__(message)
