"""Model to ORM Code Generator

Generates a Python data layer from a declarative model: SQLAlchemy entity
classes, JSON-marshaling value objects, enums and union dispatchers.
"""

__version__ = "1.0.0"

from .codegen import ModelCodeGenerator, generate_models
from .config import CodeGeneratorConfig
from .errors import ModelError, SchemaToOrmError, UnsupportedTypeError
from .loader import load_model

__all__ = [
    "ModelCodeGenerator",
    "generate_models",
    "CodeGeneratorConfig",
    "ModelError",
    "SchemaToOrmError",
    "UnsupportedTypeError",
    "load_model",
]
