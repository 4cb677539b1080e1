"""
Per-item generators, one per model item kind.
"""

from .base import GeneratedModule, GenerationContext, ItemGenerator, create_jinja_env
from .entity import EntityGenerator
from .enumeration import EnumGenerator
from .union import UnionGenerator
from .value_object import ValueObjectGenerator

__all__ = [
    "GeneratedModule",
    "GenerationContext",
    "ItemGenerator",
    "create_jinja_env",
    "EntityGenerator",
    "EnumGenerator",
    "UnionGenerator",
    "ValueObjectGenerator",
]
