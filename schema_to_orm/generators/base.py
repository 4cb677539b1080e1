"""
Base class for the per-item generators.

Every generated module is composed in two passes: the body is rendered first
while references are registered in an ImportRegistry, then the import block
is rendered and prepended.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path

import jinja2

from ..config import CodeGeneratorConfig
from ..import_registry import ImportRegistry
from ..model import Item, Model
from ..out_dir import OutDir
from ..utils import to_snake_case

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent.parent.resolve() / "templates"


def create_jinja_env() -> jinja2.Environment:
    jinja_env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        lstrip_blocks=True,
        trim_blocks=True,
        keep_trailing_newline=True,
    )
    jinja_env.filters["snake_case"] = to_snake_case
    return jinja_env


@dataclass(frozen=True)
class GenerationContext:
    """Read-only state shared by every generator call of one run."""

    model: Model
    variants: frozenset[str]
    out_dir: OutDir
    config: CodeGeneratorConfig = field(default_factory=CodeGeneratorConfig)
    generation_comment: str = ""


@dataclass(frozen=True)
class GeneratedModule:
    """Outcome of generating one model item."""

    name: str
    module: str  # module name inside the model package
    uses_helpers: bool = False


class ItemGenerator(ABC):
    """Abstract base class of the generators, one subclass per item kind."""

    TEMPLATE: str = ""

    def __init__(self, context: GenerationContext, jinja_env: jinja2.Environment | None = None):
        self.context = context
        self.jinja_env = jinja_env or create_jinja_env()
        self.template = self.jinja_env.get_template(self.TEMPLATE)
        self.prefix_template = self.jinja_env.get_template("prefix.py.jinja2")

    @property
    def model(self) -> Model:
        return self.context.model

    @abstractmethod
    def generate(self, name: str, item: Item) -> GeneratedModule:
        """
        Generate and write the module for one model item.

        Args:
            name: Item name
            item: Item definition

        Returns:
            Description of the written module
        """

    def new_imports(self) -> ImportRegistry:
        imports = ImportRegistry()
        imports.use("__future__", "annotations")
        return imports

    def write_module(self, name: str, module: str, imports: ImportRegistry, body: str) -> GeneratedModule:
        """Write a module whose body is complete, prepending its imports."""
        out = self.context.out_dir.file(f"{self.context.config.model_package}/{module}.py")
        out.append(body)
        out.prepend(
            self.prefix_template.render(
                generation_comment=self.context.generation_comment,
                imports=imports.render(self.model),
            )
        )
        out.write()
        logger.debug("Generated %s %s", module, name)
        return GeneratedModule(name=name, module=module, uses_helpers=imports.uses_helpers)
