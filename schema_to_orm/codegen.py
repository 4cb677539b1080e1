"""
Generation pass: dispatches every model item to its generator and assembles
the generated package.
"""

from __future__ import annotations

import logging

from . import __version__
from .cli_utils import COMMAND_NAME, reconstruct_command_line
from .config import CodeGeneratorConfig
from .errors import UnsupportedTypeError
from .generators import (
    EntityGenerator,
    EnumGenerator,
    GeneratedModule,
    GenerationContext,
    ItemGenerator,
    UnionGenerator,
    ValueObjectGenerator,
    create_jinja_env,
)
from .loader import load_model
from .model import ItemKind, Model, collect_variants
from .out_dir import OutDir

logger = logging.getLogger(__name__)

GENERATORS: dict[ItemKind, type[ItemGenerator]] = {
    ItemKind.ENTITY: EntityGenerator,
    ItemKind.OBJECT: ValueObjectGenerator,
    ItemKind.UNION: UnionGenerator,
    ItemKind.ENUM: EnumGenerator,
}

MARSHAL_RESOURCE = "marshal.py"
ORMCONFIG_RESOURCE = "ormconfig.py"


def generation_comment(config: CodeGeneratorConfig) -> str:
    """Comment placed at the top of every generated module."""
    if not config.add_generation_comment:
        return ""
    try:
        from .schema_to_orm import schema_to_orm as click_command  # noqa

        command_line = reconstruct_command_line(click_command)
    except (ImportError, AttributeError):
        command_line = COMMAND_NAME
    return f"# Generated by schema_to_orm v{__version__} : {command_line}"


class ModelCodeGenerator:
    """Generates one module per model item plus the barrel module.

    The output directory is expected to exist; wiping it is up to the caller
    (see `generate_models`).
    """

    def __init__(self, model: Model, out_dir: OutDir, config: CodeGeneratorConfig | None = None):
        self.model = model
        self.out_dir = out_dir
        self.config = config or CodeGeneratorConfig()

    def generate(self) -> list[GeneratedModule]:
        context = GenerationContext(
            model=self.model,
            variants=collect_variants(self.model),
            out_dir=self.out_dir,
            config=self.config,
            generation_comment=generation_comment(self.config),
        )
        jinja_env = create_jinja_env()
        generators = {kind: generator_class(context, jinja_env) for kind, generator_class in GENERATORS.items()}

        modules = []
        for name, item in self.model.items():
            generator = generators.get(getattr(item, "kind", None))
            if generator is None:
                raise UnsupportedTypeError("item", name)
            modules.append(generator.generate(name, item))

        index = self.out_dir.file(f"{self.config.model_package}/__init__.py")
        index.append(
            jinja_env.get_template("index.py.jinja2").render(
                generation_comment=context.generation_comment,
                modules=[module.module for module in modules],
            )
        )
        index.write()

        if any(module.uses_helpers for module in modules):
            self.out_dir.add_resource(MARSHAL_RESOURCE)
        return modules


def generate_models(config: CodeGeneratorConfig, model: Model | None = None) -> list[GeneratedModule]:
    """Run a full, non-incremental generation.

    Loads the model (unless given), destroys and recreates the output
    directory, copies the static resources and generates every module.
    """
    if model is None:
        model = load_model(config.schema_path)
    logger.info("Loaded %d model items from %s", len(model), config.schema_path)

    out_dir = OutDir(config.output_dir)
    out_dir.delete()
    out_dir.add_resource(ORMCONFIG_RESOURCE)
    package_init = out_dir.file("__init__.py")
    package_init.line(generation_comment(config) or '"""Generated model package."""')
    package_init.write()

    modules = ModelCodeGenerator(model, out_dir, config).generate()
    logger.info("Generated %d modules into %s", len(modules), out_dir.path)
    return modules
