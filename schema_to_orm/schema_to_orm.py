import logging

import click

from .codegen import generate_models
from .config import CodeGeneratorConfig
from .errors import SchemaToOrmError


@click.command()
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--schema", "-s", default=None, type=click.Path(resolve_path=True), help="Model description (JSON)")
@click.option("--output", "-o", default=None, type=click.Path(resolve_path=True), help="Output package directory")
@click.option("--verbose", "-v", is_flag=True, default=False)
def schema_to_orm(config, schema, output, verbose):
    """Generate SQLAlchemy entities and JSON value classes from a model description.

    The output directory is destroyed and regenerated on every run.
    """
    logging.basicConfig(level=logging.DEBUG if verbose else logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    if config is not None:
        config = CodeGeneratorConfig.from_file(config)
    else:
        config = CodeGeneratorConfig()

    # CLI options override the config file
    if schema is not None:
        config.schema_path = schema
    if output is not None:
        config.output_dir = output

    try:
        generate_models(config)
    except SchemaToOrmError as e:
        raise click.ClickException(str(e)) from e


if __name__ == "__main__":
    schema_to_orm()
