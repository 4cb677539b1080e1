import pytest

from schema_to_orm import __version__
from schema_to_orm.codegen import ModelCodeGenerator, generate_models, generation_comment
from schema_to_orm.config import CodeGeneratorConfig
from schema_to_orm.errors import UnsupportedTypeError
from schema_to_orm.loader import parse_model
from schema_to_orm.out_dir import OutDir

BROKEN_MODEL = {
    "Account": {
        "kind": "entity",
        "properties": {
            "id": {"type": {"kind": "scalar", "name": "ID"}},
            "price": {"type": {"kind": "scalar", "name": "Money"}},
        },
    }
}


class TestGenerateModels:
    """Whole-run behavior of the generator"""

    def test_package_layout(self, generate, exchange_model):
        output = generate(exchange_model)
        assert (output / "__init__.py").exists()
        assert (output / "ormconfig.py").exists()
        assert (output / "marshal.py").exists()
        assert sorted(path.name for path in (output / "model").iterdir()) == [
            "__init__.py",
            "account_model.py",
            "card.py",
            "cash.py",
            "payment.py",
            "status.py",
            "transfer_metadata.py",
            "transfer_model.py",
        ]

    def test_barrel_follows_model_order(self, generate, exchange_model):
        index = (generate(exchange_model) / "model" / "__init__.py").read_text()
        assert index.splitlines() == [
            "from .account_model import *  # noqa: F403",
            "from .transfer_model import *  # noqa: F403",
            "from .transfer_metadata import *  # noqa: F403",
            "from .card import *  # noqa: F403",
            "from .cash import *  # noqa: F403",
            "from .payment import *  # noqa: F403",
            "from .status import *  # noqa: F403",
        ]

    def test_output_directory_is_wiped(self, tmp_path, exchange_model):
        output = tmp_path / "generated"
        stale = output / "model" / "stale_model.py"
        stale.parent.mkdir(parents=True)
        stale.write_text("STALE = True\n")

        config = CodeGeneratorConfig(output_dir=str(output), add_generation_comment=False)
        generate_models(config, model=exchange_model)
        assert not stale.exists()
        assert (output / "model" / "account_model.py").exists()

    def test_returns_generated_modules(self, tmp_path, exchange_model):
        config = CodeGeneratorConfig(output_dir=str(tmp_path / "out"), add_generation_comment=False)
        modules = generate_models(config, model=exchange_model)
        assert [module.name for module in modules] == list(exchange_model)
        uses_helpers = {module.name: module.uses_helpers for module in modules}
        assert uses_helpers["Transfer"]
        assert uses_helpers["Payment"]
        assert not uses_helpers["Status"]
        assert not uses_helpers["Account"]

    def test_reads_schema_path(self, tmp_path):
        schema = tmp_path / "schema.json"
        schema.write_text('{"Status": {"kind": "enum", "values": ["A"]}}')
        config = CodeGeneratorConfig(
            schema_path=str(schema), output_dir=str(tmp_path / "out"), add_generation_comment=False
        )
        generate_models(config)
        assert (tmp_path / "out" / "model" / "status.py").exists()

    def test_model_package_name(self, generate, exchange_model):
        output = generate(exchange_model, model_package="entities")
        assert (output / "entities" / "account_model.py").exists()
        assert not (output / "model").exists()

    def test_unsupported_type_aborts(self, generate):
        with pytest.raises(UnsupportedTypeError, match="Unsupported scalar type: Money"):
            generate(parse_model(BROKEN_MODEL))


class TestGenerationComment:
    def test_comment_in_every_module(self, tmp_path, exchange_model):
        output = tmp_path / "out"
        generate_models(CodeGeneratorConfig(output_dir=str(output)), model=exchange_model)
        comment = f"# Generated by schema_to_orm v{__version__} : schema_to_orm"
        assert (output / "__init__.py").read_text().startswith(comment)
        for path in (output / "model").glob("*.py"):
            assert path.read_text().startswith(comment + "\n"), path.name

    def test_disabled(self):
        assert generation_comment(CodeGeneratorConfig(add_generation_comment=False)) == ""


class TestModelCodeGenerator:
    def test_generate_into_existing_directory(self, tmp_path, exchange_model):
        out_dir = OutDir(tmp_path)
        config = CodeGeneratorConfig(add_generation_comment=False)
        modules = ModelCodeGenerator(exchange_model, out_dir, config).generate()

        assert len(modules) == len(exchange_model)
        assert (tmp_path / "marshal.py").exists()
        assert not (tmp_path / "ormconfig.py").exists()

    def test_unknown_item(self, tmp_path):
        with pytest.raises(UnsupportedTypeError, match="Unsupported item type: Thing"):
            ModelCodeGenerator({"Thing": object()}, OutDir(tmp_path)).generate()


if __name__ == "__main__":
    pytest.main([__file__])
