import importlib
import json
import sys
import uuid
from pathlib import Path

import pytest

from schema_to_orm.codegen import generate_models
from schema_to_orm.config import CodeGeneratorConfig
from schema_to_orm.loader import parse_model

TEST_DATA_DIR = Path(__file__).parent / "test_data"


def load_test_model(name):
    """Parse one of the model descriptions under test_data/models."""
    with open(TEST_DATA_DIR / "models" / f"{name}.model.json") as f:
        return parse_model(json.load(f))


@pytest.fixture
def exchange_model():
    return load_test_model("exchange")


@pytest.fixture
def generate(tmp_path):
    """Generate a model into a fresh directory and return the output path."""

    def _generate(model, **config_values):
        output = tmp_path / f"gen_{uuid.uuid4().hex[:12]}"
        config = CodeGeneratorConfig(output_dir=str(output), add_generation_comment=False, **config_values)
        generate_models(config, model=model)
        return output

    return _generate


@pytest.fixture
def generated_package(generate, monkeypatch):
    """Generate a model and import the resulting model package."""
    packages = []

    def _import(model):
        output = generate(model)
        monkeypatch.syspath_prepend(str(output.parent))
        packages.append(output.name)
        return importlib.import_module(f"{output.name}.model")

    yield _import

    for name in list(sys.modules):
        if name.split(".")[0] in packages:
            del sys.modules[name]
