"""
Configuration for the model code generator.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, fields
from pathlib import Path

DEFAULT_SCHEMA_PATH = "schema.json"
DEFAULT_OUTPUT_DIR = "generated"


@dataclass
class CodeGeneratorConfig:
    """Configuration options for code generation."""

    # Model description read by the entry point
    schema_path: str = DEFAULT_SCHEMA_PATH

    # Root of the generated package; destroyed and recreated on every run
    output_dir: str = DEFAULT_OUTPUT_DIR

    # Name of the sub-package holding one module per model item
    model_package: str = "model"

    # Add generation comment at top of every generated module
    add_generation_comment: bool = True

    @staticmethod
    def from_dict(d: dict) -> CodeGeneratorConfig:
        """Create a config from a dictionary, ignoring unknown keys."""
        config = CodeGeneratorConfig()
        for k, v in d.items():
            if hasattr(config, k):
                setattr(config, k, v)
        return config

    @staticmethod
    def from_file(path: str | Path) -> CodeGeneratorConfig:
        with open(path) as f:
            return CodeGeneratorConfig.from_dict(json.load(f))

    def to_dict(self) -> dict:
        """Convert config to a dictionary."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
