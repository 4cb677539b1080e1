"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click

COMMAND_NAME = "schema_to_orm"


def reconstruct_command_line(click_command: click.Command) -> str:
    """
    Reconstruct command line from current Click context using introspection.

    Args:
        click_command: Click command object for introspection

    Returns:
        Reconstructed command line string
    """
    try:
        ctx = click.get_current_context()
        cli_args = ctx.params
    except RuntimeError:
        # No active context, return basic command
        return COMMAND_NAME

    cmd_parts = [COMMAND_NAME]

    for param in click_command.params:
        if not isinstance(param, click.Option) or param.name not in cli_args:
            continue

        value = cli_args[param.name]
        # Flags and values left at their defaults are omitted
        if not value or value == param.default or param.is_flag:
            continue

        # File paths are shown by name only
        if isinstance(value, (str, Path)):
            formatted_value = Path(str(value)).name
        else:
            formatted_value = str(value)

        flag = param.opts[0] if param.opts else f"--{param.name}"
        cmd_parts.extend([flag, formatted_value])

    return " ".join(cmd_parts)
