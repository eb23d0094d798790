"""
CLI utilities for command line reconstruction and introspection.
"""

from pathlib import Path

import click
from click.core import ParameterSource

PROGRAM_NAME = "json_sample_to_code"


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
        return PROGRAM_NAME

    if not cli_args:
        return PROGRAM_NAME

    cmd_parts = [PROGRAM_NAME]
    arguments = []
    options = []

    for param in click_command.params:
        param_name = param.name
        if param_name not in cli_args:
            continue

        # Values nobody typed (including resolved default paths) are left out
        if ctx.get_parameter_source(param_name) == ParameterSource.DEFAULT:
            continue

        value = cli_args[param_name]

        # Boolean flags are shown by the switch that produced them
        if isinstance(param, click.Option) and param.is_flag:
            if value == param.default:
                continue
            switches = param.opts if value else param.secondary_opts
            if switches:
                options.append(switches[0])
            continue

        if not value:
            continue

        # Open files are shown by name, stdin is left out
        if hasattr(value, "read"):
            value = getattr(value, "name", "-")
            if value in ("-", "<stdin>"):
                continue

        # Format value (convert file paths to just filenames for cleaner display)
        if isinstance(value, (str, Path)):
            path_obj = Path(str(value))
            formatted_value = path_obj.name if path_obj.exists() else str(value)
        else:
            formatted_value = str(value)

        if isinstance(param, click.Argument):
            arguments.append(formatted_value)

        elif isinstance(param, click.Option):
            # Skip if it's the default value
            if hasattr(param, "default") and value == param.default:
                continue

            flag = param.opts[0] if param.opts else f"--{param_name}"
            options.extend([flag, formatted_value])

    cmd_parts.extend(arguments)
    cmd_parts.extend(options)

    return " ".join(cmd_parts)
