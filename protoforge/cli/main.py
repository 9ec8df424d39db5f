"""Command line entry point for protoforge."""

import logging
from pathlib import Path

import click

from protoforge import __version__
from protoforge.cli.commands.list import list_cmd
from protoforge.cli.commands.validate import validate
from protoforge.config import configure, load_settings
from protoforge.exceptions import ConfigurationError


@click.group()
@click.version_option(__version__, prog_name="protoforge")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
@click.option("--quiet", "-q", is_flag=True, help="Only print results and errors")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Settings file (default: protoforge.toml or pyproject.toml in cwd)",
)
@click.pass_context
def cli(ctx, verbose, quiet, config_path):
    """protoforge - inspect and validate object registrations."""
    try:
        settings = load_settings(config_path)
    except ConfigurationError as e:
        raise click.ClickException(str(e))
    configure(settings)

    level = logging.DEBUG if verbose else getattr(logging, settings.log_level)
    logging.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["settings"] = settings


cli.add_command(list_cmd, name="list")
cli.add_command(validate)


def main():
    cli(obj={})


if __name__ == "__main__":
    main()
