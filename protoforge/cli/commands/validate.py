"""Validate command implementation."""

from pathlib import Path

import click
from rich.console import Console
from rich.markup import escape

from protoforge.bootstrap import load_registrations
from protoforge.config import ConfigLoader
from protoforge.exceptions import ConfigurationError
from protoforge.factory.keyed import KeyedFactory
from protoforge.factory.prototype import PrototypeRegistry


@click.command()
@click.argument("bootstrap_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.pass_context
def validate(ctx, bootstrap_file):
    """Validate a registration file.

    Checks the file structure, imports every referenced class, constructs
    every prototype template and checks every family kit against the roles.
    Registrations go into scratch registries; nothing global is modified.

    \b
    Examples:
        $ protoforge validate registrations.yaml
        $ protoforge -v validate registrations.toml
    """
    quiet = ctx.obj.get("quiet", False)
    console = Console()

    if not quiet:
        click.echo(f"Validating: {bootstrap_file}")

    try:
        data = ConfigLoader().load(bootstrap_file)
        result = load_registrations(
            data,
            keyed=KeyedFactory(name="validate"),
            prototypes=PrototypeRegistry(name="validate"),
        )
    except ConfigurationError as e:
        console.print(f"[red]✗ {escape(str(e))}[/red]")
        raise click.exceptions.Exit(1)

    if not quiet:
        console.print(
            f"[green]✓ Valid:[/green] {len(result.factories)} factories, "
            f"{len(result.prototypes)} prototypes, {len(result.families)} families"
        )
