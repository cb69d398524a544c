"""Command-line interface for mamlgen.

Commands:
- generate: Write MAML help XML for the cmdlets of a module
- list: Show the cmdlets found in a module
"""

import logging
import sys

import click
from rich.console import Console
from rich.table import Table

from mamlgen import __version__
from mamlgen.config import GeneratorConfig, load_config
from mamlgen.errors import MamlGenError
from mamlgen.generator import MamlGenerator
from mamlgen.loader import load_module
from mamlgen.maml import HelpItems, dumps, write
from mamlgen.reflector import get_cmdlet_declaration, get_cmdlet_types

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(level=logging.INFO, format="%(message)s")
    if verbose:
        logging.getLogger("mamlgen").setLevel(logging.DEBUG)


def _select_cmdlets(cmdlet_types: list[type], names: tuple[str, ...]) -> list[type]:
    """Keep the cmdlets named on the command line (Verb-Noun or class name)."""
    if not names:
        return cmdlet_types

    by_name = {}
    for cmdlet_type in cmdlet_types:
        declaration = get_cmdlet_declaration(cmdlet_type)
        by_name[cmdlet_type.__name__] = cmdlet_type
        by_name[f"{declaration.verb}-{declaration.noun}"] = cmdlet_type

    missing = [name for name in names if name not in by_name]
    if missing:
        raise MamlGenError(f"No cmdlet named {', '.join(repr(n) for n in missing)}")

    selected = {by_name[name] for name in names}
    return [cmdlet_type for cmdlet_type in cmdlet_types if cmdlet_type in selected]


def _load(target: str, config_path: str | None) -> tuple[GeneratorConfig, list[type]]:
    config = load_config(config_path)
    module = load_module(target)
    return config, get_cmdlet_types(module)


@click.group(context_settings={"help_option_names": ["--help", "-h"]})
@click.version_option(version=__version__)
def main() -> None:
    """mamlgen - MAML help generation for Python cmdlets.

    Reads cmdlet classes from a module and writes PowerShell MAML help XML.

    \b
    CONFIGURATION:
        mamlgen.toml, or [tool.mamlgen] in pyproject.toml
        Keys: extractors, common_namespaces, companion_extension, indent

    For help on any command: mamlgen <command> --help
    """
    pass


@main.command(name="generate")
@click.argument("target", type=str)
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file (default: stdout)")
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Config file")
@click.option("--cmdlet", "cmdlet_names", multiple=True, help="Only document this cmdlet (Verb-Noun or class name)")
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
def generate(target: str, output: str | None, config_path: str | None, cmdlet_names: tuple[str, ...], verbose: bool):
    """Generate MAML help XML for the cmdlets in TARGET.

    TARGET is an importable module name or a path to a .py file.

    \b
    Examples:
        mamlgen generate mypackage.cmdlets -o mypackage.dll-Help.xml
        mamlgen generate ./greeting.py --cmdlet Get-Greeting
    """
    _configure_logging(verbose)

    try:
        config, cmdlet_types = _load(target, config_path)
        cmdlet_types = _select_cmdlets(cmdlet_types, cmdlet_names)
        generator = MamlGenerator.from_config(config)
        help_items = HelpItems(commands=[generator.generate(cmdlet_type) for cmdlet_type in cmdlet_types])

        if output:
            with open(output, "w", encoding="utf-8", newline="\n") as f:
                write(help_items, f, indent=config.indent)
            click.echo(f"Wrote {len(help_items.commands)} command(s) to {output}", err=True)
        else:
            click.echo(dumps(help_items, indent=config.indent))

    except MamlGenError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"Error writing output: {e}", err=True)
        sys.exit(1)


@main.command(name="list")
@click.argument("target", type=str)
@click.option("--config", "-c", "config_path", type=click.Path(exists=True, dir_okay=False), help="Config file")
@click.option("--verbose", "-v", is_flag=True, help="Show debug output")
def list_cmdlets(target: str, config_path: str | None, verbose: bool):
    """List the cmdlets found in TARGET.

    \b
    Examples:
        mamlgen list mypackage.cmdlets
    """
    _configure_logging(verbose)

    try:
        config, cmdlet_types = _load(target, config_path)

        if not cmdlet_types:
            click.echo(f"No cmdlets found in {target}.")
            return

        generator = MamlGenerator.from_config(config)
        table = Table(title=f"Cmdlets in {target}", show_header=True)
        table.add_column("Command", style="cyan", no_wrap=True)
        table.add_column("Class", style="magenta")
        table.add_column("Parameters", style="green", justify="right")
        table.add_column("Parameter Sets", style="yellow", justify="right")
        table.add_column("Synopsis", style="white")

        for cmdlet_type in cmdlet_types:
            command = generator.generate(cmdlet_type)
            table.add_row(
                command.details.name,
                cmdlet_type.__qualname__,
                str(len(command.parameters)),
                str(len(command.syntax)),
                " ".join(command.details.synopsis).strip(),
            )

        Console().print(table)

    except MamlGenError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()
