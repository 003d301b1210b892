# pure_boot/cli.py

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from pure_boot.bootstrap import bootstrap
from pure_boot.config.models import BootConfig
from pure_boot.core import BootstrapContext
from pure_boot.systems.commandline import ArgumentIdentifier, flag_descriptors
from pure_boot.utils.exceptions import (
    ConfigurationError,
    FlagParseError,
    SystemInitializationError,
)
from pure_boot.utils.flags import FlagKind

app = typer.Typer(add_completion=False, help="Bootstrap the global systems from the command line.")


def flags_epilog() -> str:
    """Describes the logger flags, which are parsed by the command-line system and not by Typer."""
    lines = ["Logger flags:"]
    for descriptor in flag_descriptors(BootstrapContext()):
        option = f"{descriptor.option} N" if descriptor.kind is FlagKind.INTEGER else descriptor.option
        lines.append(f"{option}  {descriptor.help} (default: {descriptor.default})")
    return "\n\n".join(lines)


def flag_table(context: BootstrapContext) -> Table:
    """Renders every recognized flag with its resolved value and where it came from."""
    table = Table(title="Command-line flags")
    table.add_column("Flag", style="cyan")
    table.add_column("Value", style="bold")
    table.add_column("Source")

    flags = context.flags
    for identifier in ArgumentIdentifier:
        source = "default" if flags.is_default(identifier) else "command line"
        table.add_row(identifier.name, str(flags.get(identifier)), source)
    return table


@app.command(
    context_settings={"allow_extra_args": True, "ignore_unknown_options": True},
    epilog=flags_epilog(),
)
def run(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(None, "--config", help="TOML file with the logger defaults."),
):
    """
    Captures the arguments, initializes the global systems and prints the resolved flags.
    """
    console = Console()

    try:
        boot_config = BootConfig.load_config_from_file(config) if config else BootConfig()
    except ConfigurationError as e:
        console.print(f"[bold red]Configuration error:[/bold red] {escape(str(e))}")
        raise typer.Exit(code=1)

    argv = [ctx.info_name or "pure-boot", *ctx.args]
    try:
        context = bootstrap(argv, boot_config)
    except SystemInitializationError as e:
        cause = e.__cause__
        if isinstance(cause, FlagParseError):
            console.print(f"[bold red]Invalid argument:[/bold red] {escape(str(cause))}")
            raise typer.Exit(code=2)
        console.print(f"[bold red]Startup failed:[/bold red] {escape(str(e))}: {escape(str(cause))}")
        raise typer.Exit(code=1)

    context.app_logger.section("Global systems initialized")
    console.print(flag_table(context))
    if context.flags.extra_arguments:
        console.print(f"Unrecognized arguments: {escape(' '.join(context.flags.extra_arguments))}")
