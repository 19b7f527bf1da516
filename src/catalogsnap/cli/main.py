"""Main CLI entry point for catalogsnap."""

import typer
from typing import Optional
from pathlib import Path
from rich.table import Table as RichTable

from catalogsnap.config import LOG_LEVELS
from catalogsnap.cli.utils import (
    configure_logging,
    console,
    get_config_with_data,
    load_metadata_or_exit,
)

app = typer.Typer(
    name="catalogsnap",
    help="catalogsnap - decode and validate catalog metadata snapshots",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    log_level: Optional[str] = typer.Option(
        None, "--log-level", help="Logging level (overrides config)"
    ),
):
    """
    catalogsnap - decode and validate catalog metadata snapshots
    """
    if ctx.invoked_subcommand is None:
        # No subcommand was invoked, show help
        print(ctx.get_help())
        raise typer.Exit(0)

    if ctx.invoked_subcommand in ("init", "version"):
        return

    _, config_data = get_config_with_data()
    level = (log_level or config_data.log_level).upper()
    if level not in LOG_LEVELS:
        console.print(f"[red]❌ Unknown log level: {level}[/red]")
        raise typer.Exit(1)
    configure_logging(level)


@app.command()
def init(
    path: Optional[Path] = typer.Argument(
        None, help="Directory to initialize project in (default: current directory)"
    ),
    metadata: Optional[str] = typer.Option(
        None, "--metadata", "-m", help="Default catalog document path"
    ),
):
    """Initialize a new catalogsnap project."""
    from catalogsnap.config import Config

    project_path = path or Path.cwd()

    try:
        Config(project_path).init_project(metadata_path=metadata)
        typer.secho(
            f"✅ Initialized catalogsnap project in {project_path}",
            fg=typer.colors.GREEN,
        )
    except FileExistsError:
        typer.secho(f"❌ Project already exists in {project_path}", fg=typer.colors.RED)
        raise typer.Exit(1)


@app.command()
def validate(
    path: Optional[Path] = typer.Argument(
        None, help="Catalog document (default: configured metadata_path)"
    ),
):
    """Decode a catalog document and report its section sizes."""
    config, config_data = get_config_with_data()
    metadata = load_metadata_or_exit(path, config, config_data)

    table = RichTable(title="Catalog metadata", title_justify="left")
    table.add_column("Section", style="cyan")
    table.add_column("Entries", style="green", justify="right")

    for section, count in metadata.section_counts().items():
        table.add_row(section, str(count))
    table.add_row("custom types", str(len(metadata.custom_types.custom_types.type_names())))
    table.add_row("pg scalars", str(len(metadata.custom_types.pg_scalars)))

    console.print(table)
    console.print("[green]✅ Catalog metadata is valid[/green]")


@app.command(name="tables")
def list_tables(
    path: Optional[Path] = typer.Argument(
        None, help="Catalog document (default: configured metadata_path)"
    ),
):
    """List tracked tables in a catalog document."""
    config, config_data = get_config_with_data()
    metadata = load_metadata_or_exit(path, config, config_data)

    if not metadata.tables:
        console.print("[yellow]No tables found[/yellow]")
        return

    table = RichTable(title="Tracked tables", title_justify="left")
    table.add_column("Name", style="cyan")
    table.add_column("System", style="yellow")
    table.add_column("Enum", style="yellow")
    table.add_column("Columns", style="green", justify="right")
    table.add_column("Foreign keys", style="green", justify="right")

    for tracked in metadata.tables:
        if tracked.info is None:
            columns, foreign_keys = "missing", "-"
        else:
            columns = str(len(tracked.info.columns))
            foreign_keys = str(len(tracked.info.foreign_keys))
        table.add_row(
            str(tracked.name),
            "yes" if tracked.system_defined else "no",
            "yes" if tracked.is_enum else "no",
            columns,
            foreign_keys,
        )

    console.print(table)


@app.command()
def version():
    """Show catalogsnap version."""
    from catalogsnap import __version__

    typer.echo(f"catalogsnap version {__version__}")


if __name__ == "__main__":
    app()
