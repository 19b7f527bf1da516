"""Utility functions for CLI commands."""

import logging
from pathlib import Path
from typing import Optional, Tuple

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from catalogsnap.config import CatalogConfig, Config
from catalogsnap.decoder import load_catalog_metadata
from catalogsnap.errors import CatalogDecodeError, InvariantViolationError
from catalogsnap.models import CatalogMetadata

console = Console()


def get_config_with_data() -> Tuple[Config, CatalogConfig]:
    """Get config for the current directory, using defaults when uninitialized.

    Returns:
        tuple: (config, config_data)
    """
    config = Config()
    try:
        config_data = config.load_or_default()
    except ValidationError as e:
        console.print(f"[red]❌ Invalid configuration in {config.config_path}: {e}[/red]")
        raise typer.Exit(1)
    return config, config_data


def configure_logging(level: str) -> None:
    """Route library logging through rich at the given level."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def load_metadata_or_exit(
    path: Optional[Path], config: Config, config_data: CatalogConfig
) -> CatalogMetadata:
    """Decode the catalog document at ``path`` or the configured one.

    Prints the decode errors and exits with status 1 on failure.
    """
    path = path or config.resolve_metadata_path(config_data)
    if path is None:
        console.print(
            "[red]❌ No catalog document given and no metadata_path configured[/red]"
        )
        raise typer.Exit(1)

    try:
        return load_catalog_metadata(path)
    except FileNotFoundError:
        console.print(f"[red]❌ Catalog document not found: {path}[/red]", soft_wrap=True)
        raise typer.Exit(1)
    except CatalogDecodeError as e:
        label = "Invariant violation" if isinstance(e, InvariantViolationError) else "Decode error"
        where = f" in {escape(e.entity)}" if e.entity else ""
        console.print(f"[red]❌ {label}{where}[/red]", soft_wrap=True)
        for detail in e.details[: config_data.error_limit]:
            console.print(f"[red]   {escape(detail)}[/red]", soft_wrap=True)
        hidden = len(e.details) - config_data.error_limit
        if hidden > 0:
            console.print(f"[yellow]   ... {hidden} more error(s)[/yellow]")
        raise typer.Exit(1)
