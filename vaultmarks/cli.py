"""CLI entry point for Vaultmarks."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import typer
import yaml
from rich import print as rprint
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from vaultmarks.bookmarks import Document, GroupNode, create_generator
from vaultmarks.config import VaultmarksConfig, load_config
from vaultmarks.config.loader import DEFAULT_CONFIG_TEMPLATE

app = typer.Typer(
    name="vaultmarks",
    help="Generate an Obsidian bookmarks file mirroring your vault's notes.",
)

config_app = typer.Typer(help="Manage Vaultmarks configuration.")
app.add_typer(config_app, name="config")

# Global state
_config: VaultmarksConfig | None = None

_LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "error": logging.ERROR,
}


class _JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry)


def _configure_logging(cfg: VaultmarksConfig) -> None:
    if cfg.log_format == "json":
        handler: logging.Handler = logging.StreamHandler()
        handler.setFormatter(_JsonFormatter())
    else:
        handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(level=_LOG_LEVELS[cfg.log_level], handlers=[handler], force=True)


def _get_config() -> VaultmarksConfig:
    if _config is None:
        return load_config()
    return _config


@app.callback()
def main(
    config: Annotated[
        str | None, typer.Option("--config", "-c", help="Path to vaultmarks.yaml")
    ] = None,
) -> None:
    """Global options."""
    global _config
    try:
        _config = load_config(config)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    _configure_logging(_config)


def _add_nodes(tree: Tree, items: list) -> None:
    for node in items:
        if isinstance(node, GroupNode):
            branch = tree.add(f"[bold cyan]{escape(node.title)}[/bold cyan] [dim]({escape(node.path)})[/dim]")
            _add_nodes(branch, node.items)
        else:
            tree.add(f"[green]{escape(node.path)}[/green]")


@app.command()
def generate(
    vault: Annotated[str | None, typer.Argument(help="Path to the vault")] = None,
    merge: Annotated[
        bool | None,
        typer.Option("--merge/--no-merge", help="Keep the order of an existing bookmarks file"),
    ] = None,
    dry_run: Annotated[bool, typer.Option("--dry-run", help="Preview without writing")] = False,
) -> None:
    """Scan the vault and write its bookmarks file."""
    cfg = _get_config()
    vault_path = vault or cfg.vault_path

    try:
        generator = create_generator(vault_path, cfg)
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    report = generator.generate(merge_with_existing=merge, dry_run=dry_run)

    if not report.success:
        rprint(f"[red]Failed to generate bookmark file:[/red] {report.error}")
        raise typer.Exit(1)

    table = Table(title="Dry Run: bookmarks" if dry_run else "Bookmarks")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right", style="green")
    table.add_row("Items", str(report.stats.items))
    table.add_row("Merged", "yes" if report.merged else "no")
    table.add_row("Kept", str(report.stats.kept))
    table.add_row("Added", str(report.stats.added))
    table.add_row("Dropped", str(report.stats.dropped))
    table.add_row("Duration", f"{report.duration:.2f}s")
    rprint(table)

    if dry_run:
        tree = Tree(f"[bold]{report.path}[/bold] [yellow](not written)[/yellow]")
        _add_nodes(tree, report.document.items)
        rprint(tree)
    else:
        rprint(f"\n[green]Bookmark file generated:[/green] {report.path}")


@app.command()
def show(
    vault: Annotated[str | None, typer.Argument(help="Path to the vault")] = None,
) -> None:
    """Display the vault's current bookmarks file as a tree."""
    cfg = _get_config()
    bookmark_path = Path(vault or cfg.vault_path) / cfg.bookmarks.relative_path
    if not bookmark_path.is_file():
        rprint(f"[red]No bookmarks file found:[/red] {bookmark_path}")
        raise typer.Exit(1)

    try:
        doc = Document.from_json(bookmark_path.read_text(encoding="utf-8"))
    except ValueError as e:
        rprint(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    tree = Tree(f"[bold]{bookmark_path}[/bold]")
    _add_nodes(tree, doc.items)
    rprint(tree)


# ---------------------------------------------------------------------------
# Config commands
# ---------------------------------------------------------------------------


@config_app.command("init")
def config_init(
    path: Annotated[str, typer.Option("--path", help="Where to write the config")] = "vaultmarks.yaml",
    force: Annotated[bool, typer.Option("--force", help="Overwrite an existing file")] = False,
) -> None:
    """Write a default vaultmarks.yaml."""
    target = Path(path)
    if target.exists() and not force:
        rprint(f"[yellow]Config already exists:[/yellow] {target} (use --force to overwrite)")
        raise typer.Exit(1)
    target.write_text(DEFAULT_CONFIG_TEMPLATE)
    rprint(f"[green]Created[/green] {target}")


@config_app.command("show")
def config_show() -> None:
    """Print the effective configuration."""
    cfg = _get_config()
    typer.echo(yaml.safe_dump(cfg.model_dump(), sort_keys=False))


if __name__ == "__main__":
    app()
