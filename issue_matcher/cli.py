"""CLI entry point for issue-matcher."""

from __future__ import annotations

import json
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

import issue_matcher
from issue_matcher.core.compiler import CatalogLoadError
from issue_matcher.core.models import CompiledCatalog, MatchResult, Strategy

app = typer.Typer(
    name="issue-matcher",
    help="Classify device troubleshooting text against an issue catalog.",
    no_args_is_help=True,
)
config_app = typer.Typer(help="View or modify configuration.", no_args_is_help=True)
app.add_typer(config_app, name="config")
console = Console()


def _resolve_strategy_or_exit(strategy: Optional[str]) -> Strategy:
    from issue_matcher.data.config import resolve_strategy

    try:
        return resolve_strategy(strategy)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)


def _validate_key_or_exit(key: str) -> None:
    from issue_matcher.data.config import validate_key

    try:
        validate_key(key)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)


def _catalog_cache(catalog: Optional[str]):
    from issue_matcher.data.cache import CatalogCache
    from issue_matcher.data.config import resolve_catalog_source

    return CatalogCache(resolve_catalog_source(catalog))


def _load_or_exit(catalog: Optional[str]) -> CompiledCatalog:
    cache = _catalog_cache(catalog)
    try:
        return cache.get()
    except CatalogLoadError as e:
        console.print(f"[red]Error loading catalog: {e}[/]")
        raise typer.Exit(1)


def _print_matches(result: MatchResult) -> None:
    if result.context.device:
        detected = result.context.device
        if result.context.component:
            detected += f" / {result.context.component}"
        console.print(f"[dim]Detected: {detected}[/]")

    if not result.matches:
        console.print("[yellow]No matching issue found.[/]")
        return

    table = Table(title=f"Matches ({result.strategy.value})")
    table.add_column("Device", style="cyan")
    table.add_column("Component", style="green")
    table.add_column("Issue", style="bold")
    table.add_column("Description")
    table.add_column("Solution")
    for match in result.matches:
        table.add_row(
            match["device"],
            match["component"] or "-",
            match["issue"],
            match["description"],
            match["solution"],
        )
    console.print(table)


@app.command()
def classify(
    text: str = typer.Argument(..., help="Troubleshooting text to classify"),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="Matching strategy: exact or fuzzy"
    ),
    catalog: Optional[str] = typer.Option(
        None, "--catalog", "-c", help="Catalog path or URL"
    ),
    as_json: bool = typer.Option(
        False, "--json", help="Print the raw JSON response"
    ),
) -> None:
    """Classify a problem description and show the matching diagnosis."""
    from issue_matcher.core.engine import classify as run_classify
    from issue_matcher.data.loader import RemoteCatalogFetchError

    raw_text = text.strip()
    if not raw_text:
        console.print("[red]Error: no text provided.[/]")
        raise typer.Exit(1)

    resolved = _resolve_strategy_or_exit(strategy)
    cache = _catalog_cache(catalog)
    try:
        compiled = cache.get()
    except RemoteCatalogFetchError as e:
        console.print(f"[yellow]Warning: {e}[/]")
        result = MatchResult(input=raw_text, strategy=resolved, error=str(e))
    except CatalogLoadError as e:
        console.print(f"[red]Error loading catalog: {e}[/]")
        raise typer.Exit(1)
    else:
        result = run_classify(raw_text, compiled, resolved)

    if as_json:
        typer.echo(json.dumps(result.to_dict(), indent=2))
    else:
        _print_matches(result)


@app.command()
def devices(
    catalog: Optional[str] = typer.Option(
        None, "--catalog", "-c", help="Catalog path or URL"
    ),
) -> None:
    """List catalog devices, their components, and issue counts."""
    compiled = _load_or_exit(catalog)
    if not compiled.devices:
        console.print("[yellow]Catalog has no devices.[/]")
        raise typer.Exit(0)

    table = Table(title="Catalog Devices")
    table.add_column("Device", style="cyan")
    table.add_column("Components", style="green")
    table.add_column("Issues", justify="right")

    for device in compiled.devices:
        components = compiled.components_by_device.get(device, ())
        issue_count = sum(1 for p in compiled.patterns if p.device == device)
        table.add_row(device, ", ".join(components) or "-", str(issue_count))

    console.print(table)


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(8000, "--port", "-p", help="Bind port"),
    strategy: Optional[str] = typer.Option(
        None, "--strategy", "-s", help="Default matching strategy"
    ),
    catalog: Optional[str] = typer.Option(
        None, "--catalog", "-c", help="Catalog path or URL"
    ),
) -> None:
    """Run the HTTP service."""
    import uvicorn

    from issue_matcher.server import create_app

    resolved = _resolve_strategy_or_exit(strategy)
    cache = _catalog_cache(catalog)
    try:
        api = create_app(cache=cache, strategy=resolved)
    except CatalogLoadError as e:
        console.print(f"[red]Error loading catalog: {e}[/]")
        raise typer.Exit(1)

    console.print(
        f"[green]Serving {cache.source} ({resolved.value}) "
        f"on http://{host}:{port}[/]"
    )
    uvicorn.run(api, host=host, port=port)


@config_app.command("get")
def config_get(
    key: Optional[str] = typer.Argument(
        None, help="Config key (catalog, strategy)"
    ),
) -> None:
    """Show one setting, or all of them."""
    from issue_matcher.data.config import VALID_KEYS
    from issue_matcher.data.store import DataStore

    if key:
        _validate_key_or_exit(key)
    with DataStore() as store:
        if key:
            val = store.get_config(key)
            if val is not None:
                console.print(f"{key} = {val}")
            else:
                console.print(f"[yellow]{key} is not set[/]")
        else:
            values = store.all_config()
            for k in VALID_KEYS:
                console.print(f"{k} = {values.get(k) or '(not set)'}")


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Config key (catalog, strategy)"),
    value: str = typer.Argument(..., help="Value to set"),
) -> None:
    """Store a setting."""
    from issue_matcher.data.config import validate_setting
    from issue_matcher.data.store import DataStore

    try:
        validate_setting(key, value)
    except ValueError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)

    if key == "strategy":
        value = value.strip().lower()
    with DataStore() as store:
        store.set_config(key, value)
    console.print(f"[green]Set {key} = {value}[/]")


@config_app.command("unset")
def config_unset(
    key: str = typer.Argument(..., help="Config key (catalog, strategy)"),
) -> None:
    """Remove a stored setting so the default applies again."""
    from issue_matcher.data.store import DataStore

    _validate_key_or_exit(key)
    with DataStore() as store:
        store.delete_config(key)
    console.print(f"[green]Unset {key}[/]")


@app.command()
def version() -> None:
    """Print version."""
    console.print(f"issue-matcher {issue_matcher.__version__}")


if __name__ == "__main__":
    app()
