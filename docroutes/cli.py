"""CLI entry point for Docroutes."""

import json
from pathlib import Path
from typing import Annotated, Any

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn

from docroutes.core.assembler import error_html, field_html, param_html
from docroutes.core.codec import encode_value
from docroutes.core.config import DocRoutesConfig
from docroutes.core.exceptions import DocRoutesError
from docroutes.core.log import setup_logging
from docroutes.core.models import Category, DeclarationRecord, ModuleOverview
from docroutes.core.paths import decl_path, module_source_path, source_path
from docroutes.core.session import DocSession
from docroutes.core.storage import DeclarationRepository

app = typer.Typer(
    name="docroutes",
    help="Static documentation routes from a declaration store.",
    no_args_is_help=True,
)
console = Console()

_MAX_DOCS_DISPLAY = 60


def get_session(ctx: typer.Context) -> DocSession:
    """Create a session from the config built by the global options."""
    config: DocRoutesConfig = ctx.obj
    return DocSession(config)


def fail(error: Exception) -> typer.Exit:
    """Print an error and return the exit to raise."""
    console.print(f"[red]Error:[/red] {error}")
    return typer.Exit(code=1)


def print_json(value: Any) -> None:
    print(json.dumps(encode_value(value)))


def category_label(record: DeclarationRecord) -> str:
    if record.category is None:
        return record.category_name or "unknown"
    return record.category.name.lower()


def shorten(text: str) -> str:
    text = " ".join(text.split())
    if len(text) <= _MAX_DOCS_DISPLAY:
        return text
    return text[: _MAX_DOCS_DISPLAY - 3] + "..."


def overview_to_dict(overview: ModuleOverview) -> dict[str, Any]:
    return {
        "name": overview.name,
        "root_handle": overview.root_handle,
        "docs": overview.docs,
        "fields": overview.fields,
        "declarations": [
            {
                "name": d.name,
                "fqn": d.fqn,
                "target_fqn": d.target_fqn,
                "category": d.category.value if d.category is not None else None,
                "docs_short": d.docs_short,
                "type_html": d.type_html,
                "proto_html_short": d.proto_html_short,
            }
            for d in overview.declarations
        ],
    }


@app.callback()
def main(
    ctx: typer.Context,
    db: Annotated[
        Path | None, typer.Option("--db", help="Declaration store database")
    ] = None,
    cache: Annotated[Path | None, typer.Option("--cache", help="Route cache file")] = None,
    log_level: Annotated[
        str | None,
        typer.Option("--log-level", help="debug, info, warning, error or off"),
    ] = None,
) -> None:
    """Static documentation routes from a declaration store."""
    setup_logging(log_level)
    config = DocRoutesConfig.from_env(project_root=Path(".").resolve())
    ctx.obj = config.with_overrides(db_path=db, cache_path=cache)


@app.command()
def modules(ctx: typer.Context) -> None:
    """List the modules in the declaration store."""
    try:
        with get_session(ctx) as session:
            entries = session.modules
    except DocRoutesError as e:
        raise fail(e) from e

    if not entries:
        console.print("[dim]No modules found[/]")
        return
    for entry in entries:
        console.print(f"[cyan]{entry.name}[/cyan] [dim](root {entry.root_handle})[/]")


@app.command()
def routes(
    ctx: typer.Context,
    force: Annotated[
        bool, typer.Option("--force", "-f", help="Ignore the cache and regenerate")
    ] = False,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Generate every declaration route, using the cache when it is valid."""
    try:
        with get_session(ctx) as session:
            if output_json:
                result = session.generate_routes(force_regenerate=force or None)
            else:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    console=console,
                    transient=True,
                ) as progress:
                    progress.add_task("Generating routes", total=None)
                    result = session.generate_routes(force_regenerate=force or None)
            stats = session.last_stats
    except DocRoutesError as e:
        raise fail(e) from e

    if output_json:
        print_json([route.to_dict() for route in result])
        return

    for route in result:
        console.print(
            f"[cyan]{route.module}[/cyan]/{route.path} [dim]({category_label(route.record)})[/]"
        )

    console.print("[green]Done![/green]")
    console.print(f"  Routes: {len(result)}")
    if stats is None:
        return
    if stats.from_cache:
        console.print("  [dim]Loaded from cache[/]")
        return
    console.print(f"  Modules: {stats.modules}")
    if stats.duplicates:
        console.print(f"  [dim]Duplicates: {stats.duplicates}[/]")
    if stats.skipped:
        console.print(f"  [dim]Skipped: {stats.skipped}[/]")
    if stats.errors:
        console.print(f"  [red]Errors: {len(stats.errors)}[/red]")
        for error in stats.errors:
            console.print(f"    {error}")


@app.command()
def show(
    ctx: typer.Context,
    fqn: Annotated[str, typer.Argument(help="Fully qualified declaration name")],
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show the assembled record for one declaration."""
    try:
        with get_session(ctx) as session:
            record = session.lookup(fqn)
            store = session.store
            target = record.target_handle
            params = [param_html(store, target, i) for i in record.params]
            fields = [field_html(store, target, i) for i in record.fields]
            base = target if record.category is Category.ERROR_SET else record.error_set_base
            errors = [error_html(store, base, node) for node in record.error_set_nodes]
    except DocRoutesError as e:
        raise fail(e) from e

    url = decl_path(record.fqn)
    src = source_path(record.file_path)
    if output_json:
        print_json(
            {
                "url": url,
                "source_url": src,
                "record": record.to_dict(),
                "params_html": params,
                "fields_html": fields,
                "errors_html": errors,
            }
        )
        return

    console.print(f"\n[bold cyan]{record.fqn}[/] ({category_label(record)})")
    if record.is_alias:
        console.print(f"  [yellow]alias of[/] {record.target_fqn}")
    console.print(f"  [dim]{url}[/]")
    if record.file_path:
        console.print(f"  [dim]{src}[/]")
    if record.docs_short:
        console.print(f"  {shorten(record.docs_short)}", markup=False)
    if record.proto_html:
        console.print(f"  {record.proto_html}", markup=False)
    for label, items in (("Params", params), ("Fields", fields), ("Errors", errors)):
        if items:
            console.print(f"  [green]{label}:[/]")
            for item in items:
                console.print(f"    {item}", markup=False)
    if record.members:
        console.print(f"  [dim]Members: {len(record.members)}[/]")


@app.command()
def overview(
    ctx: typer.Context,
    module: Annotated[str, typer.Argument(help="Module name")],
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show a module's docs and public declarations."""
    try:
        with get_session(ctx) as session:
            result = session.overview(module)
            suffix = session.config.source_suffix
    except DocRoutesError as e:
        raise fail(e) from e

    if output_json:
        print_json(overview_to_dict(result))
        return

    console.print(f"\n[bold cyan]{result.name}[/]")
    console.print(f"  [dim]{module_source_path(result.name, suffix)}[/]")
    if result.docs:
        console.print(f"  {shorten(result.docs)}", markup=False)
    if not result.declarations:
        console.print("  [dim]No public declarations[/]")
        return
    for decl in result.declarations:
        kind = decl.category.name.lower() if decl.category is not None else "unknown"
        console.print(f"  [cyan]{decl.name}[/cyan] [dim]({kind})[/]")
        if decl.proto_html_short:
            console.print(f"    {decl.proto_html_short}", markup=False)


@app.command()
def stats(
    ctx: typer.Context,
    output_json: Annotated[bool, typer.Option("--json", "-j", help="Output as JSON")] = False,
) -> None:
    """Show declaration store statistics."""
    try:
        with get_session(ctx) as session:
            store = session.store
            result: dict[str, Any] = (
                store.get_stats() if isinstance(store, DeclarationRepository) else {}
            )
            result["cached"] = session.cache.exists()
    except DocRoutesError as e:
        raise fail(e) from e

    if output_json:
        print(json.dumps(result))
        return
    console.print(f"Declarations: {result.get('declarations', 0)}")
    console.print(f"Aliases: {result.get('aliases', 0)}")
    console.print(f"Members: {result.get('members', 0)}")
    console.print(f"Modules: {result.get('modules', 0)}")
    console.print(f"Route cache: {'present' if result['cached'] else 'absent'}")


@app.command("clear-cache")
def clear_cache(ctx: typer.Context) -> None:
    """Delete the route cache file."""
    session = get_session(ctx)
    if session.clear_cache():
        console.print("[green]Route cache cleared[/green]")
    else:
        console.print(f"[dim]No route cache at {session.cache.path}[/]")


if __name__ == "__main__":
    app()
