"""CLI for inspecting Elementor pages and running the MCP server."""

import json
from typing import Annotated

import typer
from loguru import logger

from elementor_mcp.api import WordPressApi
from elementor_mcp.config import load_settings
from elementor_mcp.core.data.backup import backup_elementor_data
from elementor_mcp.core.data.store import ElementorDataStore
from elementor_mcp.core.ops.elements import find_elements_by_type
from elementor_mcp.core.ops.structure import list_elements, page_structure, render_outline
from elementor_mcp.exceptions import ElementorError, WordPressApiError
from elementor_mcp.logging_config import configure_logging

app = typer.Typer(help="WordPress Elementor tools: inspect page layouts, back up, serve MCP.")


@app.callback()
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    ctx.obj = {"verbose": verbose}
    configure_logging(verbose=verbose)


def _open_store() -> tuple[WordPressApi, ElementorDataStore]:
    """Build the WordPress client from the environment, exiting if unconfigured.

    Callers close the client when done.
    """
    try:
        settings = load_settings()
    except RuntimeError as e:
        logger.error("{}", e)
        raise typer.Exit(1) from e
    api = WordPressApi(settings)
    return api, ElementorDataStore(api)


def _fail(e: Exception) -> typer.Exit:
    typer.echo(f"Error: {e}", err=True)
    return typer.Exit(1)


@app.command()
def serve(ctx: typer.Context) -> None:
    """Start the MCP server (stdio transport)."""
    from elementor_mcp.mcp.server import run_mcp_server

    run_mcp_server(verbose=bool(ctx.obj and ctx.obj.get("verbose")))


@app.command()
def structure(
    post_id: int = typer.Argument(..., help="Post, page or template ID"),
    settings: bool = typer.Option(False, "--settings", "-s", help="Include element settings"),
    output_json: bool = typer.Option(False, "--json", "-j", help="Output as JSON"),
) -> None:
    """Show the element tree of a page."""
    api, store = _open_store()
    try:
        elements = store.fetch(post_id)
    except (ElementorError, WordPressApiError) as e:
        raise _fail(e) from e
    finally:
        api.close()

    outline = page_structure(elements, include_settings=settings)
    if output_json:
        typer.echo(json.dumps(outline, indent=2))
    elif outline:
        typer.echo(render_outline(outline))
    else:
        typer.echo("Page has no elements.")


@app.command()
def elements(
    post_id: int = typer.Argument(..., help="Post, page or template ID"),
    content: bool = typer.Option(False, "--content", "-c", help="Show content previews"),
) -> None:
    """List every element of a page with its nesting level."""
    api, store = _open_store()
    try:
        rows = list_elements(store.fetch(post_id), include_content=content)
    except (ElementorError, WordPressApiError) as e:
        raise _fail(e) from e
    finally:
        api.close()

    typer.echo(f"{len(rows)} elements:\n")
    for row in rows:
        label = row["type"]
        if row.get("widgetType"):
            label += f":{row['widgetType']}"
        typer.echo(f"  {'  ' * row['level']}{label}  [id={row['id']}]")
        if row.get("contentPreview"):
            typer.echo(f"  {'  ' * row['level']}  {row['contentPreview']}")


@app.command()
def find(
    post_id: int = typer.Argument(..., help="Post, page or template ID"),
    widget_type: str = typer.Argument(..., help="Widget type, e.g. heading or button"),
) -> None:
    """Find all widgets of one type on a page."""
    api, store = _open_store()
    try:
        result = find_elements_by_type(store.fetch(post_id), widget_type=widget_type)
    except (ElementorError, WordPressApiError) as e:
        raise _fail(e) from e
    finally:
        api.close()

    typer.echo(f"Found {result['found_count']} {widget_type} widgets")
    for entry in result["elements"]:
        typer.echo(f"  id={entry['id']}")


@app.command()
def backup(
    post_id: int = typer.Argument(..., help="Post or page ID"),
    name: Annotated[
        str | None,
        typer.Option("--name", "-n", help="Label stored with the backup"),
    ] = None,
) -> None:
    """Snapshot a page's Elementor data into post meta."""
    api, store = _open_store()
    try:
        result = backup_elementor_data(api, store, post_id=post_id, backup_name=name)
    except (ElementorError, WordPressApiError) as e:
        raise _fail(e) from e
    finally:
        api.close()

    typer.echo(f"Backup stored as {result['backup_key']} on {result['resource']}")
