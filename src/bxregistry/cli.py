"""CLI entry point for bxregistry.

Commands:
- methods: list supported methods and their kind
- show: descriptor and JSON schemas of one method
- check: validate the registry
- params: validate a params document and print its wire form
- payload: validate a response body
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from typer import Typer

from bxregistry.config import config
from bxregistry.methods import UnknownMethodError
from bxregistry.registry import (
    METHODS,
    ParamsValidationError,
    PayloadValidationError,
)
from bxregistry.validate import registry_summary, validate_registry

# Initialize Typer app
app = Typer(
    name="bxregistry",
    help="Bitrix24 REST method registry: supported methods, their params and payloads.",
)


@app.callback()
def init_app(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Inspect the method registry and check documents against it."""
    level = logging.DEBUG if verbose else config.log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _load_json(document: Optional[str], file: Optional[Path]) -> Any:
    """Read a JSON document from an argument or a file."""
    if file is not None:
        text = file.read_text(encoding="utf-8")
    elif document is not None:
        text = document
    else:
        typer.echo("❌ Provide a JSON document or --file", err=True)
        raise typer.Exit(1)

    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        typer.echo(f"❌ Invalid JSON: {e}", err=True)
        raise typer.Exit(1)


def _describe_or_exit(method: str):
    try:
        return METHODS.describe(method)
    except UnknownMethodError as e:
        typer.echo(f"❌ {e}", err=True)
        typer.echo("   Use 'bxregistry methods' to see supported methods.")
        raise typer.Exit(1)


@app.command(name="methods")
def list_methods(
    listable: bool = typer.Option(False, "--listable", help="Only listable methods"),
    gettable: bool = typer.Option(False, "--gettable", help="Only gettable methods"),
):
    """List supported methods.

    Examples:
        bxregistry methods
        bxregistry methods --listable
    """
    if listable and gettable:
        typer.echo("❌ --listable and --gettable are mutually exclusive", err=True)
        raise typer.Exit(1)

    rows = registry_summary(METHODS)
    if listable:
        rows = [row for row in rows if row["kind"] == "list"]
    elif gettable:
        rows = [row for row in rows if row["kind"] == "get"]

    width = max(len(row["method"]) for row in rows)
    for row in rows:
        typer.echo(f"{row['method']:<{width}}  {row['kind']:<4}  {row['type']}")
    typer.echo(f"\n{len(rows)} methods")


@app.command()
def show(
    method: str = typer.Argument(..., help="Method identifier, e.g. crm.deal.list"),
    schema: bool = typer.Option(False, "--schema", help="Print params and payload JSON schemas"),
):
    """Show the type, payload and params of a method."""
    descriptor = _describe_or_exit(method)

    typer.echo(f"📘 {descriptor.method.value}")
    typer.echo(f"   Kind:    {descriptor.kind}")
    typer.echo(f"   Type:    {descriptor.type_name}")
    typer.echo(f"   Payload: {descriptor.payload.__name__}")
    typer.echo(f"   Params:  {descriptor.params.__name__}")

    if schema:
        typer.echo("\nParams schema:")
        typer.echo(json.dumps(descriptor.params.model_json_schema(by_alias=True), indent=2))
        typer.echo("\nPayload schema:")
        typer.echo(json.dumps(descriptor.payload.model_json_schema(by_alias=True), indent=2))


@app.command()
def check():
    """Validate the method registry."""
    result = validate_registry(METHODS)
    typer.echo(str(result))
    if not result.is_valid:
        raise typer.Exit(1)
    typer.echo(
        f"   {len(METHODS)} methods: {len(METHODS.listable())} listable, "
        f"{len(METHODS.gettable())} gettable"
    )


@app.command()
def params(
    method: str = typer.Argument(..., help="Method identifier"),
    document: Optional[str] = typer.Argument(None, help="Params as JSON"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read params JSON from file"),
):
    """Validate params for a method and print their wire form.

    Examples:
        bxregistry params crm.deal.list '{"start": 50, "select": ["*", "UF_*"]}'
        bxregistry params batch --file batch.json
    """
    descriptor = _describe_or_exit(method)
    data = _load_json(document, file)

    try:
        validated = METHODS.validate_params(descriptor.method, data)
    except ParamsValidationError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    typer.echo("✅ Params are valid")
    typer.echo(json.dumps(validated.to_wire(), indent=2, ensure_ascii=False))


@app.command()
def payload(
    method: str = typer.Argument(..., help="Method identifier"),
    document: Optional[str] = typer.Argument(None, help="Response body as JSON"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read response JSON from file"),
):
    """Validate a response body against a method's payload shape."""
    descriptor = _describe_or_exit(method)
    data = _load_json(document, file)

    try:
        parsed = METHODS.parse_payload(descriptor.method, data)
    except PayloadValidationError as e:
        typer.echo(f"❌ {e}", err=True)
        raise typer.Exit(1)

    typer.echo(f"✅ Valid {type(parsed).__name__}")
    if descriptor.listable:
        typer.echo(f"   Items: {len(parsed.result)} of {parsed.total}")
        if parsed.next is not None:
            typer.echo(f"   Next start: {parsed.next}")


if __name__ == "__main__":
    app()
