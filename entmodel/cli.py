"""entmodel CLI — inspect shape documents and normalize data files."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
import yaml
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.tree import Tree

from entmodel import __version__
from entmodel.attributes import AttrType
from entmodel.config.logging import setup_logging
from entmodel.errors import EntityModelError

console = Console()


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose: bool):
    """entmodel — typed entity models and normalization.

    Declare record shapes in a YAML document, then inspect their schemas or
    flatten nested JSON/YAML data into per-entity tables.
    """
    setup_logging("DEBUG" if verbose else None)


def _fail(message: str):
    console.print(f"[red]Error:[/] {escape(message)}")
    sys.exit(1)


def _load_registry(shapes_path: str):
    from entmodel.declarative import load_shapes

    try:
        return load_shapes(shapes_path)
    except EntityModelError as e:
        _fail(str(e))
    except (OSError, yaml.YAMLError) as e:
        _fail(f"Failed to read {shapes_path}: {e}")


def _resolve_shape(registry, name: str):
    shape = registry.get(name)
    if shape is not None:
        return shape
    for candidate in registry:
        if candidate.__name__ == name:
            return candidate
    _fail(f"No shape named '{name}' (known entities: {', '.join(registry.entities)})")


def _load_data(data_path: str):
    try:
        with open(data_path) as f:
            if Path(data_path).suffix == ".json":
                return json.load(f)
            return yaml.safe_load(f)
    except (OSError, ValueError, yaml.YAMLError) as e:
        _fail(f"Failed to read {data_path}: {e}")


# ── Validate ─────────────────────────────────────────────────────────


@main.command()
@click.argument("shapes_path")
def validate(shapes_path: str):
    """Validate a shape document."""
    from entmodel.declarative import read_document, validate_document

    console.print(f"\n[bold blue]entmodel[/] — Validating: {shapes_path}\n")

    try:
        data = read_document(shapes_path)
    except (OSError, yaml.YAMLError) as e:
        _fail(f"Failed to parse: {e}")

    issues = validate_document(data)
    if issues:
        console.print("[red]Validation FAILED:[/]")
        for issue in issues:
            console.print(f"  [red]x[/] {escape(issue)}")
        sys.exit(1)

    console.print(f"  [green]v[/] {len(data['shapes'])} shape(s) declared")
    console.print("\n[green]Valid![/]")


# ── Shapes ───────────────────────────────────────────────────────────


@main.command()
@click.argument("shapes_path")
def shapes(shapes_path: str):
    """List the shapes declared in a document."""
    registry = _load_registry(shapes_path)

    table = Table(title=f"Shapes ({len(registry)} declared)")
    table.add_column("Class", style="cyan")
    table.add_column("Entity")
    table.add_column("Key", style="dim")
    table.add_column("Attributes")
    table.add_column("Relations")

    for shape in registry:
        fields = shape.fields()
        attrs = [name for name, f in fields.items() if f.type is AttrType.ATTR]
        relations = [
            f"{name} -> {f.model.entity} ({f.foreign_key})"
            for name, f in fields.items()
            if f.type is AttrType.BELONGS_TO
        ]
        table.add_row(
            shape.__name__,
            shape.entity,
            shape.primary_key,
            ", ".join(attrs),
            "\n".join(relations),
        )

    console.print(table)


# ── Schema ───────────────────────────────────────────────────────────


@main.command(name="schema")
@click.argument("shapes_path")
@click.argument("entity")
@click.option("--many", is_flag=True, help="Show the schema for a list of records")
def show_schema(shapes_path: str, entity: str, many: bool):
    """Print the normalization schema of ENTITY as a tree."""
    registry = _load_registry(shapes_path)
    shape = _resolve_shape(registry, entity)

    try:
        described = shape.schema(many=many).describe()
    except EntityModelError as e:
        _fail(str(e))

    if "many" in described:
        tree = Tree("[bold]many[/]")
        _add_schema_node(tree, described["many"])
    else:
        tree = Tree("[bold]one[/]")
        _add_schema_node(tree, described)
    console.print(tree)


def _add_schema_node(parent: Tree, node: dict, label: str = ""):
    prefix = f"{label}: " if label else ""
    if "ref" in node:
        parent.add(f"{prefix}[cyan]{escape(node['ref'])}[/] [dim](cycle)[/]")
        return
    branch = parent.add(
        f"{prefix}[cyan]{escape(node['entity'])}[/] [dim]key={escape(node['primary_key'])}[/]"
    )
    for name, child in node["relations"].items():
        _add_schema_node(branch, child, name)


# ── Normalize ────────────────────────────────────────────────────────


@main.command(name="normalize")
@click.argument("shapes_path")
@click.argument("entity")
@click.argument("data_path")
@click.option("--output", "-o", default=None, help="Write the result to a file")
@click.option("--format", "fmt", default="json", type=click.Choice(["json", "yaml"]))
def normalize_data(shapes_path: str, entity: str, data_path: str, output: str | None, fmt: str):
    """Normalize the records in DATA_PATH as ENTITY."""
    registry = _load_registry(shapes_path)
    shape = _resolve_shape(registry, entity)
    data = _load_data(data_path)

    try:
        normalized = shape.normalize(data)
    except EntityModelError as e:
        _fail(str(e))

    payload = normalized.to_dict()
    if fmt == "yaml":
        text = yaml.safe_dump(payload, sort_keys=False)
    else:
        text = json.dumps(payload, indent=2, default=str)

    if output:
        Path(output).write_text(text)
        console.print(
            f"[green]Normalized {normalized.entity_count} record(s) "
            f"into {len(normalized.entities)} table(s):[/] {output}"
        )
    else:
        click.echo(text)


# ── Instantiate ──────────────────────────────────────────────────────


@main.command()
@click.argument("shapes_path")
@click.argument("entity")
@click.argument("data_path")
def instantiate(shapes_path: str, entity: str, data_path: str):
    """Build ENTITY instances from DATA_PATH and print their fields."""
    registry = _load_registry(shapes_path)
    shape = _resolve_shape(registry, entity)
    data = _load_data(data_path)

    records = data if isinstance(data, list) else [data]
    for record in records:
        if record is not None and not isinstance(record, dict):
            _fail(f"Expected a mapping, got {type(record).__name__}")
        instance = shape(record)
        click.echo(json.dumps(instance.to_dict(), default=str))


if __name__ == "__main__":
    main()
