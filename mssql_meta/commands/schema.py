"""Schema introspection commands."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from ..database import Blueprint, SQLServerConnection, SQLServerSchema
from ..errors import MetaError

app = typer.Typer(help="SQL Server schema introspection commands")
console = Console()


def _connect(
    database: Optional[str],
    host: Optional[str],
    port: Optional[int],
    user: Optional[str],
    password: Optional[str],
) -> SQLServerConnection:
    return SQLServerConnection(
        host=host,
        port=port,
        database=database,
        user=user,
        password=password,
    )


def _print_blueprint(blueprint: Blueprint):
    table = Table(title=escape(blueprint.qualified_table()))
    table.add_column("Column", style="cyan")
    table.add_column("Type", style="green")
    table.add_column("Size")
    table.add_column("Nullable")
    table.add_column("Identity")
    table.add_column("Default")

    pk_columns = blueprint.primary_key().columns
    for column in blueprint.columns():
        size = "" if column.size is None else str(column.size)
        if column.scale is not None:
            size = f"{size},{column.scale}"
        name = escape(column.name or "")
        if column.name in pk_columns:
            name = f"{name} [bold](PK)[/bold]"
        table.add_row(
            name,
            escape(column.type or ""),
            size,
            "Yes" if column.nullable else "No",
            "Yes" if column.autoincrement else "No",
            escape(column.default or ""),
        )
    console.print(table)

    for key in blueprint.indexes():
        console.print(f"  {key.name} [cyan]{escape(key.index)}[/cyan] ({escape(_join(key.columns))})")
    for relation in blueprint.relations():
        console.print(
            f"  foreign ({escape(_join(relation.columns))}) -> "
            f"[cyan]{escape(relation.on[1] or '')}[/cyan] ({escape(_join(relation.references))})"
        )


def _join(names) -> str:
    return ", ".join(str(name) for name in names)


@app.command("databases")
def list_databases(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="SQL Server host (or SQLSRV_HOST env)"),
    port: Optional[int] = typer.Option(None, "--port", help="SQL Server port (or SQLSRV_PORT env)"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="SQL Server login (or SQLSRV_USER env)"),
    password: Optional[str] = typer.Option(None, "--password", help="SQL Server password (or SQLSRV_PASSWORD env)"),
):
    """List user databases on the server."""
    try:
        with _connect(None, host, port, user, password) as connection:
            databases = SQLServerSchema.schemas(connection)
    except ImportError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1)
    except Exception as e:
        console.print(f"[red]Error connecting to SQL Server: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    if not databases:
        console.print("[yellow]No user databases found.[/yellow]")
        return

    table = Table(title="Databases")
    table.add_column("Name", style="cyan")
    for name in databases:
        table.add_row(escape(name))
    console.print(table)


@app.command("inspect")
def inspect_schema(
    schema: str = typer.Argument(..., help="Database to introspect"),
    table_name: Optional[str] = typer.Option(None, "--table", "-t", help="Show a single table in detail"),
    schema_database: Optional[str] = typer.Option(None, "--catalog-schema", "-c", help="Catalog schema to read (or SQLSRV_SCHEMA env, default dbo)"),
    as_json: bool = typer.Option(False, "--json", help="Print blueprints as JSON"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write blueprints as JSON to a file"),
    host: Optional[str] = typer.Option(None, "--host", "-h", help="SQL Server host (or SQLSRV_HOST env)"),
    port: Optional[int] = typer.Option(None, "--port", help="SQL Server port (or SQLSRV_PORT env)"),
    user: Optional[str] = typer.Option(None, "--user", "-u", help="SQL Server login (or SQLSRV_USER env)"),
    password: Optional[str] = typer.Option(None, "--password", help="SQL Server password (or SQLSRV_PASSWORD env)"),
):
    """
    Load a database's tables, columns, keys, indexes and foreign keys.

    Examples:
        mssql-meta schema inspect Sales
        mssql-meta schema inspect Sales --table Orders
        mssql-meta schema inspect Sales --json -o sales.json
    """
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
        transient=True,
    ) as progress:
        progress.add_task(f"Loading schema {escape(schema)}...", total=None)
        try:
            with _connect(schema, host, port, user, password) as connection:
                loaded = SQLServerSchema(schema, connection, schema_database=schema_database)
        except ImportError as e:
            console.print(f"[red]{escape(str(e))}[/red]")
            raise typer.Exit(1)
        except Exception as e:
            console.print(f"[red]Error loading schema {escape(schema)}: {escape(str(e))}[/red]")
            raise typer.Exit(1)

    if table_name:
        try:
            blueprints = [loaded.table(table_name)]
        except MetaError as e:
            console.print(f"[red]{escape(e.message)}[/red]")
            raise typer.Exit(1)
    else:
        blueprints = loaded.tables()

    if as_json or output:
        payload = json.dumps([blueprint.to_dict() for blueprint in blueprints], indent=2, default=str)
        if output:
            output.write_text(payload, encoding="utf-8")
            console.print(f"[green]Wrote {len(blueprints)} table(s) to {output}[/green]")
        else:
            console.print_json(payload)
        return

    if table_name:
        _print_blueprint(blueprints[0])
        return

    if not blueprints:
        console.print("[yellow]No tables found in the specified database/schema[/yellow]")
        return

    console.print(Panel(
        f"Database: {escape(schema)}\n"
        f"Catalog schema: {escape(loaded.schema_database)}\n"
        f"Connection: {escape(connection.name)}",
        title="Schema"
    ))
    summary = Table(title="Tables")
    summary.add_column("Table", style="cyan")
    summary.add_column("Columns", justify="right")
    summary.add_column("Primary Key")
    summary.add_column("Indexes", justify="right")
    summary.add_column("Relations", justify="right")
    summary.add_column("Referenced By", justify="right")
    for blueprint in blueprints:
        summary.add_row(
            escape(blueprint.table),
            str(len(blueprint.columns())),
            escape(_join(blueprint.primary_key().columns)),
            str(len(blueprint.indexes())),
            str(len(blueprint.relations())),
            str(len(loaded.referencing(blueprint))),
        )
    console.print(summary)
    console.print(f"\n[bold]Total: {len(blueprints)} tables[/bold]")
