"""mssql-meta - Main entry point."""

import logging

import typer
from rich.console import Console
from .commands import schema
from .config import settings

app = typer.Typer(
    name="mssql-meta",
    help="Read SQL Server catalog metadata into table blueprints",
    add_completion=False,
)

# Add subcommands
app.add_typer(schema.app, name="schema")

console = Console()


@app.command()
def config():
    """Show current configuration."""
    console.print("[bold]Current Configuration[/bold]")
    console.print(f"  Host: {settings.sqlsrv_host}:{settings.sqlsrv_port}")
    console.print(f"  Database: {settings.sqlsrv_database or 'Server default'}")
    console.print(f"  User: {settings.sqlsrv_user or 'Not set'}")
    console.print(f"  Password configured: {'Yes' if settings.sqlsrv_password else 'No'}")
    console.print(f"  Driver: {settings.sqlsrv_driver}")
    console.print(f"  Trusted connection: {'Yes' if settings.sqlsrv_trusted_connection else 'No'}")
    console.print(f"  Connection name: {settings.sqlsrv_connection_name}")
    console.print(f"  Catalog schema: {settings.sqlsrv_schema}")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """
    mssql-meta - Read SQL Server catalog metadata into table blueprints.

    Examples:

        mssql-meta schema databases

        mssql-meta schema inspect Sales --table Orders

        mssql-meta schema inspect Sales --json -o sales.json
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level.upper(),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )


if __name__ == "__main__":
    app()
