"""Main CLI entry point using Typer."""

import typer
from rich.console import Console

from stock_portfolio.config import (
    PRODUCT_DESCRIPTION,
    PRODUCT_NAME,
    PRODUCT_VERSION,
    ConfigurationError,
    configure_logging,
    get_settings,
    validate_settings,
)
from stock_portfolio.db.database import init_db

console = Console()
app = typer.Typer(
    name="stocks",
    help=f"{PRODUCT_NAME} — {PRODUCT_DESCRIPTION}",
    add_completion=False,
)


@app.callback()
def main_callback():
    """Configure logging and initialize database on startup."""
    configure_logging(get_settings().log_level)
    init_db()


# Import and add subcommands
from stock_portfolio.cli.portfolio import app as portfolio_app
from stock_portfolio.cli.market import app as market_app

app.add_typer(portfolio_app, name="portfolio", help="Manage portfolio holdings")
app.add_typer(market_app, name="market", help="Quotes and symbol search")


@app.command("check-config")
def check_config():
    """Verify that required configuration is present."""
    try:
        validate_settings(get_settings())
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    console.print("[green]Configuration OK[/green] - Finnhub API key is set.")


@app.command()
def serve(
    host: str = typer.Option("0.0.0.0", "--host", help="Bind address"),
    port: int = typer.Option(8086, "--port", "-p", min=1, max=65535, help="Bind port"),
):
    """Run the REST API server."""
    from stock_portfolio.main import run

    run(host, port)


@app.command()
def version():
    """Show version information."""
    console.print(f"[bold]{PRODUCT_NAME}[/] {PRODUCT_VERSION}")


if __name__ == "__main__":
    app()
