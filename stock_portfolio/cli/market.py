"""Market data CLI commands."""

import typer
from rich.console import Console
from rich.table import Table

from stock_portfolio.config import ConfigurationError, get_settings, validate_settings
from stock_portfolio.data.market.client import FinnhubClient, MarketDataError

console = Console()
app = typer.Typer()


def _client() -> FinnhubClient:
    try:
        settings = validate_settings(get_settings())
    except ConfigurationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)
    return FinnhubClient.from_settings(settings)


@app.command("quote")
def get_quote(
    symbol: str = typer.Argument(..., help="Stock ticker symbol"),
):
    """Get the latest quote for a symbol."""
    try:
        quote = _client().get_quote(symbol)
    except MarketDataError as e:
        console.print(f"[red]Error:[/red] Could not fetch quote for {symbol.upper()}: {e}")
        raise typer.Exit(1)

    console.print_json(data=quote)


@app.command("search")
def search(
    query: str = typer.Argument(..., help="Company name or symbol fragment"),
    limit: int = typer.Option(8, "--limit", "-l", help="Maximum rows to show"),
):
    """Search for symbols."""
    try:
        payload = _client().search_symbols(query)
    except MarketDataError as e:
        console.print(f"[red]Error:[/red] Search failed: {e}")
        raise typer.Exit(1)

    results = (payload.get("result") or []) if isinstance(payload, dict) else []
    if not results:
        console.print(f"[yellow]No matches for '{query}'.[/yellow]")
        return

    table = Table(title=f"Matches for '{query}'")
    table.add_column("Symbol", style="cyan")
    table.add_column("Description")
    table.add_column("Type", style="dim")

    for item in results[:limit]:
        table.add_row(
            str(item.get("symbol", "")),
            str(item.get("description", "")),
            str(item.get("type", "")),
        )

    console.print(table)
