"""Portfolio CLI commands."""

from decimal import Decimal, InvalidOperation

import typer
from rich.console import Console
from rich.table import Table

from stock_portfolio.core.portfolio.models import HoldingCreate, HoldingUpdate
from stock_portfolio.core.portfolio.repository import SqlHoldingRepository
from stock_portfolio.core.portfolio.service import PortfolioService
from stock_portfolio.db.database import get_db

console = Console()
app = typer.Typer()


def _parse_price(value: str) -> Decimal:
    try:
        return Decimal(value)
    except InvalidOperation:
        console.print(f"[red]Error:[/red] Invalid price: {value}")
        raise typer.Exit(1)


@app.command("add")
def add_holding(
    symbol: str = typer.Argument(..., help="Stock ticker symbol (e.g., AAPL)"),
    quantity: int = typer.Argument(..., help="Number of shares"),
    purchase_price: str = typer.Argument(..., help="Price paid per share"),
    name: str = typer.Option("", "--name", "-n", help="Company name"),
    current_price: str = typer.Option("0", "--current", "-c", help="Current price per share"),
):
    """Add a new holding to the portfolio."""
    candidate = HoldingCreate(
        symbol=symbol.upper(),
        name=name,
        quantity=quantity,
        purchase_price=_parse_price(purchase_price),
        current_price=_parse_price(current_price),
    )

    with get_db() as db:
        holding = PortfolioService(SqlHoldingRepository(db)).add_holding(candidate)
        console.print(
            f"[green]Added:[/green] #{holding.id} {holding.symbol} - "
            f"{holding.quantity} shares @ ${holding.purchase_price:,.2f}"
        )


@app.command("list")
def list_holdings():
    """List all holdings in the portfolio."""
    with get_db() as db:
        holdings = PortfolioService(SqlHoldingRepository(db)).list_holdings()

        if not holdings:
            console.print("[yellow]No holdings found.[/yellow] Use 'add' to add some.")
            return

        table = Table(title="Portfolio Holdings")
        table.add_column("ID", justify="right", style="dim")
        table.add_column("Symbol", style="cyan")
        table.add_column("Name")
        table.add_column("Quantity", justify="right")
        table.add_column("Purchase Price", justify="right", style="green")
        table.add_column("Current Price", justify="right")
        table.add_column("Value", justify="right")

        for h in holdings:
            table.add_row(
                str(h.id),
                h.symbol,
                h.name or "-",
                f"{h.quantity:,}",
                f"${h.purchase_price:,.2f}",
                f"${h.current_price:,.2f}",
                f"${h.market_value:,.2f}",
            )

        console.print(table)
        console.print(f"\n[dim]Total holdings: {len(holdings)}[/dim]")


@app.command("update")
def update_holding(
    holding_id: int = typer.Argument(..., help="Holding ID"),
    symbol: str = typer.Argument(..., help="Stock ticker symbol"),
    quantity: int = typer.Argument(..., help="Number of shares"),
    purchase_price: str = typer.Argument(..., help="Price paid per share"),
    name: str = typer.Option("", "--name", "-n", help="Company name"),
):
    """Replace symbol, name, quantity and purchase price of a holding."""
    replacement = HoldingUpdate(
        symbol=symbol.upper(),
        name=name,
        quantity=quantity,
        purchase_price=_parse_price(purchase_price),
    )

    with get_db() as db:
        updated = PortfolioService(SqlHoldingRepository(db)).update_holding(holding_id, replacement)

        if not updated:
            console.print(f"[red]Error:[/red] Holding #{holding_id} not found")
            raise typer.Exit(1)

        console.print(f"[green]Updated:[/green] #{updated.id} {updated.symbol}")


@app.command("remove")
def remove_holding(
    holding_id: int = typer.Argument(..., help="Holding ID to remove"),
    force: bool = typer.Option(False, "--force", "-f", help="Skip confirmation"),
):
    """Remove a holding from the portfolio."""
    if not force:
        confirm = typer.confirm(f"Remove holding #{holding_id}?")
        if not confirm:
            console.print("[dim]Cancelled.[/dim]")
            raise typer.Exit(0)

    with get_db() as db:
        PortfolioService(SqlHoldingRepository(db)).delete_holding(holding_id)
        console.print(f"[green]Removed:[/green] #{holding_id}")


@app.command("value")
def portfolio_value():
    """Show portfolio value and P&L from stored prices."""
    with get_db() as db:
        summary = PortfolioService(SqlHoldingRepository(db)).summarize()

        if not summary.holdings_count:
            console.print("[yellow]No holdings found.[/yellow] Use 'add' to add some.")
            return

        pnl_color = "green" if summary.total_pnl >= 0 else "red"

        console.print(f"[bold]Total Investment:[/bold] ${summary.total_investment:,.2f}")
        console.print(f"[bold]Total Value:[/bold]      ${summary.total_value:,.2f}")
        console.print(
            f"[bold]Total P&L:[/bold]        [{pnl_color}]${summary.total_pnl:+,.2f}[/{pnl_color}]"
        )
        if summary.top_performer:
            console.print(f"[bold]Top Performer:[/bold]    {summary.top_performer}")
        if summary.worst_performer:
            console.print(f"[bold]Worst Performer:[/bold]  {summary.worst_performer}")
