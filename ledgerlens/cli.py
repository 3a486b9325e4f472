"""Typer CLI interface for LedgerLens."""

import logging
from datetime import datetime
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from ledgerlens.config import get_settings

app = typer.Typer(
    name="ledgerlens",
    help="LedgerLens: double-entry financial statements from categorized transactions.",
)

console = Console()

_DATE_FORMATS = ["%Y-%m-%d"]


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log progress to stderr"),
) -> None:
    """LedgerLens: double-entry financial statements from categorized transactions."""
    from ledgerlens.exceptions import ConfigurationError

    try:
        settings = get_settings()
    except ConfigurationError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)
    level = logging.DEBUG if verbose else settings.log_level
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


def _load_records(input_file: Path, categories: list[str] | None = None) -> list[dict]:
    from ledgerlens.ingestion import EntryQuery, open_store

    if not input_file.exists():
        typer.echo(f"Error: File not found: {input_file}", err=True)
        raise typer.Exit(1)
    try:
        store = open_store(input_file)
        query = EntryQuery(categories=tuple(categories)) if categories else None
        return store.load(query)
    except ValueError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


def _load_chart(chart: Path | None):
    from ledgerlens.exceptions import ChartOfAccountsError
    from ledgerlens.models.chart import cached_chart

    try:
        return cached_chart(chart or get_settings().chart_path)
    except ChartOfAccountsError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)


@app.command()
def generate(
    kind: str = typer.Argument(
        ..., help="Statement: trial-balance, balance-sheet, profit-loss, cash-flow, or all"
    ),
    input_file: Path = typer.Argument(..., help="Transactions file (.json or .csv)"),
    as_of: datetime | None = typer.Option(
        None, "--as-of", formats=_DATE_FORMATS, help="Reporting date (default: latest entry date)"
    ),
    period_start: datetime | None = typer.Option(
        None, "--from", formats=_DATE_FORMATS, help="Start of the Profit & Loss / Cash Flow period"
    ),
    category: list[str] | None = typer.Option(
        None, "--category", "-c", help="Only include records of this category (repeatable)"
    ),
    chart: Path | None = typer.Option(None, "--chart", help="Chart of accounts JSON file"),
    formats: list[str] = typer.Option(
        ["screen"], "--format", "-f", help="Output: screen, txt, pdf, xlsx, json (repeatable)"
    ),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output directory for exported files"),
    strict: bool = typer.Option(False, "--strict", help="Exit with code 2 when a statement does not balance"),
) -> None:
    """Generate one or all financial statements."""
    from ledgerlens.engines.generator import StatementGenerator
    from ledgerlens.exceptions import BalanceMismatchError, EmptyLedgerError, ExportError
    from ledgerlens.models.enums import StatementKind
    from ledgerlens.reports import FILE_RENDERERS, ScreenRenderer, export_statement

    settings = get_settings()

    if kind.lower() == "all":
        kinds = list(StatementKind)
    else:
        try:
            kinds = [StatementKind(kind.lower())]
        except ValueError:
            valid = ", ".join(k.value for k in StatementKind)
            typer.echo(f"Error: Invalid statement '{kind}'. Valid: {valid}, all", err=True)
            raise typer.Exit(1)

    for fmt in formats:
        if fmt.lower() != "screen" and fmt.lower() not in FILE_RENDERERS:
            typer.echo(f"Error: Unknown format '{fmt}'. Valid: screen, {', '.join(FILE_RENDERERS)}", err=True)
            raise typer.Exit(1)

    records = _load_records(input_file, category)
    generator = StatementGenerator(_load_chart(chart))
    as_of_date = as_of.date() if as_of else None
    start_date = period_start.date() if period_start else None

    try:
        result = generator.normalize(records)
        statements = [
            generator.generate(k, result, as_of=as_of_date, period_start=start_date) for k in kinds
        ]
    except EmptyLedgerError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(1)

    output_dir = output or settings.output_dir
    screen = ScreenRenderer(currency=settings.currency)
    for statement in statements:
        for fmt in formats:
            if fmt.lower() == "screen":
                console.print(screen.table(statement))
                continue
            try:
                path = export_statement(statement, fmt, output_dir, currency=settings.currency)
            except ExportError as e:
                typer.echo(f"Error: {e}", err=True)
                raise typer.Exit(1)
            typer.echo(f"  {statement.rows.title}: {path}")

    unbalanced = [s for s in statements if not s.is_balanced]
    for statement in unbalanced:
        typer.echo(f"Warning: {statement.rows.title} does not balance", err=True)
    if strict and unbalanced:
        try:
            unbalanced[0].raise_for_balance()
        except BalanceMismatchError as e:
            typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(2)


@app.command()
def balance(
    input_file: Path = typer.Argument(..., help="Transactions file (.json or .csv)"),
    ordering: str | None = typer.Option(
        None, "--ordering", help="global: balances ignore filters; view: fold over visible rows only"
    ),
    search: str | None = typer.Option(None, "--search", "-s", help="Filter by description text"),
    entry_type: str | None = typer.Option(None, "--type", "-t", help="Filter by credit or debit"),
    category: str | None = typer.Option(None, "--category", "-c", help="Filter by category"),
) -> None:
    """Show transactions with their running balance."""
    from ledgerlens.engines.running_balance import RunningBalanceSequencer, balance_totals
    from ledgerlens.models.enums import BalanceOrdering
    from ledgerlens.models.ledger import LedgerEntry
    from ledgerlens.normalization.normalizer import TransactionNormalizer

    try:
        order = BalanceOrdering(ordering.lower()) if ordering else get_settings().balance_ordering
    except ValueError:
        typer.echo(f"Error: Invalid ordering '{ordering}'. Valid: global, view", err=True)
        raise typer.Exit(1)

    result = TransactionNormalizer().normalize_many(_load_records(input_file))
    if result.rejected:
        typer.echo(f"Warning: {len(result.rejected)} record(s) rejected", err=True)

    def visible(entry: LedgerEntry) -> bool:
        if search and search.lower() not in entry.description.lower():
            return False
        if entry_type and entry.type.value != entry_type.lower():
            return False
        if category and entry.source_category.lower() != category.lower():
            return False
        return True

    rows = RunningBalanceSequencer().sequence(result.entries, order, visible)

    tbl = Table(title=f"Running Balance ({order.value} ordering)", show_header=True)
    tbl.add_column("Date")
    tbl.add_column("Description", style="cyan")
    tbl.add_column("Category")
    tbl.add_column("Type")
    tbl.add_column("Amount", justify="right")
    tbl.add_column("Balance", justify="right", style="green")
    for row in rows:
        entry = row.entry
        tbl.add_row(
            entry.date.isoformat(),
            entry.description,
            entry.source_category,
            entry.type.value,
            f"{entry.amount:,.2f}",
            f"{row.balance:,.2f}",
        )
    console.print(tbl)

    shown = balance_totals(row.entry for row in rows)
    typer.echo(f"Total Credits: {shown.credits:,.2f}")
    typer.echo(f"Total Debits:  {shown.debits:,.2f}")
    typer.echo(f"Total Balance: {shown.balance:,.2f}")
    if order == BalanceOrdering.GLOBAL:
        typer.echo(f"Ledger Balance: {balance_totals(result.entries).balance:,.2f}")


@app.command()
def validate(
    input_file: Path = typer.Argument(..., help="Transactions file (.json or .csv)"),
) -> None:
    """Check which records normalize cleanly and why the others are rejected."""
    from ledgerlens.normalization.normalizer import TransactionNormalizer

    result = TransactionNormalizer().normalize_many(_load_records(input_file))
    typer.echo(f"Records:  {result.total}")
    typer.echo(f"Accepted: {len(result.entries)}")
    typer.echo(f"Rejected: {len(result.rejected)}")
    if result.rejected:
        tbl = Table(title="Rejected Records", show_header=True)
        tbl.add_column("Row", justify="right")
        tbl.add_column("ID", style="cyan")
        tbl.add_column("Field")
        tbl.add_column("Reason", style="red")
        for rejected in result.rejected:
            tbl.add_row(str(rejected.index), rejected.record_id, rejected.error.field, str(rejected.error))
        console.print(tbl)


@app.command()
def accounts(
    chart: Path | None = typer.Option(None, "--chart", help="Chart of accounts JSON file"),
) -> None:
    """List the chart of accounts."""
    coa = _load_chart(chart)
    tbl = Table(title=f"Chart of Accounts ({len(coa)} accounts)", show_header=True)
    tbl.add_column("Account", style="cyan")
    tbl.add_column("Group")
    tbl.add_column("P&L")
    tbl.add_column("Cash")
    tbl.add_column("Activity")
    for account in coa.accounts:
        section = account.profit_loss_section
        tbl.add_row(
            account.name,
            account.group.value,
            section.value if section else "",
            "yes" if account.cash else "",
            account.activity.value,
        )
    console.print(tbl)
