import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TextColumn, TimeElapsedColumn
from rich.table import Table

from spreadsheet_rescue.exception.base import BaseFileError
from spreadsheet_rescue.history.factory import HistorySinkFactory
from spreadsheet_rescue.logging_conf import setup_logging
from spreadsheet_rescue.mapping.base import (
    ContactsColumnMapping,
    TransactionColumnMapping,
)
from spreadsheet_rescue.mapping.columns import index_to_label
from spreadsheet_rescue.mapping.detect import detect_contacts_mapping
from spreadsheet_rescue.pipeline.models import OutputFile, RunResult
from spreadsheet_rescue.pipeline.read.factory import ReaderFactory
from spreadsheet_rescue.process.session import AppStep, ImportSession
from spreadsheet_rescue.settings import config
from spreadsheet_rescue.utils import readable_file_size

app = typer.Typer(help="Spreadsheet Rescue CLI - Clean transaction and contacts spreadsheets")
console = Console()


def _setup_cli_logging(log_level: str) -> None:
    config.LOG_LEVEL = log_level

    setup_logging()

    root_logger = logging.getLogger("spreadsheet_rescue")
    for handler in root_logger.handlers:
        if isinstance(handler, RichHandler):
            handler.console = console
            handler.show_time = False
            handler.show_path = False


def _stats_table(title: str, run: RunResult) -> Table:
    stats = run.result.stats
    table = Table(title=title)
    table.add_column("Total", justify="right")
    table.add_column("Valid", justify="right", style="green")
    table.add_column("Rejected", justify="right", style="red")
    row = [str(stats.total_records), str(stats.valid_records), str(stats.rejected_records)]
    if stats.duplicate_records is not None:
        table.add_column("Duplicates", justify="right", style="yellow")
        row.append(str(stats.duplicate_records))
    table.add_row(*row)
    return table


def _save(files: list[OutputFile], output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    for output in files:
        path = output_dir / output.file_name
        path.write_bytes(output.content)
        console.print(f"[green]Wrote[/green] {path} ({readable_file_size(output.size)})")


@app.command()
def process(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV or Excel file to clean"),
    mobile: str = typer.Option(..., "--mobile", help="Column letter of the mobile number"),
    bill_number: str = typer.Option(..., "--bill-number", help="Column letter of the bill number"),
    bill_amount: str = typer.Option(..., "--bill-amount", help="Column letter of the bill amount"),
    order_time: str = typer.Option(..., "--order-time", help="Column letter of the order time"),
    points_earned: Optional[str] = typer.Option(None, "--points-earned"),
    points_redeemed: Optional[str] = typer.Option(None, "--points-redeemed"),
    contacts: bool = typer.Option(
        False, "--contacts", help="Also generate a contacts file from the same rows"
    ),
    contacts_mobile: Optional[str] = typer.Option(
        None, "--contacts-mobile", help="Contacts columns are auto-detected when omitted"
    ),
    contacts_name: Optional[str] = typer.Option(None, "--contacts-name"),
    contacts_email: Optional[str] = typer.Option(None, "--contacts-email"),
    contacts_birthday: Optional[str] = typer.Option(None, "--contacts-birthday"),
    contacts_anniversary: Optional[str] = typer.Option(None, "--contacts-anniversary"),
    contacts_gender: Optional[str] = typer.Option(None, "--contacts-gender"),
    contacts_points: Optional[str] = typer.Option(None, "--contacts-points"),
    contacts_tags: Optional[str] = typer.Option(None, "--contacts-tags"),
    output_format: Optional[str] = typer.Option(
        None, "--format", "-f", help="Output format: csv or xlsx"
    ),
    output_dir: Optional[Path] = typer.Option(None, "--output-dir", "-o"),
    no_history: bool = typer.Option(
        False, "--no-history", help="Do not record the run in the processed files table"
    ),
) -> None:
    _setup_cli_logging("WARNING")

    try:
        session = ImportSession(
            history_sink=HistorySinkFactory.create_sink(enabled=False if no_history else None),
            output_format=output_format,
        )
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=2)

    if not session.select_file(file.name, file.read_bytes()):
        console.print(
            f"[red]Unsupported file type:[/red] {file.suffix or file.name}. "
            f"Supported: {', '.join(ReaderFactory.get_supported_extensions())}"
        )
        raise typer.Exit(code=1)

    mapping = TransactionColumnMapping.from_labels(
        mobile=mobile,
        bill_number=bill_number,
        bill_amount=bill_amount,
        order_time=order_time,
        points_earned=points_earned,
        points_redeemed=points_redeemed,
    )
    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        task = progress.add_task(f"[cyan]Processing {file.name}...", total=None)
        run = session.complete_column_mapping(mapping)
        progress.update(task, description="[green]✓ Complete!")

    if run is None:
        console.print(f"[red]Could not process {file.name}:[/red] {session.error or 'invalid column mapping'}")
        raise typer.Exit(code=1)
    console.print(_stats_table("Transactions", run))

    if session.step == AppStep.CONTACTS_CONFIRMATION:
        session.confirm_contacts(contacts)
    elif contacts:
        console.print("[yellow]No valid mobile numbers, skipping contacts file[/yellow]")

    if session.step == AppStep.CONTACTS_MAPPING:
        if contacts_mobile:
            contacts_mapping = ContactsColumnMapping.from_labels(
                mobile=contacts_mobile,
                name=contacts_name,
                email=contacts_email,
                birthday=contacts_birthday,
                anniversary=contacts_anniversary,
                gender=contacts_gender,
                points=contacts_points,
                tags=contacts_tags,
            )
        else:
            contacts_mapping = session.suggest_contacts_mapping()
            console.print(f"[cyan]Detected contacts columns:[/cyan] {contacts_mapping.mapped_fields()}")

        contacts_run = session.complete_contacts_mapping(contacts_mapping)
        if contacts_run is None:
            console.print(f"[red]Could not generate contacts file:[/red] {session.error or 'invalid contacts mapping'}")
            raise typer.Exit(code=1)
        console.print(_stats_table("Contacts", contacts_run))

    _save(session.files, output_dir or Path(config.OUTPUT_DIRECTORY))
    stats = session.stats
    console.print(
        f"[green]{stats.total_files} file(s):[/green] {stats.total_records} records, "
        f"{stats.valid_records} valid, {stats.rejected_records} rejected"
    )


@app.command()
def detect(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="CSV or Excel file"),
) -> None:
    """Show the header row with column letters and the guessed contacts mapping."""
    _setup_cli_logging("WARNING")

    try:
        grid = ReaderFactory.create_reader(file.name, file.read_bytes()).read()
    except BaseFileError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1)

    header = Table(title=f"{file.name} ({len(grid) - 1} rows)")
    header.add_column("Column")
    header.add_column("Header")
    for index, cell in enumerate(grid[0]):
        header.add_row(index_to_label(index), str(cell))
    console.print(header)

    suggested = detect_contacts_mapping(grid[0])
    mapping_table = Table(title="Suggested contacts mapping")
    mapping_table.add_column("Field")
    mapping_table.add_column("Column")
    for field, label in suggested.model_dump().items():
        mapping_table.add_row(field, label or "-")
    console.print(mapping_table)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
