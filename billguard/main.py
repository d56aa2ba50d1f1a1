"""BillGuard CLI: analyze uploads and manage the document library."""

import json
from collections.abc import Generator
from contextlib import contextmanager
from pathlib import Path
from typing import NoReturn, Optional

import psycopg
import typer
from psycopg_pool import PoolTimeout
from rich.console import Console
from rich.table import Table

from billguard.analysis.exceptions import (
    AnalysisError,
    UnparseableResponseError,
    UpstreamRejectedError,
)
from billguard.analysis.models import StoredDocument
from billguard.analysis.serialization import document_to_payload
from billguard.config.settings import Settings
from billguard.database.connection import database
from billguard.database.repositories.document_repository import ALL_CATEGORIES, DocumentRepository
from billguard.dispute.exceptions import DisputeLetterError
from billguard.dispute.letter import dispute_request_for, generate_dispute_letter
from billguard.logging.logger import Log
from billguard.pdf.exceptions import PdfExtractionError
from billguard.processor.exceptions import DocumentNotFoundError, ProcessorError
from billguard.processor.processor import build_processor
from billguard.report.formatting import category_label, format_money, report_filename, time_ago
from billguard.report.pdf_report import PdfReportBuilder

app = typer.Typer(name="billguard", help="Audit medical bills and documents with a vision model")
console = Console()

SERVICE_UNAVAILABLE = "Analysis service temporarily unavailable. Please try again."
LIBRARY_UNAVAILABLE = "Document library unavailable. Check the DB_* settings and try again."


def _settings() -> Settings:
    settings = Settings()
    Log.configure(settings.log_level)
    return settings


def _fail(message: str) -> NoReturn:
    console.print(f"[red]{message}[/red]")
    raise typer.Exit(code=1)


@contextmanager
def _library(settings: Settings) -> Generator[DocumentRepository, None, None]:
    """Open the document library, turning database failures into a CLI error."""
    try:
        with database(settings):
            yield DocumentRepository()
    except (psycopg.Error, PoolTimeout) as exc:
        Log.error(f"Database error: {exc}")
        _fail(LIBRARY_UNAVAILABLE)


@app.command()
def analyze(
    file: Path = typer.Argument(..., help="Photo (JPG, PNG) or PDF of the document"),
    save: bool = typer.Option(True, "--save/--no-save", help="Store the result in the library"),
    as_json: bool = typer.Option(False, "--json", help="Print the stored payload as JSON"),
) -> None:
    """Analyze a document and print the report."""
    settings = _settings()
    try:
        processor = build_processor(settings, persist=save)
        if save:
            with _library(settings):
                document = processor.process(file)
        else:
            document = processor.process(file)
    except UnparseableResponseError as exc:
        _fail(exc.user_message)
    except UpstreamRejectedError as exc:
        _fail(exc.message)
    except AnalysisError as exc:
        Log.error(f"Analysis failed: {exc}")
        _fail(SERVICE_UNAVAILABLE)
    except (ProcessorError, PdfExtractionError, FileNotFoundError, ValueError) as exc:
        _fail(str(exc))

    if as_json:
        typer.echo(json.dumps(document_to_payload(document), indent=2))
    else:
        _print_document(document)


@app.command("list")
def list_documents(
    category: str = typer.Option(ALL_CATEGORIES, "--category", "-c", help="Category filter"),
) -> None:
    """List stored documents, newest first."""
    settings = _settings()
    with _library(settings) as repo:
        documents = repo.find_by_category(category)
    _print_library(documents)


@app.command()
def search(query: str = typer.Argument(..., help="Words that must all appear")) -> None:
    """Search the library."""
    settings = _settings()
    with _library(settings) as repo:
        documents = repo.search(query)
    _print_library(documents)


@app.command()
def show(
    document_id: str = typer.Argument(..., help="Document id"),
    as_json: bool = typer.Option(False, "--json", help="Print the stored payload as JSON"),
) -> None:
    """Show one stored document."""
    document = _load_document(document_id)
    if as_json:
        typer.echo(json.dumps(document_to_payload(document), indent=2))
    else:
        _print_document(document)


@app.command()
def delete(document_id: str = typer.Argument(..., help="Document id")) -> None:
    """Delete a document from the library."""
    settings = _settings()
    with _library(settings) as repo:
        deleted = repo.delete(document_id)
    if not deleted:
        _fail(f"Document {document_id} not found")
    console.print(f"[green]Deleted {document_id}[/green]")


@app.command("export-pdf")
def export_pdf(
    document_id: str = typer.Argument(..., help="Document id"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Target PDF path"),
) -> None:
    """Export a stored document as a PDF report."""
    document = _load_document(document_id)
    target = output or Path(report_filename(document.analysis.title or document.id))
    target.write_bytes(PdfReportBuilder().build(document))
    console.print(f"[green]Report saved to {target}[/green]")


@app.command("dispute-letter")
def dispute_letter(
    document_id: str = typer.Argument(..., help="Document id of a medical bill"),
    name: Optional[str] = typer.Option(None, "--name", help="Patient name"),
    account: Optional[str] = typer.Option(None, "--account", help="Account number"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write the letter here"),
) -> None:
    """Generate a dispute letter for flagged charges."""
    document = _load_document(document_id)
    try:
        letter = generate_dispute_letter(dispute_request_for(document, name, account))
    except DisputeLetterError as exc:
        _fail(str(exc))
    if output is None:
        typer.echo(letter.text)
        return
    target = output / letter.filename if output.is_dir() else output
    target.write_text(letter.text, encoding="utf-8")
    console.print(f"[green]Letter saved to {target}[/green]")


@app.command("init-db")
def init_db() -> None:
    """Create the documents table."""
    settings = _settings()
    with _library(settings) as repo:
        repo.ensure_schema()
    console.print("[green]Database ready[/green]")


def _load_document(document_id: str) -> StoredDocument:
    settings = _settings()
    try:
        with _library(settings) as repo:
            return repo.find_by_id(document_id)
    except DocumentNotFoundError as exc:
        _fail(str(exc))


def _print_library(documents: list[StoredDocument]) -> None:
    if not documents:
        console.print("No documents found.")
        return
    table = Table(title=f"{len(documents)} document(s)")
    table.add_column("ID")
    table.add_column("Title")
    table.add_column("Category")
    table.add_column("Critical", justify="right")
    table.add_column("Uploaded")
    for document in documents:
        analysis = document.analysis
        critical = sum(1 for flag in analysis.risk_flags if flag.severity == "critical")
        table.add_row(
            document.id,
            analysis.title or document.file_name,
            category_label(analysis.category),
            str(critical),
            time_ago(document.uploaded_at),
        )
    console.print(table)


def _print_document(document: StoredDocument) -> None:
    analysis = document.analysis
    console.print(f"[bold]{analysis.title or document.file_name}[/bold]  ({document.id})")
    console.print(
        f"{category_label(analysis.category)} · {analysis.subcategory} · "
        f"confidence {analysis.confidence}"
    )
    if analysis.summary:
        console.print(f"\n{analysis.summary}")

    if analysis.key_findings:
        console.print("\n[bold]Key findings[/bold]")
        for index, finding in enumerate(analysis.key_findings, start=1):
            console.print(f"  {index}. {finding}")

    if analysis.risk_flags:
        console.print("\n[bold]Risk flags[/bold]")
        for flag in analysis.risk_flags:
            console.print(f"  [{flag.severity.upper()}] {flag.issue}", markup=False)

    if analysis.action_items:
        console.print("\n[bold]Action items[/bold]")
        for item in analysis.action_items:
            deadline = f" (by {item.deadline})" if item.deadline else ""
            console.print(f"  [{item.priority.upper()}] {item.action}{deadline}", markup=False)

    bill = analysis.medical_bill_data
    if bill is not None:
        table = Table(title="Line items")
        table.add_column("Code")
        table.add_column("Description")
        table.add_column("Billed", justify="right")
        table.add_column("Fair", justify="right")
        table.add_column("Status")
        for item in bill.line_items:
            table.add_row(
                item.code,
                item.description,
                format_money(item.billed_amount),
                format_money(item.fair_price),
                item.status.upper(),
            )
        console.print(table)
        console.print(
            f"Total billed {format_money(bill.total_billed)} · "
            f"fair {format_money(bill.total_fair_price)} · "
            f"potential savings {format_money(bill.total_savings)}"
        )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
