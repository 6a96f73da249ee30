"""Typer CLI entrypoint for compiling and checking draft filings."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from filingkit import __version__

console = Console()

app = typer.Typer(
    help="Compile pro se case drafts into court-formatted filings and check them before filing.",
    context_settings={"help_option_names": ["-h", "--help"]},
    no_args_is_help=True,
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if not value:
        return
    console.print(f"filingkit {__version__}")
    raise typer.Exit()


@app.callback()
def root(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show the installed version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Override FILING_LOG_LEVEL for this invocation.",
    ),
) -> None:
    from core.log import configure_logging

    configure_logging(log_level)


@app.command("compile", help="Compile a draft JSON file to PDF.")
def compile_command(
    draft_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, metavar="DRAFT_JSON"),
    out: Path = typer.Option(..., "--out", "-o", help="Output PDF path."),
    case_path: Optional[Path] = typer.Option(
        None, "--case", exists=True, dir_okay=False, help="Case bundle JSON (intake and parties)."
    ),
    signature_path: Optional[Path] = typer.Option(
        None, "--signature", exists=True, dir_okay=False, help="Signature image (PNG or JPEG)."
    ),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Bates prefix."),
    bates_start: Optional[int] = typer.Option(None, "--bates-start", help="First Bates number."),
    bates_width: Optional[int] = typer.Option(None, "--bates-width", help="Zero-padded Bates width."),
) -> None:
    from cli.common import load_case, load_draft, read_optional_bytes, write_output
    from compiler.bates import apply_bates, load_stamper, parse_bates_options
    from compiler.builder import compile_filing_pdf
    from compiler.layout import LayoutOptions
    from compiler.sections import decode_signature_image
    from core.config import get_settings

    settings = get_settings()
    draft = load_draft(draft_path)
    bundle = load_case(case_path)
    pdf_bytes = _run_or_exit(
        compile_filing_pdf,
        draft,
        intake=bundle.intake,
        parties=bundle.parties,
        signature=decode_signature_image(read_optional_bytes(signature_path)),
        options=LayoutOptions.from_settings(settings),
    )
    bates = parse_bates_options(prefix, bates_start, bates_width)
    stamper = _run_or_exit(load_stamper, settings.bates_stamper) if bates else None
    pdf_bytes = apply_bates(pdf_bytes, bates, stamper)
    write_output(out, pdf_bytes)


@app.command("docx", help="Export a draft JSON file as an editable Word document.")
def docx_command(
    draft_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, metavar="DRAFT_JSON"),
    out: Path = typer.Option(..., "--out", "-o", help="Output DOCX path."),
    case_path: Optional[Path] = typer.Option(
        None, "--case", exists=True, dir_okay=False, help="Case bundle JSON (intake and parties)."
    ),
    signature_path: Optional[Path] = typer.Option(
        None, "--signature", exists=True, dir_okay=False, help="Signature image (PNG or JPEG)."
    ),
) -> None:
    from cli.common import load_case, load_draft, read_optional_bytes, write_output
    from compiler.builder import draft_blocks
    from compiler.docx_writer import build_docx
    from compiler.sections import decode_signature_image

    draft = load_draft(draft_path)
    bundle = load_case(case_path)
    content = build_docx(
        draft.display_title,
        draft_blocks(draft),
        intake=bundle.intake,
        parties=bundle.parties,
        signature_name=draft.signature_name,
        signature_title=draft.signature_title,
        signature_image=decode_signature_image(read_optional_bytes(signature_path)),
    )
    write_output(out, content)


@app.command("analyze", help="Run readiness checks on a draft JSON file.")
def analyze_command(
    draft_path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, metavar="DRAFT_JSON"),
    case_path: Optional[Path] = typer.Option(
        None, "--case", exists=True, dir_okay=False, help="Case bundle JSON."
    ),
    json_out: bool = typer.Option(False, "--json", help="Print the result as JSON."),
) -> None:
    from cli.common import emit_json, load_case, load_draft
    from readiness.analyzer import analyze_filing_readiness
    from services.exports import readiness_input_for_draft

    draft = load_draft(draft_path)
    bundle = load_case(case_path)
    result = analyze_filing_readiness(
        readiness_input_for_draft(
            draft,
            intake=bundle.intake,
            parties=bundle.parties,
            exhibits=bundle.exhibits,
            pinned=bundle.pinned,
        )
    )

    if json_out:
        emit_json(result.model_dump(exclude_none=True))
    else:
        _print_issues(result)
    if result.has_errors:
        raise typer.Exit(code=1)


@app.command("serve", help="Run the HTTP API with uvicorn.")
def serve_command(
    host: str = typer.Option("127.0.0.1", "--host"),
    port: int = typer.Option(8000, "--port"),
    reload: bool = typer.Option(False, "--reload"),
) -> None:
    import uvicorn

    uvicorn.run("api.main:app", host=host, port=port, reload=reload)


def _print_issues(result) -> None:
    if not result.issues:
        console.print("[green]No readiness issues found.[/green]")
    else:
        table = Table(title="Filing readiness")
        table.add_column("Severity")
        table.add_column("Issue")
        table.add_column("Detail / hint", overflow="fold")
        table.add_column("ID", style="dim")
        for issue in result.issues:
            style = "red" if issue.severity == "error" else "yellow"
            table.add_row(
                f"[{style}]{issue.severity}[/{style}]",
                issue.title,
                issue.detail or issue.hint or "",
                issue.id,
            )
        console.print(table)
    if result.ignored:
        console.print(f"[dim]{len(result.ignored)} issue id(s) ignored.[/dim]")


def _run_or_exit(func, *args, **kwargs):
    from core.errors import FilingError

    try:
        return func(*args, **kwargs)
    except FilingError as exc:
        console.print(f"[red]Error:[/red] {exc.message}")
        raise typer.Exit(code=1) from exc


def main() -> None:
    app()


__all__ = ["app", "main"]
