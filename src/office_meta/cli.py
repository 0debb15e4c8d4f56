"""Command-line interface for office-meta.

Provides commands for viewing and editing Office document metadata from the terminal.
"""

import json
import logging
from pathlib import Path
from typing import Annotated, Any, NoReturn

import typer

from . import __version__
from .config import Settings, load_settings, parse_offset
from .constants import FORMAT_DOC, FORMAT_DOCX, WRITABLE_FORMATS
from .convert import convert_doc_to_docx
from .display import format_meta_value, format_metadata
from .errors import OfficeMetaError, UnsupportedFormatError
from .formats import detect_format
from .meta import default_output_path, read_meta, write_meta
from .updates import coerce_updates, load_updates

app = typer.Typer(
    name="office-meta",
    help="View and edit metadata of Office documents from the command line.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"office-meta version {__version__}")
        raise typer.Exit()


def _fail(error: Exception) -> NoReturn:
    if isinstance(error, OfficeMetaError):
        typer.echo(f"Error: {error}", err=True)
        if error.hint:
            typer.echo(f"Hint: {error.hint}", err=True)
    else:
        typer.echo(f"Unexpected error: {error}", err=True)
    raise typer.Exit(1)


def _settings(ctx: typer.Context) -> Settings:
    return ctx.obj if isinstance(ctx.obj, Settings) else load_settings()


def _resolve_document(file: Path, convert_doc: bool, settings: Settings) -> tuple[Path, str]:
    format = detect_format(file)
    if format != FORMAT_DOC:
        return file, format
    if not convert_doc:
        raise OfficeMetaError(
            "Legacy .doc format detected",
            hint="Pass --convert-doc to convert it to .docx with LibreOffice first",
        )
    converted = convert_doc_to_docx(file, settings.soffice_path)
    typer.echo(f"Converted {file} to {converted}")
    return converted, FORMAT_DOCX


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-v",
            help="Show version and exit.",
            callback=version_callback,
            is_eager=True,
        ),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", help="Enable debug logging.")] = False,
    config: Annotated[
        Path | None, typer.Option("--config", help="Path to a YAML settings file")
    ] = None,
) -> None:
    """View and edit metadata of Office documents from the command line."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    try:
        ctx.obj = load_settings(config)
    except OfficeMetaError as e:
        _fail(e)


@app.command()
def show(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Path to the .docx, .xlsx or .pptx file")],
    as_json: Annotated[bool, typer.Option("--json", help="Print metadata as JSON")] = False,
    convert_doc: Annotated[
        bool, typer.Option("--convert-doc", help="Convert a legacy .doc file first")
    ] = False,
) -> None:
    """Show document metadata."""
    try:
        path, format = _resolve_document(file, convert_doc, _settings(ctx))
        meta = read_meta(path, format)
    except Exception as e:
        _fail(e)

    if as_json:
        typer.echo(json.dumps(meta, indent=2, ensure_ascii=False))
        return

    typer.echo(f"File: {path}")
    typer.echo(f"Format: {format.upper()}")
    if not meta:
        typer.echo("No metadata found")
    for label, value in format_metadata(meta):
        typer.echo(f"{label:<20}{value}")


@app.command("set")
def set_meta(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Path to the .docx file")],
    title: Annotated[str | None, typer.Option("--title", help="Document title")] = None,
    subject: Annotated[str | None, typer.Option("--subject", help="Document subject")] = None,
    creator: Annotated[
        str | None, typer.Option("--creator", "--author", help="Document author")
    ] = None,
    description: Annotated[
        str | None, typer.Option("--description", help="Document description")
    ] = None,
    keywords: Annotated[str | None, typer.Option("--keywords", help="Keywords")] = None,
    category: Annotated[str | None, typer.Option("--category", help="Category")] = None,
    last_modified_by: Annotated[
        str | None, typer.Option("--last-modified-by", help="Last modified by")
    ] = None,
    created: Annotated[
        str | None,
        typer.Option("--created", help="Created date, local 'YYYY-MM-DD HH:MM:SS'"),
    ] = None,
    modified: Annotated[
        str | None,
        typer.Option("--modified", help="Modified date, local 'YYYY-MM-DD HH:MM:SS'"),
    ] = None,
    offset: Annotated[
        str | None,
        typer.Option("--offset", help="UTC offset of entered dates, -12 to +14"),
    ] = None,
    total_time: Annotated[
        str | None, typer.Option("--total-time", help="Total editing time in minutes")
    ] = None,
    from_file: Annotated[
        Path | None, typer.Option("--from-file", "-f", help="YAML/JSON file of updates")
    ] = None,
    output: Annotated[Path | None, typer.Option("--output", "-o", help="Output file path")] = None,
    overwrite: Annotated[
        bool, typer.Option("--overwrite", help="Overwrite the original file")
    ] = False,
    output_dir: Annotated[
        Path | None, typer.Option("--output-dir", help="Directory for the new file")
    ] = None,
    convert_doc: Annotated[
        bool, typer.Option("--convert-doc", help="Convert a legacy .doc file first")
    ] = False,
) -> None:
    """Change metadata fields and save the document."""
    if output and overwrite:
        typer.echo("Error: Cannot specify both --output and --overwrite", err=True)
        raise typer.Exit(1)

    settings = _settings(ctx)
    flags: dict[str, Any] = {
        "title": title,
        "subject": subject,
        "creator": creator,
        "description": description,
        "keywords": keywords,
        "category": category,
        "lastModifiedBy": last_modified_by,
        "created": created,
        "modified": modified,
        "totalTime": total_time,
    }

    try:
        utc_offset = settings.utc_offset if offset is None else parse_offset(offset)
        updates: dict[str, Any] = {}
        if from_file:
            updates.update(load_updates(from_file, utc_offset))
        updates.update(
            coerce_updates({k: v for k, v in flags.items() if v is not None}, utc_offset)
        )
        if not updates:
            typer.echo("Error: No metadata fields given", err=True)
            raise typer.Exit(1)

        path, format = _resolve_document(file, convert_doc, settings)
        if format not in WRITABLE_FORMATS:
            raise UnsupportedFormatError(format, "write")
        if overwrite:
            output_path = path
        else:
            output_path = output or default_output_path(path, output_dir or settings.output_dir)

        result = write_meta(path, format, updates, output_path)
    except typer.Exit:
        raise
    except Exception as e:
        _fail(e)

    for outcome in result.outcomes:
        if outcome.accepted:
            typer.echo(f"  {outcome.key}: {format_meta_value(outcome.key, outcome.value)}")
        else:
            typer.echo(f"  {outcome.key}: skipped ({outcome.reason})", err=True)

    if overwrite:
        typer.echo(f"Original file updated: {result.output_path}")
    else:
        typer.echo(f"New file created: {result.output_path}")


@app.command()
def convert(
    ctx: typer.Context,
    file: Annotated[Path, typer.Argument(help="Path to the legacy .doc file")],
) -> None:
    """Convert a legacy .doc file to .docx with LibreOffice."""
    try:
        converted = convert_doc_to_docx(file, _settings(ctx).soffice_path)
    except Exception as e:
        _fail(e)
    typer.echo(f"Converted {file} to {converted}")


if __name__ == "__main__":
    app()
