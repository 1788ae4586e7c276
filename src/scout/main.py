import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.markup import escape

from scout import __version__
from scout.exceptions import PartNotFoundError, ScoutError, StorageError
from scout.logging_config import logger, setup_logging
from scout.mcp.service_manager import get_service_manager
from scout.mcp.tools.errors import error_response

app = typer.Typer()
console = Console()

_state = {"human": False}


def _emit(payload: dict) -> None:
    typer.echo(json.dumps(payload, indent=2))


def _fail(exc: ScoutError) -> None:
    if _state["human"]:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
    else:
        _emit(error_response(exc))
    raise typer.Exit(code=1)


# Global CLI callback for flags that apply to all commands
@app.callback()
def global_options(
    human: bool = typer.Option(
        False,
        "--human",
        "-H",
        help="Enable human mode: pretty output with tables and colors",
    ),
):
    """
    Scout: structural find/replace and documentation checks for source files.

    Machine mode is DEFAULT (JSON on stdout, no console logging).
    Use --human/-H for pretty output.
    """
    _state["human"] = human
    if not human:
        setup_logging(suppress_console=True)


@app.command()
def version():
    """
    Prints the current version of Scout.
    """
    typer.echo(f"Scout v{__version__}")


@app.command()
def mcp():
    """
    Run the MCP server over stdio.
    """
    from scout.mcp import run_server

    logger.info("Starting Scout MCP server")
    run_server()


@app.command("find")
def find_cmd(
    file: Path = typer.Argument(..., help="Source file to search"),
    part_type: str = typer.Option(..., "--type", "-t", help="Part type (func, type, const, var, import, package)"),
    name: str = typer.Option(..., "--name", "-n", help="Part name; methods as ReceiverType.Name"),
    language: str = typer.Option("go", "--language", "-l", help="Language identifier"),
):
    """
    Locate a top-level construct and print its span and content.
    """
    try:
        info = get_service_manager().mutation.find_part(str(file), language, part_type, name)
        if not info.found:
            raise PartNotFoundError(part_type, name)
    except ScoutError as e:
        _fail(e)

    if _state["human"]:
        console.print(f"[green]{part_type} '{escape(name)}'[/green] lines {info.start_line}-{info.end_line} "
                      f"(bytes {info.start_offset}-{info.end_offset})")
        console.print(escape(info.content))
        return

    payload = info.model_dump()
    payload.update({"part_type": part_type, "part_name": name, "file_path": str(file)})
    _emit(payload)


@app.command("replace")
def replace_cmd(
    file: Path = typer.Argument(..., help="Source file to modify"),
    part_type: str = typer.Option(..., "--type", "-t", help="Part type (func, type, const, var, import, package)"),
    name: str = typer.Option(..., "--name", "-n", help="Part name; methods as ReceiverType.Name"),
    code: Optional[str] = typer.Option(None, "--code", "-c", help="Replacement content inline"),
    code_file: Optional[Path] = typer.Option(None, "--code-file", "-f", help="Path to file with replacement content"),
    language: str = typer.Option("go", "--language", "-l", help="Language identifier"),
):
    """
    Replace a top-level construct. The file is written only if it still parses.
    """
    if code is None and code_file is None:
        error_msg = "Must provide either --code or --code-file"
        if _state["human"]:
            console.print(f"[red]Error: {error_msg}[/red]")
        else:
            _emit({"status": "error", "error_type": "missing_argument", "message": error_msg})
        raise typer.Exit(code=1)

    if code_file is not None:
        try:
            code = code_file.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            _fail(StorageError(str(code_file), f"failed to read code file {code_file}: {e}"))

    try:
        result = get_service_manager().mutation.replace_part(str(file), language, part_type, name, code)
    except ScoutError as e:
        _fail(e)

    message = f"Successfully replaced {part_type} '{name}' in {file}"
    if _state["human"]:
        console.print(f"[green]{escape(message)}[/green]")
        return
    _emit({
        "success": True,
        "file_path": str(file),
        "language": language,
        "part_type": part_type,
        "part_name": name,
        "bytes_written": result.bytes_written,
        "message": message,
    })


@app.command("check-docs")
def check_docs_cmd(
    path: str = typer.Argument(".", help="File or directory; a trailing '...' means recursive"),
    recursive: bool = typer.Option(True, "--recursive/--no-recursive", help="Descend into subdirectories"),
    offset: int = typer.Option(0, "--offset", help="Skip this many highest-priority issues"),
    language: str = typer.Option("go", "--language", "-l", help="Language identifier"),
):
    """
    Report missing documentation, highest priority first.
    """
    manager = get_service_manager()
    try:
        scan = manager.scanner(language).scan(path, recursive=recursive)
    except ScoutError as e:
        _fail(e)

    report = manager.aggregator().build(
        path, scan.issues, base_path=scan.base_path, offset=offset, errors=scan.errors,
    )

    if not _state["human"]:
        _emit(report.to_payload())
        return

    table = Table(title=f"Documentation issues: {escape(path)}")
    table.add_column("File")
    table.add_column("Line", justify="right")
    table.add_column("Issue")
    table.add_column("Element")
    for group in report.issues_by_file:
        for issue in group.issues:
            table.add_row(escape(issue.file), str(issue.line), issue.issue, escape(issue.element))
    console.print(table)
    console.print(report.summary)
    if report.message:
        console.print(f"[yellow]{escape(report.message)}[/yellow]")
    for error in report.errors or []:
        console.print(f"[red]{escape(error.file)}: {escape(error.error)}[/red]")


@app.command("validate")
def validate_cmd(
    files: List[Path] = typer.Argument(..., help="Files to check"),
    language: Optional[str] = typer.Option(None, "--language", "-l", help="Override language detection"),
):
    """
    Check that files parse. Exits with code 1 if any file is invalid.
    """
    validator = get_service_manager().validator()
    results = [validator.validate_file(str(f), language) for f in files]
    invalid = [r for r in results if not r["valid"]]

    if _state["human"]:
        for r in results:
            status = "[green]valid[/green]" if r["valid"] else f"[red]invalid[/red] {escape(r.get('error', ''))}"
            console.print(f"{escape(r['file'])}: {status}")
    else:
        _emit({
            "results": results,
            "total_files": len(results),
            "valid_count": len(results) - len(invalid),
            "invalid_count": len(invalid),
            "overall_valid": not invalid,
        })

    if invalid:
        raise typer.Exit(code=1)


if __name__ == "__main__":
    app()
