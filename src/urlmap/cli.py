#!/usr/bin/env python3
# src/urlmap/cli.py


from __future__ import annotations

import sys
from pathlib import Path

import typer

from .defaults import default_table
from .enums import DuplicatePolicy, ListFormat, TableFormat
from .loader import SUFFIX_FORMATS, TableSource, export_table, format_for_path, open_table, render_table
from .table import NamespaceURLTable
from .utils import would_change

app = typer.Typer(
    name="urlmap",
    help="Map documentation namespaces to the base URLs their API docs live under.",
    add_completion=False,
)


def _verbosity_callback(value: int):
    return max(0, min(value, 3))


TABLE_OPTION = typer.Option(None, "--table", help="Table file (.json, .yaml, .yml, .js); defaults to the built-in table")
ON_DUPLICATE_OPTION = typer.Option(
    DuplicatePolicy.reject,
    "--on-duplicate",
    help="reject: fail on repeated namespaces (default); first: keep the first entry and warn",
    case_sensitive=False,
)
VERBOSE_OPTION = typer.Option(0, "--verbose", "-v", count=True, callback=_verbosity_callback)


def _load(table: Path | None, on_duplicate: DuplicatePolicy, verbose: int) -> NamespaceURLTable:
    source = TableSource(path=table, on_duplicate=on_duplicate, verbose=verbose)
    try:
        return open_table(source)
    except (ValueError, OSError) as e:
        print(f"❌ {e}")
        raise typer.Exit(1) from e


@app.command()
def lookup(
    namespace: str = typer.Argument(..., help="Namespace to look up (case-sensitive)"),
    table: Path | None = TABLE_OPTION,
    on_duplicate: DuplicatePolicy = ON_DUPLICATE_OPTION,
    verbose: int = VERBOSE_OPTION,
) -> None:
    url = _load(table, on_duplicate, verbose).lookup(namespace)
    if url is None:
        typer.secho(f"Namespace not found: {namespace}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    print(url)


@app.command("list")
def list_entries(
    table: Path | None = TABLE_OPTION,
    on_duplicate: DuplicatePolicy = ON_DUPLICATE_OPTION,
    fmt: ListFormat = typer.Option(ListFormat.text, "--format", help="text|json|yaml|js", case_sensitive=False),
    verbose: int = VERBOSE_OPTION,
) -> None:
    loaded = _load(table, on_duplicate, verbose)

    if fmt != ListFormat.text:
        sys.stdout.write(render_table(loaded, TableFormat(fmt.value)))
        return

    width = max((len(ns) for ns in loaded.namespaces()), default=0)
    for namespace, base_url in loaded.all_entries():
        print(f"{namespace:<{width}}  {base_url}")


@app.command()
def resolve(
    namespace: str = typer.Argument(..., help="Namespace owning the page"),
    path: str = typer.Argument(..., help="Page path relative to the namespace base URL, e.g. class.File.html"),
    table: Path | None = TABLE_OPTION,
    on_duplicate: DuplicatePolicy = ON_DUPLICATE_OPTION,
    verbose: int = VERBOSE_OPTION,
) -> None:
    loaded = _load(table, on_duplicate, verbose)
    try:
        url = loaded.resolve(namespace, path)
    except ValueError as e:
        print(f"❌ {e}")
        raise typer.Exit(1) from e

    if url is None:
        typer.secho(f"Namespace not found: {namespace}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)
    print(url)


@app.command()
def validate(
    table: Path = typer.Option(..., "--table", exists=True, dir_okay=False, help="Table file to validate"),
    on_duplicate: DuplicatePolicy = ON_DUPLICATE_OPTION,
    verbose: int = VERBOSE_OPTION,
) -> None:
    loaded = _load(table, on_duplicate, verbose)

    if verbose >= 1:
        for namespace, base_url in loaded.all_entries():
            print(f"[validate] {namespace} -> {base_url}")

    print(f"✅ Validated {len(loaded)} entries in {table}")


@app.command()
def export(
    out: Path = typer.Option(..., "--out", help="Destination file"),
    table: Path | None = TABLE_OPTION,
    on_duplicate: DuplicatePolicy = ON_DUPLICATE_OPTION,
    fmt: TableFormat | None = typer.Option(
        None, "--format", help="json|yaml|js (default: from the --out suffix)", case_sensitive=False
    ),
    check: bool = typer.Option(False, "--check", help="Exit 1 if the file would change, without writing"),
    verbose: int = VERBOSE_OPTION,
) -> None:
    loaded = _load(table, on_duplicate, verbose)

    try:
        fmt = fmt or format_for_path(out)
    except ValueError as e:
        print(f"❌ {e}")
        raise typer.Exit(1) from e

    if check:
        if would_change(out, render_table(loaded, fmt)):
            print(f"{out} is out of date")
            raise typer.Exit(1)
        print(f"{out} is up to date")
        return

    if export_table(loaded, out, fmt):
        print(f"[OK] Wrote {len(loaded)} entries to {out}")
    else:
        print(f"{out} unchanged")


@app.command()
def diagnose() -> None:
    print("urlmap Environment Check\n")

    embedded = default_table()
    print(f"Embedded table: {len(embedded)} entries ({', '.join(embedded.namespaces())})")
    formats = ", ".join(f"{suffix} ({fmt.value})" for suffix, fmt in SUFFIX_FORMATS.items())
    print(f"Table formats:  {formats}")

    print("\nLibraries")
    for module, name in (("yaml", "PyYAML"), ("pydantic", "Pydantic"), ("typer", "Typer")):
        try:
            version = getattr(__import__(module), "__version__", "unknown")
        except ImportError:
            version = "[MISSING]"
        print(f"  {name}: {version}")
    print(f"\nPython: {sys.version.split()[0]}")


if __name__ == "__main__":
    app()
