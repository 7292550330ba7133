# src/urlmap/loader.py
"""Load base URL tables from data files and render them back out.

Supported inputs, chosen by suffix:
  .json        JSON array of [namespace, base_url] pairs
  .yaml/.yml   YAML sequence of the same pairs
  .js          gi-docgen ``urlmap.js`` (``baseURLs = [ ... ]``)
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer
import yaml

from .defaults import default_table
from .enums import DuplicatePolicy, TableFormat
from .table import NamespaceURLTable
from .utils import write_if_changed

SUFFIX_FORMATS = {
    ".json": TableFormat.json,
    ".yaml": TableFormat.yaml,
    ".yml": TableFormat.yaml,
    ".js": TableFormat.js,
}

# String literals are matched first so the "//" inside URLs is never taken as a comment
_JS_TOKEN_RE = re.compile(
    r"""('(?:\\.|[^'\\\n])*'|"(?:\\.|[^"\\\n])*")|/\*.*?\*/|//[^\n]*""",
    re.DOTALL,
)


@dataclass(slots=True)
class TableSource:
    path: Path | None = None
    on_duplicate: DuplicatePolicy = DuplicatePolicy.reject
    verbose: int = 0


def open_table(source: TableSource) -> NamespaceURLTable:
    if source.path is None:
        if source.verbose:
            typer.echo("[load] using embedded default table")
        return default_table()
    table = load_table(source.path, source.on_duplicate)
    if source.verbose:
        typer.echo(f"[load] {len(table)} entries from {source.path}")
    return table


def format_for_path(path: Path) -> TableFormat:
    try:
        return SUFFIX_FORMATS[path.suffix.lower()]
    except KeyError:
        supported = ", ".join(sorted(SUFFIX_FORMATS))
        raise ValueError(f"Unsupported table file '{path.name}' (expected one of: {supported})") from None


def load_table(path: Path, on_duplicate: DuplicatePolicy = DuplicatePolicy.reject) -> NamespaceURLTable:
    path = Path(path)
    fmt = format_for_path(path)

    if not path.is_file():
        raise FileNotFoundError(f"Table file not found: {path}")

    text = path.read_text(encoding="utf-8")
    try:
        if fmt == TableFormat.json:
            data = json.loads(text)
        elif fmt == TableFormat.yaml:
            data = yaml.safe_load(text)
        else:
            data = _parse_js(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise ValueError(f"Could not parse {path.name}: {e}") from e

    return NamespaceURLTable(parse_pairs(data), on_duplicate=on_duplicate)


def _parse_js(text: str) -> Any:
    # An array of string arrays is valid YAML flow syntax, quotes and trailing commas included
    body = _JS_TOKEN_RE.sub(lambda m: m.group(1) or "", text).expandtabs(4)

    start = body.find("[")
    end = body.rfind("]")
    if start == -1 or end < start:
        raise ValueError("No array literal found in urlmap script")

    return yaml.safe_load(body[start : end + 1])


def parse_pairs(data: Any) -> list[tuple[str, str]]:
    if not isinstance(data, list):
        raise ValueError(f"Table must be a list of [namespace, base_url] pairs, got {type(data).__name__}")

    pairs: list[tuple[str, str]] = []
    for i, item in enumerate(data):
        if not isinstance(item, (list, tuple)) or len(item) != 2:
            raise ValueError(f"Entry {i} must be a [namespace, base_url] pair, got: {item!r}")
        namespace, base_url = item
        if not isinstance(namespace, str) or not isinstance(base_url, str):
            raise ValueError(f"Entry {i} must contain two strings, got: {item!r}")
        pairs.append((namespace, base_url))
    return pairs


def render_table(table: NamespaceURLTable, fmt: TableFormat) -> str:
    pairs = [list(pair) for pair in table.all_entries()]

    if fmt == TableFormat.json:
        return json.dumps(pairs, indent=2, ensure_ascii=False) + "\n"

    if fmt == TableFormat.yaml:
        return yaml.safe_dump(pairs, default_flow_style=None, allow_unicode=True)

    lines = ["baseURLs = ["]
    for namespace, base_url in pairs:
        lines.append(f"    [{json.dumps(namespace)}, {json.dumps(base_url)}],")
    lines.append("]")
    return "\n".join(lines) + "\n"


def export_table(table: NamespaceURLTable, path: Path, fmt: TableFormat | None = None) -> bool:
    """Write ``table`` to ``path``; returns False when the file already matched."""
    path = Path(path)
    content = render_table(table, fmt or format_for_path(path))
    return write_if_changed(path, content)
