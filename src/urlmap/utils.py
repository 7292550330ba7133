# src/urlmap/utils.py

from __future__ import annotations

from pathlib import Path


def write_if_changed(path: Path, content: str) -> bool:
    if path.exists():
        existing = path.read_text(encoding="utf-8")
        if existing == content:
            return False

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(content, encoding="utf-8")
    tmp.replace(path)
    return True


def would_change(path: Path, content: str) -> bool:
    if not path.exists():
        return True
    return path.read_text(encoding="utf-8") != content
