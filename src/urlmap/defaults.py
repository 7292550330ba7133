# src/urlmap/defaults.py
"""Embedded base URL table for the GNOME platform namespaces."""

from __future__ import annotations

from .table import NamespaceURLTable

DEFAULT_BASE_URLS: list[list[str]] = [
    ["GLib", "https://docs.gtk.org/glib/"],
    ["Gio", "https://docs.gtk.org/gio/"],
    ["GObject", "https://docs.gtk.org/gobject/"],
]

# Built on first use and shared read-only for the rest of the process
_default_table: NamespaceURLTable | None = None


def default_table() -> NamespaceURLTable:
    global _default_table
    if _default_table is None:
        _default_table = NamespaceURLTable(DEFAULT_BASE_URLS)
    return _default_table


def lookup(namespace: str) -> str | None:
    return default_table().lookup(namespace)


def all_entries() -> tuple[tuple[str, str], ...]:
    return default_table().all_entries()
