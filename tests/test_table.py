# tests/test_table.py

import pytest
from pydantic import ValidationError

from urlmap.enums import DuplicatePolicy
from urlmap.table import DuplicateNamespaceError, Entry, NamespaceURLTable

PAIRS = [
    ("GLib", "https://docs.gtk.org/glib/"),
    ("Gio", "https://docs.gtk.org/gio/"),
    ("GObject", "https://docs.gtk.org/gobject/"),
    ("Pango", "https://docs.gtk.org/Pango/"),
    ("Gtk", "https://docs.gtk.org/gtk4/"),
]


@pytest.fixture
def table():
    return NamespaceURLTable(PAIRS)


class TestLookup:
    def test_every_entry_round_trips(self, table):
        for namespace, base_url in PAIRS:
            assert table.lookup(namespace) == base_url

    def test_unknown_namespace_is_none(self, table):
        assert table.lookup("DoesNotExist") is None
        assert table.lookup("") is None

    def test_lookup_is_case_sensitive(self, table):
        assert table.lookup("glib") is None
        assert table.lookup("GIO") is None

    def test_empty_table(self):
        empty = NamespaceURLTable()
        assert len(empty) == 0
        assert empty.lookup("GLib") is None
        assert empty.all_entries() == ()


class TestAllEntries:
    def test_definition_order(self, table):
        assert table.all_entries() == tuple(PAIRS)

    def test_repeatable(self, table):
        first = table.all_entries()
        second = table.all_entries()
        assert first == second
        assert list(first) == list(second)

    def test_base_urls_end_with_slash(self, table):
        assert all(url.endswith("/") for _, url in table.all_entries())

    def test_container_protocol(self, table):
        assert len(table) == len(PAIRS)
        assert "Gio" in table
        assert "Gdk" not in table
        assert [e.namespace for e in table] == [ns for ns, _ in PAIRS]
        assert table.namespaces() == [ns for ns, _ in PAIRS]

    def test_equality(self, table):
        assert table == NamespaceURLTable(PAIRS)
        assert table != NamespaceURLTable(PAIRS[:2])
        assert hash(table) == hash(NamespaceURLTable(PAIRS))

    def test_from_entries(self):
        entries = [Entry(namespace=ns, base_url=url) for ns, url in PAIRS]
        assert NamespaceURLTable.from_entries(entries) == NamespaceURLTable(PAIRS)


class TestEntryValidation:
    def test_missing_trailing_slash(self):
        with pytest.raises(ValueError, match="must end with '/'"):
            NamespaceURLTable([("GLib", "https://docs.gtk.org/glib")])

    @pytest.mark.parametrize("url", ["", "docs.gtk.org/glib/", "/glib/", "https:///glib/"])
    def test_not_absolute(self, url):
        with pytest.raises(ValueError, match="absolute URL"):
            Entry(namespace="GLib", base_url=url)

    def test_empty_namespace(self):
        with pytest.raises(ValueError, match="non-empty"):
            Entry(namespace="", base_url="https://docs.gtk.org/glib/")

    def test_whitespace_namespace(self):
        with pytest.raises(ValueError, match="whitespace"):
            Entry(namespace=" GLib", base_url="https://docs.gtk.org/glib/")

    def test_entry_is_frozen(self):
        entry = Entry(namespace="GLib", base_url="https://docs.gtk.org/glib/")
        with pytest.raises(ValidationError):
            entry.base_url = "https://example.com/"

    def test_wrong_pair_arity(self):
        with pytest.raises(ValueError):
            NamespaceURLTable([("GLib", "https://docs.gtk.org/glib/", "extra")])


class TestDuplicates:
    DUPES = [
        ("GLib", "https://docs.gtk.org/glib/"),
        ("Gio", "https://docs.gtk.org/gio/"),
        ("GLib", "https://example.com/glib/"),
    ]

    def test_rejected_by_default(self):
        with pytest.raises(DuplicateNamespaceError, match="Duplicate namespace 'GLib' at entry 2") as exc_info:
            NamespaceURLTable(self.DUPES)

        assert exc_info.value.namespace == "GLib"
        assert exc_info.value.first_index == 0
        assert exc_info.value.index == 2
        assert isinstance(exc_info.value, ValueError)

    def test_first_match_wins(self):
        with pytest.warns(UserWarning, match="Ignoring duplicate namespace 'GLib'"):
            table = NamespaceURLTable(self.DUPES, on_duplicate=DuplicatePolicy.first)

        assert table.lookup("GLib") == "https://docs.gtk.org/glib/"
        assert table.all_entries() == tuple(self.DUPES[:2])


class TestResolve:
    def test_joins_relative_path(self, table):
        assert table.resolve("Gio", "class.File.html") == "https://docs.gtk.org/gio/class.File.html"
        assert table.resolve("GLib", "func.idle_add.html#args") == "https://docs.gtk.org/glib/func.idle_add.html#args"

    def test_empty_path_is_base_url(self, table):
        assert table.resolve("GObject", "") == "https://docs.gtk.org/gobject/"

    def test_unknown_namespace(self, table):
        assert table.resolve("Nonexistent", "index.html") is None

    @pytest.mark.parametrize("path", ["/glib/index.html", "https://example.com/x.html", "//example.com/x.html"])
    def test_rejects_non_relative(self, table, path):
        with pytest.raises(ValueError, match="must be relative"):
            table.resolve("GLib", path)

    def test_rejects_escaping_base(self, table):
        with pytest.raises(ValueError, match="escapes base URL"):
            table.resolve("Gio", "../gtk4/class.Widget.html")

    @pytest.mark.parametrize(
        "path",
        [
            "%2e%2e/gtk4/class.Widget.html",
            "%2E%2E/gtk4/class.Widget.html",
            "..\\gtk4\\class.Widget.html",
            "classes\\..\\..\\gtk4\\index.html",
            "./class.File.html",
            "%2e/class.File.html",
        ],
    )
    def test_rejects_encoded_dot_segments(self, table, path):
        with pytest.raises(ValueError, match="escapes base URL"):
            table.resolve("Gio", path)

    def test_rejects_encoded_host(self, table):
        with pytest.raises(ValueError, match="must be relative"):
            table.resolve("Gio", "%2F%2Fexample.com/x.html")

    def test_backslash_separators_are_normalized(self, table):
        assert table.resolve("Gio", "iface\\File.html") == "https://docs.gtk.org/gio/iface/File.html"

    def test_dots_inside_names_are_allowed(self, table):
        assert table.resolve("Gio", "method.File..copy.html") == "https://docs.gtk.org/gio/method.File..copy.html"
