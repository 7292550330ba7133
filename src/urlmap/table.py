# src/urlmap/table.py
"""Ordered namespace -> documentation base URL table.

Lookups of unknown namespaces are an expected outcome and return ``None``;
only malformed input raises.
"""

from __future__ import annotations

import warnings
from collections.abc import Iterable, Iterator, Sequence
from urllib.parse import unquote, urljoin, urlsplit

from pydantic import BaseModel, ConfigDict, field_validator

from .enums import DuplicatePolicy


class DuplicateNamespaceError(ValueError):
    """Raised when a namespace appears more than once under the reject policy."""

    def __init__(self, namespace: str, first_index: int, index: int):
        self.namespace = namespace
        self.first_index = first_index
        self.index = index
        super().__init__(f"Duplicate namespace '{namespace}' at entry {index} (first defined at entry {first_index})")


class Entry(BaseModel):
    model_config = ConfigDict(frozen=True)

    namespace: str
    base_url: str

    @field_validator("namespace")
    @classmethod
    def _check_namespace(cls, v: str) -> str:
        if not v:
            raise ValueError("namespace must be a non-empty string")
        if v != v.strip():
            raise ValueError(f"namespace must not have surrounding whitespace: {v!r}")
        return v

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, v: str) -> str:
        parts = urlsplit(v)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"base_url must be an absolute URL with scheme and host, got: {v!r}")
        if not v.endswith("/"):
            raise ValueError(f"base_url must end with '/', got: {v!r}")
        return v

    def as_pair(self) -> tuple[str, str]:
        return (self.namespace, self.base_url)


class NamespaceURLTable:
    """Immutable, ordered mapping of namespaces to base URLs.

    Built once from ``(namespace, base_url)`` pairs. Under
    ``DuplicatePolicy.reject`` a repeated namespace raises
    ``DuplicateNamespaceError``; under ``DuplicatePolicy.first`` the first
    entry wins and each ignored duplicate is reported with a ``UserWarning``.
    """

    __slots__ = ("_entries", "_index")

    def __init__(
        self,
        pairs: Iterable[Sequence[str]] = (),
        on_duplicate: DuplicatePolicy = DuplicatePolicy.reject,
    ):
        entries = [Entry(namespace=ns, base_url=url) for ns, url in pairs]
        self._build(entries, on_duplicate)

    @classmethod
    def from_entries(
        cls,
        entries: Iterable[Entry],
        on_duplicate: DuplicatePolicy = DuplicatePolicy.reject,
    ) -> NamespaceURLTable:
        table = cls.__new__(cls)
        table._build(list(entries), on_duplicate)
        return table

    def _build(self, entries: list[Entry], on_duplicate: DuplicatePolicy) -> None:
        kept: list[Entry] = []
        index: dict[str, str] = {}
        positions: dict[str, int] = {}

        for i, entry in enumerate(entries):
            if entry.namespace in index:
                if on_duplicate == DuplicatePolicy.reject:
                    raise DuplicateNamespaceError(entry.namespace, positions[entry.namespace], i)
                warnings.warn(
                    f"Ignoring duplicate namespace '{entry.namespace}' at entry {i} "
                    f"(keeping {index[entry.namespace]})",
                    UserWarning,
                    stacklevel=3,
                )
                continue
            index[entry.namespace] = entry.base_url
            positions[entry.namespace] = i
            kept.append(entry)

        self._entries: tuple[Entry, ...] = tuple(kept)
        self._index: dict[str, str] = index

    def lookup(self, namespace: str) -> str | None:
        return self._index.get(namespace)

    def all_entries(self) -> tuple[tuple[str, str], ...]:
        return tuple(entry.as_pair() for entry in self._entries)

    def namespaces(self) -> list[str]:
        return [entry.namespace for entry in self._entries]

    def resolve(self, namespace: str, path: str) -> str | None:
        """Join a relative page path onto the namespace's base URL.

        Returns None for an unknown namespace. Raises ValueError when
        ``path`` would leave the base URL (absolute path, scheme, dot
        segments, including percent-encoded or backslash-separated ones).
        """
        base_url = self.lookup(namespace)
        if base_url is None:
            return None

        # Browsers read "\" as "/" in http(s) URLs and decode %2e before resolving dot segments
        normalized = path.replace("\\", "/")
        decoded = unquote(normalized).replace("\\", "/")

        for candidate in (normalized, decoded):
            parts = urlsplit(candidate)
            if parts.scheme or parts.netloc or candidate.startswith("/"):
                raise ValueError(f"Link path must be relative to the namespace base URL, got: {path!r}")
            if any(segment in (".", "..") for segment in parts.path.split("/")):
                raise ValueError(f"Link path {path!r} escapes base URL {base_url}")

        url = urljoin(base_url, normalized)
        if not url.startswith(base_url):
            raise ValueError(f"Link path {path!r} escapes base URL {base_url}")
        return url

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, namespace: object) -> bool:
        return namespace in self._index

    def __iter__(self) -> Iterator[Entry]:
        return iter(self._entries)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NamespaceURLTable):
            return NotImplemented
        return self._entries == other._entries

    def __hash__(self) -> int:
        return hash(self._entries)

    def __repr__(self) -> str:
        return f"NamespaceURLTable({list(self.all_entries())!r})"
