"""Semver ordering utilities."""

from __future__ import annotations

from typing import Iterable

from packaging.version import Version, InvalidVersion

from catalog_importer.models.chart import ChartIndexEntry


def parse_version(v: str) -> Version | None:
    """Parse a version string, returning None on failure."""
    try:
        return Version(v)
    except InvalidVersion:
        # Try stripping leading 'v'
        if v.startswith("v"):
            try:
                return Version(v[1:])
            except InvalidVersion:
                pass
    return None


def sort_newest_first(entries: Iterable[ChartIndexEntry]) -> list[ChartIndexEntry]:
    """Order chart entries by descending version.

    Unparseable versions go last, keeping their relative index order.
    """
    parsed = [(parse_version(e.version), e) for e in entries]
    valid = [pair for pair in parsed if pair[0] is not None]
    invalid = [e for v, e in parsed if v is None]
    valid.sort(key=lambda pair: pair[0], reverse=True)
    return [e for _, e in valid] + invalid
