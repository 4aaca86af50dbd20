"""Chart repository index models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ChartIndexEntry:
    name: str
    version: str
    url: str
    deprecated: bool = False
    app_version: str = ""
    description: str = ""

    @property
    def ref(self) -> str:
        return f"{self.name}:{self.version}"

    @classmethod
    def from_dict(cls, d: dict, url: str) -> ChartIndexEntry:
        return cls(
            name=str(d.get("name", "") or ""),
            version=str(d.get("version", "")),
            url=url,
            deprecated=bool(d.get("deprecated", False)),
            app_version=str(d.get("appVersion", "") or ""),
            description=d.get("description", "") or "",
        )


# Package name -> entries, newest first
ChartIndex = dict[str, list[ChartIndexEntry]]
