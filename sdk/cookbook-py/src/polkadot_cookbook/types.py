from __future__ import annotations

import enum
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Union

from .error_codes import COOKBOOK_E_VERSION_MISSING
from .errors import MissingVersionError


VersionTable = Dict[str, str]


@dataclass(frozen=True)
class Semver:
    components: tuple[int, ...]

    def padded(self, width: int) -> tuple[int, ...]:
        return self.components + (0,) * (width - len(self.components))


@dataclass(frozen=True)
class StableTag:
    yymm: int
    patch: int

    def __str__(self) -> str:
        return f"polkadot-stable{self.yymm}-{self.patch}"


@dataclass(frozen=True)
class Opaque:
    text: str


VersionFormat = Union[Semver, StableTag, Opaque]


class VersionSource(str, enum.Enum):
    GLOBAL = "global"
    RECIPE = "recipe"


@dataclass
class ResolvedVersions:
    versions: VersionTable = field(default_factory=dict)
    sources: dict[str, VersionSource] = field(default_factory=dict)

    def get(self, key: str) -> str | None:
        return self.versions.get(key)

    def get_source(self, key: str) -> VersionSource | None:
        return self.sources.get(key)

    def contains(self, key: str) -> bool:
        return key in self.versions

    def require(self, key: str) -> str:
        value = self.versions.get(key)
        if value is None:
            raise MissingVersionError(
                COOKBOOK_E_VERSION_MISSING,
                f"no version for {key!r} in global or recipe tables",
                data={"key": key, "available": sorted(self.versions)},
            )
        return value

    def dependencies(self) -> list[str]:
        return sorted(self.versions)


@dataclass(frozen=True)
class TrackedDocument:
    title: str
    source_github: str
    docs_commit: str
    test_path: Path | None = None


@dataclass(frozen=True)
class UpToDate:
    commit: str


@dataclass(frozen=True)
class Changed:
    latest_commit: str


@dataclass(frozen=True)
class Unknown:
    reason: str


DriftStatus = Union[UpToDate, Changed, Unknown]


@dataclass(frozen=True)
class DriftEntry:
    title: str
    old_commit: str
    new_commit: str
    test_path: str
    doc_path: str


@dataclass
class DriftReport:
    entries: list[DriftEntry] = field(default_factory=list)
    checked: int = 0
    unknown: int = 0

    @property
    def has_drift(self) -> bool:
        return bool(self.entries)

    @property
    def drift_count(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class VersionMapping:
    description: str
    local_path: str
    upstream_path: str


@dataclass(frozen=True)
class VersionUpdate:
    description: str
    local_path: str
    old: str
    new: str


@dataclass
class SyncReport:
    updates: list[VersionUpdate] = field(default_factory=list)
    skipped: list[str] = field(default_factory=list)

    @property
    def has_updates(self) -> bool:
        return bool(self.updates)
