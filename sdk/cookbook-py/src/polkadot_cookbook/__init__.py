from .drift import check_document, check_documents, discover_documents, upstream_path
from .errors import CookbookError, FetchError, MissingVersionError, ParseError
from .github import GitHubClient
from .loader import load, load_block, load_global, load_recipe, lookup
from .resolver import (
    load_global_versions,
    resolve,
    resolve_recipe_versions,
    resolve_versions,
    tool_environment,
)
from .sync import DEFAULT_MAPPINGS, plan_updates, sync_versions
from .types import (
    Changed,
    DriftEntry,
    DriftReport,
    DriftStatus,
    Opaque,
    ResolvedVersions,
    Semver,
    StableTag,
    SyncReport,
    TrackedDocument,
    Unknown,
    UpToDate,
    VersionFormat,
    VersionMapping,
    VersionSource,
    VersionTable,
    VersionUpdate,
)
from .version import compare_versions, is_newer, parse_version

__all__ = [
    "CookbookError",
    "FetchError",
    "MissingVersionError",
    "ParseError",
    "GitHubClient",
    "Changed",
    "DriftEntry",
    "DriftReport",
    "DriftStatus",
    "Opaque",
    "ResolvedVersions",
    "Semver",
    "StableTag",
    "SyncReport",
    "TrackedDocument",
    "Unknown",
    "UpToDate",
    "VersionFormat",
    "VersionMapping",
    "VersionSource",
    "VersionTable",
    "VersionUpdate",
    "DEFAULT_MAPPINGS",
    "check_document",
    "check_documents",
    "compare_versions",
    "discover_documents",
    "is_newer",
    "load",
    "load_block",
    "load_global",
    "load_global_versions",
    "load_recipe",
    "lookup",
    "parse_version",
    "plan_updates",
    "resolve",
    "resolve_recipe_versions",
    "resolve_versions",
    "sync_versions",
    "tool_environment",
    "upstream_path",
]
