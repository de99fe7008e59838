from __future__ import annotations

from typing import Final, Literal

COOKBOOK_E_FETCH_FAILED: Final[str] = "COOKBOOK_E_FETCH_FAILED"
COOKBOOK_E_FRONTMATTER_INVALID: Final[str] = "COOKBOOK_E_FRONTMATTER_INVALID"
COOKBOOK_E_VERSIONS_IO: Final[str] = "COOKBOOK_E_VERSIONS_IO"
COOKBOOK_E_VERSIONS_NOT_SCALAR: Final[str] = "COOKBOOK_E_VERSIONS_NOT_SCALAR"
COOKBOOK_E_VERSIONS_SCHEMA: Final[str] = "COOKBOOK_E_VERSIONS_SCHEMA"
COOKBOOK_E_VERSIONS_WRITE: Final[str] = "COOKBOOK_E_VERSIONS_WRITE"
COOKBOOK_E_VERSION_MISSING: Final[str] = "COOKBOOK_E_VERSION_MISSING"
COOKBOOK_E_YAML_PARSE: Final[str] = "COOKBOOK_E_YAML_PARSE"

ALL_CODES: Final[tuple[str, ...]] = (
    COOKBOOK_E_FETCH_FAILED,
    COOKBOOK_E_FRONTMATTER_INVALID,
    COOKBOOK_E_VERSIONS_IO,
    COOKBOOK_E_VERSIONS_NOT_SCALAR,
    COOKBOOK_E_VERSIONS_SCHEMA,
    COOKBOOK_E_VERSIONS_WRITE,
    COOKBOOK_E_VERSION_MISSING,
    COOKBOOK_E_YAML_PARSE,
)

CookbookErrorCode = Literal[
    "COOKBOOK_E_FETCH_FAILED",
    "COOKBOOK_E_FRONTMATTER_INVALID",
    "COOKBOOK_E_VERSIONS_IO",
    "COOKBOOK_E_VERSIONS_NOT_SCALAR",
    "COOKBOOK_E_VERSIONS_SCHEMA",
    "COOKBOOK_E_VERSIONS_WRITE",
    "COOKBOOK_E_VERSION_MISSING",
    "COOKBOOK_E_YAML_PARSE",
]

CODE_DOCS: Final[dict[str, dict[str, object]]] = {
    "COOKBOOK_E_FETCH_FAILED": {
        "severity": "error",
        "retryable": True,
        "summary": "Upstream request failed.",
        "data_fields": ["url", "reason"],
        "hints": ["Re-run the CI job; upstream failures are not retried automatically."],
    },
    "COOKBOOK_E_FRONTMATTER_INVALID": {
        "severity": "error",
        "retryable": False,
        "summary": "README frontmatter is missing or malformed.",
        "data_fields": ["path", "reason"],
        "hints": ["Frontmatter must open and close with `---` and hold a YAML mapping."],
    },
    "COOKBOOK_E_VERSION_MISSING": {
        "severity": "error",
        "retryable": False,
        "summary": "Version key is absent from both global and recipe tables.",
        "data_fields": ["key", "available"],
        "hints": ["Add the key under `versions:` in the root versions.yml."],
    },
    "COOKBOOK_E_VERSIONS_IO": {
        "severity": "error",
        "retryable": False,
        "summary": "Versions file could not be read.",
        "data_fields": ["path", "io_error"],
        "hints": ["Check that versions.yml exists at the repository root."],
    },
    "COOKBOOK_E_VERSIONS_NOT_SCALAR": {
        "severity": "error",
        "retryable": False,
        "summary": "Version path resolves to a mapping or list instead of a scalar.",
        "data_fields": ["path", "key_path", "kind"],
        "hints": ["Point the key path at a leaf value such as `.zombienet.version`."],
    },
    "COOKBOOK_E_VERSIONS_SCHEMA": {
        "severity": "error",
        "retryable": False,
        "summary": "Versions document does not match the expected shape.",
        "data_fields": ["path", "errors"],
        "hints": ["Version tables map string keys to scalar version strings."],
    },
    "COOKBOOK_E_VERSIONS_WRITE": {
        "severity": "error",
        "retryable": False,
        "summary": "Versions file could not be rewritten.",
        "data_fields": ["path", "io_error"],
        "hints": ["The file is replaced atomically; check directory permissions."],
    },
    "COOKBOOK_E_YAML_PARSE": {
        "severity": "error",
        "retryable": False,
        "summary": "Document is not valid YAML.",
        "data_fields": ["path", "reason"],
        "hints": ["Validate the file with a YAML linter."],
    },
}

__all__ = [
    "COOKBOOK_E_FETCH_FAILED",
    "COOKBOOK_E_FRONTMATTER_INVALID",
    "COOKBOOK_E_VERSION_MISSING",
    "COOKBOOK_E_VERSIONS_IO",
    "COOKBOOK_E_VERSIONS_NOT_SCALAR",
    "COOKBOOK_E_VERSIONS_SCHEMA",
    "COOKBOOK_E_VERSIONS_WRITE",
    "COOKBOOK_E_YAML_PARSE",
    "ALL_CODES",
    "CookbookErrorCode",
    "CODE_DOCS",
]
