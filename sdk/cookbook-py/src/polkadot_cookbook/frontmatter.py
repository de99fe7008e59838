from __future__ import annotations

from typing import Any

from jsonschema import Draft202012Validator

from .error_codes import COOKBOOK_E_FRONTMATTER_INVALID
from .errors import ParseError
from .loader import parse_yaml


DELIMITER = "---"

TRACKED_DOC_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "title": "Tracked guide frontmatter",
    "type": "object",
    "properties": {
        "title": {"type": "string"},
        "source_github": {"type": "string", "minLength": 1},
        "docs_commit": {"type": "string"},
    },
}

_VALIDATOR = Draft202012Validator(TRACKED_DOC_SCHEMA)


def split_frontmatter(text: str, *, source: str = "<string>") -> str | None:
    """YAML text between the leading ``---`` fences, or None when the file has no frontmatter."""
    body = text.lstrip()
    if not body.startswith(DELIMITER):
        return None
    rest = body[len(DELIMITER):]
    end = rest.find("\n" + DELIMITER)
    if end < 0:
        raise ParseError(
            COOKBOOK_E_FRONTMATTER_INVALID,
            f"{source}: frontmatter is not closed with ---",
            data={"path": source, "reason": "unclosed"},
        )
    return rest[:end]


def parse_frontmatter(text: str, *, source: str = "<string>") -> dict[str, Any] | None:
    raw = split_frontmatter(text, source=source)
    if raw is None:
        return None

    doc = parse_yaml(raw, source=source)
    if doc is None:
        return {}
    if not isinstance(doc, dict):
        raise ParseError(
            COOKBOOK_E_FRONTMATTER_INVALID,
            f"{source}: frontmatter must be a mapping",
            data={"path": source, "reason": type(doc).__name__},
        )

    err = next(iter(sorted(_VALIDATOR.iter_errors(doc), key=lambda e: [str(p) for p in e.path])), None)
    if err is not None:
        where = "/".join(str(p) for p in err.absolute_path) or "<root>"
        raise ParseError(
            COOKBOOK_E_FRONTMATTER_INVALID,
            f"{source}: {where}: {err.message}",
            data={"path": source, "reason": err.message},
        )
    return doc
