from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from jsonschema import Draft202012Validator
from referencing import Registry, Resource
from referencing.jsonschema import DRAFT202012

from .error_codes import (
    COOKBOOK_E_VERSIONS_IO,
    COOKBOOK_E_VERSIONS_NOT_SCALAR,
    COOKBOOK_E_VERSIONS_SCHEMA,
    COOKBOOK_E_YAML_PARSE,
)
from .errors import CookbookError, ParseError
from .types import VersionTable


VERSIONS_FILE = "versions.yml"

SCHEMA_BASE = "https://polkadot-cookbook.dev/schemas/"
VERSION_SET_SCHEMA_ID = SCHEMA_BASE + "version-set.schema.json"
GLOBAL_VERSIONS_SCHEMA_ID = SCHEMA_BASE + "versions.schema.json"
RECIPE_VERSIONS_SCHEMA_ID = SCHEMA_BASE + "recipe-versions.schema.json"

VERSION_SET_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": VERSION_SET_SCHEMA_ID,
    "title": "Version set",
    "type": "object",
    "propertyNames": {"pattern": "^[A-Za-z0-9_.-]+$"},
    "additionalProperties": {"type": ["string", "null"]},
}

GLOBAL_VERSIONS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": GLOBAL_VERSIONS_SCHEMA_ID,
    "title": "Global versions.yml",
    "type": "object",
    "required": ["versions"],
    "properties": {
        "versions": {"$ref": "version-set.schema.json"},
        "metadata": {
            "type": "object",
            "properties": {"schema_version": {"type": "string"}},
        },
    },
}

RECIPE_VERSIONS_SCHEMA: dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": RECIPE_VERSIONS_SCHEMA_ID,
    "title": "Recipe versions.yml",
    "anyOf": [
        {"$ref": "versions.schema.json"},
        {"$ref": "version-set.schema.json"},
    ],
}


def _build_registry() -> Registry:
    reg = Registry()
    for schema in (VERSION_SET_SCHEMA, GLOBAL_VERSIONS_SCHEMA, RECIPE_VERSIONS_SCHEMA):
        reg = reg.with_resource(
            schema["$id"],
            Resource.from_contents(schema, default_specification=DRAFT202012),
        )
    return reg


REGISTRY = _build_registry()


class _VersionYamlLoader(yaml.SafeLoader):
    pass


# Version pins such as `1.90` must keep their text; only bool/null resolve implicitly.
_VersionYamlLoader.yaml_implicit_resolvers = {
    first: [
        (tag, regexp)
        for tag, regexp in resolvers
        if tag not in ("tag:yaml.org,2002:int", "tag:yaml.org,2002:float", "tag:yaml.org,2002:timestamp")
    ]
    for first, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def parse_yaml(text: str, *, source: str = "<string>") -> Any:
    try:
        return yaml.load(text, Loader=_VersionYamlLoader)
    except yaml.YAMLError as exc:
        raise ParseError(
            COOKBOOK_E_YAML_PARSE,
            f"{source}: invalid YAML",
            data={"path": source, "reason": str(exc)},
        ) from exc


def read_yaml(path: Path) -> Any:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CookbookError(
            COOKBOOK_E_VERSIONS_IO,
            f"failed to read {path}",
            data={"path": str(path), "io_error": str(exc)},
        ) from exc
    except UnicodeDecodeError as exc:
        raise ParseError(
            COOKBOOK_E_YAML_PARSE,
            f"{path}: not valid UTF-8",
            data={"path": str(path), "reason": str(exc)},
        ) from exc
    return parse_yaml(text, source=str(path))


def validate(doc: Any, schema_id: str, *, source: str) -> None:
    schema = REGISTRY.contents(schema_id)
    validator = Draft202012Validator(schema, registry=REGISTRY)
    errors = sorted(validator.iter_errors(doc), key=lambda e: [str(p) for p in e.absolute_path])
    if errors:
        messages = []
        for err in errors:
            where = "/".join(str(p) for p in err.absolute_path) or "<root>"
            messages.append(f"{where}: {err.message}")
        raise ParseError(
            COOKBOOK_E_VERSIONS_SCHEMA,
            f"{source}: {messages[0]}",
            data={"path": source, "errors": messages},
        )


def _split_path(key_path: str) -> list[str]:
    return [seg for seg in key_path.strip().lstrip(".").split(".") if seg]


def lookup(doc: Any, key_path: str, *, source: str = "<document>") -> str | None:
    """Resolve a dotted path such as ``.zombienet.version`` to its scalar value.

    Returns ``None`` when any segment is missing or the leaf is null. An empty
    string stays an empty string. A path that ends on a mapping or a list
    raises :class:`ParseError`.
    """
    node = doc
    for seg in _split_path(key_path):
        if not isinstance(node, dict) or seg not in node:
            return None
        node = node[seg]
    if node is None:
        return None
    if isinstance(node, (dict, list)):
        raise ParseError(
            COOKBOOK_E_VERSIONS_NOT_SCALAR,
            f"{source}: {key_path} is not a scalar",
            data={"path": source, "key_path": key_path, "kind": type(node).__name__},
        )
    if isinstance(node, bool):
        return "true" if node else "false"
    return str(node)


def _table(mapping: dict[str, Any]) -> VersionTable:
    return {str(k): str(v) for k, v in mapping.items() if v is not None}


def table_from_document(doc: Any, *, source: str = "<document>", scope: str = "recipe") -> VersionTable:
    schema_id = GLOBAL_VERSIONS_SCHEMA_ID if scope == "global" else RECIPE_VERSIONS_SCHEMA_ID
    if doc is None and scope != "global":
        return {}
    validate(doc, schema_id, source=source)
    versions = doc.get("versions")
    if isinstance(versions, dict):
        return _table(versions)
    return _table(doc)


def load_global(path: Path) -> VersionTable:
    """Load the ``versions:`` block of a repository-root versions.yml."""
    return table_from_document(read_yaml(path), source=str(path), scope="global")


def load_recipe(path: Path) -> VersionTable:
    """Load a recipe-local versions.yml (flat, or with its own ``versions:`` block)."""
    return table_from_document(read_yaml(path), source=str(path), scope="recipe")


def load(path: Path) -> VersionTable:
    return load_recipe(path)


def load_block(path: Path, block_key: str) -> VersionTable | None:
    """Scalar entries of a top-level block of the root versions.yml.

    Returns ``None`` when the block is missing. Nested mappings inside the
    block are not version pins and are skipped.
    """
    doc = read_yaml(path)
    if not isinstance(doc, dict):
        return None
    block = doc.get(block_key)
    if not isinstance(block, dict):
        return None
    return {
        str(k): str(v)
        for k, v in block.items()
        if v is not None and not isinstance(v, (dict, list))
    }

