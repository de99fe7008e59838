from __future__ import annotations

import os
import re
import tempfile
from pathlib import Path

import yaml

from .error_codes import COOKBOOK_E_VERSIONS_NOT_SCALAR, COOKBOOK_E_VERSIONS_WRITE
from .errors import CookbookError
from .loader import lookup, parse_yaml


KEY_RE = re.compile(r"""^\s*(?P<key>"[^"]*"|'[^']*'|[^\s:#'"][^:#]*?)\s*:(?:[ \t]|\r?\n|$)""")
LEAF_RE = re.compile(
    r"""^(?P<head>\s*(?:"[^"]*"|'[^']*'|[^\s:#'"][^:#]*?)\s*:[ \t]*)"""
    r"""(?P<value>"(?:[^"\\]|\\.)*"|'(?:[^']|'')*'|[^#\r\n]*?)"""
    r"""(?P<tail>[ \t]*(?:#.*)?)(?P<eol>\r?\n?)$"""
)
_NEEDS_QUOTES_RE = re.compile(r"""(?:^[\[\]{}&*!|>'"%@`,?-])|:\s|\s#|^\s|\s$""")
_YAML_KEYWORDS = frozenset({"true", "false", "yes", "no", "on", "off", "null", "~"})


def _indent(line: str) -> int:
    return len(line) - len(line.lstrip(" "))


def _is_content(line: str) -> bool:
    stripped = line.strip()
    return bool(stripped) and not stripped.startswith("#")


def _unquote(key: str) -> str:
    if len(key) >= 2 and key[0] == key[-1] and key[0] in ("'", '"'):
        return key[1:-1]
    return key


def _plain_stays_text(value: str) -> bool:
    # Other readers of versions.yml use the standard YAML 1.1 resolvers.
    try:
        return isinstance(yaml.safe_load(value), str)
    except yaml.YAMLError:
        return False


def _render_scalar(old: str, value: str) -> str:
    if old.startswith('"'):
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
    if old.startswith("'"):
        return "'" + value.replace("'", "''") + "'"
    if (
        not value
        or value.lower() in _YAML_KEYWORDS
        or _NEEDS_QUOTES_RE.search(value)
        or not _plain_stays_text(value)
    ):
        return '"' + value.replace("\\", "\\\\").replace('"', '\\"') + '"'
    return value


def _find_line(lines: list[str], segments: list[str], key_path: str) -> int:
    start = 0
    parent_indent = -1
    for depth, seg in enumerate(segments):
        child_indent: int | None = None
        found: int | None = None
        for idx in range(start, len(lines)):
            line = lines[idx]
            if not _is_content(line):
                continue
            indent = _indent(line)
            if indent <= parent_indent:
                break
            if child_indent is None:
                child_indent = indent
            if indent != child_indent:
                continue
            m = KEY_RE.match(line)
            if m and _unquote(m.group("key")) == seg:
                found = idx
                break
        if found is None or child_indent is None:
            raise CookbookError(
                COOKBOOK_E_VERSIONS_WRITE,
                f"cannot locate {key_path} in block-style YAML",
                data={"key_path": key_path, "missing_segment": seg, "depth": depth},
            )
        if depth == len(segments) - 1:
            return found
        start = found + 1
        parent_indent = child_indent
    raise CookbookError(
        COOKBOOK_E_VERSIONS_WRITE,
        "empty key path",
        data={"key_path": key_path},
    )


def set_scalar(text: str, key_path: str, value: str) -> str:
    """Replace one scalar in block-style YAML text, leaving every other byte alone.

    Comments, quoting style and key order are kept. The result is re-parsed and
    must yield ``value`` at ``key_path``.
    """
    segments = [seg for seg in key_path.strip().lstrip(".").split(".") if seg]
    lines = text.splitlines(keepends=True)
    idx = _find_line(lines, segments, key_path)

    m = LEAF_RE.match(lines[idx])
    if m is None or not m.group("value").strip():
        raise CookbookError(
            COOKBOOK_E_VERSIONS_NOT_SCALAR,
            f"{key_path} does not hold an inline scalar",
            data={"key_path": key_path, "line": idx + 1},
        )
    rendered = _render_scalar(m.group("value"), value)
    lines[idx] = f"{m.group('head')}{rendered}{m.group('tail')}{m.group('eol')}"
    out = "".join(lines)

    if lookup(parse_yaml(out), key_path) != value:
        raise CookbookError(
            COOKBOOK_E_VERSIONS_WRITE,
            f"rewriting {key_path} did not round-trip",
            data={"key_path": key_path, "line": idx + 1},
        )
    return out


def atomic_write(path: Path, text: str) -> None:
    """Write ``text`` to a temp file beside ``path`` and rename it into place."""
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=str(path.parent))
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="") as fh:
            fh.write(text)
        if path.exists():
            os.chmod(tmp_name, path.stat().st_mode & 0o7777)
        os.replace(tmp_name, path)
    except OSError as exc:
        try:
            os.unlink(tmp_name)
        except FileNotFoundError:
            pass
        raise CookbookError(
            COOKBOOK_E_VERSIONS_WRITE,
            f"failed to write {path}",
            data={"path": str(path), "io_error": str(exc)},
        ) from exc
