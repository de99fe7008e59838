#!/usr/bin/env python3
"""
CI gate for cookbook error-code completeness.

Checks:
  1) every code in polkadot_cookbook.error_codes has a well-formed CODE_DOCS entry.
  2) No undocumented codes are referenced in package or test sources.
  3) No documented codes are left unused in package sources.
"""

from __future__ import annotations

import re
import sys
from pathlib import Path

from polkadot_cookbook.error_codes import ALL_CODES, CODE_DOCS


CODES_REL = Path("sdk/cookbook-py/src/polkadot_cookbook/error_codes.py")

SCAN_ROOTS = [
    Path("sdk/cookbook-py/src"),
    Path("sdk/cookbook-py/tests"),
]

CODE_RE = re.compile(r"\bCOOKBOOK_[EW]_[A-Z0-9_]+\b")


def _repo_root() -> Path:
    return Path(__file__).resolve().parents[1]


def _iter_py_files(root: Path) -> list[Path]:
    if not root.exists():
        return []
    return sorted(p for p in root.rglob("*.py") if p.is_file())


def _check_docs() -> list[str]:
    errors: list[str] = []
    if list(ALL_CODES) != sorted(ALL_CODES):
        errors.append("ALL_CODES must be sorted lexicographically")
    if len(set(ALL_CODES)) != len(ALL_CODES):
        errors.append("ALL_CODES contains duplicates")

    for code in ALL_CODES:
        doc = CODE_DOCS.get(code)
        if not isinstance(doc, dict):
            errors.append(f"{code}: missing CODE_DOCS entry")
            continue
        if doc.get("severity") not in ("error", "warn"):
            errors.append(f"{code}: severity must be 'error' or 'warn' (got {doc.get('severity')!r})")
        summary = doc.get("summary")
        if not isinstance(summary, str) or not summary.strip():
            errors.append(f"{code}: summary must be non-empty")
        if not isinstance(doc.get("retryable"), bool):
            errors.append(f"{code}: retryable must be boolean")
        hints = doc.get("hints")
        if not isinstance(hints, list) or not hints or any(not isinstance(x, str) for x in hints):
            errors.append(f"{code}: hints must be a non-empty array of strings")

    stale = sorted(set(CODE_DOCS) - set(ALL_CODES))
    for code in stale:
        errors.append(f"{code}: documented but missing from ALL_CODES")
    return errors


def _scan_used_codes(root: Path, *, include_tests: bool) -> set[str]:
    exclude = (root / CODES_REL).resolve()
    used: set[str] = set()
    for rel_root in SCAN_ROOTS:
        if not include_tests and rel_root.name == "tests":
            continue
        for path in _iter_py_files(root / rel_root):
            if path.resolve() == exclude:
                continue
            used.update(m.group(0) for m in CODE_RE.finditer(path.read_text(encoding="utf-8")))
    return used


def main(argv: list[str]) -> int:
    if argv != ["--check"]:
        print("usage: check_error_codes.py --check", file=sys.stderr)
        return 2

    root = _repo_root()
    errors = _check_docs()
    for msg in errors:
        print(f"ERROR: {msg}", file=sys.stderr)
    if errors:
        return 1

    documented = set(ALL_CODES)
    undocumented = sorted(_scan_used_codes(root, include_tests=True) - documented)
    if undocumented:
        for code in undocumented:
            print(f"ERROR: undocumented error code referenced in sources: {code}", file=sys.stderr)
        print(f"ERROR: add it to {CODES_REL}", file=sys.stderr)
        return 1

    unused = sorted(documented - _scan_used_codes(root, include_tests=False))
    if unused:
        for code in unused:
            print(f"ERROR: error code is unused in package sources: {code}", file=sys.stderr)
        print("ERROR: remove stale codes or use them in package logic", file=sys.stderr)
        return 1

    print("ok: cookbook error codes are documented and in use")
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
