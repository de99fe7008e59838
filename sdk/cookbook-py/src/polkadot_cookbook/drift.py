"""Detect upstream changes to the polkadot-docs pages that cookbook guides test.

Each tracked README records the upstream page in ``source_github`` and the
last verified upstream commit in ``docs_commit``. The checker is read-only:
it reports drift, and a maintainer bumps ``docs_commit`` after re-verifying
the guide.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Iterable, Protocol

from .errors import CookbookError
from .frontmatter import parse_frontmatter
from .github import DEFAULT_BRANCH, DOCS_REPO, compare_url
from .types import (
    Changed,
    DriftEntry,
    DriftReport,
    DriftStatus,
    TrackedDocument,
    Unknown,
    UpToDate,
)


BLOB_MARKER = f"/blob/{DEFAULT_BRANCH}/"
DOCS_DIR = "polkadot-docs"
README_NAME = "README.md"
SKIP_DIRS = frozenset({"node_modules"})


class CommitSource(Protocol):
    def latest_commit(self, repo: str, path: str, *, branch: str = ...) -> str | None: ...


def upstream_path(source_github: str) -> str:
    idx = source_github.rfind(BLOB_MARKER)
    if idx < 0:
        return source_github
    return source_github[idx + len(BLOB_MARKER):]


def check_document(doc: TrackedDocument, client: CommitSource, *, repo: str = DOCS_REPO) -> DriftStatus:
    path = upstream_path(doc.source_github)
    label = doc.test_path or doc.title
    try:
        latest = client.latest_commit(repo, path, branch=DEFAULT_BRANCH)
    except Exception as exc:  # noqa: BLE001
        print(f"WARN {label}: could not fetch latest commit for {path}: {exc}", file=sys.stderr)
        return Unknown(str(exc))
    if not latest:
        print(f"WARN {label}: could not fetch latest commit for {path}", file=sys.stderr)
        return Unknown("no commits returned")

    print(f"CHECK {doc.title}: known={doc.docs_commit} latest={latest}")
    if latest == doc.docs_commit:
        print("  -> Up to date")
        return UpToDate(latest)
    print("  -> CHANGED")
    return Changed(latest)


def check_documents(
    docs: Iterable[TrackedDocument],
    client: CommitSource,
    *,
    repo: str = DOCS_REPO,
) -> DriftReport:
    report = DriftReport()
    for doc in docs:
        status = check_document(doc, client, repo=repo)
        report.checked += 1
        if isinstance(status, Unknown):
            report.unknown += 1
        elif isinstance(status, Changed):
            report.entries.append(
                DriftEntry(
                    title=doc.title,
                    old_commit=doc.docs_commit,
                    new_commit=status.latest_commit,
                    test_path=str(doc.test_path) if doc.test_path is not None else "",
                    doc_path=upstream_path(doc.source_github),
                )
            )
    return report


def render_details(report: DriftReport, *, repo: str = DOCS_REPO) -> str:
    lines: list[str] = []
    for entry in report.entries:
        link = compare_url(repo, entry.old_commit, entry.new_commit)
        lines.append(f"- **{entry.title}**: [view diff]({link})")
        lines.append(f"  - Test: `{entry.test_path}`")
        lines.append(f"  - Doc: `{entry.doc_path}`")
    return "\n".join(lines)


def _iter_readmes(docs_root: Path) -> Iterable[Path]:
    for path in sorted(docs_root.rglob(README_NAME)):
        if SKIP_DIRS.intersection(path.relative_to(docs_root).parts):
            continue
        if path.is_file():
            yield path


def discover_documents(root: Path, *, docs_dir: str = DOCS_DIR) -> list[TrackedDocument]:
    """Tracked guides under ``root/docs_dir``.

    READMEs without ``source_github`` are not tracked. Those without
    ``docs_commit`` are reported as SKIP and left out, as are READMEs whose
    frontmatter cannot be parsed.
    """
    docs_root = root / docs_dir
    if not docs_root.is_dir():
        return []

    out: list[TrackedDocument] = []
    for readme in _iter_readmes(docs_root):
        rel = readme.relative_to(root)
        try:
            text = readme.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            print(f"WARN {rel}: cannot read: {exc}", file=sys.stderr)
            continue
        try:
            meta = parse_frontmatter(text, source=str(rel))
        except CookbookError as exc:
            print(f"WARN {rel}: {exc}", file=sys.stderr)
            continue
        if not meta:
            continue
        source = meta.get("source_github")
        if not source:
            continue
        commit = meta.get("docs_commit")
        if not commit:
            print(f"SKIP {rel}: no docs_commit field")
            continue
        out.append(
            TrackedDocument(
                title=meta.get("title") or "",
                source_github=source,
                docs_commit=commit,
                test_path=rel,
            )
        )
    return out
