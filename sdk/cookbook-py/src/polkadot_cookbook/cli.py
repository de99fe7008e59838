from __future__ import annotations

import argparse
import json
import os
import sys
from pathlib import Path

from .drift import DOCS_DIR, check_documents, discover_documents, render_details
from .errors import CookbookError, error_hints
from .github import DOCS_REPO, GitHubClient
from .loader import VERSIONS_FILE
from .outputs import write_outputs
from .resolver import resolve_recipe_versions, tool_environment
from .sync import UPSTREAM_VARIABLES_URL, render_changelog, sync_versions


def _env_path(name: str) -> Path | None:
    value = os.environ.get(name, "").strip()
    return Path(value) if value else None


def _report_error(exc: CookbookError, prefix: str = "") -> None:
    print(f"ERROR: {prefix}{exc}", file=sys.stderr)
    for hint in error_hints(exc.code):
        print(f"hint: {hint}", file=sys.stderr)


def parse_sync_args(argv: list[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="sync_versions.py")
    ap.add_argument("--root", type=Path, default=Path.cwd(), help="Cookbook checkout (default: cwd)")
    ap.add_argument("--versions", type=Path, default=None, help=f"Local versions file (default: <root>/{VERSIONS_FILE})")
    ap.add_argument("--upstream-url", default=UPSTREAM_VARIABLES_URL)
    ap.add_argument("--upstream-file", type=Path, default=None, help="Read upstream variables.yml from disk")
    ap.add_argument("--github-output", type=Path, default=None, help="Defaults to $GITHUB_OUTPUT when omitted.")
    ap.add_argument("--timeout", type=float, default=30.0, help="HTTP timeout in seconds")
    ap.add_argument("--check", action="store_true", help="Report pending updates without writing")
    return ap.parse_args(argv)


def sync_versions_main(argv: list[str]) -> int:
    args = parse_sync_args(argv)
    local_path: Path = args.versions or (args.root / VERSIONS_FILE)

    try:
        if args.upstream_file is not None:
            upstream_text = args.upstream_file.read_text(encoding="utf-8")
        else:
            upstream_text = GitHubClient.from_env(timeout_s=args.timeout).fetch_text(args.upstream_url)
    except (OSError, UnicodeDecodeError) as exc:
        print(f"ERROR: cannot fetch upstream variables: {exc}", file=sys.stderr)
        return 2
    except CookbookError as exc:
        _report_error(exc, "cannot fetch upstream variables: ")
        return 2

    try:
        report = sync_versions(local_path, upstream_text, write=not args.check)
    except CookbookError as exc:
        _report_error(exc)
        return 2

    outputs: dict[str, str | int | bool] = {"has_updates": report.has_updates}
    if report.has_updates:
        outputs["changelog"] = render_changelog(report)
    write_outputs(outputs, args.github_output, multiline=["changelog"])

    print("")
    print(f"Done. has_updates={'true' if report.has_updates else 'false'}")
    if args.check and report.has_updates:
        print(f"ERROR: {local_path} is behind upstream (re-run without --check)", file=sys.stderr)
        return 1
    return 0


def parse_drift_args(argv: list[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="check_docs_drift.py")
    ap.add_argument("--root", type=Path, default=Path.cwd(), help="Cookbook checkout (default: cwd)")
    ap.add_argument("--docs-dir", default=DOCS_DIR, help="Directory holding tracked guides")
    ap.add_argument("--repo", default=DOCS_REPO, help="Upstream docs repository (owner/name)")
    ap.add_argument("--github-output", type=Path, default=None, help="Defaults to $GITHUB_OUTPUT when omitted.")
    ap.add_argument("--timeout", type=float, default=30.0, help="HTTP timeout in seconds")
    return ap.parse_args(argv)


def check_docs_drift_main(argv: list[str], client: GitHubClient | None = None) -> int:
    args = parse_drift_args(argv)
    docs = discover_documents(args.root, docs_dir=args.docs_dir)
    if client is None:
        client = GitHubClient.from_env(timeout_s=args.timeout)

    report = check_documents(docs, client, repo=args.repo)

    outputs: dict[str, str | int | bool] = {
        "has_drift": report.has_drift,
        "drift_count": report.drift_count,
    }
    if report.has_drift:
        outputs["drift_details"] = render_details(report, repo=args.repo)
    write_outputs(outputs, args.github_output, multiline=["drift_details"])

    print("")
    print(f"Done. {report.drift_count} tutorial(s) with upstream changes.")
    return 0


def parse_load_args(argv: list[str]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(prog="load_versions.py")
    ap.add_argument("--root", type=Path, default=Path.cwd(), help="Cookbook checkout (default: cwd)")
    ap.add_argument(
        "--tutorial-dir",
        type=Path,
        default=_env_path("TUTORIAL_DIR"),
        help="Tutorial directory (default: $TUTORIAL_DIR)",
    )
    ap.add_argument(
        "--tutorial-key",
        default=os.environ.get("TUTORIAL_KEY") or None,
        help="Override block in the root versions.yml (default: $TUTORIAL_KEY or the directory name)",
    )
    ap.add_argument("--recipe", default=None, help="Print every resolved version for recipes/<slug>")
    ap.add_argument("--json", action="store_true", help="Print JSON instead of KEY=value lines")
    return ap.parse_args(argv)


def load_versions_main(argv: list[str]) -> int:
    args = parse_load_args(argv)
    try:
        if args.recipe:
            resolved = resolve_recipe_versions(args.root, args.recipe)
            if args.json:
                doc = {
                    key: {"version": resolved.versions[key], "source": resolved.sources[key].value}
                    for key in resolved.dependencies()
                }
                print(json.dumps(doc, sort_keys=True, indent=2))
            else:
                for key in resolved.dependencies():
                    print(f"{key}: {resolved.versions[key]} ({resolved.sources[key].value})")
            return 0

        env = tool_environment(args.root, tutorial_dir=args.tutorial_dir, tutorial_key=args.tutorial_key)
    except CookbookError as exc:
        _report_error(exc)
        return 2

    if args.json:
        print(json.dumps(env, sort_keys=True, indent=2))
    else:
        for name, value in env.items():
            print(f"{name}={value}")
    return 0


def sync_versions_main_entry() -> int:
    return sync_versions_main(sys.argv[1:])


def check_docs_drift_main_entry() -> int:
    return check_docs_drift_main(sys.argv[1:])


def load_versions_main_entry() -> int:
    return load_versions_main(sys.argv[1:])
