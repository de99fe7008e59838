"""Pull newer dependency versions from polkadot-docs ``variables.yml`` into ``versions.yml``.

Only strictly newer upstream versions are applied; a local pin that is equal
to or ahead of upstream is left alone. Keys are never added or removed.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Sequence

from .github import DOCS_REPO, raw_url
from .loader import VERSIONS_FILE, lookup, parse_yaml, read_yaml
from .types import SyncReport, VersionMapping, VersionUpdate
from .version import is_newer
from .yaml_edit import atomic_write, set_scalar


UPSTREAM_VARIABLES_URL = raw_url(DOCS_REPO, "variables.yml")

DEFAULT_MAPPINGS: tuple[VersionMapping, ...] = (
    VersionMapping(
        "Polkadot SDK",
        ".polkadot_sdk.release_tag",
        ".dependencies.repositories.polkadot_sdk.version",
    ),
    VersionMapping(
        "Parachain Template",
        ".parachain_template.version",
        ".dependencies.repositories.polkadot_sdk_parachain_template.version",
    ),
    VersionMapping(
        "Polkadot Omni Node",
        ".parachain_template.crates.polkadot_omni_node.version",
        ".dependencies.crates.polkadot_omni_node.version",
    ),
    VersionMapping(
        "Chain Spec Builder",
        ".parachain_template.crates.chain_spec_builder.version",
        ".dependencies.repositories.polkadot_sdk_parachain_template.subdependencies.chain_spec_builder_version",
    ),
    VersionMapping(
        "Zombienet",
        ".zombienet.version",
        ".dependencies.repositories.zombienet.version",
    ),
)


def _show(value: str | None) -> str:
    return "null" if value is None else value


def plan_updates(
    local_doc: Any,
    upstream_doc: Any,
    mappings: Sequence[VersionMapping] = DEFAULT_MAPPINGS,
    *,
    local_source: str = VERSIONS_FILE,
    upstream_source: str = "variables.yml",
) -> SyncReport:
    report = SyncReport()
    for mapping in mappings:
        local_ver = lookup(local_doc, mapping.local_path, source=local_source)
        upstream_ver = lookup(upstream_doc, mapping.upstream_path, source=upstream_source)

        if local_ver is None or upstream_ver is None:
            print(f"SKIP {mapping.description}: local={_show(local_ver)} upstream={_show(upstream_ver)}")
            report.skipped.append(mapping.description)
            continue

        print(f"CHECK {mapping.description}: local={local_ver} upstream={upstream_ver}")
        if is_newer(local_ver, upstream_ver):
            print(f"  -> Updating {mapping.description}: {local_ver} -> {upstream_ver}")
            report.updates.append(
                VersionUpdate(
                    description=mapping.description,
                    local_path=mapping.local_path,
                    old=local_ver,
                    new=upstream_ver,
                )
            )
        else:
            print("  -> Up to date (or ahead)")
    return report


def apply_updates(text: str, updates: Sequence[VersionUpdate]) -> str:
    for update in updates:
        text = set_scalar(text, update.local_path, update.new)
    return text


def sync_versions(
    local_path: Path,
    upstream_text: str,
    mappings: Sequence[VersionMapping] = DEFAULT_MAPPINGS,
    *,
    write: bool = True,
) -> SyncReport:
    local_doc = read_yaml(local_path)
    upstream_doc = parse_yaml(upstream_text, source=UPSTREAM_VARIABLES_URL)
    report = plan_updates(
        local_doc,
        upstream_doc,
        mappings,
        local_source=str(local_path),
        upstream_source=UPSTREAM_VARIABLES_URL,
    )
    if report.has_updates and write:
        text = local_path.read_text(encoding="utf-8")
        atomic_write(local_path, apply_updates(text, report.updates))
    return report


def render_changelog(report: SyncReport) -> str:
    return "\n".join(f"- **{u.description}**: `{u.old}` -> `{u.new}`" for u in report.updates)
