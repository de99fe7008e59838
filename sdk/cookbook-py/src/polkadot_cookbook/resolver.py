from __future__ import annotations

from pathlib import Path
from typing import Mapping

from .loader import VERSIONS_FILE, load, load_block, load_global
from .types import ResolvedVersions, VersionSource, VersionTable


RECIPES_DIR = "recipes"

# Environment variables exported to recipe test harnesses.
TOOL_ENV_KEYS: dict[str, str] = {
    "RUST_VERSION": "rust",
    "OMNI_NODE_VERSION": "polkadot_omni_node",
    "CHAIN_SPEC_BUILDER_VERSION": "chain_spec_builder",
}


def resolve(global_table: Mapping[str, str], override: Mapping[str, str] | None = None) -> ResolvedVersions:
    """Merge recipe overrides over the global table, tracking where each key came from.

    Keys present only in ``override`` are added. Neither input is mutated.
    """
    resolved = ResolvedVersions()
    for key, value in global_table.items():
        resolved.versions[key] = value
        resolved.sources[key] = VersionSource.GLOBAL
    if override:
        for key, value in override.items():
            resolved.versions[key] = value
            resolved.sources[key] = VersionSource.RECIPE
    return resolved


def _recipe_table(recipe_dir: Path | None) -> VersionTable | None:
    if recipe_dir is None:
        return None
    path = recipe_dir / VERSIONS_FILE
    if not path.is_file():
        return None
    return load(path)


def resolve_versions(repo_root: Path, recipe_dir: Path | None = None) -> ResolvedVersions:
    global_table = load_global(repo_root / VERSIONS_FILE)
    return resolve(global_table, _recipe_table(recipe_dir))


def resolve_recipe_versions(repo_root: Path, slug: str) -> ResolvedVersions:
    return resolve_versions(repo_root, repo_root / RECIPES_DIR / slug)


def load_global_versions(repo_root: Path) -> ResolvedVersions:
    return resolve_versions(repo_root, None)


def tutorial_key_for(tutorial_dir: Path) -> str:
    return tutorial_dir.name.replace("-", "_")


def tool_environment(
    repo_root: Path,
    *,
    tutorial_dir: Path | None = None,
    tutorial_key: str | None = None,
) -> dict[str, str]:
    """Tool versions for a tutorial, keyed by the exported variable name.

    A tutorial-local versions.yml wins outright and only contributes the keys
    it sets. Otherwise the root ``versions:`` defaults apply, overridden by the
    root block named ``tutorial_key`` (derived from the directory name when
    not given).
    """
    if tutorial_dir is not None and (tutorial_dir / VERSIONS_FILE).is_file():
        local = load(tutorial_dir / VERSIONS_FILE)
        return {env: local[key] for env, key in TOOL_ENV_KEYS.items() if local.get(key)}

    root_file = repo_root / VERSIONS_FILE
    defaults = load_global(root_file)

    if not tutorial_key and tutorial_dir is not None:
        tutorial_key = tutorial_key_for(tutorial_dir)
    block = load_block(root_file, tutorial_key) if tutorial_key else None
    if block:
        block = {key: value for key, value in block.items() if value}

    resolved = resolve(defaults, block)
    return {env: resolved.require(key) for env, key in TOOL_ENV_KEYS.items()}
