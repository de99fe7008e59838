from __future__ import annotations

from pathlib import Path

import pytest

from polkadot_cookbook.error_codes import COOKBOOK_E_VERSION_MISSING
from polkadot_cookbook.errors import MissingVersionError
from polkadot_cookbook.resolver import (
    load_global_versions,
    resolve,
    resolve_recipe_versions,
    tool_environment,
    tutorial_key_for,
)
from polkadot_cookbook.types import VersionSource


GLOBAL_YAML = """\
versions:
  rust: "1.86"
  polkadot_omni_node: "0.5.0"
  chain_spec_builder: "10.0.0"
  frame_omni_bencher: "0.13.0"

zero_to_hero:
  polkadot_omni_node: "0.4.1"
"""


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_override_wins_per_key() -> None:
    resolved = resolve({"rust": "1.86", "polkadot_omni_node": "0.5.0"}, {"rust": "1.90"})
    assert resolved.get("rust") == "1.90"
    assert resolved.get_source("rust") == VersionSource.RECIPE
    assert resolved.get("polkadot_omni_node") == "0.5.0"
    assert resolved.get_source("polkadot_omni_node") == VersionSource.GLOBAL


def test_override_only_keys_are_added() -> None:
    resolved = resolve({"rust": "1.86"}, {"zombienet": "v1.3.133"})
    assert resolved.dependencies() == ["rust", "zombienet"]
    assert resolved.get_source("zombienet") == VersionSource.RECIPE


def test_resolve_is_pure_and_idempotent() -> None:
    global_table = {"rust": "1.86", "chain_spec_builder": "10.0.0"}
    override = {"rust": "1.90"}
    first = resolve(global_table, override)
    second = resolve(global_table, override)
    assert first == second
    assert global_table == {"rust": "1.86", "chain_spec_builder": "10.0.0"}
    assert override == {"rust": "1.90"}


def test_no_override_is_global_only() -> None:
    resolved = resolve({"rust": "1.86"}, None)
    assert resolved.versions == {"rust": "1.86"}
    assert resolved.sources == {"rust": VersionSource.GLOBAL}


def test_require_reports_missing_keys() -> None:
    resolved = resolve({"rust": "1.86"})
    with pytest.raises(MissingVersionError) as exc_info:
        resolved.require("polkadot_omni_node")
    assert exc_info.value.code == COOKBOOK_E_VERSION_MISSING
    assert exc_info.value.data["available"] == ["rust"]


def test_resolve_recipe_versions_merges_recipe_file(tmp_path: Path) -> None:
    _write(tmp_path / "versions.yml", GLOBAL_YAML)
    _write(tmp_path / "recipes" / "my-recipe" / "versions.yml", "versions:\n  polkadot_omni_node: \"0.6.0\"\n")

    resolved = resolve_recipe_versions(tmp_path, "my-recipe")
    assert resolved.get("rust") == "1.86"
    assert resolved.get("polkadot_omni_node") == "0.6.0"
    assert resolved.get_source("polkadot_omni_node") == VersionSource.RECIPE
    assert resolved.get_source("chain_spec_builder") == VersionSource.GLOBAL


def test_recipe_without_versions_file_uses_globals(tmp_path: Path) -> None:
    _write(tmp_path / "versions.yml", GLOBAL_YAML)
    (tmp_path / "recipes" / "plain").mkdir(parents=True)

    resolved = resolve_recipe_versions(tmp_path, "plain")
    assert resolved == load_global_versions(tmp_path)
    assert set(resolved.sources.values()) == {VersionSource.GLOBAL}


def test_tutorial_key_is_derived_from_directory_name() -> None:
    assert tutorial_key_for(Path("/repo/tutorials/zero-to-hero")) == "zero_to_hero"


def test_tool_environment_applies_root_block_override(tmp_path: Path) -> None:
    _write(tmp_path / "versions.yml", GLOBAL_YAML)
    tutorial_dir = tmp_path / "tutorials" / "zero-to-hero"
    tutorial_dir.mkdir(parents=True)

    env = tool_environment(tmp_path, tutorial_dir=tutorial_dir)
    assert env == {
        "RUST_VERSION": "1.86",
        "OMNI_NODE_VERSION": "0.4.1",
        "CHAIN_SPEC_BUILDER_VERSION": "10.0.0",
    }


def test_tool_environment_prefers_tutorial_local_file(tmp_path: Path) -> None:
    _write(tmp_path / "versions.yml", GLOBAL_YAML)
    tutorial_dir = tmp_path / "tutorials" / "custom"
    _write(tutorial_dir / "versions.yml", "rust: \"1.88\"\n")

    env = tool_environment(tmp_path, tutorial_dir=tutorial_dir)
    assert env == {"RUST_VERSION": "1.88"}


def test_tool_environment_missing_default_is_an_error(tmp_path: Path) -> None:
    _write(tmp_path / "versions.yml", "versions:\n  rust: \"1.86\"\n")
    with pytest.raises(MissingVersionError):
        tool_environment(tmp_path)
