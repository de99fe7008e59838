from __future__ import annotations

import json
from pathlib import Path

import pytest

from polkadot_cookbook.cli import check_docs_drift_main, load_versions_main, sync_versions_main


LOCAL = """\
versions:
  rust: "1.86"
  polkadot_omni_node: "0.5.0"
  chain_spec_builder: "10.0.0"

zombienet:
  version: v1.3.133  # keep in sync with CI image
"""

UPSTREAM = """\
dependencies:
  repositories:
    zombienet:
      version: v1.3.140
"""

SOURCE = "https://github.com/polkadot-developers/polkadot-docs/blob/master/parachains/zero-to-hero.md"


class FakeCommits:
    def __init__(self, sha: str | None):
        self.sha = sha

    def latest_commit(self, repo: str, path: str, *, branch: str = "master") -> str | None:
        return self.sha


def _setup_sync(tmp_path: Path) -> tuple[Path, Path, Path]:
    local = tmp_path / "versions.yml"
    local.write_text(LOCAL, encoding="utf-8")
    upstream = tmp_path / "variables.yml"
    upstream.write_text(UPSTREAM, encoding="utf-8")
    return local, upstream, tmp_path / "github_output"


def test_sync_versions_main_updates_and_reports(tmp_path: Path) -> None:
    local, upstream, output = _setup_sync(tmp_path)
    rc = sync_versions_main(
        ["--root", str(tmp_path), "--upstream-file", str(upstream), "--github-output", str(output)]
    )
    assert rc == 0
    assert "  version: v1.3.140  # keep in sync with CI image\n" in local.read_text(encoding="utf-8")
    assert output.read_text(encoding="utf-8") == (
        "has_updates=true\n"
        "changelog<<EOF\n"
        "- **Zombienet**: `v1.3.133` -> `v1.3.140`\n"
        "EOF\n"
    )


def test_sync_versions_main_check_mode(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    local, upstream, output = _setup_sync(tmp_path)
    rc = sync_versions_main(
        ["--root", str(tmp_path), "--upstream-file", str(upstream), "--github-output", str(output), "--check"]
    )
    assert rc == 1
    assert local.read_text(encoding="utf-8") == LOCAL
    assert "behind upstream" in capsys.readouterr().err


def test_sync_versions_main_no_updates(tmp_path: Path) -> None:
    local, upstream, output = _setup_sync(tmp_path)
    upstream.write_text(UPSTREAM.replace("v1.3.140", "v1.3.100"), encoding="utf-8")
    rc = sync_versions_main(
        ["--root", str(tmp_path), "--upstream-file", str(upstream), "--github-output", str(output)]
    )
    assert rc == 0
    assert local.read_text(encoding="utf-8") == LOCAL
    assert output.read_text(encoding="utf-8") == "has_updates=false\n"


def test_sync_versions_main_fails_without_upstream(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    _setup_sync(tmp_path)
    rc = sync_versions_main(["--root", str(tmp_path), "--upstream-file", str(tmp_path / "missing.yml")])
    assert rc == 2
    assert "ERROR: cannot fetch upstream variables" in capsys.readouterr().err


def test_sync_versions_main_rejects_undecodable_upstream(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    local, upstream, _ = _setup_sync(tmp_path)
    upstream.write_bytes(b"dependencies:\n  note: caf\xe9\n")
    rc = sync_versions_main(["--root", str(tmp_path), "--upstream-file", str(upstream)])
    assert rc == 2
    assert local.read_text(encoding="utf-8") == LOCAL
    assert "ERROR: cannot fetch upstream variables" in capsys.readouterr().err


def test_sync_versions_main_rejects_undecodable_local(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    local, upstream, _ = _setup_sync(tmp_path)
    local.write_bytes(b"versions:\n  rust: \"1.86\xff\"\n")
    rc = sync_versions_main(["--root", str(tmp_path), "--upstream-file", str(upstream)])
    assert rc == 2
    assert "COOKBOOK_E_YAML_PARSE" in capsys.readouterr().err


def _tracked_readme(root: Path, commit: str) -> None:
    readme = root / "polkadot-docs" / "zero-to-hero" / "README.md"
    readme.parent.mkdir(parents=True)
    readme.write_text(
        f'---\ntitle: "Zero to Hero"\nsource_github: "{SOURCE}"\ndocs_commit: "{commit}"\n---\n\n# Zero to Hero\n',
        encoding="utf-8",
    )


def test_check_docs_drift_main_reports_drift(tmp_path: Path) -> None:
    _tracked_readme(tmp_path, "abc123")
    output = tmp_path / "github_output"
    rc = check_docs_drift_main(
        ["--root", str(tmp_path), "--github-output", str(output)],
        client=FakeCommits("def456"),  # type: ignore[arg-type]
    )
    assert rc == 0
    text = output.read_text(encoding="utf-8")
    assert text.startswith("has_drift=true\ndrift_count=1\ndrift_details<<EOF\n")
    assert "compare/abc123...def456" in text
    assert "  - Test: `polkadot-docs/zero-to-hero/README.md`" in text
    assert text.endswith("EOF\n")


def test_check_docs_drift_main_network_failure_is_not_drift(tmp_path: Path) -> None:
    _tracked_readme(tmp_path, "abc123")
    output = tmp_path / "github_output"
    rc = check_docs_drift_main(
        ["--root", str(tmp_path), "--github-output", str(output)],
        client=FakeCommits(None),  # type: ignore[arg-type]
    )
    assert rc == 0
    assert output.read_text(encoding="utf-8") == "has_drift=false\ndrift_count=0\n"


def _versions_root(tmp_path: Path) -> Path:
    (tmp_path / "versions.yml").write_text(
        LOCAL + "\nzero_to_hero:\n  rust: \"1.88\"\n",
        encoding="utf-8",
    )
    return tmp_path


def test_load_versions_main_prints_env(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("TUTORIAL_DIR", raising=False)
    monkeypatch.delenv("TUTORIAL_KEY", raising=False)
    root = _versions_root(tmp_path)

    rc = load_versions_main(["--root", str(root), "--tutorial-key", "zero_to_hero"])
    assert rc == 0
    assert capsys.readouterr().out.splitlines() == [
        "RUST_VERSION=1.88",
        "OMNI_NODE_VERSION=0.5.0",
        "CHAIN_SPEC_BUILDER_VERSION=10.0.0",
    ]


def test_load_versions_main_recipe_json(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("TUTORIAL_DIR", raising=False)
    monkeypatch.delenv("TUTORIAL_KEY", raising=False)
    root = _versions_root(tmp_path)
    recipe = root / "recipes" / "my-recipe"
    recipe.mkdir(parents=True)
    (recipe / "versions.yml").write_text("polkadot_omni_node: \"0.6.0\"\n", encoding="utf-8")

    rc = load_versions_main(["--root", str(root), "--recipe", "my-recipe", "--json"])
    assert rc == 0
    doc = json.loads(capsys.readouterr().out)
    assert doc["polkadot_omni_node"] == {"version": "0.6.0", "source": "recipe"}
    assert doc["rust"] == {"version": "1.86", "source": "global"}


def test_load_versions_main_missing_root_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
) -> None:
    monkeypatch.delenv("TUTORIAL_DIR", raising=False)
    monkeypatch.delenv("TUTORIAL_KEY", raising=False)
    rc = load_versions_main(["--root", str(tmp_path)])
    assert rc == 2
    assert "ERROR:" in capsys.readouterr().err
