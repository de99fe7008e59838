from __future__ import annotations

from pathlib import Path

import pytest

from polkadot_cookbook.outputs import format_outputs, write_outputs


def test_scalar_outputs() -> None:
    assert format_outputs({"has_drift": False, "drift_count": 0}) == "has_drift=false\ndrift_count=0\n"


def test_multiline_values_use_heredoc() -> None:
    text = format_outputs({"drift_details": "- a\n- b\n"})
    assert text == "drift_details<<EOF\n- a\n- b\nEOF\n"


def test_forced_multiline_for_single_line_value() -> None:
    text = format_outputs({"changelog": "- **Zombienet**: `v1` -> `v2`"}, multiline=["changelog"])
    assert text == "changelog<<EOF\n- **Zombienet**: `v1` -> `v2`\nEOF\n"


def test_heredoc_delimiter_avoids_collisions() -> None:
    text = format_outputs({"body": "line\nEOF\nmore"})
    assert text == "body<<EOF_1\nline\nEOF\nmore\nEOF_1\n"


def test_write_outputs_appends_to_github_output(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    out = tmp_path / "github_output"
    out.write_text("previous=1\n", encoding="utf-8")
    monkeypatch.setenv("GITHUB_OUTPUT", str(out))

    write_outputs({"has_updates": True})
    assert out.read_text(encoding="utf-8") == "previous=1\nhas_updates=true\n"


def test_write_outputs_falls_back_to_stdout(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.delenv("GITHUB_OUTPUT", raising=False)
    write_outputs({"has_updates": False})
    assert capsys.readouterr().out == "has_updates=false\n"
