from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Mapping, Union

OutputValue = Union[str, int, bool]


def _render_value(value: OutputValue) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def _delimiter(value: str) -> str:
    lines = set(value.splitlines())
    delim = "EOF"
    n = 0
    while delim in lines:
        n += 1
        delim = f"EOF_{n}"
    return delim


def format_outputs(outputs: Mapping[str, OutputValue], *, multiline: Iterable[str] = ()) -> str:
    """Render step outputs as ``key=value`` lines, multi-line values as ``key<<EOF`` blocks."""
    forced = set(multiline)
    chunks: list[str] = []
    for key, raw in outputs.items():
        value = _render_value(raw)
        if key in forced or "\n" in value:
            body = value.rstrip("\n")
            delim = _delimiter(body)
            chunks.append(f"{key}<<{delim}\n{body}\n{delim}\n")
        else:
            chunks.append(f"{key}={value}\n")
    return "".join(chunks)


def output_path(explicit: Path | None = None) -> Path | None:
    if explicit is not None:
        return explicit
    env = os.environ.get("GITHUB_OUTPUT", "").strip()
    return Path(env) if env else None


def write_outputs(
    outputs: Mapping[str, OutputValue],
    path: Path | None = None,
    *,
    multiline: Iterable[str] = (),
) -> None:
    text = format_outputs(outputs, multiline=multiline)
    target = output_path(path)
    if target is None:
        print(text, end="")
        return
    with target.open("a", encoding="utf-8") as fh:
        fh.write(text)
