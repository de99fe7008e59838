"""Version parsing and ordering for cookbook dependency pins.

Two formats are understood:

- semantic versions with an optional leading ``v`` (``v0.5.0``, ``1.86``)
- Polkadot SDK release tags (``polkadot-stable2512-1``, or ``polkadot-stable2512``
  for patch 0)

Semantic versions compare numerically per component with missing trailing
components treated as zero, so ``1.2`` and ``1.2.0`` are equal. Release tags
compare by ``(YYMM, PATCH)``. Anything else, or a mix of the two formats, is
ordered the way ``sort -V`` would order the normalized strings.
"""

from __future__ import annotations

import re

from .types import Opaque, Semver, StableTag, VersionFormat


STABLE_PREFIX = "polkadot-stable"

SEMVER_RE = re.compile(r"^\d+(?:\.\d+)*$")
STABLE_TAG_RE = re.compile(rf"^{re.escape(STABLE_PREFIX)}(?P<yymm>\d+)(?:-(?P<patch>\d+))?$")
_RUN_RE = re.compile(r"\d+|\D+")


def _strip_v(text: str) -> str:
    text = text.strip()
    return text[1:] if text.startswith("v") else text


def parse_version(text: str) -> VersionFormat:
    raw = _strip_v(text)
    m = STABLE_TAG_RE.match(raw)
    if m:
        return StableTag(int(m.group("yymm")), int(m.group("patch") or 0))
    if SEMVER_RE.match(raw):
        return Semver(tuple(int(part) for part in raw.split(".")))
    return Opaque(raw)


def normalize_version(local: str, upstream: str) -> tuple[str, str]:
    """Return the dotted forms of two versions as they are compared.

    ``polkadot-stable2512-1`` becomes ``2512.1`` when both sides are release
    tags; otherwise only a leading ``v`` is removed.
    """
    lv = _strip_v(local)
    uv = _strip_v(upstream)
    if lv.startswith(STABLE_PREFIX) and uv.startswith(STABLE_PREFIX):
        lv = lv[len(STABLE_PREFIX):].replace("-", ".")
        uv = uv[len(STABLE_PREFIX):].replace("-", ".")
    return lv, uv


def _natural_key(text: str) -> tuple[tuple[int, int, str], ...]:
    key = []
    for run in _RUN_RE.findall(text):
        if run.isdigit():
            key.append((0, int(run), ""))
        else:
            key.append((1, 0, run))
    return tuple(key)


def _cmp(a: object, b: object) -> int:
    return (a > b) - (a < b)  # type: ignore[operator]


def compare_versions(a: str, b: str) -> int:
    """Return -1, 0 or 1 as ``a`` sorts before, equal to, or after ``b``."""
    pa = parse_version(a)
    pb = parse_version(b)

    if isinstance(pa, StableTag) and isinstance(pb, StableTag):
        return _cmp((pa.yymm, pa.patch), (pb.yymm, pb.patch))

    if isinstance(pa, Semver) and isinstance(pb, Semver):
        width = max(len(pa.components), len(pb.components))
        return _cmp(pa.padded(width), pb.padded(width))

    na, nb = normalize_version(a, b)
    if na == nb:
        return 0
    if SEMVER_RE.match(na) and SEMVER_RE.match(nb):
        ca = tuple(int(part) for part in na.split("."))
        cb = tuple(int(part) for part in nb.split("."))
        width = max(len(ca), len(cb))
        return _cmp(Semver(ca).padded(width), Semver(cb).padded(width))
    return _cmp(_natural_key(na), _natural_key(nb))


def is_newer(local: str, upstream: str) -> bool:
    """True iff ``upstream`` sorts strictly after ``local``.

    A local pin that is ahead of upstream is never reported as outdated.
    """
    lv, uv = normalize_version(local, upstream)
    if lv == uv:
        return False
    return compare_versions(local, upstream) < 0
