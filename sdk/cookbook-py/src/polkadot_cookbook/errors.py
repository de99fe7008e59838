from __future__ import annotations

from typing import Any

from .error_codes import CODE_DOCS, CookbookErrorCode


class CookbookError(RuntimeError):
    def __init__(self, code: CookbookErrorCode, message: str, *, data: dict[str, Any] | None = None):
        self.code = code
        self.data = data or {}
        super().__init__(f"{code}: {message}")


class ParseError(CookbookError):
    """A versions or frontmatter document could not be parsed."""


class MissingVersionError(CookbookError):
    """A version key is absent from every table it was looked up in."""


class FetchError(CookbookError):
    """An upstream HTTP request failed or returned an unusable payload."""


def error_hints(code: str) -> list[str]:
    doc = CODE_DOCS.get(code)
    if not isinstance(doc, dict):
        return []
    hints = doc.get("hints")
    if not isinstance(hints, list):
        return []
    return [h for h in hints if isinstance(h, str) and h]
