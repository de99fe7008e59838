from __future__ import annotations

from polkadot_cookbook.error_codes import ALL_CODES, CODE_DOCS, COOKBOOK_E_VERSION_MISSING
from polkadot_cookbook.errors import CookbookError, MissingVersionError, error_hints


def test_every_code_is_documented() -> None:
    assert sorted(CODE_DOCS) == sorted(ALL_CODES)
    for code in ALL_CODES:
        doc = CODE_DOCS[code]
        assert doc["severity"] == "error"
        assert isinstance(doc["summary"], str) and doc["summary"]


def test_error_carries_code_and_data() -> None:
    exc = MissingVersionError(COOKBOOK_E_VERSION_MISSING, "rust not found", data={"key": "rust"})
    assert isinstance(exc, CookbookError)
    assert exc.code == COOKBOOK_E_VERSION_MISSING
    assert exc.data == {"key": "rust"}
    assert str(exc) == "COOKBOOK_E_VERSION_MISSING: rust not found"


def test_error_hints() -> None:
    assert error_hints(COOKBOOK_E_VERSION_MISSING)
    assert error_hints("UNKNOWN") == []
