"""
Tests for exit code mapping.
"""

import json

import pytest

from repomanifest.errors import ParseError, ValidationError
from repomanifest.exit_codes import (
    DATA_ERROR,
    GENERAL_ERROR,
    INTERRUPTED,
    NO_MANIFEST,
    NO_REPOS_FOUND,
    PARTIAL_SUCCESS,
    PERMISSION_ERROR,
    ManifestNotFoundError,
    NoReposFoundError,
    PartialSuccessError,
    get_exit_code_for_exception,
)


@pytest.mark.parametrize("exc,code", [
    (ValidationError([]), DATA_ERROR),
    (ParseError("bad"), DATA_ERROR),
    (json.JSONDecodeError("Expecting value", "", 0), DATA_ERROR),
    (PermissionError("denied"), PERMISSION_ERROR),
    (KeyboardInterrupt(), INTERRUPTED),
    (RuntimeError("boom"), GENERAL_ERROR),
    (ManifestNotFoundError("/x/manifest.json"), NO_MANIFEST),
    (NoReposFoundError(), NO_REPOS_FOUND),
    (PartialSuccessError("1 of 2 failed", succeeded=1, failed=1), PARTIAL_SUCCESS),
])
def test_exit_code_for_exception(exc, code):
    assert get_exit_code_for_exception(exc) == code


def test_manifest_not_found_message():
    error = ManifestNotFoundError("/x/manifest.json")
    assert str(error) == "Manifest not found: /x/manifest.json"
    assert error.path == "/x/manifest.json"
