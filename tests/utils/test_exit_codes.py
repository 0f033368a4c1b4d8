"""Unit tests for todorecur.utils.exit_codes."""

from __future__ import annotations

import pytest

from todorecur.utils.exit_codes import (
    ERROR_GENERAL,
    ERROR_INVALID_ARGS,
    ERROR_NOT_FOUND,
    ERROR_PARTIAL_FAILURE,
    ERROR_STORAGE,
    SUCCESS,
    get_exit_code_name,
)


def test_codes_are_distinct():
    codes = [SUCCESS, ERROR_GENERAL, ERROR_INVALID_ARGS, ERROR_STORAGE, ERROR_NOT_FOUND, ERROR_PARTIAL_FAILURE]
    assert len(set(codes)) == len(codes)


@pytest.mark.parametrize(
    "code, name",
    [
        (0, "SUCCESS"),
        (1, "ERROR_GENERAL"),
        (2, "ERROR_INVALID_ARGS"),
        (4, "ERROR_STORAGE"),
        (5, "ERROR_NOT_FOUND"),
        (7, "ERROR_PARTIAL_FAILURE"),
    ],
)
def test_get_exit_code_name(code, name):
    assert get_exit_code_name(code) == name


def test_unknown_code_name():
    assert get_exit_code_name(99) == "UNKNOWN(99)"
