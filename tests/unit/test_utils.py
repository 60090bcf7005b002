# -*- coding: utf-8 -*-

# Copyright: (c) 2026, tower-inventory-sync contributors
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

"""Unit tests for utility helpers."""

import json

import pytest

from tower_inventory_sync.errors import (
    EXIT_CODES,
    ApiError,
    ConfigurationError,
    TowerError,
    UpsertFailedError,
    exit_code_for,
)
from tower_inventory_sync.utils import encode_host_variables, is_blank


class TestIsBlank:
    """Test cases for is_blank()."""

    @pytest.mark.parametrize("value", [None, "", "   ", [], {}, ()])
    def test_blank_values(self, value):
        """Empty and whitespace values are blank."""
        assert is_blank(value)

    @pytest.mark.parametrize("value", ["x", ["a"], 0, 7, False])
    def test_present_values(self, value):
        """Non-empty values and scalars are not blank."""
        assert not is_blank(value)


class TestEncodeHostVariables:
    """Test cases for encode_host_variables()."""

    def test_is_json_string(self):
        """Variables are a JSON string holding ansible_host."""
        encoded = encode_host_variables("10.0.0.5")
        assert isinstance(encoded, str)
        assert json.loads(encoded) == {"ansible_host": "10.0.0.5"}


class TestExitCodes:
    """Test cases for exit_code_for()."""

    def test_codes_are_distinct(self):
        """Every error class has its own non-zero exit code."""
        codes = list(EXIT_CODES.values())
        assert len(codes) == len(set(codes))
        assert 0 not in codes

    def test_known_error(self):
        assert exit_code_for(ConfigurationError("x")) == EXIT_CODES[ConfigurationError]
        assert exit_code_for(UpsertFailedError("x")) == EXIT_CODES[UpsertFailedError]
        assert exit_code_for(ApiError("x", status_code=500)) == EXIT_CODES[ApiError]

    def test_base_error(self):
        """The bare base class falls back to 1."""
        assert exit_code_for(TowerError("x")) == 1
