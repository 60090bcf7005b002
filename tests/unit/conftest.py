# -*- coding: utf-8 -*-

# Copyright: (c) 2026, tower-inventory-sync contributors
# MIT License (see LICENSE or https://opensource.org/licenses/MIT)

"""Pytest configuration for tower_inventory_sync unit tests."""

import os

import pytest

from tower_inventory_sync.models import TowerConfig, VirtualMachine


class FakeTowerClient:
    """Stand-in for TowerClient that records calls and replays canned responses.

    ``responses`` maps ``(method, api_path)`` to a response body, an exception
    to raise, or a list of those consumed in order (the last one repeats).
    """

    def __init__(self, responses=None):
        self.responses = dict(responses or {})
        self.calls = []

    def _respond(self, method, api_path, payload=None):
        self.calls.append((method, api_path, payload))
        key = (method, api_path)
        if key not in self.responses:
            raise AssertionError(f"Unexpected request: {method} {api_path}")
        item = self.responses[key]
        if isinstance(item, list):
            item = item.pop(0) if len(item) > 1 else item[0]
        if isinstance(item, Exception):
            raise item
        return item

    def get(self, api_path):
        return self._respond("GET", api_path)

    def post(self, api_path, payload):
        return self._respond("POST", api_path, payload)

    def patch(self, api_path, payload):
        return self._respond("PATCH", api_path, payload)


@pytest.fixture(autouse=True)
def clean_tower_env(monkeypatch):
    """Keep TOWER_* variables from the outer environment out of the tests."""
    for name in list(os.environ):
        if name.upper().startswith("TOWER_"):
            monkeypatch.delenv(name)


@pytest.fixture
def tower_config():
    """A complete Tower configuration targeting the "Lab" inventory."""
    return TowerConfig(
        url="https://tower.example.com",
        username="admin",
        password="secret",
        inventory_name="Lab",
        api_version="v2",
        verify_ssl=True,
        timeout=30,
    )


@pytest.fixture
def vm():
    """A VM with no explicit hostnames and a single address."""
    return VirtualMachine(name="web01", hostnames=[], ipaddresses=["10.0.0.5"])


@pytest.fixture
def make_client():
    """Factory for FakeTowerClient instances."""
    return FakeTowerClient
