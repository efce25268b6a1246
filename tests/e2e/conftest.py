"""Fixtures for end-to-end API tests.

The app runs against in-memory repositories; sessions are JWT cookies
signed with a per-test secret.
"""

import asyncio

import pytest
from dishka.integrations.fastapi import FastapiProvider
from fastapi.testclient import TestClient

from undead.interface.api.app import create_app
from tests.di import build_test_container
from tests.e2e.session import CRON_SECRET, JWT_SECRET


@pytest.fixture
def container(monkeypatch):
    """Fresh in-memory container per test."""
    monkeypatch.setenv("ENVIRONMENT", "test")
    monkeypatch.setenv("AUTH__JWT_SECRET", JWT_SECRET)
    monkeypatch.setenv("CRON__SECRET", CRON_SECRET)
    return build_test_container(FastapiProvider())


@pytest.fixture
def client(container):
    """Test client for an app wired to the in-memory container."""
    return TestClient(create_app(container))


@pytest.fixture
def resolve(container):
    """Resolve an APP-scoped dependency (repositories) outside a request."""

    def _resolve(dependency_type):
        return asyncio.run(container.get(dependency_type))

    return _resolve
