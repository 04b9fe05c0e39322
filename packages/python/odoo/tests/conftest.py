"""
Pytest configuration and fixtures for odoo-do tests.

This module provides fixtures for:
- Loading the seeded dataset served by the fake Odoo server
- Routing the client's HTTP traffic to that server through httpx.MockTransport
- Authenticated and unauthenticated clients
- Isolating the global configuration between tests

Run the tests from the repository root:
    pytest
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, AsyncGenerator

import httpx
import pytest
import yaml

from odoo_do import ClientConfig, OdooClient, connect
from odoo_do import config as config_module

from tests.mock_server import FakeOdoo

FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ============================================================================
# Dataset Fixtures
# ============================================================================


@pytest.fixture(scope="session")
def seed() -> dict[str, Any]:
    """Load the seeded dataset from YAML."""
    with open(FIXTURES_DIR / "seed.yaml") as f:
        return yaml.safe_load(f)


@pytest.fixture
def odoo_server(seed: dict[str, Any]) -> FakeOdoo:
    """A fresh fake Odoo server for each test."""
    return FakeOdoo(seed)


@pytest.fixture
def transport(odoo_server: FakeOdoo) -> httpx.MockTransport:
    """httpx transport answering from the fake server."""
    return httpx.MockTransport(odoo_server.handle)


# ============================================================================
# Client Fixtures
# ============================================================================


@pytest.fixture
def config() -> ClientConfig:
    """Valid credentials for the seeded admin user."""
    return ClientConfig(
        url="http://odoo.test",
        db="test",
        username="admin",
        password="admin",
    )


@pytest.fixture
async def client(
    config: ClientConfig, transport: httpx.MockTransport
) -> AsyncGenerator[OdooClient, None]:
    """An authenticated client, closed after the test."""
    client = await connect(config, transport=transport)
    yield client
    await client.close()


@pytest.fixture
async def unauthenticated_client(
    config: ClientConfig, transport: httpx.MockTransport
) -> AsyncGenerator[OdooClient, None]:
    """A client that has not logged in yet."""
    client = OdooClient(config, transport=transport)
    yield client
    await client.close()


@pytest.fixture(autouse=True)
def isolated_global_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep configure() calls and ODOO_* variables from leaking between tests."""
    monkeypatch.setattr(
        config_module,
        "_global_config",
        {"url": None, "db": None, "username": None, "password": None},
    )
    for name in ("ODOO_URL", "ODOO_DB", "ODOO_USERNAME", "ODOO_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
