"""Shared fixtures for routegen tests."""

import pytest

from routegen.core.config import RouteGenConfig, set_config

CANONICAL = """
{ "/" index GET
  "/pastes" paste::pastes GET
  "/pastes/:id" paste::paste GET POST
  *"/admin" { admin::build_routes() } }
"""


@pytest.fixture(autouse=True)
def default_config():
    """Pin the global config to defaults so ROUTEGEN_* env vars cannot leak in."""
    config = RouteGenConfig()
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def canonical_source() -> str:
    return CANONICAL
