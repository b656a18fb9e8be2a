"""Pytest configuration and fixtures."""

import os
import pytest

from repo_lens.core import create_container, get_settings
from repo_lens.doctrine import DoctrineRegistry


# ============================================================================
# Pytest Hooks
# ============================================================================

def pytest_configure(config):
    """Configure pytest with environment variables."""
    os.environ['LENS_LOG_LEVEL'] = 'DEBUG'
    os.environ['LENS_JSON_LOGS'] = 'false'


# ============================================================================
# Core Fixtures
# ============================================================================

@pytest.fixture
def settings():
    """Test settings."""
    get_settings.cache_clear()
    yield get_settings()
    get_settings.cache_clear()


@pytest.fixture
def di_container(settings):
    """Dependency injection container for testing."""
    return create_container(settings)


# ============================================================================
# Registry Fixtures
# ============================================================================

@pytest.fixture
def registry():
    """Empty registry."""
    return DoctrineRegistry()


@pytest.fixture
def bootstrapped_registry():
    """Registry holding the known dashboard components."""
    registry = DoctrineRegistry()
    registry.bootstrap()
    return registry


@pytest.fixture
def family_registry(registry):
    """Registry with a small three-level tree and a second root.

    root -> mid -> leaf
    root -> sibling
    other
    """
    registry.register_component("root", "Root", "module", 1, 1, 1, "Root module")
    registry.register_component("mid", "Mid", "submodule", 1, 2, 1, "Middle", parent_id="root")
    registry.register_component("leaf", "Leaf", "file", 1, 2, 2, "Leaf file", parent_id="mid")
    registry.register_component("sibling", "Sibling", "page", 1, 3, 1, "Sibling page", parent_id="root")
    registry.register_component("other", "Other", "module", 2, 1, 1, "Second root")
    return registry
