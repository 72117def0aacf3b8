"""
Shared pytest fixtures for the Resend helper tests.

Provides fixtures for:
- Test configuration
- A fake JSON transport with scripted pages
- Page builders for list responses
- Logging capture
"""

import sys
import logging
from pathlib import Path
from typing import Any, Callable, Dict, List
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from resend_node.base import ResendConfig


# ============================================================================
# Logging Fixtures
# ============================================================================

@pytest.fixture(autouse=True)
def configure_test_logging(caplog):
    """Configure logging for all tests."""
    caplog.set_level(logging.DEBUG)
    return caplog


# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def resend_config() -> ResendConfig:
    """Create test Resend configuration."""
    return ResendConfig(
        api_key="re_test_key_12345",
        base_url="https://api.resend.test",
        timeout=5,
    )


# ============================================================================
# Transport Fixtures
# ============================================================================

@pytest.fixture
def make_page() -> Callable[..., Dict[str, Any]]:
    """
    Build a list response page.

    Usage:
        make_page(["a", "b"], has_more=True) -> {"object": "list", "data": [{"id": "a"}, ...]}
    """
    def _make(ids: List[str], has_more: bool = False, **extra) -> Dict[str, Any]:
        page = {
            "object": "list",
            "data": [{"id": item_id, "name": f"Item {item_id}"} for item_id in ids],
            "has_more": has_more,
        }
        page.update(extra)
        return page
    return _make


@pytest.fixture
def mock_transport():
    """
    Fake JSON transport.

    Usage:
        def test_something(mock_transport):
            mock_transport.get_json.side_effect = [page_1, page_2]
    """
    transport = MagicMock()
    transport.build_url = MagicMock(side_effect=lambda path: f"https://api.resend.test{path}")
    transport.get_json = AsyncMock()
    return transport

