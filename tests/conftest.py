"""
Pytest configuration and fixtures for the auto-reply bot tests.
"""

import sys
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

# Add the project root to the path so flat imports (core, responders, ...) work
root_path = Path(__file__).parent.parent
sys.path.insert(0, str(root_path))

from core.rule_store import RuleStore  # noqa: E402
from responders.manager import RuleManager  # noqa: E402


@pytest.fixture
def store_path(tmp_path):
    return tmp_path / "auto_replies.json"


@pytest.fixture
def store(store_path):
    return RuleStore(store_path)


@pytest.fixture
def manager(store):
    return RuleManager(store)


@pytest.fixture
def fake_session():
    """Build a stand-in for aiohttp.ClientSession whose get() yields one response."""

    def _make(status=200, text="", payload=None):
        resp = MagicMock()
        resp.status = status
        resp.text = AsyncMock(return_value=text)
        resp.json = AsyncMock(return_value=payload)

        ctx = MagicMock()
        ctx.__aenter__ = AsyncMock(return_value=resp)
        ctx.__aexit__ = AsyncMock(return_value=False)

        session = MagicMock()
        session.get = MagicMock(return_value=ctx)
        session.close = AsyncMock()
        return session

    return _make


@pytest.fixture
def interaction():
    """A slash-command interaction in guild 42 invoked by user 111."""
    inter = MagicMock()
    inter.user.id = 111
    inter.guild_id = 42
    inter.channel_id = 7
    inter.response.send_message = AsyncMock()
    inter.response.defer = AsyncMock()
    inter.followup.send = AsyncMock()
    return inter
