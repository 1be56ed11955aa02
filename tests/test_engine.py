"""
Tests for the platform-independent auto-reply engine.
"""

import pytest

from core.types import OutcomeKind, Visibility
from responders.engine import MSG_GUILD_ONLY, AutoReplyEngine, MessageEvent, ReplyCommand
from responders.manager import MSG_EMPTY_RESPONSE, MSG_REMOVED


@pytest.fixture
def engine(manager):
    return AutoReplyEngine(manager)


@pytest.mark.asyncio
async def test_add_then_message_gets_reply(engine):
    outcome = await engine.run_reply_command(
        ReplyCommand(trigger="kerja", user_id="U1", guild_id="G1", response="semangat!")
    )
    assert outcome.ok

    rule = engine.reply_for(MessageEvent(text="ayo Kerja!", guild_id="G1"))
    assert rule is not None
    assert rule.response == "semangat!"


@pytest.mark.asyncio
async def test_bot_authors_and_dms_are_ignored(engine):
    await engine.run_reply_command(
        ReplyCommand(trigger="hello", user_id="U1", guild_id="G1", response="hi")
    )

    assert engine.reply_for(MessageEvent(text="hello", guild_id="G1", author_is_bot=True)) is None
    assert engine.reply_for(MessageEvent(text="hello", guild_id=None)) is None
    assert engine.reply_for(MessageEvent(text="", guild_id="G1")) is None


@pytest.mark.asyncio
async def test_reply_command_outside_guild_is_refused(engine):
    outcome = await engine.run_reply_command(
        ReplyCommand(trigger="hello", user_id="U1", guild_id=None, response="hi")
    )

    assert outcome.kind is OutcomeKind.VALIDATION_ERROR
    assert outcome.message == MSG_GUILD_ONLY
    assert outcome.visibility is Visibility.PRIVATE


@pytest.mark.asyncio
async def test_add_without_response_is_rejected(engine):
    outcome = await engine.run_reply_command(
        ReplyCommand(trigger="hello", user_id="U1", guild_id="G1")
    )

    assert outcome.kind is OutcomeKind.VALIDATION_ERROR
    assert outcome.message == MSG_EMPTY_RESPONSE


@pytest.mark.asyncio
async def test_remove_mode_ignores_response(engine):
    await engine.run_reply_command(
        ReplyCommand(trigger="hello", user_id="U1", guild_id="G1", response="hi")
    )

    outcome = await engine.run_reply_command(
        ReplyCommand(trigger="hello", user_id="U1", guild_id="G1", response="ignored", mode="Remove")
    )

    assert outcome.ok
    assert outcome.message == MSG_REMOVED
    assert engine.manager.list_rules("G1") == ()


@pytest.mark.asyncio
async def test_unknown_mode_is_rejected(engine):
    outcome = await engine.run_reply_command(
        ReplyCommand(trigger="hello", user_id="U1", guild_id="G1", response="hi", mode="delete")
    )

    assert outcome.kind is OutcomeKind.VALIDATION_ERROR
    assert "`delete`" in outcome.message
    assert engine.manager.list_rules("G1") == ()
