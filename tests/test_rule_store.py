"""
Tests for the JSON-backed rule store.
"""

import json

import pytest

from core.rule_store import RuleStore, StoreError, parse_document
from core.types import Rule


@pytest.mark.asyncio
async def test_load_missing_file_gives_empty_store(store):
    error = await store.load()

    assert error is None
    assert store.rule_count == 0
    assert store.scope_count == 0


@pytest.mark.asyncio
async def test_save_and_load_round_trip(store, store_path):
    store.append("1", Rule("hello", "hi there", "U1"))
    store.append("1", Rule("bye", "cya"))
    store.append("2", Rule("kerja", "working hard!", "U2"))
    await store.save()

    reloaded = RuleStore(store_path)
    assert await reloaded.load() is None

    assert reloaded.rules_for("1") == (Rule("hello", "hi there", "U1"), Rule("bye", "cya", ""))
    assert reloaded.rules_for("2") == (Rule("kerja", "working hard!", "U2"),)
    assert reloaded.to_document() == store.to_document()


@pytest.mark.asyncio
async def test_saved_document_omits_empty_author(store, store_path):
    store.append("1", Rule("bye", "cya"))
    store.append("1", Rule("hello", "hi", "U1"))
    await store.save()

    data = json.loads(store_path.read_text(encoding="utf-8"))
    assert data == {
        "1": [
            {"trigger": "bye", "response": "cya"},
            {"trigger": "hello", "response": "hi", "author_id": "U1"},
        ]
    }
    assert not store_path.with_suffix(".json.tmp").exists()


@pytest.mark.asyncio
async def test_load_malformed_json_recovers_with_empty_store(store, store_path):
    store_path.write_text("{not json", encoding="utf-8")

    error = await store.load()

    assert isinstance(error, StoreError)
    assert store.rule_count == 0


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "document",
    [
        [{"trigger": "hi", "response": "hello"}],
        {"1": {"trigger": "hi", "response": "hello"}},
        {"1": ["hi"]},
        {"1": [{"trigger": "hi"}]},
        {"1": [{"response": "hello"}]},
        {"1": [{"trigger": "hi", "response": "hello", "author_id": 5}]},
    ],
)
async def test_load_rejects_bad_shapes(store, store_path, document):
    store_path.write_text(json.dumps(document), encoding="utf-8")

    error = await store.load()

    assert isinstance(error, StoreError)
    assert store.scope_count == 0


@pytest.mark.asyncio
async def test_load_replaces_previous_state_even_on_error(store, store_path):
    store.append("1", Rule("stale", "old"))
    store_path.write_text("[]", encoding="utf-8")

    await store.load()

    assert store.rules_for("1") == ()


def test_parse_document_normalizes_and_dedupes():
    rules = parse_document({
        "1": [
            {"trigger": "Hello", "response": "first", "author_id": "U1"},
            {"trigger": "HELLO", "response": "second"},
            {"trigger": "Hi  There", "response": "x", "author_id": None},
        ],
        "2": [],
    })

    assert rules == {
        "1": [Rule("hello", "first", "U1"), Rule("hi there", "x", "")],
    }


@pytest.mark.asyncio
async def test_save_failure_raises_store_error(tmp_path):
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = RuleStore(blocker / "auto_replies.json")
    store.append("1", Rule("hi", "hello"))

    with pytest.raises(StoreError):
        await store.save()

    # In-memory state is untouched
    assert store.rules_for("1") == (Rule("hi", "hello"),)


def test_find_is_case_insensitive(store):
    rule = Rule("hello", "hi")
    store.append("1", rule)

    assert store.find("1", "HeLLo") is rule
    assert store.find("2", "hello") is None


def test_rules_for_is_a_snapshot(store):
    store.append("1", Rule("a", "1"))
    snapshot = store.rules_for("1")

    store.append("1", Rule("b", "2"))

    assert len(snapshot) == 1
    assert len(store.rules_for("1")) == 2


def test_delete_drops_empty_scope(store):
    rule = Rule("a", "1")
    store.append("1", rule)

    store.delete("1", rule)

    assert store.scope_count == 0
    assert store.to_document() == {}


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [
        '{"1": [{"trigger": "a", "response": "b", "author_id": ' + "9" * 5000 + "}]}",
        "[" * 100000 + "]" * 100000,
    ],
    ids=["huge-integer", "deep-nesting"],
)
async def test_load_survives_undecodable_json(store, store_path, body):
    store_path.write_text(body, encoding="utf-8")

    error = await store.load()

    assert isinstance(error, StoreError)
    assert store.rule_count == 0


@pytest.mark.asyncio
async def test_load_survives_invalid_utf8(store, store_path):
    store_path.write_bytes(b'{"1": [{"trigger": "\xff", "response": "b"}]}')

    error = await store.load()

    assert isinstance(error, StoreError)
    assert store.rule_count == 0
