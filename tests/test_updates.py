"""Tests for web search update events."""

from __future__ import annotations

from websift.updates import (
    MessageWebSearchErrorUpdate,
    MessageWebSearchFinishedUpdate,
    MessageWebSearchUpdateType,
    make_error_update,
    make_final_answer_update,
    make_general_update,
    make_sources_update,
    web_search_update_adapter,
)


def test_updates_serialize_with_discriminator() -> None:
    """Each update should dump its type and subtype."""

    dumped = make_error_update(message="An error occurred", args=["boom"]).model_dump(mode="json")

    assert dumped == {"type": "webSearch", "subtype": "error", "message": "An error occurred", "args": ["boom"]}
    assert make_final_answer_update().model_dump(mode="json") == {"type": "webSearch", "subtype": "finished"}
    assert make_sources_update([]).model_dump(mode="json")["sources"] == []
    assert make_general_update(message="hi").args == []


def test_updates_parse_back_to_variant() -> None:
    """The adapter should pick the variant from the subtype."""

    error = web_search_update_adapter.validate_python({"type": "webSearch", "subtype": "error", "message": "m"})
    finished = web_search_update_adapter.validate_json('{"type": "webSearch", "subtype": "finished"}')

    assert isinstance(error, MessageWebSearchErrorUpdate)
    assert isinstance(finished, MessageWebSearchFinishedUpdate)
    assert finished.subtype == MessageWebSearchUpdateType.FINISHED
