"""Tests for resolving reactors across emoji."""

import pytest

from conftest import FakeHistorySource, reaction_payload, user_payload
from reactors_bot.data_models.leaderboard import ReactionSummary
from reactors_bot.services.reaction_collector import collect_emoji_reactors, collect_reactors
from reactors_bot.utils.leaderboard_exceptions import TransportError


def _summaries(*payloads):
    return [ReactionSummary.from_payload(p) for p in payloads]


@pytest.mark.asyncio
async def test_unions_users_across_emoji_and_dedupes():
    source = FakeHistorySource(reactors={
        ("m1", "👍"): [user_payload("1"), user_payload("2")],
        ("m1", "🔥"): [user_payload("2"), user_payload("3")],
    })

    reactors = await collect_reactors(
        source, 111, "m1", _summaries(reaction_payload("👍", 2), reaction_payload("🔥", 2))
    )

    assert reactors == {"1", "2", "3"}


@pytest.mark.asyncio
async def test_bots_are_excluded():
    source = FakeHistorySource(reactors={
        ("m1", "👍"): [user_payload("1"), user_payload("99", bot=True)],
    })

    reactors = await collect_reactors(source, 111, "m1", _summaries(reaction_payload("👍", 2)))

    assert reactors == {"1"}


@pytest.mark.asyncio
async def test_custom_emoji_uses_name_id_token():
    source = FakeHistorySource(reactors={
        ("m1", "bookworm:123456"): [user_payload("7")],
    })

    reactors = await collect_reactors(
        source, 111, "m1", _summaries(reaction_payload("bookworm", 1, emoji_id="123456"))
    )

    assert reactors == {"7"}
    assert source.reaction_calls[0]["emoji_token"] == "bookworm:123456"


@pytest.mark.asyncio
async def test_zero_count_and_nameless_unicode_emoji_are_skipped():
    source = FakeHistorySource()

    reactors = await collect_reactors(
        source, 111, "m1", _summaries(reaction_payload("👍", 0), {"count": 3, "emoji": {"id": None, "name": None}})
    )

    assert reactors == set()
    assert source.reaction_calls == []


@pytest.mark.asyncio
async def test_deleted_custom_emoji_reactors_still_counted():
    source = FakeHistorySource(reactors={("m1", "_:5"): [user_payload("8")]})

    reactors = await collect_reactors(
        source, 111, "m1", _summaries({"count": 1, "emoji": {"id": "5", "name": None}})
    )

    assert reactors == {"8"}
    assert source.reaction_calls[0]["emoji_token"] == "_:5"


@pytest.mark.asyncio
async def test_pages_with_after_cursor_until_short_page():
    users = [user_payload(str(1000 + i)) for i in range(230)]
    source = FakeHistorySource(reactors={("m1", "👍"): users})

    reactors = await collect_emoji_reactors(source, 111, "m1", "👍")

    assert len(reactors) == 230
    assert [call["after"] for call in source.reaction_calls] == [None, "1099", "1199"]


@pytest.mark.asyncio
async def test_full_final_page_costs_one_extra_request():
    users = [user_payload(str(1000 + i)) for i in range(100)]
    source = FakeHistorySource(reactors={("m1", "👍"): users})

    reactors = await collect_emoji_reactors(source, 111, "m1", "👍")

    assert len(reactors) == 100
    assert len(source.reaction_calls) == 2


@pytest.mark.asyncio
async def test_bot_on_page_boundary_still_advances_cursor():
    users = [user_payload(str(1000 + i), bot=(i == 99)) for i in range(101)]
    source = FakeHistorySource(reactors={("m1", "👍"): users})

    reactors = await collect_emoji_reactors(source, 111, "m1", "👍")

    assert "1099" not in reactors
    assert "1100" in reactors
    assert source.reaction_calls[1]["after"] == "1099"


@pytest.mark.asyncio
async def test_failure_aborts_message_resolution():
    source = FakeHistorySource(reactors={("m1", "👍"): [user_payload("1")]})
    source.fail_reactions_status = 500

    with pytest.raises(TransportError) as exc_info:
        await collect_reactors(source, 111, "m1", _summaries(reaction_payload("👍", 1)))

    assert exc_info.value.status == 500
