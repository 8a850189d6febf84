"""Tests for ranking order and leaderboard rendering."""

from datetime import datetime, timezone

import discord

from conftest import NOW
from reactors_bot.constants import LeaderboardConstants, UIConstants
from reactors_bot.data_models.leaderboard import LeaderboardEntry, ScanResult
from reactors_bot.utils.embeds import (
    build_leaderboard_embed,
    build_slash_embed,
    format_points,
    mention,
    rank_marker,
    render_lines,
)
from reactors_bot.utils.ranking import rank_entries


def _result(entries, unique=0):
    return ScanResult(entries=entries, name_resolver=mention, unique_reactors=unique, window_start=NOW)


class TestRankEntries:
    def test_sorted_by_points_then_user_id(self):
        entries = rank_entries({"u3": 1, "u2": 2, "u1": 1})

        assert [(e.rank, e.user_id, e.points) for e in entries] == [
            (0, "u2", 2),
            (1, "u1", 1),
            (2, "u3", 1),
        ]

    def test_tie_break_is_lexicographic_not_numeric(self):
        entries = rank_entries({"9": 1, "10": 1})

        assert [e.user_id for e in entries] == ["10", "9"]

    def test_limit_takes_lowest_ids_among_tied_leaders(self):
        points = {f"user{i}": 5 for i in range(5)}
        points["straggler"] = 1

        entries = rank_entries(points, limit=3)

        assert [e.user_id for e in entries] == ["user0", "user1", "user2"]

    def test_independent_of_insertion_order(self):
        forward = rank_entries({"a": 2, "b": 2, "c": 3})
        backward = rank_entries({"c": 3, "b": 2, "a": 2})

        assert forward == backward

    def test_empty_and_non_positive_limit(self):
        assert rank_entries({}) == []
        assert rank_entries({"u1": 1}, limit=0) == []


class TestRendering:
    def test_rank_markers(self):
        assert [rank_marker(i) for i in range(5)] == ["🥇", "🥈", "🥉", UIConstants.BULLET, UIConstants.BULLET]

    def test_points_pluralization(self):
        assert format_points(1) == "1 pt"
        assert format_points(2) == "2 pts"
        assert format_points(0) == "0 pts"

    def test_render_lines(self):
        entries = [LeaderboardEntry(0, "42", 3), LeaderboardEntry(1, "7", 1), LeaderboardEntry(3, "8", 1)]

        assert render_lines(entries) == [
            "🥇 **1. <@42>** — 3 pts",
            "🥈 **2. <@7>** — 1 pt",
            "• **4. <@8>** — 1 pt",
        ]

    def test_empty_renders_placeholder(self):
        assert render_lines([]) == [LeaderboardConstants.EMPTY_PLACEHOLDER]

    def test_custom_name_resolver(self):
        lines = render_lines([LeaderboardEntry(0, "42", 2)], name_resolver=lambda uid: f"reader-{uid}")

        assert lines == ["🥇 **1. reader-42** — 2 pts"]

    def test_empty_resolved_name_falls_back(self):
        lines = render_lines([LeaderboardEntry(0, "42", 2)], name_resolver=lambda uid: "")

        assert lines == ["🥇 **1. User 42** — 2 pts"]


class TestEmbeds:
    def test_weekly_embed(self):
        stamp = datetime(2026, 10, 19, tzinfo=timezone.utc)
        embed = build_leaderboard_embed(_result([LeaderboardEntry(0, "1", 4)], unique=6), timestamp=stamp)

        assert isinstance(embed, discord.Embed)
        assert embed.title == LeaderboardConstants.WEEKLY_TITLE
        assert embed.description == "🥇 **1. <@1>** — 4 pts"
        assert embed.color.value == UIConstants.WEEKLY_EMBED_COLOR
        assert embed.footer.text == LeaderboardConstants.SCORING_FOOTER
        assert embed.fields[0].name == "Unique reactors (7d)"
        assert embed.fields[0].value == "6"
        assert embed.fields[0].inline is True
        assert embed.timestamp == stamp

    def test_empty_embed_uses_placeholder_and_zero_reactors(self):
        embed = build_leaderboard_embed(_result([]))

        assert embed.description == "No points this week."
        assert embed.fields[0].value == "0"

    def test_slash_embed(self):
        embed = build_slash_embed(_result([LeaderboardEntry(0, "1", 1)], unique=1))

        assert embed.title == LeaderboardConstants.SLASH_TITLE
        assert embed.footer.text == LeaderboardConstants.SLASH_FOOTER
        assert embed.fields[0].name == "Unique reactors"
        assert embed.color.value == UIConstants.SLASH_EMBED_COLOR
