from __future__ import annotations

from analytics.summary import build_chat_stats, build_filter_options

RECORDS = [
    {"date": "15 Jan 2026", "shift": "Pagi", "cs": "Ani", "channel": "Shopee",
     "intention": "Refund", "closing_status": "Closed", "survey": "TRUE"},
    {"date": "02/01/2026", "shift": "Pagi", "cs": "Ani", "channel": "TikTok",
     "intention": "Question", "closing_status": "Open", "survey": "FALSE"},
    {"date": "2026-02-03", "shift": "Malam", "cs": "Budi", "channel": "Shopee",
     "intention": "Refund", "closing_status": "", "survey": ""},
    {"date": "bad date", "shift": "", "cs": "", "channel": "",
     "intention": "", "closing_status": "Pending", "survey": True},
]


class TestChatStats:
    def test_status_counts(self) -> None:
        stats = build_chat_stats(RECORDS)

        assert stats.total_chats == 4
        assert stats.closed_chats == 1
        assert stats.open_chats == 2
        assert stats.surveyed_chats == 2

    def test_breakdowns_skip_blank_values(self) -> None:
        stats = build_chat_stats(RECORDS)

        assert stats.channels == {"Shopee": 2, "TikTok": 1}
        assert stats.shifts == {"Pagi": 2, "Malam": 1}
        assert set(stats.cs_performance) == {"Ani", "Budi"}
        assert stats.cs_performance["Ani"].total == 2
        assert stats.cs_performance["Ani"].closed == 1
        assert stats.cs_performance["Ani"].open == 1

    def test_date_range_uses_calendar_order(self) -> None:
        data = build_chat_stats(RECORDS).to_dict()
        assert data["date_range"] == {"min": "02 Jan 2026", "max": "03 Feb 2026"}

    def test_empty_input(self) -> None:
        data = build_chat_stats([]).to_dict()
        assert data["total_chats"] == 0
        assert data["date_range"] == {"min": None, "max": None}


def test_filter_options_are_sorted_and_distinct() -> None:
    options = build_filter_options(RECORDS)

    assert options["channels"] == ["Shopee", "TikTok"]
    assert options["intentions"] == ["Question", "Refund"]
    assert options["closing_status"] == ["Closed", "Open", "Pending"]
    assert options["cases"] == []
