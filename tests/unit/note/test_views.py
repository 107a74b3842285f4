"""Tests for note list views: search filter and recency grouping."""

from datetime import UTC, datetime, timedelta, timezone
from uuid import uuid4

import pytest

from pocketnote.core.modules.note.models import Note, RecencyBucket
from pocketnote.core.modules.note.views import (
    derive_view,
    filter_notes,
    group_by_recency,
    note_stats,
    recency_bucket,
    word_count,
)

NOW = datetime(2026, 10, 18, 15, 30, tzinfo=UTC)


def make_note(owner_id, title="Note", content="", updated_at=NOW):
    return Note(id=uuid4(), owner=owner_id, title=title, content=content, updated_at=updated_at)


@pytest.fixture
def notes(owner_id):
    return [
        make_note(owner_id, "Groceries", "Buy MILK and eggs", NOW - timedelta(hours=1)),
        make_note(owner_id, "Meeting", "Discuss roadmap", NOW - timedelta(hours=20)),
        make_note(owner_id, "Ideas", "milkshake recipe", NOW - timedelta(days=3)),
        make_note(owner_id, "Archive", "old stuff", NOW - timedelta(days=90)),
    ]


class TestFilterNotes:
    def test_empty_query_returns_all(self, notes):
        assert filter_notes(notes, "") == notes

    def test_case_insensitive_title_and_content(self, notes):
        result = filter_notes(notes, "Milk")

        assert [n.title for n in result] == ["Groceries", "Ideas"]

    def test_matches_title(self, notes):
        assert [n.title for n in filter_notes(notes, "meet")] == ["Meeting"]

    def test_result_is_subset_in_order(self, notes):
        for query in ("", "o", "e", "zzz", "ARCH"):
            result = filter_notes(notes, query)
            assert all(note in notes for note in result)
            assert [notes.index(n) for n in result] == sorted(notes.index(n) for n in result)

    def test_no_match(self, notes):
        assert filter_notes(notes, "nothing like this") == []

    def test_does_not_mutate_input(self, notes):
        before = list(notes)
        filter_notes(notes, "milk")
        assert notes == before


class TestRecencyBucket:
    @pytest.mark.parametrize(
        ("updated_at", "expected"),
        [
            (NOW, RecencyBucket.TODAY),
            (datetime(2026, 10, 18, 0, 0, tzinfo=UTC), RecencyBucket.TODAY),
            (datetime(2026, 10, 17, 23, 59, tzinfo=UTC), RecencyBucket.YESTERDAY),
            (datetime(2026, 10, 17, 0, 0, tzinfo=UTC), RecencyBucket.YESTERDAY),
            (datetime(2026, 10, 16, 23, 59, tzinfo=UTC), RecencyBucket.PREVIOUS_30_DAYS),
            (NOW - timedelta(days=30) + timedelta(seconds=1), RecencyBucket.PREVIOUS_30_DAYS),
            (NOW - timedelta(days=30), RecencyBucket.OLDER),
            (NOW - timedelta(days=400), RecencyBucket.OLDER),
        ],
    )
    def test_boundaries(self, updated_at, expected):
        assert recency_bucket(updated_at, NOW) == expected

    def test_calendar_day_uses_reference_timezone(self):
        # 23:00 UTC on the 17th is already the 18th in UTC+3
        tz = timezone(timedelta(hours=3))
        now = datetime(2026, 10, 18, 9, 0, tzinfo=tz)

        assert recency_bucket(datetime(2026, 10, 17, 23, 0, tzinfo=UTC), now) == RecencyBucket.TODAY

    @pytest.mark.parametrize(
        ("updated_at", "now", "expected"),
        [
            (datetime(2026, 10, 18, 1, 0, tzinfo=UTC), NOW.replace(tzinfo=None), RecencyBucket.TODAY),
            (datetime(2026, 10, 18, 1, 0), NOW, RecencyBucket.TODAY),
            (datetime(2026, 10, 17, 1, 0), NOW.replace(tzinfo=None), RecencyBucket.YESTERDAY),
            (datetime(2026, 8, 1), NOW, RecencyBucket.OLDER),
        ],
    )
    def test_naive_datetimes_are_utc(self, updated_at, now, expected):
        assert recency_bucket(updated_at, now) == expected

    def test_naive_reference_in_view(self, owner_id):
        view = derive_view([make_note(owner_id, updated_at=NOW - timedelta(days=3))], "", NOW.replace(tzinfo=None))

        assert [group.bucket for group in view.groups] == [RecencyBucket.PREVIOUS_30_DAYS]


class TestGroupByRecency:
    def test_all_buckets_present_in_order(self):
        groups = group_by_recency([], NOW)

        assert list(groups) == [
            RecencyBucket.TODAY,
            RecencyBucket.YESTERDAY,
            RecencyBucket.PREVIOUS_30_DAYS,
            RecencyBucket.OLDER,
        ]
        assert all(items == [] for items in groups.values())

    def test_partition_is_exhaustive_and_disjoint(self, owner_id):
        notes = [make_note(owner_id, updated_at=NOW - timedelta(hours=h)) for h in range(0, 24 * 45, 7)]

        groups = group_by_recency(notes, NOW)
        grouped_ids = [note.id for items in groups.values() for note in items]

        assert sorted(grouped_ids) == sorted(note.id for note in notes)
        assert len(grouped_ids) == len(set(grouped_ids))

    def test_keeps_input_order_within_bucket(self, owner_id):
        first = make_note(owner_id, "first", updated_at=NOW - timedelta(minutes=5))
        second = make_note(owner_id, "second", updated_at=NOW - timedelta(minutes=1))

        groups = group_by_recency([first, second], NOW)

        assert groups[RecencyBucket.TODAY] == [first, second]

    def test_sample_collection(self, notes):
        groups = group_by_recency(notes, NOW)

        assert [n.title for n in groups[RecencyBucket.TODAY]] == ["Groceries"]
        assert [n.title for n in groups[RecencyBucket.YESTERDAY]] == ["Meeting"]
        assert [n.title for n in groups[RecencyBucket.PREVIOUS_30_DAYS]] == ["Ideas"]
        assert [n.title for n in groups[RecencyBucket.OLDER]] == ["Archive"]

    def test_idempotent(self, notes):
        assert group_by_recency(notes, NOW) == group_by_recency(notes, NOW)


class TestDeriveView:
    def test_omits_empty_groups(self, notes):
        view = derive_view(notes, "milk", NOW)

        assert view.total == 2
        assert [group.bucket for group in view.groups] == [RecencyBucket.TODAY, RecencyBucket.PREVIOUS_30_DAYS]
        assert view.query == "milk"
        assert view.stale is False

    def test_empty_collection(self):
        view = derive_view([], "", NOW, stale=True)

        assert view.total == 0
        assert view.groups == []
        assert view.stale is True


class TestStats:
    @pytest.mark.parametrize(("text", "expected"), [("", 0), ("   ", 0), ("one", 1), (" two  words\nthree ", 3)])
    def test_word_count(self, text, expected):
        assert word_count(text) == expected

    def test_note_stats(self, owner_id):
        stats = note_stats(make_note(owner_id, content="Buy milk"))

        assert stats.words == 2
        assert stats.characters == 8
