"""Pure presentation views over a note collection.

Nothing here is cached or mutated: every call recomputes from the collection
and query it is given, so results are safe to derive on every request.
"""

from collections.abc import Sequence
from datetime import UTC, datetime, timedelta

from pocketnote.core.modules.note.models import Note, NoteGroup, NoteListView, NoteStats, RecencyBucket

RECENT_WINDOW = timedelta(days=30)


def filter_notes(notes: Sequence[Note], query: str) -> list[Note]:
    """Return notes whose title or content contains query, case-insensitively.

    Collection order is preserved. An empty query returns every note.
    """
    if not query:
        return list(notes)
    needle = query.casefold()
    return [note for note in notes if needle in note.title.casefold() or needle in note.content.casefold()]


def recency_bucket(updated_at: datetime, now: datetime) -> RecencyBucket:
    """Classify a timestamp against a reference time.

    Calendar days are compared in now's timezone. The 30 day window is elapsed
    wall-clock time, not calendar days. Naive datetimes on either side are
    taken to be UTC.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=UTC)
    if updated_at.tzinfo is None:
        updated_at = updated_at.replace(tzinfo=UTC)
    local = updated_at.astimezone(now.tzinfo)
    day = local.date()
    if day == now.date():
        return RecencyBucket.TODAY
    if day == (now - timedelta(days=1)).date():
        return RecencyBucket.YESTERDAY
    if now - local < RECENT_WINDOW:
        return RecencyBucket.PREVIOUS_30_DAYS
    return RecencyBucket.OLDER


def group_by_recency(notes: Sequence[Note], now: datetime) -> dict[RecencyBucket, list[Note]]:
    """Partition notes into the four recency buckets.

    Every bucket is present in the result (possibly empty), in display order.
    Within a bucket the input order is kept.
    """
    groups: dict[RecencyBucket, list[Note]] = {bucket: [] for bucket in RecencyBucket}
    for note in notes:
        groups[recency_bucket(note.updated_at, now)].append(note)
    return groups


def derive_view(notes: Sequence[Note], query: str, now: datetime, stale: bool = False) -> NoteListView:
    """Filter, group and drop empty buckets for rendering."""
    filtered = filter_notes(notes, query)
    groups = [NoteGroup(bucket=bucket, notes=items) for bucket, items in group_by_recency(filtered, now).items() if items]
    return NoteListView(query=query, total=len(filtered), groups=groups, stale=stale)


def word_count(text: str) -> int:
    return len(text.split())


def note_stats(note: Note) -> NoteStats:
    return NoteStats(words=word_count(note.content), characters=len(note.content))
