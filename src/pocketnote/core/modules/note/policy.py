"""Save policy: resolves the title and content to persist from editor fields."""

from typing import NamedTuple

TITLE_MAX_LENGTH = 30
DEFAULT_TITLE = "New Note"


class ResolvedNote(NamedTuple):
    title: str
    content: str


def is_blank(draft_title: str, draft_content: str) -> bool:
    """Whether a draft has nothing worth saving (both fields empty or whitespace)."""
    return not draft_title.strip() and not draft_content.strip()


def infer_title(content: str) -> str:
    """Derive a title from the first line of content.

    Surrounding whitespace of the line is dropped. Falls back to DEFAULT_TITLE
    when the first line is blank, e.g. content that starts with a newline.
    """
    first_line = content.split("\n", 1)[0].strip()
    return first_line[:TITLE_MAX_LENGTH] or DEFAULT_TITLE


def resolve(draft_title: str, draft_content: str) -> ResolvedNote:
    """Resolve editor fields into the title and content to persist.

    - A non-empty title is used stripped, content is kept as is.
    - Without a title the first line of content (up to TITLE_MAX_LENGTH chars)
      becomes the title. Content is never stripped of that line.
    - With both empty, DEFAULT_TITLE and empty content are returned. Callers
      check is_blank first and discard such drafts instead of writing them.
    """
    title = draft_title.strip()
    if title:
        return ResolvedNote(title=title, content=draft_content)

    if draft_content.strip():
        return ResolvedNote(title=infer_title(draft_content), content=draft_content)

    return ResolvedNote(title=DEFAULT_TITLE, content="")
