"""Headshot resolution: pick one current headshot per profile.

A profile may have many media rows of kind ``headshot`` (re-uploads,
imports, hand-pasted URLs). Exactly one is shown. Candidates are ordered
by a strict total order, each criterion breaking ties of the previous:

1. flagged current before not current
2. later upload timestamp first (unparseable -> epoch 0)
3. lower explicit sort index first (missing/unparseable/non-finite -> +infinity)
4. file-id candidates before URL-only candidates
5. lexicographic file id (else URL)

The winner's URL gets a ``v=`` cache-busting parameter so browsers and
CDNs pick up a replaced headshot immediately.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime, timezone
from urllib.parse import quote

from alumsearch.constants import (
    DEFAULT_HEADSHOT_URL,
    HEADSHOT_FILE_URL_TEMPLATE,
    HEADSHOT_KIND,
    TRUTHY_STRINGS,
)
from alumsearch.entities.models import MediaCandidate

logger = logging.getLogger(__name__)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@dataclass(frozen=True)
class ResolvedHeadshot:
    """The URL to render plus the candidate it came from (None for the placeholder)."""

    url: str
    cache_key: str = ""
    candidate: MediaCandidate | None = None

    @property
    def is_placeholder(self) -> bool:
        return self.candidate is None


def truthy(value: object) -> bool:
    """Interpret a spreadsheet flag: True, or "true"/"t"/"yes"/"y"/"1" in any case."""
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    return str(value).strip().lower() in TRUTHY_STRINGS


def is_headshot_kind(kind: str) -> bool:
    """Match "headshot", "Head_Shot", "head-shot", "head shot" alike."""
    squashed = "".join(ch for ch in (kind or "").lower() if ch.isalnum())
    return squashed == HEADSHOT_KIND


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO-8601 timestamp; anything unparseable is the epoch."""
    text = (value or "").strip()
    if not text:
        return _EPOCH
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return _EPOCH
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_sort_index(value: str) -> float:
    """Parse an explicit sort index; missing, unparseable or non-finite sorts last."""
    try:
        number = float((value or "").strip())
    except ValueError:
        return math.inf
    return number if math.isfinite(number) else math.inf


def _sort_key(candidate: MediaCandidate) -> tuple:
    has_file = bool(candidate.file_id)
    return (
        0 if truthy(candidate.is_current) else 1,
        -parse_timestamp(candidate.uploaded_at).timestamp(),
        parse_sort_index(candidate.sort_index),
        0 if has_file else 1,
        candidate.file_id if has_file else candidate.external_url,
    )


def pick_current_headshot(candidates: Iterable[MediaCandidate]) -> MediaCandidate | None:
    """Return the single canonical headshot candidate, or None.

    Rows with neither a file id nor a URL cannot be rendered and are skipped.
    """
    headshots = [
        c for c in candidates if is_headshot_kind(c.kind) and (c.file_id or c.external_url)
    ]
    if not headshots:
        return None
    return min(headshots, key=_sort_key)


def upstream_url(candidate: MediaCandidate) -> str:
    """File ids go through the thumbnail template; external URLs pass through."""
    if candidate.file_id:
        return HEADSHOT_FILE_URL_TEMPLATE.format(file_id=quote(candidate.file_id, safe=""))
    return candidate.external_url


def with_version(url: str, version: str) -> str:
    """Append a ``v=`` cache-busting parameter."""
    if not version:
        return url
    sep = "&" if "?" in url else "?"
    return f"{url}{sep}v={quote(version, safe='')}"


def resolve_headshot(
    candidates: Iterable[MediaCandidate],
    record_updated_at: str = "",
) -> ResolvedHeadshot:
    """Resolve the headshot URL and cache key for one profile.

    Args:
        candidates: All media rows matched to the profile (any kind).
        record_updated_at: The profile's own last-updated timestamp, used
            as the version when the winning candidate has no upload time.

    Returns:
        ResolvedHeadshot; the default placeholder if nothing resolves.
    """
    winner = pick_current_headshot(candidates)
    if winner is None:
        return ResolvedHeadshot(url=DEFAULT_HEADSHOT_URL)

    url = upstream_url(winner)
    cache_key = next(
        (
            v
            for v in (winner.uploaded_at, record_updated_at, winner.file_id, winner.external_url)
            if v and v.strip()
        ),
        "",
    )
    return ResolvedHeadshot(url=with_version(url, cache_key), cache_key=cache_key, candidate=winner)
