# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Builders shared across test modules."""

from datetime import datetime, timedelta, timezone
from typing import Optional

from emojigate.classes import PullRequest

NOW = datetime(2026, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


def make_pr(
    number: int = 1,
    title: str = 'Update docs',
    merged_days_ago: Optional[float] = 1.0,
    now: datetime = NOW,
) -> PullRequest:
    """Build a PullRequest merged `merged_days_ago` days before `now` (None = closed, not merged)."""
    merged_at = None if merged_days_ago is None else now - timedelta(days=merged_days_ago)
    return PullRequest(number=number, title=title, merged_at=merged_at)


def make_pr_raw(number: int = 1, title: str = 'Update docs', merged_at: Optional[str] = '2026-01-14T12:00:00Z') -> dict:
    """Minimal REST payload for one entry of GET /repos/{owner}/{repo}/pulls."""
    return {
        'number': number,
        'title': title,
        'state': 'closed',
        'merged_at': merged_at,
        'closed_at': merged_at or '2026-01-14T12:00:00Z',
        'updated_at': '2026-01-14T12:00:00Z',
    }
