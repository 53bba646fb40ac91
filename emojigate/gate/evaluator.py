# The MIT License (MIT)
# Copyright © 2025 Entrius

from datetime import datetime, timedelta, timezone
from typing import List, Optional

import bittensor as bt

from emojigate.classes import EmojiPolicy, EvaluationResult, GateOutcome, PullRequest
from emojigate.constants import EXAMPLE_POSITIVE_EMOJIS


def calculate_period_start(days: int, now: Optional[datetime] = None) -> datetime:
    """Start of the lookback window, `days` calendar days before now (UTC).

    Windows reaching past the earliest representable date start there.
    """
    now = now or datetime.now(timezone.utc)
    try:
        return now - timedelta(days=days)
    except OverflowError:
        return datetime.min.replace(tzinfo=timezone.utc)


def filter_recent_merged_prs(pull_requests: List[PullRequest], period_start: datetime) -> List[PullRequest]:
    """Keep PRs merged strictly after period_start. Closed-but-unmerged PRs are dropped."""
    recent = []
    for pr in pull_requests:
        if not pr.is_merged:
            bt.logging.debug(f"Skipping PR #{pr.number} - closed without merging")
            continue
        if pr.merged_at <= period_start:
            bt.logging.debug(f"Skipping PR #{pr.number} - merged before {period_start.isoformat()}")
            continue
        recent.append(pr)
    return recent


def build_failure_message(days: int) -> str:
    """Remediation text shown when no merged PR in the window has a positive emoji."""
    examples = ' '.join(EXAMPLE_POSITIVE_EMOJIS)
    return (
        f"❌ No PRs with positive emojis were merged in the last {days} days!\n\n"
        f"Your team needs to create and merge a PR with a positive emoji in the title to unblock deployments.\n\n"
        f"Positive emoji examples: {examples}\n\n"
        f"Create a small PR (e.g., update documentation, add comments) with a positive emoji in the title, "
        f"get it reviewed and merged, and then retry this workflow."
    )


def build_success_message(qualifying_prs: List[PullRequest]) -> str:
    pr_links = '\n'.join(str(pr) for pr in qualifying_prs)
    return f"✅ Found these PRs with positive emojis:\n{pr_links}"


def evaluate(
    pull_requests: List[PullRequest],
    days: int,
    bypass: bool = False,
    policy: Optional[EmojiPolicy] = None,
    now: Optional[datetime] = None,
) -> EvaluationResult:
    """
    Decide the gate outcome for a list of closed pull requests.

    Does no I/O and raises nothing for well-formed PullRequest records, so the
    caller owns all signaling to the CI host.

    Args:
        pull_requests (List[PullRequest]): Closed PRs as fetched from GitHub
        days (int): Lookback window in days
        bypass (bool): Downgrade a failing gate to a warning
        policy (Optional[EmojiPolicy]): Allow-list and detector, defaults to EmojiPolicy.default()
        now (Optional[datetime]): Evaluation time, defaults to the current UTC time

    Returns:
        EvaluationResult: outcome, message and counts for the run
    """
    policy = policy or EmojiPolicy.default()
    period_start = calculate_period_start(days, now)

    recent_merged_prs = filter_recent_merged_prs(pull_requests, period_start)
    qualifying_prs = [pr for pr in recent_merged_prs if policy.is_positive_title(pr.title)]

    if qualifying_prs:
        outcome = GateOutcome.PASSED
        message = build_success_message(qualifying_prs)
    else:
        outcome = GateOutcome.PASSED_VIA_BYPASS_WARNING if bypass else GateOutcome.FAILED
        message = build_failure_message(days)

    return EvaluationResult(
        days=days,
        outcome=outcome,
        message=message,
        total_merged_count=len(recent_merged_prs),
        qualifying_prs=qualifying_prs,
    )
