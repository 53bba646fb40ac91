from typing import TYPE_CHECKING

import bittensor as bt

if TYPE_CHECKING:
    from emojigate.classes import EvaluationResult

BYPASS_MODE_WARNING = 'Running in bypass mode - workflow will continue despite no positive emoji PRs'


def log_evaluation_results(result: 'EvaluationResult') -> None:
    """Log the counts of an evaluation, and the qualifying PRs when there are any."""
    bt.logging.info(f'Checking for positive emojis in PR titles merged in the last {result.days} days')
    bt.logging.info(
        f'Found {result.total_merged_count} merged PRs, '
        f'of which {result.qualifying_count} have positive emojis'
    )

    if result.qualifying_prs:
        bt.logging.info(result.message)


def build_job_summary(result: 'EvaluationResult') -> str:
    """Markdown job summary for the run."""
    lines = [
        '## Positive emoji gate',
        '',
        f'**Outcome:** {result.outcome.value}',
        '',
        f'- Lookback window: {result.days} days',
        f'- Merged PRs in window: {result.total_merged_count}',
        f'- PRs with positive emojis: {result.qualifying_count}',
        '',
    ]

    if result.qualifying_prs:
        lines.append('| PR | Title |')
        lines.append('| --- | --- |')
        for pr in result.qualifying_prs:
            title = pr.title.replace('|', '\\|')
            lines.append(f'| #{pr.number} | {title} |')
    else:
        lines.append(result.message)

    return '\n'.join(lines) + '\n'
