# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Top-level boundary of a gate run.

Every exception raised while parsing inputs, listing PRs or evaluating them
ends here and becomes a failed run. The evaluator's typed result is mapped to
the runner's signaling: PASSED and PASSED_VIA_BYPASS_WARNING exit 0, FAILED
exits 1.
"""

from datetime import datetime
from typing import Callable, List, Optional

import bittensor as bt

from emojigate.classes import EmojiPolicy, EvaluationResult, GateOutcome, PullRequest
from emojigate.gate.config import parse_config
from emojigate.gate.evaluator import evaluate
from emojigate.utils import actions
from emojigate.utils.github_api_tools import list_closed_pull_requests
from emojigate.utils.logging import BYPASS_MODE_WARNING, build_job_summary, log_evaluation_results

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

FetchPullRequests = Callable[[str, str], List[PullRequest]]


def write_step_outputs(result: EvaluationResult) -> None:
    """Step outputs and job summary. A write failure never changes the outcome."""
    try:
        actions.set_output('qualifying-count', result.qualifying_count)
        actions.set_output('merged-count', result.total_merged_count)
        actions.set_output('passed', str(result.passed).lower())
        actions.append_job_summary(build_job_summary(result))
    except OSError as e:
        bt.logging.warning(f"Could not write step outputs: {e}")


def report_result(result: EvaluationResult) -> int:
    """Signal an evaluation result to the runner and return the exit code."""
    log_evaluation_results(result)

    if result.outcome == GateOutcome.PASSED:
        exit_code = EXIT_SUCCESS
    elif result.outcome == GateOutcome.PASSED_VIA_BYPASS_WARNING:
        actions.warning(result.message)
        actions.warning(BYPASS_MODE_WARNING)
        exit_code = EXIT_SUCCESS
    else:
        actions.set_failed(result.message)
        exit_code = EXIT_FAILURE

    write_step_outputs(result)
    return exit_code


def run(
    token: Optional[str],
    repository: Optional[str],
    days: Optional[str] = None,
    bypass_mode: Optional[str] = None,
    policy: Optional[EmojiPolicy] = None,
    now: Optional[datetime] = None,
    fetch: Optional[FetchPullRequests] = None,
) -> int:
    """
    Run the positive emoji gate once.

    Args:
        token (Optional[str]): GitHub token
        repository (Optional[str]): Repository in format 'owner/repo'
        days (Optional[str]): Raw lookback window input
        bypass_mode (Optional[str]): Raw bypass-mode input
        policy (Optional[EmojiPolicy]): Emoji policy, defaults to the built-in allow-list
        now (Optional[datetime]): Evaluation time, defaults to the current UTC time
        fetch (Optional[FetchPullRequests]): Lists closed PRs for (repository, token),
            defaults to list_closed_pull_requests

    Returns:
        int: Process exit code
    """
    fetch = fetch or list_closed_pull_requests
    try:
        config = parse_config(token, repository, days, bypass_mode)
        pull_requests = fetch(config.repository, config.token)
        result = evaluate(pull_requests, config.days, config.bypass, policy=policy, now=now)
        return report_result(result)
    except Exception as e:
        actions.set_failed(f"Action failed with error: {e}")
        bt.logging.debug(f"Gate run aborted: {type(e).__name__}")
        return EXIT_FAILURE

