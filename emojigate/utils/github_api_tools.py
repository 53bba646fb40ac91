# Entrius 2025
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import bittensor as bt
import requests

from emojigate.classes import PullRequest
from emojigate.constants import BASE_GITHUB_API_URL, GITHUB_API_TIMEOUT, PULLS_PER_PAGE
from emojigate.errors import GitHubAPIError

# =============================================================================
# Rate Limit Configuration
# =============================================================================
RATE_LIMIT_MIN_REMAINING = 10  # Warn when this few requests remain


@dataclass
class RateLimitInfo:
    """Represents GitHub API rate limit information extracted from response headers."""

    limit: int  # Maximum requests allowed per hour
    remaining: int  # Requests remaining in current window
    reset_timestamp: int  # Unix timestamp when the rate limit resets
    used: int  # Requests used in current window

    @property
    def is_exceeded(self) -> bool:
        """Check if rate limit has been exceeded."""
        return self.remaining == 0

    @property
    def seconds_until_reset(self) -> int:
        """Calculate seconds until rate limit resets."""
        current_time = int(time.time())
        return max(0, self.reset_timestamp - current_time)

    @property
    def reset_at(self) -> datetime:
        return datetime.fromtimestamp(self.reset_timestamp, tz=timezone.utc)

    def __str__(self) -> str:
        return f"RateLimit(remaining={self.remaining}/{self.limit}, resets_in={self.seconds_until_reset}s)"


def parse_rate_limit_headers(response: requests.Response) -> Optional[RateLimitInfo]:
    """
    Parse GitHub API rate limit information from response headers.

    Args:
        response: The HTTP response from GitHub API

    Returns:
        RateLimitInfo object if headers are present, None otherwise
    """
    headers = response.headers

    try:
        limit = int(headers.get('X-RateLimit-Limit', 0))
        remaining = int(headers.get('X-RateLimit-Remaining', 0))
        reset_timestamp = int(headers.get('X-RateLimit-Reset', 0))
        used = int(headers.get('X-RateLimit-Used', 0))

        if limit == 0 and reset_timestamp == 0:
            return None

        return RateLimitInfo(
            limit=limit,
            remaining=remaining,
            reset_timestamp=reset_timestamp,
            used=used
        )
    except (ValueError, TypeError) as e:
        bt.logging.debug(f"Could not parse rate limit headers: {e}")
        return None


def is_rate_limited(response: requests.Response) -> bool:
    """Check if a 403/429 response was caused by an exhausted rate limit."""
    if response.status_code not in (403, 429):
        return False

    rate_limit_info = parse_rate_limit_headers(response)
    if rate_limit_info and rate_limit_info.is_exceeded:
        return True

    return 'rate limit' in response.text.lower()


def check_preemptive_rate_limit(response: requests.Response) -> None:
    """
    Check if we're approaching rate limit and log a warning.

    Args:
        response: The HTTP response from GitHub API
    """
    rate_limit_info = parse_rate_limit_headers(response)

    if rate_limit_info:
        if rate_limit_info.remaining <= RATE_LIMIT_MIN_REMAINING:
            bt.logging.warning(
                f"Approaching GitHub API rate limit: {rate_limit_info.remaining} requests remaining, "
                f"resets in {rate_limit_info.seconds_until_reset}s"
            )
        else:
            bt.logging.debug(f"GitHub API {rate_limit_info}")


def make_headers(token: str) -> Dict[str, str]:
    """Build standard GitHub HTTP headers for a token.

    Args:
        token (str): GitHub token (PAT or the workflow's GITHUB_TOKEN)
    Returns:
        Dict[str, str]: Mapping of HTTP header names to values.
    """
    return {
        "Authorization": f"token {token}",
        "Accept": "application/vnd.github.v3+json",
    }


def _error_detail(response: requests.Response) -> str:
    """GitHub's error `message` field, falling back to the raw body."""
    try:
        body = response.json()
    except ValueError:
        return response.text.strip()
    if isinstance(body, dict) and body.get('message'):
        return body['message']
    return response.text.strip()


def list_closed_pull_requests(repository: str, token: str) -> List[PullRequest]:
    '''
    List the most recently updated closed PRs of a repository (first page only).

    Not retried: any failure is terminal for the gate run.

    Args:
        repository (str): Repository in format 'owner/repo'
        token (str): GitHub token
    Returns:
        List[PullRequest]: Up to PULLS_PER_PAGE closed PRs, most recently updated first

    Raises:
        GitHubAPIError: On a connection error, a non-200 response or an unexpected payload
    '''
    params: Dict[str, Any] = {
        'state': 'closed',
        'sort': 'updated',
        'direction': 'desc',
        'per_page': PULLS_PER_PAGE,
    }

    try:
        response = requests.get(
            f'{BASE_GITHUB_API_URL}/repos/{repository}/pulls',
            headers=make_headers(token),
            params=params,
            timeout=GITHUB_API_TIMEOUT,
        )
    except requests.exceptions.RequestException as e:
        raise GitHubAPIError(f"Request for closed PRs in {repository} failed: {e}") from e

    if is_rate_limited(response):
        rate_limit_info = parse_rate_limit_headers(response)
        reset_str = f", resets at {rate_limit_info.reset_at.isoformat()}" if rate_limit_info else ''
        raise GitHubAPIError(
            f"GitHub API rate limit exceeded while listing PRs in {repository}{reset_str}",
            status_code=response.status_code,
        )

    if response.status_code != 200:
        raise GitHubAPIError(
            f"Failed to list PRs in {repository}: status {response.status_code} ({_error_detail(response)})",
            status_code=response.status_code,
        )

    check_preemptive_rate_limit(response)

    pulls = response.json()
    if not isinstance(pulls, list):
        raise GitHubAPIError(f"Unexpected response listing PRs in {repository}: expected a list")

    bt.logging.debug(f"Fetched {len(pulls)} closed PRs from {repository}")
    return [PullRequest.from_github_response(pr_raw) for pr_raw in pulls]
