#!/usr/bin/env python3
# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Unit tests for github_api_tools module.

Tests the pull request listing, particularly focusing on:
- Request shape (closed, sorted by update, first page of 100)
- Parsing of merged and unmerged PRs
- Error handling for failed responses and connection errors (no retries)
- Rate limit header parsing
"""

from datetime import datetime, timezone
from unittest.mock import Mock, patch

import pytest
import requests

from emojigate.errors import GitHubAPIError
from emojigate.utils.github_api_tools import (
    is_rate_limited,
    list_closed_pull_requests,
    make_headers,
    parse_rate_limit_headers,
)
from tests.helpers import make_pr_raw

RATE_LIMIT_EXCEEDED_HEADERS = {
    'X-RateLimit-Limit': '5000',
    'X-RateLimit-Remaining': '0',
    'X-RateLimit-Reset': '1768478400',
    'X-RateLimit-Used': '5000',
}


def _response(status_code=200, body=None, headers=None, text=''):
    response = Mock(status_code=status_code, headers=headers or {}, text=text)
    response.json.return_value = body
    return response


# ============================================================================
# list_closed_pull_requests
# ============================================================================


class TestListClosedPullRequests:
    @patch('emojigate.utils.github_api_tools.requests.get')
    def test_request_shape(self, mock_get):
        mock_get.return_value = _response(body=[])

        list_closed_pull_requests('octo/repo', 'tok')

        mock_get.assert_called_once()
        args, kwargs = mock_get.call_args
        assert args[0] == 'https://api.github.com/repos/octo/repo/pulls'
        assert kwargs['params'] == {'state': 'closed', 'sort': 'updated', 'direction': 'desc', 'per_page': 100}
        assert kwargs['headers']['Authorization'] == 'token tok'
        assert kwargs['timeout'] == 30

    @patch('emojigate.utils.github_api_tools.requests.get')
    def test_parses_merged_and_unmerged_prs(self, mock_get):
        mock_get.return_value = _response(
            body=[
                make_pr_raw(2, 'Add tests ✅', '2026-01-14T10:30:00Z'),
                make_pr_raw(1, 'Abandoned', None),
            ]
        )

        prs = list_closed_pull_requests('octo/repo', 'tok')

        assert [pr.number for pr in prs] == [2, 1]
        assert prs[0].title == 'Add tests ✅'
        assert prs[0].merged_at == datetime(2026, 1, 14, 10, 30, tzinfo=timezone.utc)
        assert prs[1].merged_at is None
        assert not prs[1].is_merged

    @patch('emojigate.utils.github_api_tools.requests.get')
    def test_error_status_raises_without_retry(self, mock_get):
        mock_get.return_value = _response(status_code=401, body={'message': 'Bad credentials'}, text='{}')

        with pytest.raises(GitHubAPIError, match='status 401 \\(Bad credentials\\)') as exc_info:
            list_closed_pull_requests('octo/repo', 'tok')

        assert exc_info.value.status_code == 401
        assert mock_get.call_count == 1

    @patch('emojigate.utils.github_api_tools.requests.get')
    def test_error_without_json_body(self, mock_get):
        response = _response(status_code=502, text='<html>502 Bad Gateway</html>')
        response.json.side_effect = ValueError('not json')
        mock_get.return_value = response

        with pytest.raises(GitHubAPIError, match='502 Bad Gateway'):
            list_closed_pull_requests('octo/repo', 'tok')

    @patch('emojigate.utils.github_api_tools.requests.get')
    def test_connection_error_raises(self, mock_get):
        mock_get.side_effect = requests.exceptions.ConnectionError('Connection refused')

        with pytest.raises(GitHubAPIError, match='Connection refused'):
            list_closed_pull_requests('octo/repo', 'tok')

        assert mock_get.call_count == 1

    @patch('emojigate.utils.github_api_tools.requests.get')
    def test_rate_limited_raises(self, mock_get):
        mock_get.return_value = _response(
            status_code=403, headers=RATE_LIMIT_EXCEEDED_HEADERS, text='API rate limit exceeded'
        )

        with pytest.raises(GitHubAPIError, match='rate limit exceeded') as exc_info:
            list_closed_pull_requests('octo/repo', 'tok')

        assert exc_info.value.status_code == 403
        assert '2026-01-15T12:00:00+00:00' in str(exc_info.value)

    @patch('emojigate.utils.github_api_tools.requests.get')
    def test_unexpected_payload_raises(self, mock_get):
        mock_get.return_value = _response(body={'items': []})

        with pytest.raises(GitHubAPIError, match='expected a list'):
            list_closed_pull_requests('octo/repo', 'tok')

    @patch('emojigate.utils.github_api_tools.bt.logging')
    @patch('emojigate.utils.github_api_tools.requests.get')
    def test_warns_when_rate_limit_nearly_exhausted(self, mock_get, mock_logging):
        headers = dict(RATE_LIMIT_EXCEEDED_HEADERS, **{'X-RateLimit-Remaining': '3'})
        mock_get.return_value = _response(body=[], headers=headers)

        list_closed_pull_requests('octo/repo', 'tok')

        mock_logging.warning.assert_called_once()
        assert 'Approaching GitHub API rate limit' in mock_logging.warning.call_args.args[0]


# ============================================================================
# Rate limit helpers
# ============================================================================


class TestRateLimitHelpers:
    def test_parse_headers(self):
        info = parse_rate_limit_headers(_response(headers=RATE_LIMIT_EXCEEDED_HEADERS))
        assert info.limit == 5000
        assert info.remaining == 0
        assert info.is_exceeded

    def test_parse_missing_headers(self):
        assert parse_rate_limit_headers(_response(headers={})) is None

    def test_parse_garbage_headers(self):
        assert parse_rate_limit_headers(_response(headers={'X-RateLimit-Limit': 'lots'})) is None

    def test_forbidden_without_rate_limit_is_not_rate_limited(self):
        assert not is_rate_limited(_response(status_code=403, text='Resource not accessible by integration'))

    def test_rate_limit_message_in_body(self):
        assert is_rate_limited(_response(status_code=429, text='You have exceeded a secondary rate limit'))

    def test_success_is_not_rate_limited(self):
        assert not is_rate_limited(_response(status_code=200, headers=RATE_LIMIT_EXCEEDED_HEADERS))

    def test_make_headers(self):
        assert make_headers('abc') == {
            'Authorization': 'token abc',
            'Accept': 'application/vnd.github.v3+json',
        }
