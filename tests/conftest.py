#!/usr/bin/env python3
# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Shared fixtures for emojigate tests.
"""

import pytest

from tests.helpers import NOW

# Variables a GitHub Actions job exports; every test starts without them.
_ACTIONS_ENV_VARS = [
    'GITHUB_ACTIONS',
    'GITHUB_OUTPUT',
    'GITHUB_STEP_SUMMARY',
    'GITHUB_REPOSITORY',
    'GITHUB_TOKEN',
    'INPUT_GITHUB-TOKEN',
    'INPUT_GITHUB_TOKEN',
    'INPUT_DAYS',
    'INPUT_BYPASS-MODE',
    'INPUT_BYPASS_MODE',
]


@pytest.fixture(autouse=True)
def clean_actions_env(monkeypatch):
    for name in _ACTIONS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def actions_env(monkeypatch, tmp_path):
    """Pretend to run inside a GitHub Actions job, with output and summary files."""
    output_file = tmp_path / 'github_output'
    summary_file = tmp_path / 'step_summary'
    monkeypatch.setenv('GITHUB_ACTIONS', 'true')
    monkeypatch.setenv('GITHUB_OUTPUT', str(output_file))
    monkeypatch.setenv('GITHUB_STEP_SUMMARY', str(summary_file))
    return output_file, summary_file
