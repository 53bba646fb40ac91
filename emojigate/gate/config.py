# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Parse raw action inputs (all strings) into a GateConfig.

Invalid or missing optional values fall back to their defaults; missing
required values raise ConfigurationError.
"""

import re
from typing import Optional

import bittensor as bt

from emojigate.classes import GateConfig
from emojigate.constants import DEFAULT_BYPASS_MODE, DEFAULT_LOOKBACK_DAYS, MAX_LOOKBACK_DAYS
from emojigate.errors import ConfigurationError
from emojigate.utils.utils import mask_secret

REPO_PATTERN = re.compile(r'^[a-zA-Z0-9._-]+/[a-zA-Z0-9._-]+$')
# Leading integer only, so "14d" reads as 14
DAYS_PATTERN = re.compile(r'^\s*([+-]?\d+)')


def parse_days(raw: Optional[str]) -> int:
    """Lookback window in days.

    Missing, non-numeric or non-positive values give the default. Values above
    MAX_LOOKBACK_DAYS are capped.
    """
    if raw is None:
        return DEFAULT_LOOKBACK_DAYS

    match = DAYS_PATTERN.match(str(raw))
    if not match:
        if str(raw).strip():
            bt.logging.warning(f"Invalid days input '{raw}', using default of {DEFAULT_LOOKBACK_DAYS}")
        return DEFAULT_LOOKBACK_DAYS

    days = int(match.group(1))
    if days <= 0:
        bt.logging.warning(f"Non-positive days input '{raw}', using default of {DEFAULT_LOOKBACK_DAYS}")
        return DEFAULT_LOOKBACK_DAYS
    if days > MAX_LOOKBACK_DAYS:
        bt.logging.warning(f"Days input '{raw}' exceeds {MAX_LOOKBACK_DAYS}, capping the window")
        return MAX_LOOKBACK_DAYS
    return days


def parse_bypass_mode(raw: Optional[str]) -> bool:
    """Only the string 'true' (any case) enables bypass mode."""
    if raw is None:
        return DEFAULT_BYPASS_MODE
    return str(raw).strip().lower() == 'true'


def validate_repository(repository: Optional[str]) -> str:
    if not repository or not repository.strip():
        raise ConfigurationError('Repository not set (expected owner/repo, e.g. from GITHUB_REPOSITORY)')

    repository = repository.strip()
    if not REPO_PATTERN.match(repository):
        raise ConfigurationError(f"Invalid repository '{repository}', expected owner/repo")
    return repository


def parse_config(
    token: Optional[str],
    repository: Optional[str],
    days: Optional[str] = None,
    bypass_mode: Optional[str] = None,
) -> GateConfig:
    """Build and validate the gate configuration once, at startup.

    Args:
        token (Optional[str]): GitHub token, required
        repository (Optional[str]): Repository in format 'owner/repo', required
        days (Optional[str]): Raw lookback window input
        bypass_mode (Optional[str]): Raw bypass-mode input

    Returns:
        GateConfig: The validated configuration

    Raises:
        ConfigurationError: If the token or repository is missing or malformed
    """
    if not token or not token.strip():
        raise ConfigurationError('Input required and not supplied: github-token')

    config = GateConfig(
        token=token.strip(),
        repository=validate_repository(repository),
        days=parse_days(days),
        bypass=parse_bypass_mode(bypass_mode),
    )
    bt.logging.debug(f"Loaded {config} with token {mask_secret(config.token)}")
    return config
