# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
GitHub Actions runner integration.

Inputs arrive as INPUT_<NAME> environment variables, the repository as
GITHUB_REPOSITORY. Warnings and failures are reported with workflow commands
on stdout; step outputs and the job summary are appended to the files named
by GITHUB_OUTPUT and GITHUB_STEP_SUMMARY.
"""

import os
import uuid
from typing import Optional

import bittensor as bt
import click

from emojigate.errors import ConfigurationError


def is_github_actions() -> bool:
    """Return True when running inside a GitHub Actions job."""
    return os.getenv('GITHUB_ACTIONS', '').lower() == 'true'


def get_input(name: str, required: bool = False) -> Optional[str]:
    """Read an action input, trimmed. Accepts both INPUT_BYPASS-MODE and INPUT_BYPASS_MODE."""
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    value = os.getenv(key)
    if value is None:
        value = os.getenv(key.replace('-', '_'))

    value = value.strip() if value is not None else None
    if required and not value:
        raise ConfigurationError(f'Input required and not supplied: {name}')
    return value or None


def get_repository() -> Optional[str]:
    """The 'owner/repo' of the workflow run."""
    return os.getenv('GITHUB_REPOSITORY')


def escape_data(value: str) -> str:
    """Escape a workflow command message so multi-line text survives."""
    return value.replace('%', '%25').replace('\r', '%0D').replace('\n', '%0A')


def _issue_command(command: str, message: str) -> None:
    click.echo(f"::{command}::{escape_data(message)}")


def warning(message: str) -> None:
    """Log a warning, annotated on the run when inside GitHub Actions."""
    bt.logging.warning(message)
    if is_github_actions():
        _issue_command('warning', message)


def set_failed(message: str) -> None:
    """Report the run's failure reason. The caller sets the non-zero exit status."""
    if is_github_actions():
        _issue_command('error', message)
    bt.logging.error(message)


def _append_to_file(env_var: str, content: str) -> bool:
    path = os.getenv(env_var)
    if not path:
        return False
    with open(path, 'a', encoding='utf-8') as f:
        f.write(content)
    return True


def set_output(name: str, value) -> None:
    """Write a step output. Multi-line values use a random heredoc delimiter."""
    value = str(value)
    if '\n' in value:
        delimiter = f"ghadelimiter_{uuid.uuid4()}"
        content = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    else:
        content = f"{name}={value}\n"

    if not _append_to_file('GITHUB_OUTPUT', content):
        bt.logging.debug(f"GITHUB_OUTPUT not set, skipping output {name}={value}")


def append_job_summary(markdown: str) -> None:
    if not _append_to_file('GITHUB_STEP_SUMMARY', markdown if markdown.endswith('\n') else markdown + '\n'):
        bt.logging.debug("GITHUB_STEP_SUMMARY not set, skipping job summary")
