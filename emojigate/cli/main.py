# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
emojigate CLI - Main entry point

Usage:
    emojigate check [--days N] [--bypass-mode true]   - Run the gate
    emojigate prs [--days N]                          - List merged PRs in the window

Options not given on the command line fall back to the GitHub Actions inputs
(INPUT_GITHUB-TOKEN, INPUT_DAYS, INPUT_BYPASS-MODE) and GITHUB_REPOSITORY. The token
finally falls back to GITHUB_TOKEN.
"""

import os
import sys

import bittensor as bt
import click
from rich.console import Console
from rich.table import Table

from emojigate import __version__
from emojigate.classes import EmojiPolicy
from emojigate.constants import INPUT_BYPASS_MODE, INPUT_DAYS, INPUT_GITHUB_TOKEN
from emojigate.errors import EmojiGateError
from emojigate.gate.config import parse_config
from emojigate.gate.evaluator import calculate_period_start, filter_recent_merged_prs
from emojigate.gate.runner import run
from emojigate.utils import actions
from emojigate.utils.github_api_tools import list_closed_pull_requests

console = Console()


def _resolve(value, input_name):
    """Command line value, else the matching action input."""
    return value if value is not None else actions.get_input(input_name)


def _resolve_token(value):
    return _resolve(value, INPUT_GITHUB_TOKEN) or os.getenv('GITHUB_TOKEN')


def gate_options(func):
    """Options shared by every command that talks to GitHub."""
    func = click.option(
        '--repository', '-r', default=None, help='Repository as owner/repo (default: $GITHUB_REPOSITORY)'
    )(func)
    func = click.option('--days', '-d', default=None, help='Lookback window in days (default: 7)')(func)
    func = click.option(
        '--github-token', '-t', 'github_token', default=None, help='GitHub token (default: $GITHUB_TOKEN)'
    )(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name='emojigate')
@click.option('--debug', is_flag=True, default=False, help='Enable debug logging')
def cli(debug):
    """emojigate - Block deployments until a PR with a positive emoji is merged"""
    if debug:
        bt.logging.set_debug(True)
    else:
        bt.logging.set_info(True)


@cli.command('check')
@gate_options
@click.option('--bypass-mode', 'bypass_mode', default=None, help="'true' turns a failing gate into a warning")
def check(github_token, days, repository, bypass_mode):
    """Run the positive emoji gate.

    Exits 0 when a PR with a positive emoji was merged in the window (or in
    bypass mode), 1 otherwise.

    \b
    Examples:
        emojigate check
        emojigate check --days 14 --bypass-mode true
    """
    exit_code = run(
        token=_resolve_token(github_token),
        repository=repository or actions.get_repository(),
        days=_resolve(days, INPUT_DAYS),
        bypass_mode=_resolve(bypass_mode, INPUT_BYPASS_MODE),
    )
    sys.exit(exit_code)


@cli.command('prs')
@gate_options
def prs(github_token, days, repository):
    """Show the PRs merged in the lookback window.

    PRs whose title would pass the gate are marked.
    """
    try:
        config = parse_config(
            _resolve_token(github_token),
            repository or actions.get_repository(),
            _resolve(days, INPUT_DAYS),
        )
        pull_requests = list_closed_pull_requests(config.repository, config.token)
    except EmojiGateError as e:
        console.print(f'[red]Error: {e}[/red]')
        sys.exit(1)

    policy = EmojiPolicy.default()
    recent = filter_recent_merged_prs(pull_requests, calculate_period_start(config.days))

    console.print(f'\n[bold]PRs merged in {config.repository} in the last {config.days} days[/bold]\n')
    if not recent:
        console.print('[yellow]No merged PRs in the lookback window[/yellow]\n')
        return

    table = Table(show_header=True)
    table.add_column('PR', style='cyan', justify='right')
    table.add_column('Title')
    table.add_column('Merged', style='dim')
    table.add_column('Positive', justify='center')

    for pr in recent:
        positive = policy.positive_emojis_in(pr.title)
        mark = f'[green]✓ {" ".join(positive)}[/green]' if positive else '[red]✗[/red]'
        table.add_row(f'#{pr.number}', pr.title, pr.merged_at.strftime('%Y-%m-%d %H:%M'), mark)

    console.print(table)
    qualifying = sum(1 for pr in recent if policy.is_positive_title(pr.title))
    console.print(f'\n[dim]{qualifying} of {len(recent)} merged PRs have positive emojis[/dim]\n')


def main():
    """Main entry point for the CLI"""
    cli()


if __name__ == '__main__':
    main()
