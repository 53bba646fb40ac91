# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
Positive emoji deployment gate.

    parse_config   - build the typed GateConfig from raw action inputs
    evaluate       - filter merged PRs and decide the outcome (no I/O)
    run            - fetch, evaluate and signal the result to the runner
"""

from .config import parse_bypass_mode, parse_config, parse_days
from .evaluator import build_failure_message, evaluate, filter_recent_merged_prs
from .runner import run

__all__ = [
    'build_failure_message',
    'evaluate',
    'filter_recent_merged_prs',
    'parse_bypass_mode',
    'parse_config',
    'parse_days',
    'run',
]
