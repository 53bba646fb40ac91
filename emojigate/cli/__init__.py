# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
emojigate CLI

Usage:
    emojigate check     # Run the positive emoji gate (GitHub Action entry point)
    emojigate prs       # Show merged PRs in the lookback window
"""

from .main import cli

__all__ = ['cli']
