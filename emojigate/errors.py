# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Exceptions raised by the gate. The runner converts all of them into a failed run."""

from typing import Optional


class EmojiGateError(Exception):
    """Base class for gate errors."""


class ConfigurationError(EmojiGateError):
    """A required input is missing or malformed."""


class GitHubAPIError(EmojiGateError):
    """The pull request listing could not be fetched."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
