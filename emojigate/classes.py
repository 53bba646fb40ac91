import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, FrozenSet, List, Optional

from emojigate.constants import (
    EMOJI_PATTERN,
    EMOJI_VARIATION_SELECTOR,
    POSITIVE_EMOJIS,
)


class GateOutcome(Enum):
    """Terminal outcome of a gate run"""

    PASSED = "PASSED"
    PASSED_VIA_BYPASS_WARNING = "PASSED_VIA_BYPASS_WARNING"
    FAILED = "FAILED"


def parse_github_timestamp(value: Optional[str]) -> Optional[datetime]:
    """Parse a GitHub ISO-8601 timestamp ('2024-01-15T10:30:00Z') as an aware UTC datetime."""
    if not value:
        return None
    return datetime.fromisoformat(value.rstrip("Z")).replace(tzinfo=timezone.utc)


@dataclass(frozen=True)
class GateConfig:
    """Typed gate configuration, immutable for the run"""

    token: str
    repository: str
    days: int
    bypass: bool

    @property
    def owner(self) -> str:
        return self.repository.split("/")[0]

    @property
    def repo(self) -> str:
        return self.repository.split("/")[1]

    def __str__(self) -> str:
        return f"GateConfig(repository={self.repository}, days={self.days}, bypass={self.bypass})"


@dataclass(frozen=True)
class PullRequest:
    """A closed pull request as listed by the GitHub REST API"""

    number: int
    title: str
    merged_at: Optional[datetime]  # None when closed without merging

    @property
    def is_merged(self) -> bool:
        return self.merged_at is not None

    def __str__(self) -> str:
        return f"#{self.number} - {self.title}"

    @classmethod
    def from_github_response(cls, pr_raw: Dict) -> 'PullRequest':
        """Create PullRequest from GitHub API response"""
        return cls(
            number=pr_raw['number'],
            title=pr_raw.get('title') or '',
            merged_at=parse_github_timestamp(pr_raw.get('merged_at')),
        )


def _strip_variation_selector(glyph: str) -> str:
    return glyph.replace(EMOJI_VARIATION_SELECTOR, '')


@dataclass(frozen=True)
class EmojiPolicy:
    """Which emojis count as positive, and how emojis are found in a title.

    Allow-list entries are stored without the emoji presentation selector so
    that '❤️' in the list matches the single '❤' glyph the detector extracts.
    """

    positive_emojis: FrozenSet[str]
    detector: re.Pattern = EMOJI_PATTERN

    @classmethod
    def from_emojis(cls, emojis: List[str], detector: re.Pattern = EMOJI_PATTERN) -> 'EmojiPolicy':
        return cls(
            positive_emojis=frozenset(_strip_variation_selector(e) for e in emojis),
            detector=detector,
        )

    @classmethod
    def default(cls) -> 'EmojiPolicy':
        return cls.from_emojis(POSITIVE_EMOJIS)

    def extract_emojis(self, title: str) -> List[str]:
        """Return every emoji glyph in the title, in order of appearance."""
        return self.detector.findall(title)

    def positive_emojis_in(self, title: str) -> List[str]:
        return [e for e in self.extract_emojis(title) if e in self.positive_emojis]

    def is_positive_title(self, title: str) -> bool:
        return bool(self.positive_emojis_in(title))


@dataclass
class EvaluationResult:
    """Result of one gate evaluation. Computed once per run, never persisted."""

    days: int
    outcome: GateOutcome
    message: str
    total_merged_count: int = 0
    qualifying_prs: List[PullRequest] = field(default_factory=list)

    @property
    def qualifying_count(self) -> int:
        return len(self.qualifying_prs)

    @property
    def passed(self) -> bool:
        return self.outcome != GateOutcome.FAILED

    @property
    def bypassed(self) -> bool:
        return self.outcome == GateOutcome.PASSED_VIA_BYPASS_WARNING
