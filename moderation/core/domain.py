# moderation/core/domain.py

"""Domain models for moderation verdicts and policy outcomes."""

from dataclasses import dataclass
from typing import Optional

from moderation.core.definitions import Category


@dataclass(frozen=True)
class ModerationVerdict:
    """Outcome of running the detector over a single text.

    Attributes:
        flagged: True when any rule matched
        category: Category of the first rule that matched, NONE otherwise
        rule_name: Name of the matching rule (e.g., 'phone_number')
        matched_text: Lower-cased fragment that triggered the rule
    """

    flagged: bool
    category: str = Category.NONE
    rule_name: Optional[str] = None
    matched_text: Optional[str] = None

    def __post_init__(self) -> None:
        if self.flagged != (self.category != Category.NONE):
            raise ValueError(
                f"Inconsistent verdict: flagged={self.flagged}, category={self.category}"
            )

    @classmethod
    def clean(cls) -> "ModerationVerdict":
        return cls(flagged=False)


@dataclass(frozen=True)
class ChatSendResult:
    """Result of the chat-send policy.

    Attributes:
        delivered_text: Text that was actually sent
        was_substituted: True when the original was replaced by a warning
        verdict: Detector verdict for the original text
    """

    delivered_text: str
    was_substituted: bool
    verdict: ModerationVerdict


@dataclass(frozen=True)
class ListingResult:
    """Result of the listing-description policy.

    Attributes:
        result_text: Normalized text, or the untouched original when rejected
        was_rejected: True when the description was flagged
        verdict: Detector verdict for the submitted text
        warning: Caller-visible explanation when rejected
    """

    result_text: str
    was_rejected: bool
    verdict: ModerationVerdict
    warning: Optional[str] = None


@dataclass(frozen=True)
class FlaggedContent:
    """A single flagged text recorded for admin review."""

    entry_id: str
    policy: str
    category: str
    rule_name: Optional[str]
    snippet: str
    severity: str
    timestamp: str
    thread_id: Optional[str] = None
    message_id: Optional[str] = None
