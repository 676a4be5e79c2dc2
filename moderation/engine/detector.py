# moderation/engine/detector.py

"""Contact and off-platform transaction detector."""

import logging
import threading
from typing import List, Optional

from moderation.core.domain import ModerationVerdict
from moderation.core.loader import RuleLoader
from moderation.engine.recognizers import (
    OffPlatformRuleRecognizer,
    create_all_recognizers,
)

logger = logging.getLogger(__name__)


class OffPlatformDetector:
    """Rule engine flagging contact details and off-platform arrangements.

    Rules run in catalogue order against the lower-cased text and the first
    one that matches decides the category. Detection errors are never
    swallowed: a broken detector must not turn into a "clean" verdict.
    """

    def __init__(self, loader: Optional[RuleLoader] = None) -> None:
        self.loader = loader or RuleLoader.get_instance()
        self._recognizers: List[OffPlatformRuleRecognizer] = create_all_recognizers(
            self.loader
        )

    @property
    def rule_names(self) -> List[str]:
        return [r.rule_name for r in self._recognizers]

    def detect(self, text: Optional[str]) -> ModerationVerdict:
        """Scans text for contact information or bypass language.

        Args:
            text: Message body or listing description; None counts as empty

        Returns:
            ModerationVerdict for the first matching rule, or a clean verdict
        """
        if not text:
            return ModerationVerdict.clean()

        lowered = text.lower()

        for recognizer in self._recognizers:
            match = recognizer.first_match(lowered)
            if match is None:
                continue

            logger.info(
                "Off-platform content detected",
                extra={
                    "category": recognizer.category,
                    "rule": recognizer.rule_name,
                    "text_length": len(text),
                },
            )
            return ModerationVerdict(
                flagged=True,
                category=recognizer.category,
                rule_name=recognizer.rule_name,
                matched_text=lowered[match.start : match.end],
            )

        return ModerationVerdict.clean()

    def is_flagged(self, text: Optional[str]) -> bool:
        return self.detect(text).flagged


class DetectorService:
    """Shared detector used by both the chat and the listing paths."""

    _instance: Optional[OffPlatformDetector] = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> OffPlatformDetector:
        """Returns the process-wide detector, building it on first use."""
        if cls._instance is None:
            with cls._lock:
                # Double-checked locking pattern
                if cls._instance is None:
                    logger.info("Initializing off-platform detector")
                    cls._instance = OffPlatformDetector()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        with cls._lock:
            cls._instance = None


def detect(text: Optional[str]) -> ModerationVerdict:
    """Runs the shared detector over text."""
    return DetectorService.get_instance().detect(text)


def contains_external_sale_attempt(text: Optional[str]) -> bool:
    """Boolean form of detect() for callers that only need the flag."""
    return detect(text).flagged
