# moderation/logic/normalizer.py

"""Cosmetic clean-up for free-text listing descriptions.

The normalizer is a best-effort enhancement: any internal failure falls
back to the caller's original text instead of raising.
"""

import logging
import re
import threading
from typing import List, Optional, Pattern, Sequence, Tuple

from moderation.core.loader import RuleLoader

logger = logging.getLogger(__name__)

BULLET = "• "


class FormattingLogic:
    """Static helpers for the individual formatting steps."""

    PARAGRAPH_SPLIT = re.compile(r"\n+")
    SENTENCE_SPLIT = re.compile(r"(?<=[.!?])\s+")
    REPEATED_SPACES = re.compile(r" {2,}")

    @staticmethod
    def capitalize_first_letter(fragment: str) -> str:
        """Upper-cases the first alphabetic character, leaving the rest alone."""
        for i, ch in enumerate(fragment):
            if ch.isalpha():
                return fragment[:i] + ch.upper() + fragment[i + 1 :]
        return fragment

    @classmethod
    def format_paragraph(cls, paragraph: str) -> str:
        sentences = cls.SENTENCE_SPLIT.split(paragraph)
        formatted = [
            cls.capitalize_first_letter(s) if s.strip() else s for s in sentences
        ]
        return " ".join(formatted).strip()

    @staticmethod
    def as_bullets(paragraph: str) -> str:
        return "\n".join(f"{BULLET}{item.strip()}" for item in paragraph.split(","))


class DescriptionNormalizer:
    """Formats descriptions into capitalized sentences, paragraphs, and lists.

    Args:
        corrections: Compiled (pattern, replacement) pairs applied last
        bullet_max_length: Paragraphs this long or longer are never bulleted
        bullet_min_items: Comma-separated items needed to treat a paragraph as a list
    """

    def __init__(
        self,
        corrections: Sequence[Tuple[Pattern, str]],
        bullet_max_length: int = 100,
        bullet_min_items: int = 3,
    ) -> None:
        self.corrections = list(corrections)
        self.bullet_max_length = bullet_max_length
        self.bullet_min_items = bullet_min_items

    def _looks_like_list(self, paragraph: str) -> bool:
        return (
            "," in paragraph
            and len(paragraph.split(",")) >= self.bullet_min_items
            and len(paragraph) < self.bullet_max_length
        )

    def _format(self, description: str) -> str:
        paragraphs: List[str] = [
            FormattingLogic.format_paragraph(p)
            for p in FormattingLogic.PARAGRAPH_SPLIT.split(description)
        ]
        paragraphs = [p for p in paragraphs if p]

        paragraphs = [
            FormattingLogic.as_bullets(p) if self._looks_like_list(p) else p
            for p in paragraphs
        ]

        formatted = FormattingLogic.REPEATED_SPACES.sub(" ", "\n\n".join(paragraphs))

        for pattern, replacement in self.corrections:
            formatted = pattern.sub(replacement, formatted)

        return formatted

    def normalize(self, description: Optional[str]) -> str:
        """Returns the formatted description, or the input itself on failure."""
        if not description:
            return ""

        try:
            return self._format(description)
        except Exception:
            logger.error(
                "Description formatting failed; returning original text",
                exc_info=True,
                extra={"text_length": len(description) if isinstance(description, str) else 0},
            )
            return description


_default_normalizer: Optional[DescriptionNormalizer] = None
_default_lock = threading.Lock()


def get_normalizer() -> DescriptionNormalizer:
    """Returns the normalizer configured from settings and the rule catalogue."""
    global _default_normalizer

    if _default_normalizer is None:
        with _default_lock:
            # Double-checked locking pattern
            if _default_normalizer is None:
                # Lazy import to prevent circular dependency
                from moderation.service.config import settings

                _default_normalizer = DescriptionNormalizer(
                    corrections=RuleLoader.get_instance().get_corrections(),
                    bullet_max_length=settings.bullet_max_length,
                    bullet_min_items=settings.bullet_min_items,
                )
    return _default_normalizer


def normalize_description(description: Optional[str]) -> str:
    """Formats a listing description with the shared normalizer."""
    return get_normalizer().normalize(description)
