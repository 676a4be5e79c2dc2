# moderation/engine/recognizers.py

"""Presidio pattern recognizers built from the off-platform rule catalogue."""

import logging
from typing import Any, Dict, List, Optional

from presidio_analyzer import Pattern, PatternRecognizer, RecognizerResult

from moderation.core.loader import RuleLoader
from moderation.core.exceptions import InitializationError

logger = logging.getLogger(__name__)

# Every rule is a hard signal; there is no score-based thresholding.
RULE_SCORE = 1.0


class OffPlatformRuleRecognizer(PatternRecognizer):
    """Pattern recognizer for a single catalogue rule.

    The recognizer's supported entity is the rule's category, so a
    RecognizerResult maps straight onto a verdict category.
    """

    def __init__(
        self,
        rule_name: str,
        category: str,
        patterns: Optional[List[str]] = None,
        deny_list: Optional[List[str]] = None,
    ):
        self.rule_name = rule_name
        self.category = category

        super().__init__(
            supported_entity=category,
            name=f"{rule_name}_Recognizer",
            patterns=[
                Pattern(name=f"{rule_name}_{i}", regex=regex, score=RULE_SCORE)
                for i, regex in enumerate(patterns or [])
            ],
            deny_list=deny_list or None,
            deny_list_score=RULE_SCORE,
        )

    def first_match(self, text: str) -> Optional[RecognizerResult]:
        """Returns the left-most match in already lower-cased text, if any."""
        results = self.analyze(text=text, entities=[self.category])
        if not results:
            return None
        return min(results, key=lambda r: (r.start, -r.end))


def build_recognizer(rule: Dict[str, Any]) -> OffPlatformRuleRecognizer:
    """Creates a recognizer from one catalogue rule dictionary."""
    return OffPlatformRuleRecognizer(
        rule_name=rule["name"],
        category=rule["category"],
        patterns=rule.get("patterns"),
        deny_list=rule.get("deny_list"),
    )


def create_all_recognizers(
    loader: Optional[RuleLoader] = None,
) -> List[OffPlatformRuleRecognizer]:
    """Instantiates recognizers for every rule, preserving scan order.

    Raises:
        InitializationError: If any rule cannot be turned into a recognizer.
    """
    loader = loader or RuleLoader.get_instance()
    recognizers = []

    for rule in loader.get_rules():
        try:
            recognizers.append(build_recognizer(rule))
        except Exception as e:
            logger.error(
                f"Failed to build recognizer for rule '{rule.get('name')}'",
                exc_info=True,
            )
            raise InitializationError(
                f"Cannot build recognizer for rule '{rule.get('name')}'"
            ) from e

    logger.debug(f"Loaded {len(recognizers)} off-platform recognizers")
    return recognizers
