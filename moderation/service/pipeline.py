# moderation/service/pipeline.py

"""Moderation policies for outbound chat messages and listing descriptions."""

import logging
import random
from typing import Any, Optional

from moderation.service.config import settings
from moderation.service.audit import AuditSink, build_entry
from moderation.engine.detector import DetectorService, OffPlatformDetector
from moderation.logic.normalizer import DescriptionNormalizer, get_normalizer
from moderation.core.loader import RuleLoader
from moderation.core.definitions import Policy, Severity
from moderation.core.domain import ChatSendResult, ListingResult, ModerationVerdict
from moderation.core.exceptions import ValidationError

logger = logging.getLogger(__name__)


def _require_text(text: Any) -> str:
    if text is None:
        return ""
    if not isinstance(text, str):
        logger.error(f"Invalid input type received: {type(text)}")
        raise ValidationError(f"Expected text, got {type(text).__name__}")
    return text


def _require_severity(severity: Optional[str]) -> Optional[str]:
    if severity is None:
        return None
    normalized = severity.strip().lower() if isinstance(severity, str) else severity
    if normalized not in Severity.ALL:
        raise ValidationError(
            f"Severity must be one of {Severity.ALL}, got {severity!r}"
        )
    return normalized


def _record(
    audit: Optional[AuditSink],
    text: str,
    verdict: ModerationVerdict,
    policy: str,
    severity: Optional[str],
    thread_id: Optional[str] = None,
    message_id: Optional[str] = None,
) -> None:
    if audit is None:
        return
    audit.record(
        build_entry(
            text,
            verdict,
            policy=policy,
            severity=severity or settings.default_severity,
            snippet_length=settings.snippet_length,
            thread_id=thread_id,
            message_id=message_id,
        )
    )


def choose_warning(
    rng: Optional[random.Random] = None, loader: Optional[RuleLoader] = None
) -> str:
    """Picks one canned warning uniformly at random.

    Args:
        rng: Source of randomness exposing choice(); the module generator if None
        loader: Catalogue holding the warnings; the shared one if None
    """
    warnings = (loader or RuleLoader.get_instance()).get_warnings()
    return (rng or random).choice(warnings)


def send_chat_message(
    text: Optional[str],
    *,
    rng: Optional[random.Random] = None,
    audit: Optional[AuditSink] = None,
    severity: Optional[str] = None,
    thread_id: Optional[str] = None,
    message_id: Optional[str] = None,
    detector: Optional[OffPlatformDetector] = None,
) -> ChatSendResult:
    """Applies the chat-send policy to an outgoing message.

    A flagged message is never delivered; a canned warning is sent in its
    place, still attributed to the sender.

    Args:
        text: Outgoing message body
        rng: Random source for warning selection
        audit: Sink receiving an entry when the message is flagged
        severity: Review priority for the audit entry
        thread_id: Conversation the message belongs to
        message_id: Identifier of the message being sent
        detector: Detector to use instead of the shared one

    Returns:
        ChatSendResult with the text actually sent

    Raises:
        ValidationError: If text is not a string or severity is unknown
    """
    text = _require_text(text)
    severity = _require_severity(severity)
    detector = detector or DetectorService.get_instance()

    verdict = detector.detect(text)

    if not verdict.flagged:
        return ChatSendResult(
            delivered_text=text, was_substituted=False, verdict=verdict
        )

    _record(audit, text, verdict, Policy.CHAT, severity, thread_id, message_id)

    logger.info(
        "Chat message replaced with warning",
        extra={"category": verdict.category, "thread_id": thread_id},
    )
    return ChatSendResult(
        delivered_text=choose_warning(rng, detector.loader),
        was_substituted=True,
        verdict=verdict,
    )


def submit_listing_description(
    text: Optional[str],
    *,
    audit: Optional[AuditSink] = None,
    severity: Optional[str] = None,
    listing_id: Optional[str] = None,
    detector: Optional[OffPlatformDetector] = None,
    normalizer: Optional[DescriptionNormalizer] = None,
) -> ListingResult:
    """Applies the listing-description policy to a submitted description.

    Flagged descriptions come back untouched with a rejection notice;
    clean ones come back normalized.

    Raises:
        ValidationError: If text is not a string or severity is unknown
    """
    text = _require_text(text)
    severity = _require_severity(severity)
    detector = detector or DetectorService.get_instance()

    verdict = detector.detect(text)

    if verdict.flagged:
        _record(audit, text, verdict, Policy.LISTING, severity, message_id=listing_id)
        logger.info(
            "Listing description rejected for enhancement",
            extra={"category": verdict.category, "listing_id": listing_id},
        )
        return ListingResult(
            result_text=text,
            was_rejected=True,
            verdict=verdict,
            warning=detector.loader.get_listing_warning(),
        )

    normalizer = normalizer or get_normalizer()
    return ListingResult(
        result_text=normalizer.normalize(text), was_rejected=False, verdict=verdict
    )


def moderate(text: Optional[str], policy: str, **kwargs: Any):
    """Dispatches text to the policy named by the caller.

    Args:
        text: Message body or listing description
        policy: Policy.CHAT or Policy.LISTING
        **kwargs: Forwarded to the selected policy

    Raises:
        ValidationError: If the policy is unknown
    """
    if policy == Policy.CHAT:
        return send_chat_message(text, **kwargs)
    if policy == Policy.LISTING:
        return submit_listing_description(text, **kwargs)
    raise ValidationError(f"Unknown moderation policy: {policy!r}")


def pickup_message(seller_name: str, location: str) -> str:
    """Chat text sent to a buyer once a purchase has completed."""
    return (
        f"Now that you've completed your purchase, you can arrange pickup with "
        f"{seller_name}. The item is available at: {location}. "
        f"Please coordinate a convenient time through this chat."
    )
