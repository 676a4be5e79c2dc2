"""Tests for the off-platform detector."""

import pytest

from moderation.core.definitions import Category
from moderation.core.domain import ModerationVerdict
from moderation.engine.detector import contains_external_sale_attempt, detect


@pytest.mark.parametrize(
    "text, category, rule",
    [
        ("Call me at 555-123-4567 instead", Category.PHONE, "phone_number"),
        ("my number is 555.123.4567", Category.PHONE, "phone_number"),
        ("reach me on 5551234567", Category.PHONE, "phone_number"),
        ("Email Jane.Doe@Example.com for pics", Category.EMAIL, "email_address"),
        ("Find me on Instagram", Category.SOCIAL_HANDLE, "messaging_platform"),
        ("add me on snapchat", Category.SOCIAL_HANDLE, "messaging_platform"),
        ("ping me on WhatsApp!", Category.SOCIAL_HANDLE, "messaging_platform"),
        ("We can meet elsewhere", Category.MEETUP_LANGUAGE, "meet_outside"),
        ("let's meet me outside the library", Category.MEETUP_LANGUAGE, "meet_outside"),
        ("Just DM me", Category.MEETUP_LANGUAGE, "direct_contact"),
        ("text me when you're free", Category.MEETUP_LANGUAGE, "direct_contact"),
        ("I'd rather pay cash", Category.PAYMENT_BYPASS_LANGUAGE, "pay_outside"),
        ("you can pay me venmo", Category.PAYMENT_BYPASS_LANGUAGE, "pay_outside"),
        ("so we avoid the fee", Category.PAYMENT_BYPASS_LANGUAGE, "avoid_fee"),
        ("deal offplatform", Category.PLATFORM_BYPASS_LANGUAGE, "off_platform"),
        ("happy to sell off-platform", Category.PLATFORM_BYPASS_LANGUAGE, "off_platform"),
        ("Off site pickup only", Category.PLATFORM_BYPASS_LANGUAGE, "off_site"),
        ("not through this website please", Category.PLATFORM_BYPASS_LANGUAGE, "not_through_site"),
        ("Contact for details", Category.MEETUP_LANGUAGE, "direct_contact"),
        ("please contact me tonight", Category.MEETUP_LANGUAGE, "direct_contact"),
        ("message me later", Category.MEETUP_LANGUAGE, "direct_contact"),
        ("send a direct message", Category.MEETUP_LANGUAGE, "direct_contact"),
        ("telegram", Category.SOCIAL_HANDLE, "messaging_platform"),
        ("snap", Category.SOCIAL_HANDLE, "messaging_platform"),
        ("offsite pickup", Category.PLATFORM_BYPASS_LANGUAGE, "off_site"),
        ("off-site handoff", Category.PLATFORM_BYPASS_LANGUAGE, "off_site"),
        ("I can pay paypal", Category.PAYMENT_BYPASS_LANGUAGE, "pay_outside"),
        ("we pay outside", Category.PAYMENT_BYPASS_LANGUAGE, "pay_outside"),
        ("not the platform", Category.PLATFORM_BYPASS_LANGUAGE, "not_through_site"),
        ("pay me cash if we meet elsewhere", Category.MEETUP_LANGUAGE, "meet_outside"),
    ],
)
def test_flags_off_platform_attempts(detector, text, category, rule):
    verdict = detector.detect(text)
    assert verdict.flagged
    assert verdict.category == category
    assert verdict.rule_name == rule


@pytest.mark.parametrize(
    "text",
    [
        "Is this still available?",
        "Great condition, barely used. Includes the original box.",
        "Selling my calculus textbook for the spring semester",
        "Nice snapshot of the campus on the cover",
        "Would you take a lower price for it?",
    ],
)
def test_clean_text_is_not_flagged(detector, text):
    verdict = detector.detect(text)
    assert not verdict.flagged
    assert verdict.category == Category.NONE
    assert verdict.rule_name is None


@pytest.mark.parametrize("text", ["", None])
def test_empty_input_is_not_flagged(detector, text):
    assert detector.detect(text) == ModerationVerdict.clean()


def test_contact_rules_win_over_bypass_rules(detector):
    verdict = detector.detect("pay me cash, my number is 555-123-4567")
    assert verdict.category == Category.PHONE


def test_matched_text_is_reported(detector):
    verdict = detector.detect("Call me at 555-123-4567 instead")
    assert verdict.matched_text == "555-123-4567"


def test_detection_is_idempotent(detector):
    text = "Message me on Telegram so we avoid the fee"
    assert detector.detect(text) == detector.detect(text)


def test_over_blocking_is_preserved(detector):
    # Ordinary words that collide with platform names still flag.
    assert detector.detect("This phone gets great signal everywhere").flagged


def test_long_and_non_alphabetic_input(detector):
    assert not detector.detect("lorem " * 20000).flagged
    assert not detector.detect("!!! ??? ... ---").flagged
    assert detector.detect("x" * 5000 + " call me " + "y" * 5000).flagged


def test_rule_scan_order(detector):
    assert detector.rule_names == [
        "phone_number",
        "email_address",
        "messaging_platform",
        "meet_outside",
        "direct_contact",
        "pay_outside",
        "avoid_fee",
        "off_platform",
        "off_site",
        "not_through_site",
    ]


def test_shared_detector_helpers():
    assert detect("find me on facebook").category == Category.SOCIAL_HANDLE
    assert contains_external_sale_attempt("email me: a@b.co")
    assert not contains_external_sale_attempt("")


def test_verdict_rejects_inconsistent_state():
    with pytest.raises(ValueError):
        ModerationVerdict(flagged=True, category=Category.NONE)
    with pytest.raises(ValueError):
        ModerationVerdict(flagged=False, category=Category.EMAIL)
