# moderation/core/definitions.py

"""Category and policy constants for off-platform detection."""


class Category:
    """Constants representing which family of rule flagged a text."""

    # Contact information
    PHONE = "PHONE"
    EMAIL = "EMAIL"
    SOCIAL_HANDLE = "SOCIAL_HANDLE"
    MEETUP_LANGUAGE = "MEETUP_LANGUAGE"

    # Payment / platform bypass
    PAYMENT_BYPASS_LANGUAGE = "PAYMENT_BYPASS_LANGUAGE"
    PLATFORM_BYPASS_LANGUAGE = "PLATFORM_BYPASS_LANGUAGE"

    NONE = "NONE"

    ALL = (
        PHONE,
        EMAIL,
        SOCIAL_HANDLE,
        MEETUP_LANGUAGE,
        PAYMENT_BYPASS_LANGUAGE,
        PLATFORM_BYPASS_LANGUAGE,
        NONE,
    )


class Policy:
    """Call-site policies understood by the orchestrator."""

    CHAT = "chat"
    LISTING = "listing"


class Severity:
    """Review priority attached to flagged content."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"

    ALL = (LOW, MEDIUM, HIGH)
