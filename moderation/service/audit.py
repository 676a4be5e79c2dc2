# moderation/service/audit.py

"""Append-only record of flagged content for admin review."""

import logging
import threading
import uuid
from datetime import datetime, timezone
from typing import Dict, List, Optional, Protocol

from moderation.core.definitions import Severity
from moderation.core.domain import FlaggedContent, ModerationVerdict

logger = logging.getLogger(__name__)


class AuditSink(Protocol):
    """Anything that can accept flagged-content entries."""

    def record(self, entry: FlaggedContent) -> None: ...


def build_entry(
    text: str,
    verdict: ModerationVerdict,
    policy: str,
    severity: str,
    snippet_length: int,
    thread_id: Optional[str] = None,
    message_id: Optional[str] = None,
) -> FlaggedContent:
    """Creates an audit entry holding only a truncated snippet of the text."""
    snippet = text[:snippet_length] + ("..." if len(text) > snippet_length else "")
    return FlaggedContent(
        entry_id=uuid.uuid4().hex,
        policy=policy,
        category=verdict.category,
        rule_name=verdict.rule_name,
        snippet=snippet,
        severity=severity,
        timestamp=datetime.now(timezone.utc).isoformat(),
        thread_id=thread_id,
        message_id=message_id,
    )


class InMemoryAuditLog:
    """Thread-safe, process-local audit sink.

    Entries are only ever appended. Durable storage belongs to the
    surrounding service, which can supply its own AuditSink.
    """

    def __init__(self) -> None:
        self._entries: List[FlaggedContent] = []
        self._lock = threading.Lock()

    def record(self, entry: FlaggedContent) -> None:
        with self._lock:
            self._entries.append(entry)

        logger.info(
            "Content flagged for review",
            extra={
                "entry_id": entry.entry_id,
                "policy": entry.policy,
                "category": entry.category,
                "severity": entry.severity,
            },
        )

    def entries(self) -> List[FlaggedContent]:
        """Returns a copy of all entries in insertion order."""
        with self._lock:
            return list(self._entries)

    def needs_attention(self, thread_id: str) -> bool:
        """True when any entry belongs to the given conversation."""
        with self._lock:
            return any(e.thread_id == thread_id for e in self._entries)

    def analytics(self) -> Dict[str, int]:
        """Counts entries overall and per severity."""
        with self._lock:
            counts = {
                "total_flagged": len(self._entries),
                "high_severity": 0,
                "medium_severity": 0,
                "low_severity": 0,
            }
            for entry in self._entries:
                if entry.severity in Severity.ALL:
                    counts[f"{entry.severity}_severity"] += 1
            return counts

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
