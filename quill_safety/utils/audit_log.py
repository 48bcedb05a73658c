"""
Minor Data Audit Trail - Records who touched which records holding minor data.

Every access to an application, contract or user record that belongs to a
minor is logged so the compliance report can show an access sample. This
module only collects entries in memory; the request layer decides where they
are stored.
"""

import json
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

logger = logging.getLogger(__name__)


class AuditAction(Enum):
    """What was done to the target record."""

    VIEW = "view"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"
    SIGN = "sign"
    STATUS_CHANGE = "status_change"
    EXPORT = "export"


class AuditTarget(Enum):
    """Table the target record lives in."""

    APPLICATIONS = "applications"
    CONTRACTS = "contracts"
    USERS = "users"
    PUBLISHING_UPDATES = "publishing_updates"


@dataclass
class AuditEntry:
    """A single access to a record."""

    user_id: Union[int, str]
    action: AuditAction
    target: AuditTarget
    target_id: str
    is_minor: bool = False
    details: dict[str, Any] = field(default_factory=dict)
    ip_address: Optional[str] = None
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def to_dict(self) -> dict:
        """Convert to the row shape of the audit_logs table."""
        enriched_details = {
            **self.details,
            "is_minor_data": self.is_minor,
            "timestamp": self.timestamp.isoformat(),
        }
        return {
            "user_id": self.user_id,
            "action": self.action.value,
            "entity_type": self.target.value,
            "entity_id": self.target_id,
            "ip_address": self.ip_address,
            "details": enriched_details,
        }


class MinorDataAuditLog:
    """Collects audit entries for a request or batch.

    Usage:
        audit_log = MinorDataAuditLog()
        audit_log.log_minor_data_access(
            user_id=7,
            action=AuditAction.VIEW,
            target=AuditTarget.APPLICATIONS,
            target_id=42,
        )
        audit_log.get_summary()
    """

    def __init__(self):
        self._entries: list[AuditEntry] = []
        self._lock = threading.Lock()

    def log_event(
        self,
        user_id: Union[int, str],
        action: AuditAction,
        target: AuditTarget,
        target_id: Union[int, str],
        details: Optional[dict[str, Any]] = None,
        ip_address: Optional[str] = None,
        is_minor: bool = False,
    ) -> AuditEntry:
        """Record an access event.

        Args:
            user_id: Acting user
            action: What was done
            target: Table of the target record
            target_id: Id of the target record (stored as a string)
            details: Optional extra context
            ip_address: Optional client address
            is_minor: Whether the record holds minor data

        Returns:
            The created audit entry
        """
        entry = AuditEntry(
            user_id=user_id,
            action=action,
            target=target,
            target_id=str(target_id),
            is_minor=is_minor,
            details=dict(details or {}),
            ip_address=ip_address,
        )
        with self._lock:
            self._entries.append(entry)

        if is_minor:
            logger.info(
                f"Minor data access: user {user_id} performed {action.value} on {target.value}:{target_id}"
            )
        return entry

    def log_minor_data_access(
        self,
        user_id: Union[int, str],
        action: AuditAction,
        target: AuditTarget,
        target_id: Union[int, str],
        ip_address: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ) -> AuditEntry:
        """Shortcut for log_event(..., is_minor=True)."""
        return self.log_event(
            user_id=user_id,
            action=action,
            target=target,
            target_id=target_id,
            details=details,
            ip_address=ip_address,
            is_minor=True,
        )

    def get_all_entries(self) -> list[AuditEntry]:
        with self._lock:
            return self._entries.copy()

    def get_minor_entries(self) -> list[AuditEntry]:
        """Get only the entries that touched minor data."""
        return [e for e in self.get_all_entries() if e.is_minor]

    def get_summary(self) -> dict:
        """Count entries by action and by target table."""
        entries = self.get_all_entries()
        by_action: dict[str, int] = {}
        by_target: dict[str, int] = {}
        for entry in entries:
            by_action[entry.action.value] = by_action.get(entry.action.value, 0) + 1
            by_target[entry.target.value] = by_target.get(entry.target.value, 0) + 1

        return {
            "total_entries": len(entries),
            "minor_entries": sum(1 for e in entries if e.is_minor),
            "by_action": by_action,
            "by_target": by_target,
        }

    def export_to_json(self, filepath: Union[str, Path]) -> None:
        """Export all entries to a JSON file.

        Args:
            filepath: Path to output JSON file
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)

        entries = self.get_all_entries()
        data = {
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "summary": self.get_summary(),
            "entries": [e.to_dict() for e in entries],
        }

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, indent=2, ensure_ascii=False)

        logger.info(f"Exported {len(entries)} audit entries to {filepath}")

    def clear(self) -> None:
        """Clear all entries (for reuse between batches)."""
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
