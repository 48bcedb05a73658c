"""Tests for the minor data audit trail."""

import json

from quill_safety.utils.audit_log import AuditAction, AuditTarget, MinorDataAuditLog


class TestMinorDataAuditLog:
    def test_log_event(self):
        audit_log = MinorDataAuditLog()
        entry = audit_log.log_event(
            user_id=3,
            action=AuditAction.UPDATE,
            target=AuditTarget.CONTRACTS,
            target_id=55,
            details={"field": "status"},
        )
        assert entry.target_id == "55"
        assert entry.is_minor is False
        assert len(audit_log) == 1

    def test_minor_access(self):
        audit_log = MinorDataAuditLog()
        audit_log.log_event(3, AuditAction.VIEW, AuditTarget.USERS, 1)
        audit_log.log_minor_data_access(3, AuditAction.EXPORT, AuditTarget.APPLICATIONS, 2, ip_address="10.0.0.4")
        minors = audit_log.get_minor_entries()
        assert len(minors) == 1
        assert minors[0].ip_address == "10.0.0.4"

    def test_to_dict_enriches_details(self):
        audit_log = MinorDataAuditLog()
        entry = audit_log.log_minor_data_access(
            3, AuditAction.SIGN, AuditTarget.CONTRACTS, 9, details={"role": "guardian"}
        )
        row = entry.to_dict()
        assert row["action"] == "sign"
        assert row["entity_type"] == "contracts"
        assert row["entity_id"] == "9"
        assert row["details"]["role"] == "guardian"
        assert row["details"]["is_minor_data"] is True
        assert "timestamp" in row["details"]

    def test_summary(self):
        audit_log = MinorDataAuditLog()
        audit_log.log_event(1, AuditAction.VIEW, AuditTarget.USERS, 1)
        audit_log.log_minor_data_access(1, AuditAction.VIEW, AuditTarget.APPLICATIONS, 2)
        audit_log.log_minor_data_access(1, AuditAction.STATUS_CHANGE, AuditTarget.APPLICATIONS, 2)
        summary = audit_log.get_summary()
        assert summary["total_entries"] == 3
        assert summary["minor_entries"] == 2
        assert summary["by_action"] == {"view": 2, "status_change": 1}
        assert summary["by_target"] == {"users": 1, "applications": 2}

    def test_export_to_json(self, tmp_path):
        audit_log = MinorDataAuditLog()
        audit_log.log_minor_data_access(1, AuditAction.VIEW, AuditTarget.USERS, 8)
        path = tmp_path / "nested" / "audit.json"
        audit_log.export_to_json(path)
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["summary"]["total_entries"] == 1
        assert data["entries"][0]["entity_id"] == "8"

    def test_clear(self):
        audit_log = MinorDataAuditLog()
        audit_log.log_event(1, AuditAction.DELETE, AuditTarget.PUBLISHING_UPDATES, 4)
        audit_log.clear()
        assert len(audit_log) == 0
        assert audit_log.get_summary()["total_entries"] == 0
