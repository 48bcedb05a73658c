"""Tests for the quill-safety command-line entry point."""

import json
import logging

import pytest

from quill_safety.cli import load_records, main


@pytest.fixture(autouse=True)
def restore_root_logger():
    """main() reconfigures the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def authors_file(tmp_path, minor_profile, adult_profile):
    path = tmp_path / "authors.json"
    path.write_text(json.dumps([minor_profile, adult_profile]), encoding="utf-8")
    return path


class TestLoadRecords:
    def test_missing_file(self, tmp_path):
        with pytest.raises(ValueError, match="not found"):
            load_records(tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON"):
            load_records(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "obj.json"
        path.write_text('{"id": 1}', encoding="utf-8")
        with pytest.raises(ValueError, match="JSON list"):
            load_records(path)


class TestSanitizeCommand:
    def test_writes_public_records(self, authors_file, tmp_path, minor_profile):
        output = tmp_path / "out" / "public.json"
        assert main(["sanitize", str(authors_file), "--output", str(output)]) == 0

        public = json.loads(output.read_text(encoding="utf-8"))
        assert [r["id"] for r in public] == [123, "a-77"]
        assert public[0]["displayName"] == "Jonathan S."
        assert public[0]["ageDisplay"] == "Youth Author"
        assert minor_profile["email"] not in output.read_text(encoding="utf-8")

    def test_audit_output(self, authors_file, tmp_path):
        output = tmp_path / "public.json"
        audit = tmp_path / "audit.json"
        code = main([
            "sanitize", str(authors_file),
            "--output", str(output),
            "--viewer-id", "7",
            "--audit-output", str(audit),
        ])
        assert code == 0
        data = json.loads(audit.read_text(encoding="utf-8"))
        assert data["summary"]["minor_entries"] == 1

    def test_invalid_record_fails(self, tmp_path):
        path = tmp_path / "authors.json"
        path.write_text(json.dumps([{"id": 1, "first_name": "No Flag"}]), encoding="utf-8")
        assert main(["sanitize", str(path), "--output", str(tmp_path / "out.json")]) == 1

    def test_missing_input_fails(self, tmp_path):
        assert main(["sanitize", str(tmp_path / "missing.json")]) == 1


class TestIntegrityCommand:
    def test_metadata_only(self, capsys):
        assert main(["integrity", "--paste-count", "60", "--total-characters", "100"]) == 0
        out = capsys.readouterr().out
        assert "FLAGGED" in out
        assert "## Card Task" not in out

    def test_renders_prompt(self, tmp_path, capsys):
        task = tmp_path / "task.txt"
        submission = tmp_path / "submission.txt"
        task.write_text("Write about rain.", encoding="utf-8")
        submission.write_text("It rained.", encoding="utf-8")
        code = main([
            "integrity", "--paste-count", "80", "--total-characters", "100",
            "--task-file", str(task), "--submission-file", str(submission),
        ])
        assert code == 0
        out = capsys.readouterr().out
        assert "## Card Task" in out
        assert "## Integrity Alert" in out

    def test_prompt_needs_both_files(self, tmp_path):
        task = tmp_path / "task.txt"
        task.write_text("Write about rain.", encoding="utf-8")
        assert main([
            "integrity", "--paste-count", "1", "--total-characters", "10", "--task-file", str(task),
        ]) == 2

    def test_missing_config_file_fails(self, tmp_path, capsys):
        missing = tmp_path / "missing.yaml"
        code = main([
            "--config", str(missing), "integrity", "--paste-count", "1", "--total-characters", "10",
        ])
        assert code == 1
        assert "Config file not found" in capsys.readouterr().err


class TestComplianceCommand:
    def test_summary(self, tmp_path, application_records, capsys):
        path = tmp_path / "apps.json"
        path.write_text(json.dumps(application_records), encoding="utf-8")
        assert main(["compliance", str(path)]) == 0
        out = capsys.readouterr().out
        assert "Guardian Consent" in out
        assert "Minor authors: 2" in out
