#!/usr/bin/env python3
"""quill-safety - Command-line access to the author safety utilities.

Sanitizes exported author records, scores submission paste telemetry, and
summarizes guardian consent for the compliance export.

Usage:
    uv run quill-safety sanitize authors.json --output public_authors.json
    uv run quill-safety sanitize authors.json --viewer-id 7 --audit-output audit.json
    uv run quill-safety integrity --paste-count 600 --total-characters 1000
    uv run quill-safety integrity --paste-count 600 --total-characters 1000 \\
        --task-file task.txt --submission-file submission.txt
    uv run quill-safety compliance applications.json
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from quill_safety.config import load_safety_config
from quill_safety.sanitizers.minor_safety import ProfileSanitizer
from quill_safety.scorers.integrity_scorer import IntegrityScorer, ratio_to_percent
from quill_safety.services.compliance_service import build_minor_roster, summarize_guardian_consent
from quill_safety.utils.audit_log import MinorDataAuditLog
from quill_safety.utils.logger import configure_global_logging

console = Console()
err_console = Console(stderr=True)
logger = logging.getLogger(__name__)


def load_records(path: Path) -> list[dict[str, Any]]:
    """Load a JSON list of records.

    Raises:
        ValueError: If the file is missing, not JSON, or not a list of objects
    """
    if not path.exists():
        raise ValueError(f"Input file not found: {path}")
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {path}: {e}") from e
    if not isinstance(data, list) or not all(isinstance(r, dict) for r in data):
        raise ValueError(f"{path} must contain a JSON list of objects")
    return data


def cmd_sanitize(args: argparse.Namespace, config_path: Optional[Path]) -> int:
    records = load_records(args.input)
    audit_log = MinorDataAuditLog() if args.viewer_id is not None else None
    sanitizer = ProfileSanitizer(load_safety_config(config_path), audit_log=audit_log)

    sanitized = sanitizer.sanitize_profiles(records, viewer_id=args.viewer_id)
    public = [s.to_public_dict() for s in sanitized]

    if args.output:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        args.output.write_text(json.dumps(public, indent=2, ensure_ascii=False), encoding="utf-8")
        console.print(f"Sanitized records saved to: {args.output}")
    else:
        console.print_json(json.dumps(public, ensure_ascii=False))

    table = Table(title="Sanitized Authors")
    table.add_column("ID", style="cyan")
    table.add_column("Display Name")
    table.add_column("Avatar", justify="center")
    table.add_column("Age Display")
    for s in sanitized:
        table.add_row(str(s.id), s.display_name, s.avatar, s.age_display)
    console.print(table)

    if audit_log is not None and args.audit_output:
        audit_log.export_to_json(args.audit_output)
        console.print(f"Audit log saved to: {args.audit_output}")

    logger.info(f"Sanitized {len(sanitized)} records from {args.input}")
    return 0


def cmd_integrity(args: argparse.Namespace, config_path: Optional[Path]) -> int:
    scorer = IntegrityScorer(load_safety_config(config_path))
    integrity = scorer.calculate_integrity(args.paste_count, args.total_characters)

    status = "[red]FLAGGED[/red]" if integrity.is_flagged else "[green]OK[/green]"
    summary = (
        f"Pasted characters: {integrity.paste_count}\n"
        f"Total characters: {integrity.total_characters}\n"
        f"Paste ratio: {integrity.paste_ratio} ({ratio_to_percent(integrity.paste_ratio)}%)\n"
        f"Status: {status}"
    )
    console.print(Panel(summary, title="Integrity Metadata", border_style="blue"))

    if args.task_file and args.submission_file:
        task = args.task_file.read_text(encoding="utf-8")
        submission = args.submission_file.read_text(encoding="utf-8")
        console.print()
        console.print(scorer.build_ai_review_prompt(task, submission, integrity), markup=False, highlight=False)
    elif args.task_file or args.submission_file:
        err_console.print("[yellow]Both --task-file and --submission-file are needed to render the prompt[/yellow]")
        return 2

    return 0


def cmd_compliance(args: argparse.Namespace, config_path: Optional[Path]) -> int:
    records = load_records(args.input)
    sanitizer = ProfileSanitizer(load_safety_config(config_path))

    consent = summarize_guardian_consent(records)
    summary = (
        f"Minor authors: {consent['total']}\n"
        f"Guardian consent verified: {consent['with_guardian_consent']}\n"
        f"Pending consent: {consent['pending_consent']}"
    )
    console.print(Panel(summary, title="Guardian Consent", border_style="blue"))

    roster = build_minor_roster(records, sanitizer=sanitizer)
    if roster:
        table = Table(title="Minor Author Roster")
        table.add_column("ID", style="cyan")
        table.add_column("Display Name")
        table.add_column("Guardian")
        table.add_column("Consent", justify="center")
        table.add_column("Retain Until")
        for row in roster:
            consent_status = "[green]VERIFIED[/green]" if row["consent_verified"] else "[yellow]PENDING[/yellow]"
            table.add_row(
                str(row["id"]),
                row["display_name"],
                row["guardian_name"] or "",
                consent_status,
                row["data_retention_until"] or "",
            )
        console.print(table)

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Author safety and submission integrity utilities")
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to a safety config YAML (default: config/safety.yaml or $QUILL_SAFETY_CONFIG)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    sanitize = subparsers.add_parser("sanitize", help="Sanitize a JSON list of author records")
    sanitize.add_argument("input", type=Path, help="JSON file with author records")
    sanitize.add_argument("--output", type=Path, help="Write public records to this file instead of stdout")
    sanitize.add_argument("--viewer-id", help="Acting user id; enables the minor data audit log")
    sanitize.add_argument("--audit-output", type=Path, help="Write the audit log to this JSON file")
    sanitize.set_defaults(handler=cmd_sanitize)

    integrity = subparsers.add_parser("integrity", help="Score paste telemetry for a submission")
    integrity.add_argument("--paste-count", type=int, required=True, help="Pasted characters")
    integrity.add_argument("--total-characters", type=int, required=True, help="Total characters submitted")
    integrity.add_argument("--task-file", type=Path, help="Card task text (renders the review prompt)")
    integrity.add_argument("--submission-file", type=Path, help="Submission text (renders the review prompt)")
    integrity.set_defaults(handler=cmd_integrity)

    compliance = subparsers.add_parser("compliance", help="Guardian consent summary and minor roster")
    compliance.add_argument("input", type=Path, help="JSON file with application records")
    compliance.set_defaults(handler=cmd_compliance)

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    """Main entry point."""
    load_dotenv()
    args = build_parser().parse_args(argv)
    configure_global_logging(args.log_level, phase=args.command)

    try:
        if args.config is not None and not args.config.is_file():
            raise ValueError(f"Config file not found: {args.config}")
        return args.handler(args, args.config)
    except ValidationError as e:
        err_console.print(f"[red]Invalid record:[/red] {e}")
        return 1
    except (ValueError, OSError) as e:
        err_console.print(f"[red]Error:[/red] {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
