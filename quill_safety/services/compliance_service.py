"""
Compliance Service - minor-author roster and guardian consent summary.

Feeds the admin compliance export. Records are application rows joined with
the applicant's name; guardian contact details are kept (the export is
admin-only), but author names are always truncated.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Union

from quill_safety.sanitizers.minor_safety import ProfileSanitizer

logger = logging.getLogger(__name__)


def _iso(value: Any) -> Optional[str]:
    """Dates may arrive as datetime objects or already-formatted strings."""
    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def build_minor_roster(
    records: Iterable[Mapping[str, Any]],
    sanitizer: Optional[ProfileSanitizer] = None,
) -> list[dict]:
    """Build the minor-author section of the compliance export.

    Args:
        records: Application rows with is_minor, first_name, last_name and
            guardian_* fields
        sanitizer: Optional sanitizer (defaults to the loaded config)

    Returns:
        One row per minor application, in input order
    """
    sanitizer = sanitizer or ProfileSanitizer()
    roster = []
    for record in records:
        if not record.get("is_minor"):
            continue

        record_id = record.get("id")
        has_name = record.get("first_name") is not None or record.get("last_name") is not None
        display_name = (
            sanitizer.truncate_name(record.get("first_name"), record.get("last_name"))
            if has_name
            else f"Author {record_id}"
        )

        roster.append({
            "id": record_id,
            "display_name": display_name,
            "guardian_name": record.get("guardian_name"),
            "guardian_email": record.get("guardian_email"),
            "consent_method": record.get("guardian_consent_method"),
            "consent_verified": bool(record.get("guardian_consent_verified")),
            "data_retention_until": _iso(record.get("data_retention_until")),
        })

    logger.debug(f"Built minor roster with {len(roster)} entries")
    return roster


def summarize_guardian_consent(records: Iterable[Mapping[str, Any]]) -> dict[str, int]:
    """Count minor applications with and without verified guardian consent."""
    minors = [r for r in records if r.get("is_minor")]
    verified = sum(1 for r in minors if r.get("guardian_consent_verified"))
    return {
        "total": len(minors),
        "with_guardian_consent": verified,
        "pending_consent": len(minors) - verified,
    }


def mask_contract_display_name(
    contract_id: Union[int, str],
    pen_name: Optional[str],
    is_minor: bool,
    public_identity_enabled: bool = False,
) -> str:
    """Display name for a contract in the public publishing list.

    - No pen name -> "Author #<contract id>"
    - Minor, or adult in safe mode -> "<pen name initial>. Author"
    - Adult who opted into public identity -> the pen name
    """
    pen_name = (pen_name or "").strip()
    if not pen_name:
        return f"Author #{contract_id}"
    if is_minor or not public_identity_enabled:
        return f"{pen_name[0].upper()}. Author"
    return pen_name
