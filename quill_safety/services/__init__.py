"""Services built on the sanitizers for admin-facing reports."""

from quill_safety.services.compliance_service import (
    build_minor_roster,
    mask_contract_display_name,
    summarize_guardian_consent,
)

__all__ = [
    "build_minor_roster",
    "mask_contract_display_name",
    "summarize_guardian_consent",
]
