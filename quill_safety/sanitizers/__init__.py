"""Zero-PII sanitizers for public author displays."""

from quill_safety.sanitizers.minor_safety import (
    ProfileSanitizer,
    assign_emoji,
    get_age_category,
    id_hash,
    sanitize_profile,
    sanitize_profiles,
    truncate_name,
)

__all__ = [
    "ProfileSanitizer",
    "assign_emoji",
    "get_age_category",
    "id_hash",
    "sanitize_profile",
    "sanitize_profiles",
    "truncate_name",
]
