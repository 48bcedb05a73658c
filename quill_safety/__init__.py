"""Zero-PII author display and submission integrity utilities."""

from quill_safety.config import SafetyConfig, load_safety_config
from quill_safety.models import AuthorProfile, IntegrityMetadata, SanitizedAuthorProfile
from quill_safety.sanitizers import (
    ProfileSanitizer,
    assign_emoji,
    get_age_category,
    sanitize_profile,
    sanitize_profiles,
    truncate_name,
)
from quill_safety.scorers import IntegrityScorer, build_ai_review_prompt, calculate_integrity

__version__ = "0.1.0"

__all__ = [
    # Config
    "SafetyConfig",
    "load_safety_config",
    # Models
    "AuthorProfile",
    "SanitizedAuthorProfile",
    "IntegrityMetadata",
    # Minor safety
    "ProfileSanitizer",
    "assign_emoji",
    "truncate_name",
    "sanitize_profile",
    "sanitize_profiles",
    "get_age_category",
    # Integrity
    "IntegrityScorer",
    "calculate_integrity",
    "build_ai_review_prompt",
]
