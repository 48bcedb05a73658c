"""Data models for author profiles and submission integrity."""

from quill_safety.models.author_profile import AuthorProfile, SanitizedAuthorProfile
from quill_safety.models.integrity import IntegrityMetadata

__all__ = [
    "AuthorProfile",
    "SanitizedAuthorProfile",
    "IntegrityMetadata",
]
