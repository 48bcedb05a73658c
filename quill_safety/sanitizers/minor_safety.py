"""
Minor-Safety Sanitizer - Zero-PII display records for author profiles.

Public pages and API responses never show a minor author's email, date of
birth, last name beyond its initial, or age. Minors get a truncated name and
a deterministic emoji avatar; adults are shown as entered.

Usage:
    from quill_safety.sanitizers import sanitize_profile

    public = sanitize_profile({"id": 42, "first_name": "Jonathan", "last_name": "Smith", "is_minor": True})
    public.display_name  # "Jonathan S."
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Optional, Union

from quill_safety.config import SafetyConfig, load_safety_config
from quill_safety.models import AuthorProfile, SanitizedAuthorProfile
from quill_safety.utils.audit_log import AuditAction, AuditTarget, MinorDataAuditLog

logger = logging.getLogger(__name__)

ProfileInput = Union[AuthorProfile, Mapping]


def _to_int32(value: int) -> int:
    """Fold an integer to a signed 32-bit value."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def id_hash(author_id: Union[int, str]) -> int:
    """Rolling hash (h * 31 + code) over the UTF-16 code units of str(author_id).

    Folded to 32 bits after every step so existing avatars keep their emoji.
    """
    # surrogatepass: lone surrogates (valid in JSON ids) hash like any other code unit
    encoded = str(author_id).encode("utf-16-le", "surrogatepass")
    h = 0
    for i in range(0, len(encoded), 2):
        code = encoded[i] | (encoded[i + 1] << 8)
        h = _to_int32((h << 5) - h + code)
    return h


class ProfileSanitizer:
    """Maps internal author records to public-safe display records.

    Stateless apart from the optional audit log, which records a view event
    for every minor profile sanitized on behalf of a known viewer.
    """

    def __init__(
        self,
        config: Optional[SafetyConfig] = None,
        audit_log: Optional[MinorDataAuditLog] = None,
    ):
        self.config = config or load_safety_config()
        self.audit_log = audit_log

    def assign_emoji(self, author_id: Union[int, str]) -> str:
        """Pick the avatar for an id. Same id, same emoji; collisions are fine."""
        pool = self.config.author_emojis
        return pool[abs(id_hash(author_id)) % len(pool)]

    def truncate_name(self, first_name: Optional[str], last_name: Optional[str]) -> str:
        """Format as "First L." ("Jonathan Smith" -> "Jonathan S.")."""
        first = (first_name or "").strip() or self.config.fallback_first_name
        last_initial = (last_name or "").strip()[:1].upper()
        return f"{first} {last_initial}." if last_initial else first

    def get_age_category(self, date_of_birth: Optional[str], is_minor: bool) -> str:
        # date_of_birth is deliberately ignored: age is asserted by the caller, never computed here
        return self.config.youth_author_label if is_minor else self.config.author_label

    def sanitize_profile(
        self,
        profile: ProfileInput,
        viewer_id: Optional[Union[int, str]] = None,
    ) -> SanitizedAuthorProfile:
        """Sanitize one profile for public display.

        Args:
            profile: AuthorProfile or a mapping with the same keys
            viewer_id: Acting user, recorded in the audit log for minors

        Returns:
            SanitizedAuthorProfile; for minors it never carries email, date of
            birth, the full last name, or a numeric age
        """
        if not isinstance(profile, AuthorProfile):
            profile = AuthorProfile.model_validate(profile)

        if profile.is_minor:
            sanitized = SanitizedAuthorProfile(
                id=profile.id,
                display_name=self.truncate_name(profile.first_name, profile.last_name),
                avatar=self.assign_emoji(profile.id),
                age_display=self.config.youth_author_label,
                is_minor=True,
                pen_name=profile.pen_name,
                can_show_photo=False,
            )
            if self.audit_log is not None and viewer_id is not None:
                self.audit_log.log_minor_data_access(
                    user_id=viewer_id,
                    action=AuditAction.VIEW,
                    target=AuditTarget.USERS,
                    target_id=profile.id,
                    details={"purpose": "public_display"},
                )
            return sanitized

        # Adults are shown exactly as entered, no trimming or fallback
        return SanitizedAuthorProfile(
            id=profile.id,
            display_name=f"{profile.first_name or ''} {profile.last_name or ''}",
            avatar=profile.profile_photo or self.config.default_avatar,
            age_display=self.config.author_label,
            is_minor=False,
            pen_name=profile.pen_name,
            can_show_photo=True,
        )

    def sanitize_profiles(
        self,
        profiles: Iterable[ProfileInput],
        viewer_id: Optional[Union[int, str]] = None,
    ) -> list[SanitizedAuthorProfile]:
        """Sanitize a batch, preserving order and length."""
        sanitized = [self.sanitize_profile(p, viewer_id=viewer_id) for p in profiles]
        logger.debug(
            f"Sanitized {len(sanitized)} author profiles "
            f"({sum(1 for s in sanitized if s.is_minor)} minors)"
        )
        return sanitized


# ============================================================================
# Module-level convenience functions (default config)
# ============================================================================


def _default_sanitizer() -> ProfileSanitizer:
    return ProfileSanitizer(load_safety_config())


def assign_emoji(author_id: Union[int, str]) -> str:
    """Deterministic emoji avatar for an author id."""
    return _default_sanitizer().assign_emoji(author_id)


def truncate_name(first_name: Optional[str], last_name: Optional[str]) -> str:
    """Truncate to "First L." format."""
    return _default_sanitizer().truncate_name(first_name, last_name)


def sanitize_profile(profile: ProfileInput) -> SanitizedAuthorProfile:
    """Sanitize a single author profile for public display."""
    return _default_sanitizer().sanitize_profile(profile)


def sanitize_profiles(profiles: Iterable[ProfileInput]) -> list[SanitizedAuthorProfile]:
    """Sanitize multiple author profiles, preserving order."""
    return _default_sanitizer().sanitize_profiles(profiles)


def get_age_category(date_of_birth: Optional[str], is_minor: bool) -> str:
    """Age label for display (never an actual age)."""
    return _default_sanitizer().get_age_category(date_of_birth, is_minor)
