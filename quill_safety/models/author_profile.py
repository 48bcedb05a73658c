"""
Pydantic models for author profiles.

AuthorProfile is the internal record handed in by the request layer.
SanitizedAuthorProfile is the only shape that may leave the platform in a
public API response or page render.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class AuthorProfile(BaseModel):
    """Internal author record (may contain PII)."""

    model_config = ConfigDict(extra="ignore")  # Records arrive as raw DB rows

    id: Union[int, str]
    first_name: Optional[str] = ""
    last_name: Optional[str] = ""
    email: Optional[str] = None
    date_of_birth: Optional[str] = None
    is_minor: bool = Field(..., description="Pre-computed by the caller from verified DOB/guardian consent")
    pen_name: Optional[str] = None
    profile_photo: Optional[str] = None


class SanitizedAuthorProfile(BaseModel):
    """Public-safe author record.

    For minors this never carries email, date of birth, a last name beyond
    its initial, or a numeric age.
    """

    model_config = ConfigDict(frozen=True)

    id: Union[int, str]
    display_name: str
    avatar: str
    age_display: str
    is_minor: bool
    pen_name: Optional[str] = None
    can_show_photo: bool = False

    def to_public_dict(self) -> dict:
        """Render the camelCase shape consumed by the web client."""
        return {
            "id": self.id,
            "displayName": self.display_name,
            "avatar": self.avatar,
            "ageDisplay": self.age_display,
            "isMinor": self.is_minor,
            "penName": self.pen_name,
            "canShowPhoto": self.can_show_photo,
        }
