"""Pydantic model for submission integrity telemetry."""

from pydantic import BaseModel, ConfigDict


class IntegrityMetadata(BaseModel):
    """Paste telemetry for a single submission evaluation.

    Counts are passed through as given; negative input is not rejected.
    """

    model_config = ConfigDict(frozen=True)

    paste_count: int
    total_characters: int
    paste_ratio: float  # Rounded to two decimals
    is_flagged: bool

    def to_dict(self) -> dict:
        """Convert to the camelCase shape stored alongside the submission."""
        return {
            "pasteCount": self.paste_count,
            "totalCharacters": self.total_characters,
            "pasteRatio": self.paste_ratio,
            "isFlagged": self.is_flagged,
        }
