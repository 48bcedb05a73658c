"""
Deterministic integrity scoring - paste ratio from editor telemetry.

The editor counts pasted characters; this module turns that count into a
paste ratio and a flag, and renders the prompt handed to the external LLM
reviewer. The LLM never computes the ratio itself: it receives it as a fact.
"""

import logging
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Optional

from quill_safety.config import SafetyConfig, load_safety_config
from quill_safety.constants import PASTE_RATIO_PRECISION
from quill_safety.models import IntegrityMetadata

logger = logging.getLogger(__name__)


def round_half_away(value: float, places: int = PASTE_RATIO_PRECISION) -> float:
    """Round to `places` decimals, halves away from zero (0.125 -> 0.13)."""
    exact = Decimal(str(value))
    if not exact.is_finite():
        return value
    with localcontext() as ctx:
        # Enough digits for the integer part plus the kept decimals
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        return float(exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP))


def ratio_to_percent(ratio: float) -> int:
    """Whole-number percentage of a ratio (0.67 -> 67)."""
    exact = Decimal(str(ratio))
    if not exact.is_finite():
        raise ValueError(f"Cannot express {ratio} as a percentage")
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, exact.adjusted() + 4)
        return int((exact * 100).to_integral_value(rounding=ROUND_HALF_UP))


class IntegrityScorer:
    """Paste-ratio scoring and review prompt rendering."""

    def __init__(self, config: Optional[SafetyConfig] = None):
        self.config = config or load_safety_config()

    def calculate_integrity(self, paste_count: int, total_characters: int) -> IntegrityMetadata:
        """
        Calculate integrity metadata for a submission.

        Rules:
        - No characters at all -> ratio 0 (not undefined)
        - Ratio reported to two decimals
        - Flagged only when the unrounded ratio is strictly above the threshold

        Args:
            paste_count: Pasted characters (not validated)
            total_characters: Total characters in the submission (not validated)

        Returns:
            IntegrityMetadata
        """
        paste_ratio = paste_count / total_characters if total_characters > 0 else 0
        is_flagged = paste_ratio > self.config.paste_flag_threshold

        if is_flagged:
            logger.debug(
                f"Submission flagged for paste ratio {paste_ratio:.2f} "
                f"[paste_count={paste_count} total_characters={total_characters}]"
            )

        return IntegrityMetadata(
            paste_count=paste_count,
            total_characters=total_characters,
            paste_ratio=round_half_away(paste_ratio),
            is_flagged=is_flagged,
        )

    def build_ai_review_prompt(self, task: str, manuscript_text: str, integrity: IntegrityMetadata) -> str:
        """Render the reviewer prompt. Task and submission are embedded verbatim."""
        lines = [
            f"You are reviewing a student's writing submission for {self.config.organization_name}.",
            "",
            "## Card Task",
            task,
            "",
            "## Submission Content",
            manuscript_text,
            "",
            "## Integrity Metadata",
            f"- Pasted characters: {integrity.paste_count}",
            f"- Total characters: {integrity.total_characters}",
            f"- Paste ratio: {ratio_to_percent(integrity.paste_ratio)}%",
            f"- Flagged for review: {'Yes' if integrity.is_flagged else 'No'}",
        ]

        if integrity.is_flagged:
            threshold_pct = ratio_to_percent(self.config.paste_flag_threshold)
            lines.extend([
                "",
                "## Integrity Alert",
                f"This submission has been automatically flagged because {ratio_to_percent(integrity.paste_ratio)}% "
                f"of the content appears to be pasted (review threshold: more than {threshold_pct}%).",
                "Pay extra attention to whether this text feels like an original response or a generic copy-paste.",
                "Look for signs of: AI-generated text, content copied from external sources, "
                "or text that doesn't directly address the card task.",
                "Provide your assessment of originality alongside your normal feedback.",
            ])

        return "\n".join(lines)


def calculate_integrity(paste_count: int, total_characters: int) -> IntegrityMetadata:
    """Paste ratio and flag using the loaded config threshold."""
    return IntegrityScorer(load_safety_config()).calculate_integrity(paste_count, total_characters)


def build_ai_review_prompt(task: str, manuscript_text: str, integrity: IntegrityMetadata) -> str:
    """Reviewer prompt using the loaded config."""
    return IntegrityScorer(load_safety_config()).build_ai_review_prompt(task, manuscript_text, integrity)
