"""Deterministic scoring modules for submission review."""

from quill_safety.scorers.integrity_scorer import (
    IntegrityScorer,
    build_ai_review_prompt,
    calculate_integrity,
    ratio_to_percent,
    round_half_away,
)

__all__ = [
    "IntegrityScorer",
    "build_ai_review_prompt",
    "calculate_integrity",
    "ratio_to_percent",
    "round_half_away",
]
