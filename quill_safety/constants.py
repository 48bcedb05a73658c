"""
Global constants for author safety and submission integrity.

Centralizes the display labels, emoji pool and thresholds used by the
sanitizer and scorer so they can be overridden from config/safety.yaml.
"""

# Avatar pool for minor authors (order matters: index is derived from the id hash)
AUTHOR_EMOJIS = ("✍️", "📚", "📖", "🖊️", "📝", "🎭", "🌟", "💫", "🦋", "🌈")
DEFAULT_AVATAR = "👤"  # Adult authors without a profile photo

# Display labels (never a numeric age)
YOUTH_AUTHOR_LABEL = "Youth Author"
AUTHOR_LABEL = "Author"
FALLBACK_FIRST_NAME = "Author"  # Used when the first name is blank

# Integrity
PASTE_FLAG_THRESHOLD = 0.5  # Strictly above this ratio is flagged
PASTE_RATIO_PRECISION = 2  # Decimal places kept on the reported ratio

# Review prompt
ORGANIZATION_NAME = "The Indie Quill Collective"
