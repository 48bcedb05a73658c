"""Safety configuration — display labels, avatar pool and integrity threshold.

Defaults come from quill_safety.constants. A YAML file can override any of
them; the path defaults to config/safety.yaml at the project root and can be
changed with the QUILL_SAFETY_CONFIG environment variable.

Usage:
    from quill_safety.config import load_safety_config

    config = load_safety_config()
    config.paste_flag_threshold  # 0.5
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Optional

import yaml

from quill_safety.constants import (
    AUTHOR_EMOJIS,
    AUTHOR_LABEL,
    DEFAULT_AVATAR,
    FALLBACK_FIRST_NAME,
    ORGANIZATION_NAME,
    PASTE_FLAG_THRESHOLD,
    YOUTH_AUTHOR_LABEL,
)

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "QUILL_SAFETY_CONFIG"


@dataclass(frozen=True)
class SafetyConfig:
    """Constant pools injected into the sanitizer and the integrity scorer.

    Attributes:
        author_emojis: Ordered avatar pool for minor authors
        default_avatar: Avatar for adults without a profile photo
        paste_flag_threshold: Paste ratio strictly above this is flagged
        youth_author_label: Age display for minors
        author_label: Age display for adults
        fallback_first_name: Substituted when a first name is blank
        organization_name: Named in the review prompt preamble
    """

    author_emojis: tuple[str, ...] = field(default=AUTHOR_EMOJIS)
    default_avatar: str = DEFAULT_AVATAR
    paste_flag_threshold: float = PASTE_FLAG_THRESHOLD
    youth_author_label: str = YOUTH_AUTHOR_LABEL
    author_label: str = AUTHOR_LABEL
    fallback_first_name: str = FALLBACK_FIRST_NAME
    organization_name: str = ORGANIZATION_NAME

    def __post_init__(self):
        if not self.author_emojis:
            raise ValueError("author_emojis must contain at least one entry")
        if not 0.0 <= self.paste_flag_threshold <= 1.0:
            raise ValueError(f"paste_flag_threshold must be within [0, 1], got {self.paste_flag_threshold}")

    @classmethod
    def from_dict(cls, raw: dict) -> "SafetyConfig":
        """Build a config from a YAML mapping, rejecting unknown keys."""
        known = {f.name for f in fields(cls)}
        extra = set(raw) - known
        if extra:
            raise ValueError(f"Unknown safety config keys: {sorted(extra)}")

        values = dict(raw)
        if "author_emojis" in values:
            values["author_emojis"] = tuple(values["author_emojis"] or ())
        if "paste_flag_threshold" in values:
            values["paste_flag_threshold"] = float(values["paste_flag_threshold"])
        return cls(**values)


# Module-level cache
_config_cache: Optional[SafetyConfig] = None


def get_config_path() -> Path:
    """Resolve the config file path (env override, then project default)."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return Path(env_path).expanduser().resolve()
    return Path(__file__).parent.parent / "config" / "safety.yaml"


def load_safety_config(path: Optional[Path] = None) -> SafetyConfig:
    """Load and cache the safety config.

    Falls back to the built-in defaults when the file does not exist. An
    explicit path bypasses the cache.
    """
    global _config_cache
    if path is None and _config_cache is not None:
        return _config_cache

    config_path = path or get_config_path()
    if not config_path.exists():
        logger.warning(f"Safety config not found at {config_path}, using defaults")
        config = SafetyConfig()
    else:
        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        if not isinstance(raw, dict):
            raise ValueError(f"Safety config at {config_path} must be a mapping")
        config = SafetyConfig.from_dict(raw)
        logger.info(
            f"Loaded safety config from {config_path} "
            f"({len(config.author_emojis)} avatars, threshold={config.paste_flag_threshold})"
        )

    if path is None:
        _config_cache = config
    return config


def clear_cache():
    """Clear the config cache (useful for testing)."""
    global _config_cache
    _config_cache = None
