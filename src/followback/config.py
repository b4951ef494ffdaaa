import logging
from pathlib import Path
from typing import Dict, Any, Tuple

import orjson

logger = logging.getLogger(__name__)

class Config:
    """Configuration settings for archive extraction and comparison."""

    def __init__(self):
        # Profile links
        self.profile_url_template = "https://www.instagram.com/{username}"
        self.placeholder_segments: Tuple[str, ...] = ("_u",)  # e.g. /_u/<username>

        # Export record shape
        self.list_entry_field = "string_list_data"
        self.identity_field = "value"
        self.title_field = "title"
        self.link_field = "href"
        self.timestamp_field = "timestamp"

        # File roles, in priority order
        self.role_keywords: Tuple[str, ...] = ("followers", "following")

        # Archive entries skipped before extraction
        self.ignored_path_markers: Tuple[str, ...] = ("__macosx", "/.")
        self.json_suffix = ".json"

        # Process management
        self.max_workers = 4  # 1 runs extraction inline
        self.show_progress = True

        # Logging
        self.log_level = logging.INFO
        self.snippet_length = 150  # Characters of unmatched JSON echoed to the log

    def profile_url(self, username: str) -> str:
        """Canonical profile link for a username."""
        return self.profile_url_template.format(username=username)

    def to_dict(self) -> Dict[str, Any]:
        """Convert config to dictionary for serialization."""
        return {
            'profile_url_template': self.profile_url_template,
            'placeholder_segments': list(self.placeholder_segments),
            'list_entry_field': self.list_entry_field,
            'identity_field': self.identity_field,
            'title_field': self.title_field,
            'link_field': self.link_field,
            'timestamp_field': self.timestamp_field,
            'role_keywords': list(self.role_keywords),
            'ignored_path_markers': list(self.ignored_path_markers),
            'json_suffix': self.json_suffix,
            'max_workers': self.max_workers,
            'show_progress': self.show_progress,
            'log_level': self.log_level,
            'snippet_length': self.snippet_length
        }

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'Config':
        """Create Config instance from dictionary."""
        config = cls()
        for key, value in config_dict.items():
            if hasattr(config, key):
                if isinstance(getattr(config, key), tuple):
                    value = tuple(value)
                setattr(config, key, value)
            else:
                logger.warning(f"Ignoring unknown config key: {key}")
        return config

    @classmethod
    def load(cls, path: Path) -> 'Config':
        """Load configuration overrides from a JSON file."""
        with open(path, 'rb') as f:
            return cls.from_dict(orjson.loads(f.read()))

# Create a global config instance
config = Config()
