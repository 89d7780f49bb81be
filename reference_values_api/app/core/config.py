"""
Simple configuration management.

The ``Settings`` dataclass reads configuration directly from environment
variables.  Defaults are provided for all fields so the service can be
started without any setup, although with an empty ``API_TOKENS`` every
request will be rejected.
"""

import os
from dataclasses import dataclass, field
from typing import List


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    project_name: str = field(default_factory=lambda: os.getenv("PROJECT_NAME", "Reference Values API"))
    api_version: str = field(default_factory=lambda: os.getenv("API_VERSION", "1.0.0"))
    log_level: str = field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO"))
    log_file: str = field(default_factory=lambda: os.getenv("LOG_FILE", ""))

    # Path to the JSON file backing the reference value collection.  A
    # relative path is resolved against the current working directory.
    data_file: str = field(default_factory=lambda: os.getenv("DATA_FILE", "reference_values.json"))

    # Comma‑separated list of tokens accepted in the Authorization header.
    # Example: API_TOKENS="token1,token2".
    api_tokens: str = field(default_factory=lambda: os.getenv("API_TOKENS", ""))

    host: str = field(default_factory=lambda: os.getenv("HOST", "localhost"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8081")))

    def token_list(self) -> List[str]:
        """Return the configured tokens with surrounding whitespace removed."""
        return [t.strip() for t in self.api_tokens.split(",") if t.strip()]


# Instantiate settings once so other modules can import it without
# repeatedly reading environment variables.
settings = Settings()
