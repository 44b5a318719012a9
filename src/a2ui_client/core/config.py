"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# Tree resolution recurses a few frames per level; stay well under the interpreter limit
MAX_TREE_DEPTH = 128


class Settings(BaseSettings):
    """Client settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="A2UI_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Transport
    base_url: str = Field(default="http://localhost:8080", description="Agent server base URL")
    stream_path: str = Field(default="/form", description="Initial surface path")
    request_timeout: float = Field(default=10.0, gt=0, description="HTTP request timeout (seconds)")

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Surface state
    form_prefix: str = Field(default="/form/", description="Binding path namespace seeded into the overlay")
    clear_overlay_on_navigate: bool = Field(
        default=False, description="Drop local form edits when navigating to a new surface"
    )

    # Actions
    submit_component_id: str = Field(default="submit-btn", description="Default componentId of submit events")
    submit_extra_fields: bool = Field(
        default=True, description="Send form entries beyond name/date/time/party on submit"
    )

    # Limits
    max_tree_depth: int = Field(default=64, gt=0, le=MAX_TREE_DEPTH, description="Max component tree depth")
    max_line_bytes: int = Field(default=1024 * 1024, gt=0, description="Max size of one NDJSON line")
    max_json_depth: int = Field(default=32, gt=0, description="Max nesting depth of one message")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
