"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from pathlib import Path
from typing import Annotated, List, Optional
from pydantic_settings import BaseSettings, NoDecode
from pydantic import Field, field_validator, ConfigDict

# Project root: trail-events/
PROJECT_ROOT = Path(__file__).parent.parent.parent
# Content directory: trail-events/content/
CONTENT_DIR = PROJECT_ROOT / "content"


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")
    base_url: Optional[str] = Field(
        default=None,
        description="Public site URL, used to absolutise event links"
    )

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === GPX sources ===
    content_dir: Path = Field(
        default=CONTENT_DIR,
        description="Root directory for relative GPX paths"
    )
    gpx_fetch_timeout: float = Field(default=30.0, description="Seconds")
    max_gpx_bytes: int = Field(default=20 * 1024 * 1024)
    gpx_allowed_hosts: Annotated[List[str], NoDecode] = Field(
        default_factory=list,
        description="Hosts remote GPX URLs may point at (subdomains included); empty disables remote sources"
    )
    use_fallback_waypoints: bool = Field(
        default=True,
        description="Synthesize trailhead/midpoint/summit when a track has no waypoints"
    )

    # === Map rendering ===
    map_tile_url: str = Field(
        default="https://{s}.tile.openstreetmap.org/{z}/{x}/{y}.png"
    )
    map_tile_attribution: str = Field(default="© OpenStreetMap contributors")
    map_max_zoom: int = Field(default=19)
    track_color: str = Field(default="#F25C27")
    checkpoint_color: str = Field(default="#4AAE69")

    # === Calendar export ===
    calendar_prodid: str = Field(default="-//MJT Studio//Events//EN")

    @field_validator('cors_origins', 'gpx_allowed_hosts', mode='before')
    @classmethod
    def parse_comma_separated(cls, v):
        """Parse CORS origins and GPX hosts from comma-separated string."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(',') if item.strip()]
        return v

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
