"""Pydantic settings for the content browse service."""

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from data_models.content import CategoryOrder


class BrowseSettings(BaseSettings):
    """Settings for storage paths and the browse/sitemap endpoints."""

    model_config = SettingsConfigDict(env_prefix="CONTENT_BROWSE_")

    base_path: Path = Field(
        Path("."),
        description="Base directory for storage paths.",
    )

    storage_path: Path = Field(
        Path("data"),
        description="Directory containing content.db.",
    )

    category_order: CategoryOrder = Field(
        CategoryOrder.NAME,
        description="Order of sibling categories: by name or by creation time.",
    )

    footer_articles_per_category: int = Field(
        5,
        ge=0,
        description="Maximum article previews per category in the footer sitemap.",
    )

    cache_max_age: int = Field(
        3600,
        ge=0,
        description="s-maxage (seconds) sent in Cache-Control for browse responses.",
    )

    log_file_prefix: str = Field(
        "content_browse",
        description="Prefix of the rotating log file under ./logs.",
    )

    profiling_enabled: bool = Field(
        False,
        description="Allow ?profile=true on API requests to save pyinstrument profiles.",
    )

    profile_output_dir: Path = Field(
        Path("profiles"),
        description="Directory receiving HTML profiles.",
    )

    @model_validator(mode="after")
    def _apply_base_path(self) -> "BrowseSettings":
        if not self.storage_path.is_absolute():
            self.storage_path = self.base_path / self.storage_path
        return self
