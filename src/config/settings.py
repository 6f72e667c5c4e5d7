"""
Application settings and configuration

Uses pydantic-settings for type-safe configuration via environment variables.
All settings use WISHTEXT_ prefix (e.g., WISHTEXT_SCANNER_MAX_DEPTH=200).

List settings are read from JSON in the environment, e.g.
WISHTEXT_EXTENSION_TAGS='["nowiki", "pre"]'.

Settings can also be loaded from a .env file in the project root.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    """
    Application configuration via environment variables.

    Environment variables use WISHTEXT_ prefix.

    Examples:
        WISHTEXT_SCANNER_MAX_DEPTH=200
        WISHTEXT_VALUE_DELIMITER=;
        WISHTEXT_WISH_TEMPLATE="Community Wishlist/Wish"
    """

    model_config = SettingsConfigDict(
        env_prefix="WISHTEXT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Scanner configuration
    extension_tags: List[str] = Field(
        default=[
            "nowiki",
            "pre",
            "ref",
            "references",
            "gallery",
            "math",
            "syntaxhighlight",
            "source",
            "poem",
            "templatedata",
            "indicator",
            "categorytree",
            "score",
            "graph",
            "chem",
            "ce",
            "hiero",
            "inputbox",
            "timeline",
            "mapframe",
            "maplink",
        ],
        description="Extension element names whose bodies are opaque to the scanner",
    )

    scanner_max_depth: int = Field(
        default=100,
        ge=1,
        # Each level costs up to three interpreter frames while building a tree
        le=200,
        description="Maximum nesting of templates and links before the text scanner gives up",
    )

    tree_max_depth: int = Field(
        default=30,
        ge=0,
        description="Maximum tree depth searched by the parsed-tree locator",
    )

    # Record configuration
    value_delimiter: str = Field(
        default=",",
        min_length=1,
        description="Delimiter for multi-valued record fields",
    )

    wish_template: str = Field(
        default="Community Wishlist/Wish",
        description="Template holding wish records",
    )

    vote_template: str = Field(
        default="Community Wishlist/Vote",
        description="Template holding vote records",
    )

    focus_area_template: str = Field(
        default="Community Wishlist/Focus area",
        description="Template holding focus area records",
    )

    @field_validator("extension_tags")
    @classmethod
    def extensionTags_clean(cls, tags: List[str]) -> List[str]:
        """Tag names are compared exactly, so strip stray whitespace"""
        return [tag.strip() for tag in tags if tag.strip()]

    def extensionTags_get(self) -> frozenset:
        """
        Extension tag allow-list as an immutable set

        Returns:
            frozenset of tag names, safe to share between scanner instances

        Example:
            >>> "nowiki" in AppSettings().extensionTags_get()
            True
        """
        return frozenset(self.extension_tags)


# Singleton instance - import this in your code
appsettings = AppSettings()
