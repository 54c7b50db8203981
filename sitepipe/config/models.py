import logging
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

logger = logging.getLogger(__name__)

DEFAULT_PERMALINK = "/:year/:month/:title/"


class SiteConfig(BaseModel):
    """Keys read from the site config file (config.toml and friends)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    ugly_urls: bool = Field(default=False, alias="uglyURLs")
    build_drafts: bool = Field(default=False, alias="buildDrafts")
    permalinks: dict[str, str] = Field(default_factory=dict)

    def get_bool(self, key: str) -> bool:
        return bool(self._lookup(key))

    def get_string_map(self, key: str) -> dict[str, str]:
        return dict(self._lookup(key))

    def is_set(self, key: str) -> bool:
        return self._field_name(key) in self.model_fields_set

    def _lookup(self, key: str):
        name = self._field_name(key)
        value = getattr(self, name)
        if name not in self.model_fields_set:
            logger.info("config: no %s set, using default: %s", key, value)
        return value

    def _field_name(self, key: str) -> str:
        for name, info in type(self).model_fields.items():
            if key in (name, info.alias):
                return name
        raise KeyError(f"unknown config key: {key}")


class PublishConfig(BaseModel):
    """Run options, normally filled from CLI flags."""

    ext: str = "md"
    processor: str = ""
    source: str = "content"
    destination: str = "public"
    section_list: bool = True
    section_on_root: str = "posts"
    default_permalink: str = DEFAULT_PERMALINK
    workers: int = Field(default=4, ge=1)
    queue_size: int = Field(default=64, ge=0)
    transform_timeout: float | None = Field(default=None, gt=0)
    dry_run: bool = False
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
