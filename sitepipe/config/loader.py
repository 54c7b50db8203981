"""Site config loading (TOML, YAML or JSON) with env var expansion."""

import json
import logging
import os
import re
import tomllib
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import SiteConfig

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAMES = ("config.toml", "config.yaml", "config.yml", "config.json")


def load_site_config(cli_path: str | None = None) -> SiteConfig:
    """Load config with resolution order: CLI > project-local > defaults."""
    config_paths = [Path(cli_path) if cli_path else None]
    config_paths += [Path(name) for name in DEFAULT_CONFIG_NAMES]

    for path in config_paths:
        if path and path.exists():
            raw = _read(path)
            if raw is None:
                continue
            raw = _expand_env_vars(raw)
            try:
                config = SiteConfig.model_validate(raw)
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e
            logger.info("config: loaded %s", path)
            return config

    if cli_path:
        logger.warning("config: %s not found, using defaults", cli_path)
    return SiteConfig()


def _read(path: Path) -> dict | None:
    """Parse a config file by suffix; TOML is the default."""
    text = path.read_text(encoding="utf-8")
    suffix = path.suffix.lower()
    try:
        if suffix in (".yaml", ".yml"):
            raw = yaml.safe_load(text)
        elif suffix == ".json":
            raw = json.loads(text) if text.strip() else None
        else:
            raw = tomllib.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError, tomllib.TOMLDecodeError) as e:
        raise ValueError(f"Invalid {suffix.lstrip('.') or 'toml'} in {path}: {e}") from e
    if raw is not None and not isinstance(raw, dict):
        raise ValueError(f"Invalid config in {path}: expected a mapping")
    return raw or None


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default template for a new site config
DEFAULT_CONFIG_TEMPLATE = """\
# config.toml

# Emit <page>.<ext> instead of <page>/index.<ext>
uglyURLs = false

# Publish pages marked draft = true
buildDrafts = false

# Permalink pattern per top-level section
# Tokens: :year :month :monthname :day :weekday :weekdayname :yearday
#         :section :title :slug :filename
[permalinks]
posts = "/:year/:month/:title/"
"""
