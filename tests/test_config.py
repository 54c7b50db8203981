"""Tests for sitepipe.config — models and the site config loader."""

import json
import logging
from unittest.mock import patch

import pytest
from pydantic import ValidationError

from sitepipe.config.loader import DEFAULT_CONFIG_TEMPLATE, _expand_env_vars, load_site_config
from sitepipe.config.models import DEFAULT_PERMALINK, PublishConfig, SiteConfig


class TestSiteConfig:
    def test_defaults(self, site_config):
        assert site_config.ugly_urls is False
        assert site_config.build_drafts is False
        assert site_config.permalinks == {}

    def test_aliases(self):
        cfg = SiteConfig(uglyURLs=True, buildDrafts=True, permalinks={"posts": "/:slug/"})
        assert cfg.get_bool("uglyURLs") is True
        assert cfg.get_bool("buildDrafts") is True
        assert cfg.get_string_map("permalinks") == {"posts": "/:slug/"}

    def test_field_names_accepted(self):
        cfg = SiteConfig(ugly_urls=True)
        assert cfg.get_bool("ugly_urls") is True
        assert cfg.is_set("uglyURLs")

    def test_unknown_keys_ignored(self):
        cfg = SiteConfig.model_validate({"baseURL": "https://example.org", "title": "x"})
        assert cfg.is_set("uglyURLs") is False

    def test_unknown_lookup_raises(self, site_config):
        with pytest.raises(KeyError):
            site_config.get_bool("nope")

    def test_default_is_logged(self, site_config, caplog):
        with caplog.at_level(logging.INFO, logger="sitepipe.config.models"):
            site_config.get_bool("uglyURLs")
        assert "no uglyURLs set, using default: False" in caplog.text

    def test_explicit_value_not_logged(self, caplog):
        with caplog.at_level(logging.INFO, logger="sitepipe.config.models"):
            SiteConfig(uglyURLs=False).get_bool("uglyURLs")
        assert "uglyURLs" not in caplog.text

    def test_string_map_is_a_copy(self):
        cfg = SiteConfig(permalinks={"posts": "/:slug/"})
        cfg.get_string_map("permalinks")["posts"] = "/changed/"
        assert cfg.permalinks["posts"] == "/:slug/"


class TestPublishConfig:
    def test_defaults(self):
        cfg = PublishConfig()
        assert cfg.ext == "md"
        assert cfg.source == "content"
        assert cfg.destination == "public"
        assert cfg.section_list is True
        assert cfg.section_on_root == "posts"
        assert cfg.default_permalink == DEFAULT_PERMALINK == "/:year/:month/:title/"
        assert cfg.workers == 4
        assert cfg.log_level == "info"

    def test_workers_must_be_positive(self):
        with pytest.raises(ValidationError):
            PublishConfig(workers=0)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            PublishConfig(log_level="verbose")


class TestLoadSiteConfig:
    def test_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('uglyURLs = true\n[permalinks]\nposts = "/:slug/"\n')
        cfg = load_site_config(str(path))
        assert cfg.ugly_urls is True
        assert cfg.permalinks == {"posts": "/:slug/"}

    def test_yaml(self, tmp_path):
        path = tmp_path / "site.yaml"
        path.write_text("buildDrafts: true\npermalinks:\n  notes: /:title/\n")
        cfg = load_site_config(str(path))
        assert cfg.build_drafts is True
        assert cfg.permalinks == {"notes": "/:title/"}

    def test_json(self, tmp_path):
        path = tmp_path / "site.json"
        path.write_text(json.dumps({"uglyURLs": True}))
        assert load_site_config(str(path)).ugly_urls is True

    def test_env_expansion(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('[permalinks]\nposts = "/${SECTION_PREFIX}/:slug/"\n')
        with patch.dict("os.environ", {"SECTION_PREFIX": "blog"}):
            cfg = load_site_config(str(path))
        assert cfg.permalinks["posts"] == "/blog/:slug/"

    def test_invalid_toml(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text("uglyURLs = \n")
        with pytest.raises(ValueError, match="Invalid toml"):
            load_site_config(str(path))

    def test_invalid_schema(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text('uglyURLs = "sometimes"\n')
        with pytest.raises(ValueError, match="Invalid config"):
            load_site_config(str(path))

    def test_project_local_file(self, tmp_path, monkeypatch):
        (tmp_path / "config.yaml").write_text("uglyURLs: true\n")
        monkeypatch.chdir(tmp_path)
        assert load_site_config().ugly_urls is True

    def test_defaults_when_missing(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        cfg = load_site_config(str(tmp_path / "absent.toml"))
        assert cfg == SiteConfig()

    def test_empty_file_falls_through(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_site_config(str(path)) == SiteConfig()

    def test_template_is_valid(self, tmp_path):
        path = tmp_path / "config.toml"
        path.write_text(DEFAULT_CONFIG_TEMPLATE)
        cfg = load_site_config(str(path))
        assert cfg.permalinks == {"posts": "/:year/:month/:title/"}


def test_expand_env_vars_recurses():
    with patch.dict("os.environ", {"A": "1"}, clear=False):
        assert _expand_env_vars({"x": ["${A}", {"y": "${A}-${MISSING_VAR_XYZ}"}], "n": 3}) == {
            "x": ["1", {"y": "1-"}],
            "n": 3,
        }
