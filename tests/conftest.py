"""Shared test fixtures for sitepipe."""

from datetime import datetime, timezone
from pathlib import Path

import pytest

from sitepipe.config.models import PublishConfig, SiteConfig
from sitepipe.content.models import PageMetadata
from sitepipe.output.store import LocalStore

_FIXED_NOW = datetime(2024, 5, 6, 12, 0, tzinfo=timezone.utc)

_HELLO_POST = """\
---
title: Hello
date: 2024-01-01
summary: First post
---
Hello body.
"""


def _write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create files (relative path -> content) below root."""
    for rel, content in files.items():
        path = root / rel
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


def _post(title: str, date: str, summary: str = "", draft: bool = False, slug: str = "") -> str:
    lines = ["---", f"title: {title}", f"date: {date}"]
    if summary:
        lines.append(f"summary: {summary}")
    if slug:
        lines.append(f"slug: {slug}")
    if draft:
        lines.append("draft: true")
    lines += ["---", f"Body of {title}.", ""]
    return "\n".join(lines)


@pytest.fixture
def write_tree():
    return _write_tree


@pytest.fixture
def make_post():
    """Factory for YAML-headed posts."""
    return _post


@pytest.fixture
def hello_post():
    return _HELLO_POST


@pytest.fixture
def fixed_now():
    return lambda: _FIXED_NOW


@pytest.fixture
def sample_metadata():
    return PageMetadata(
        title="Hello World",
        slug="hello-world",
        summary="A greeting",
        date=datetime(2024, 3, 5, 9, 30, tzinfo=timezone.utc),
        file_path="2024-03-05-hello",
        subdir="posts",
    )


@pytest.fixture
def content_dir(tmp_path):
    """A small source tree with a root index, posts and a draft."""
    return _write_tree(tmp_path / "content", {
        "_index.md": "---\ntitle: Home\n---\nWelcome.\n",
        "posts/2024-01-01-hello.md": _HELLO_POST,
        "posts/second.md": _post("Second", "2024-02-01", "Another one"),
        "posts/wip.md": _post("Work In Progress", "2024-03-01", draft=True),
    })


@pytest.fixture
def out_dir(tmp_path):
    return tmp_path / "public"


@pytest.fixture
def publish_config(content_dir, out_dir):
    return PublishConfig(source=str(content_dir), destination=str(out_dir), workers=2)


@pytest.fixture
def site_config():
    return SiteConfig()


@pytest.fixture
def store(out_dir):
    return LocalStore(out_dir)
