"""Tests for sitepipe.transform — passthrough and subprocess transforms."""

import shutil

import pytest

from sitepipe.errors import TransformError
from sitepipe.interfaces import Transform
from sitepipe.transform import CommandTransform, PassthroughTransform, create_transform

needs_posix = pytest.mark.skipif(shutil.which("tr") is None, reason="requires POSIX tools")


class TestPassthrough:
    def test_returns_body(self):
        assert PassthroughTransform().apply(b"# hi\n") == b"# hi\n"

    def test_satisfies_protocol(self):
        assert isinstance(PassthroughTransform(), Transform)


class TestCreateTransform:
    def test_empty_command_is_passthrough(self):
        assert isinstance(create_transform(""), PassthroughTransform)
        assert isinstance(create_transform("   "), PassthroughTransform)

    def test_command_is_split(self):
        t = create_transform("pandoc -f markdown -t html", timeout=3)
        assert isinstance(t, CommandTransform)
        assert t.argv == ["pandoc", "-f", "markdown", "-t", "html"]
        assert t.timeout == 3

    def test_empty_argv_rejected(self):
        with pytest.raises(ValueError):
            CommandTransform([])


@needs_posix
class TestCommandTransform:
    def test_pipes_body_through_command(self):
        assert CommandTransform("tr a-z A-Z").apply(b"hello\n") == b"HELLO\n"

    def test_non_zero_exit(self):
        with pytest.raises(TransformError, match="exited 1"):
            CommandTransform(["false"]).apply(b"x")

    def test_missing_executable(self):
        with pytest.raises(TransformError, match="not found"):
            CommandTransform(["definitely-not-a-real-binary-xyz"]).apply(b"x")

    def test_timeout(self):
        with pytest.raises(TransformError, match="timed out"):
            CommandTransform(["sleep", "5"], timeout=0.1).apply(b"")

    def test_error_is_unit_scoped(self):
        with pytest.raises(TransformError) as exc_info:
            CommandTransform(["false"]).apply(b"x")
        assert not exc_info.value.fatal
        assert exc_info.value.stage == "transform"
