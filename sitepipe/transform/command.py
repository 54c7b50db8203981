"""Transforms that pipe page bodies through an external command."""

from __future__ import annotations

import logging
import shlex
import subprocess

from sitepipe.errors import TransformError

logger = logging.getLogger(__name__)


class PassthroughTransform:
    """Returns the body unchanged; used when no processor is configured."""

    def apply(self, body: bytes) -> bytes:
        return body


class CommandTransform:
    """Runs `command` with the body on stdin and returns its stdout."""

    def __init__(self, command: str | list[str], timeout: float | None = None) -> None:
        self.argv = shlex.split(command) if isinstance(command, str) else list(command)
        if not self.argv:
            raise ValueError("transform command must not be empty")
        self.command = " ".join(self.argv)
        self.timeout = timeout

    def apply(self, body: bytes) -> bytes:
        try:
            result = subprocess.run(
                self.argv,
                input=body,
                capture_output=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise TransformError(self.command, f"executable not found: {e.filename}") from e
        except subprocess.TimeoutExpired as e:
            raise TransformError(self.command, f"timed out after {self.timeout}s") from e
        except OSError as e:
            raise TransformError(self.command, str(e)) from e

        if result.returncode != 0:
            stderr = result.stderr.decode("utf-8", "replace").strip()
            raise TransformError(
                self.command, f"exited {result.returncode}: {stderr[:200]}"
            )
        if result.stderr:
            logger.debug("%s stderr: %s", self.command, result.stderr[:200])
        return result.stdout


def create_transform(command: str, timeout: float | None = None) -> CommandTransform | PassthroughTransform:
    """Pick a transform for the configured processor command."""
    if not command.strip():
        return PassthroughTransform()
    return CommandTransform(command, timeout=timeout)
