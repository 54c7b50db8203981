"""Content transforms."""

from sitepipe.transform.command import CommandTransform, PassthroughTransform, create_transform

__all__ = ["CommandTransform", "PassthroughTransform", "create_transform"]
