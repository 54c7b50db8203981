"""Publish pipeline orchestration."""

from sitepipe.pipeline.models import PublishReport, UnitError
from sitepipe.pipeline.pipeline import Pipeline, strip_underscore

__all__ = ["Pipeline", "PublishReport", "UnitError", "strip_underscore"]
