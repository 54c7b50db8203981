"""sitepipe — publish front-matter content trees through an external processor."""

from sitepipe.pipeline import Pipeline, PublishReport

__version__ = "0.1.0"

__all__ = ["Pipeline", "PublishReport", "__version__"]
