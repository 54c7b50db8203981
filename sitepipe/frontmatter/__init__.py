"""Front matter codec — detects and decodes content headers."""

from sitepipe.frontmatter.codec import (
    Dialect,
    FrontMatter,
    FrontMatterValue,
    decode_front_matter,
    detect_dialect,
)

__all__ = [
    "Dialect",
    "FrontMatter",
    "FrontMatterValue",
    "decode_front_matter",
    "detect_dialect",
]
