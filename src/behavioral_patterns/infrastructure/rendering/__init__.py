"""Rendering infrastructure package."""
from behavioral_patterns.infrastructure.rendering.readme_renderer import (
    ReadmeRenderer,
    extract_code_blocks,
)

__all__ = ["ReadmeRenderer", "extract_code_blocks"]
