"""Catalog configuration schema."""
from typing import Optional

from pydantic import BaseModel, Field


class CatalogConfig(BaseModel):
    """Where the catalog comes from and how the README is rendered."""

    source_path: Optional[str] = Field(None, description="Catalog YAML file; bundled catalog when unset")
    template_dir: Optional[str] = Field(None, description="Directory overriding the bundled templates")
    readme_title: Optional[str] = Field(None, description="README title; catalog title when unset")
    include_snippets: bool = Field(True, description="Embed implementation source in the README")
