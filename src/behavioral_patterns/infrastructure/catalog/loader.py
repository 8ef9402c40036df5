"""Catalog loader - reads the YAML catalog into domain models."""
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from pydantic import ValidationError as PydanticValidationError

from behavioral_patterns.domain.catalog import CatalogDocument
from behavioral_patterns.domain.core.exceptions import (
    CatalogValidationError,
    ConfigurationError,
)
from behavioral_patterns.infrastructure.logging.logger import get_logger

BUNDLED_CATALOG = "catalog.yaml"
RESOURCE_PACKAGE = "behavioral_patterns.resources"


class CatalogLoader:
    """
    Loads a catalog document from a YAML file.

    With no source path the catalog bundled in ``behavioral_patterns.resources``
    is used.
    """

    def __init__(self, source_path: Optional[Union[str, Path]] = None):
        self._source_path = Path(source_path) if source_path else None
        self._logger = get_logger(__name__)

    @property
    def source(self) -> str:
        """Human readable name of where the catalog comes from."""
        if self._source_path is not None:
            return str(self._source_path)
        return f"{RESOURCE_PACKAGE}/{BUNDLED_CATALOG}"

    def load(self) -> CatalogDocument:
        """
        Read and validate the catalog.

        Raises:
            ConfigurationError: If the file is missing or is not valid YAML
            CatalogValidationError: If the content does not match the catalog model
        """
        raw = self._read_text()
        try:
            data = yaml.safe_load(raw)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Catalog {self.source} is not valid YAML: {e}")

        if not isinstance(data, dict):
            raise ConfigurationError(f"Catalog {self.source} must contain a mapping at the top level")

        document = self.parse(data, self.source)
        self._logger.debug(f"Loaded {len(document.patterns)} pattern(s) from {self.source}")
        return document

    @staticmethod
    def parse(data: Dict[str, Any], source: str = "<memory>") -> CatalogDocument:
        """Validate already-decoded catalog data."""
        try:
            return CatalogDocument.model_validate(data)
        except PydanticValidationError as e:
            errors = {}
            for error in e.errors():
                location = ".".join(str(part) for part in error["loc"]) or "catalog"
                errors[location] = error["msg"]
            raise CatalogValidationError(source, errors)

    def _read_text(self) -> str:
        if self._source_path is None:
            return resources.files(RESOURCE_PACKAGE).joinpath(BUNDLED_CATALOG).read_text(encoding="utf-8")
        if not self._source_path.is_file():
            raise ConfigurationError(f"Catalog file not found: {self._source_path}")
        return self._source_path.read_text(encoding="utf-8")
