import os
from unittest.mock import Mock

import pytest

import behavioral_patterns.patterns  # noqa: F401  (registers demos)
from behavioral_patterns.application.catalog.service import CatalogApplicationService
from behavioral_patterns.application.decorators import get_registered_demos
from behavioral_patterns.bootstrap import Application
from behavioral_patterns.config.manager import ConfigurationManager
from behavioral_patterns.domain.catalog import CatalogDocument, PatternEntry
from behavioral_patterns.infrastructure.catalog.loader import CatalogLoader
from behavioral_patterns.infrastructure.registry.pattern_registry import PatternRegistry
from behavioral_patterns.infrastructure.rendering.readme_renderer import ReadmeRenderer


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Keep BP_* variables from the developer's shell out of the tests."""
    for name in list(os.environ):
        if name.startswith("BP_"):
            monkeypatch.delenv(name, raising=False)


@pytest.fixture
def catalog_document() -> CatalogDocument:
    return CatalogLoader().load()


@pytest.fixture
def registry(catalog_document) -> PatternRegistry:
    registry = PatternRegistry()
    registry.load(catalog_document, get_registered_demos())
    return registry


@pytest.fixture
def catalog_service(registry) -> CatalogApplicationService:
    return CatalogApplicationService(
        registry=registry,
        renderer=ReadmeRenderer(logger=Mock()),
        logger=Mock(),
    )


@pytest.fixture
def application() -> Application:
    app = Application(
        config_manager=ConfigurationManager(),
        registry=PatternRegistry(),
        configure_logging=False,
    )
    app.initialize()
    return app


@pytest.fixture
def sample_entry() -> PatternEntry:
    return PatternEntry(
        slug="strategy",
        name="Strategy",
        intent="Make algorithms interchangeable.",
        snippets=["behavioral_patterns.patterns.strategy:SelectionStrategy"],
        related=["state"],
    )
