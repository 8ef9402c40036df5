"""Application bootstrap - wires configuration, logging, catalog and services."""
from __future__ import annotations

from typing import Optional

from behavioral_patterns.config import AppConfig
from behavioral_patterns.config.manager import ConfigurationManager, get_config_manager
from behavioral_patterns.infrastructure.logging.logger import get_logger, setup_logging
from behavioral_patterns.infrastructure.registry.pattern_registry import PatternRegistry


class Application:
    """Application context: owns the configuration and the catalog service."""

    def __init__(
        self,
        config_path: Optional[str] = None,
        config_manager: Optional[ConfigurationManager] = None,
        registry: Optional[PatternRegistry] = None,
        configure_logging: bool = True,
    ) -> None:
        self.config_path = config_path
        self._config_manager = config_manager
        self._registry = registry
        self._configure_logging = configure_logging
        self._service = None
        self._initialized = False

        self.logger = get_logger(__name__)

    def _ensure_config_manager(self) -> ConfigurationManager:
        if self._config_manager is None:
            self._config_manager = get_config_manager(self.config_path)
        return self._config_manager

    @property
    def config(self) -> AppConfig:
        return self._ensure_config_manager().app_config

    @property
    def config_manager(self) -> ConfigurationManager:
        return self._ensure_config_manager()

    @property
    def registry(self) -> PatternRegistry:
        if self._registry is None:
            self._registry = PatternRegistry.get_instance()
        return self._registry

    def initialize(self) -> bool:
        """
        Load configuration and the catalog.

        Raises:
            ConfigurationError: Configuration or catalog file problems
            CatalogValidationError: The catalog content is invalid
        """
        if self._initialized:
            return True

        app_config = self.config
        if self._configure_logging:
            setup_logging(app_config.logging)

        # Importing the pattern modules registers their demos
        import behavioral_patterns.patterns  # noqa: F401
        from behavioral_patterns.application.catalog.service import CatalogApplicationService
        from behavioral_patterns.application.decorators import get_registered_demos
        from behavioral_patterns.infrastructure.catalog.loader import CatalogLoader
        from behavioral_patterns.infrastructure.rendering.readme_renderer import ReadmeRenderer

        loader = CatalogLoader(app_config.catalog.source_path)
        self.registry.load(loader.load(), get_registered_demos())

        self._service = CatalogApplicationService(
            registry=self.registry,
            renderer=ReadmeRenderer(template_dir=app_config.catalog.template_dir),
            logger=get_logger("behavioral_patterns.application.catalog"),
            include_snippets=app_config.catalog.include_snippets,
            readme_title=app_config.catalog.readme_title,
        )

        self._initialized = True
        self.logger.info(f"Catalog loaded from {loader.source} ({app_config.environment})")
        return True

    def get_catalog_service(self):
        """Get the catalog application service, initializing on first use."""
        if not self._initialized:
            self.initialize()
        return self._service

    def shutdown(self) -> None:
        self.logger.info("Shutting down application")
        self._initialized = False
        self._service = None


def create_application(config_path: Optional[str] = None, **kwargs) -> Application:
    """Create and initialize an application."""
    app = Application(config_path, **kwargs)
    app.initialize()
    return app
