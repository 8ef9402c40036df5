"""System command handlers for the interface layer."""
from typing import Any, Dict

from behavioral_patterns._package import PACKAGE_NAME, __version__


def handle_show_config(args, app) -> Dict[str, Any]:
    """Handle ``config show``: the effective configuration after overrides."""
    return {
        "config_file": app.config_manager.config_file,
        "config": app.config.model_dump(mode="json"),
    }


def handle_system_info(args, app) -> Dict[str, Any]:
    info = app.get_catalog_service().get_catalog_info()
    return {"package": PACKAGE_NAME, "version": __version__, **info}
