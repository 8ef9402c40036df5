"""Command handlers for the interface layer.

Handlers are plain functions taking the parsed arguments and the
application and returning data for the CLI formatters.
"""
from behavioral_patterns.interface.pattern_command_handlers import (
    handle_list_patterns,
    handle_render_readme,
    handle_run_demo,
    handle_show_pattern,
    handle_validate_catalog,
)
from behavioral_patterns.interface.serve_command_handler import handle_serve_api
from behavioral_patterns.interface.system_command_handlers import (
    handle_show_config,
    handle_system_info,
)

__all__ = [
    "handle_list_patterns",
    "handle_show_pattern",
    "handle_run_demo",
    "handle_validate_catalog",
    "handle_render_readme",
    "handle_show_config",
    "handle_system_info",
    "handle_serve_api",
]
