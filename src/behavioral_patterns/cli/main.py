"""
Main CLI module with argument parsing and command execution.

- Command line argument parsing (resource/action structure)
- Command routing to interface handlers
- Output formatting and exit codes
"""
import argparse
import sys
from typing import Any, List, Optional

from behavioral_patterns._package import PACKAGE_NAME_SHORT, __version__
from behavioral_patterns.cli.formatters import format_output
from behavioral_patterns.domain.catalog import PatternCategory
from behavioral_patterns.infrastructure.error.exception_handler import get_exception_handler
from behavioral_patterns.infrastructure.logging.logger import get_logger, setup_logging

OUTPUT_FORMATS = ["json", "yaml", "table", "list"]
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with resource-action structure."""
    parser = argparse.ArgumentParser(
        prog=PACKAGE_NAME_SHORT,
        description="Behavioral design patterns: catalog, demos and README generation",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s patterns list                     # List all patterns
  %(prog)s patterns show observer --snippets # Show a pattern with its source
  %(prog)s patterns demo --all --format list # Run every demo
  %(prog)s catalog validate                  # Check purpose statements and code blocks
  %(prog)s catalog readme --output README.md # Render the README
        """,
    )

    # Global options
    parser.add_argument("--config", help="Configuration file path")
    parser.add_argument("--log-level", choices=LOG_LEVELS, help="Set logging level")
    parser.add_argument("--format", choices=OUTPUT_FORMATS, default="json", help="Output format")
    parser.add_argument("--output", help="Output file (default: stdout)")
    parser.add_argument("--quiet", action="store_true", help="Suppress non-essential output")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose output")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="resource", help="Available resources")

    # Patterns resource
    patterns_parser = subparsers.add_parser("patterns", help="Browse patterns and run demos")
    patterns_subparsers = patterns_parser.add_subparsers(dest="action", help="Pattern actions")

    patterns_list = patterns_subparsers.add_parser("list", help="List all patterns")
    patterns_list.add_argument(
        "--category", choices=[c.value for c in PatternCategory], help="Filter by category"
    )

    patterns_show = patterns_subparsers.add_parser("show", help="Show pattern details")
    patterns_show.add_argument("slug", help="Pattern slug, e.g. chain-of-responsibility")
    patterns_show.add_argument("--snippets", action="store_true", help="Include implementation source")

    patterns_demo = patterns_subparsers.add_parser("demo", help="Run a pattern demo")
    patterns_demo.add_argument("slug", nargs="?", help="Pattern slug")
    patterns_demo.add_argument("--all", action="store_true", help="Run every available demo")

    # Catalog resource
    catalog_parser = subparsers.add_parser("catalog", help="Catalog checks and rendering")
    catalog_subparsers = catalog_parser.add_subparsers(dest="action", help="Catalog actions")

    catalog_subparsers.add_parser("validate", help="Validate the catalog")

    catalog_readme = catalog_subparsers.add_parser("readme", help="Render the README as Markdown")
    catalog_readme.add_argument("--title", help="README title")

    # Config resource
    config_parser = subparsers.add_parser("config", help="Configuration management")
    config_subparsers = config_parser.add_subparsers(dest="action", help="Config actions")
    config_subparsers.add_parser("show", help="Show effective configuration")

    # System resource
    system_parser = subparsers.add_parser("system", help="System operations")
    system_subparsers = system_parser.add_subparsers(dest="action", help="System actions")
    system_subparsers.add_parser("info", help="Show package and catalog information")

    system_serve = system_subparsers.add_parser("serve", help="Start the REST API server")
    system_serve.add_argument("--host", help="Server host")
    system_serve.add_argument("--port", type=int, help="Server port")

    return parser


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    return build_parser().parse_args(argv)


def execute_command(args, app) -> Any:
    """Execute the appropriate command handler."""
    from behavioral_patterns.interface import (
        handle_list_patterns,
        handle_render_readme,
        handle_run_demo,
        handle_serve_api,
        handle_show_config,
        handle_show_pattern,
        handle_system_info,
        handle_validate_catalog,
    )

    # Command handler mapping
    COMMAND_HANDLERS = {
        ("patterns", "list"): handle_list_patterns,
        ("patterns", "show"): handle_show_pattern,
        ("patterns", "demo"): handle_run_demo,
        ("catalog", "validate"): handle_validate_catalog,
        ("catalog", "readme"): handle_render_readme,
        ("config", "show"): handle_show_config,
        ("system", "info"): handle_system_info,
        ("system", "serve"): handle_serve_api,
    }

    handler_key = (args.resource, args.action)
    if handler_key not in COMMAND_HANDLERS:
        raise ValueError(f"Unknown command: {args.resource} {args.action}")
    return COMMAND_HANDLERS[handler_key](args, app)


def _effective_log_level(args, configured: str) -> str:
    if args.log_level:
        return args.log_level
    if args.verbose:
        return "DEBUG"
    if args.quiet:
        return "ERROR"
    return configured


def _write_output(text: str, args) -> None:
    if not text.endswith("\n"):
        text += "\n"
    if args.output:
        with open(args.output, "w", encoding="utf-8") as f:
            f.write(text)
        if not args.quiet:
            print(f"Output written to {args.output}", file=sys.stderr)
    else:
        sys.stdout.write(text)


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point. Returns the process exit code."""
    logger = get_logger(__name__)
    args = parse_args(argv)

    if not args.resource:
        print("Error: No resource specified. Use --help for usage information.", file=sys.stderr)
        return 1
    if not args.action:
        print(
            f"Error: No action specified for {args.resource}. Use --help for usage information.",
            file=sys.stderr,
        )
        return 1

    try:
        from behavioral_patterns.bootstrap import Application
        from behavioral_patterns.config.manager import ConfigurationManager

        # Environment overrides are read on every invocation
        app = Application(
            args.config,
            config_manager=ConfigurationManager(args.config),
            configure_logging=False,
        )
        logging_config = app.config.logging
        logging_config = logging_config.model_copy(
            update={"level": _effective_log_level(args, logging_config.level)}
        )
        setup_logging(logging_config)
        app.initialize()

        result = execute_command(args, app)
        _write_output(format_output(result, args.format), args)

        if isinstance(result, dict) and result.get("valid") is False:
            return 1
        return 0

    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        return 130
    except Exception as e:
        error_response = get_exception_handler().handle_error(e)
        logger.debug(f"Command failed with {error_response.error_code.value}")
        if args.verbose:
            import traceback

            traceback.print_exc()
        if not args.quiet:
            print(f"Error: {error_response.message}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
